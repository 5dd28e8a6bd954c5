# File: admin_panel/services/__init__.py

# This file makes 'services' a Python package.
# Import from the modules directly, e.g.:
# from admin_panel.services.user_service import UserService

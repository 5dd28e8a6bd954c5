# File: admin_panel/extensions.py
import json
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from flask_babel import Babel
from flask_htmx import HTMX
from sqlalchemy.types import TypeDecorator, TEXT

# Database
db = SQLAlchemy()

# Migrations
migrate = Migrate()

# Login Manager
login_manager = LoginManager()
# Users who are not logged in and try to reach a protected page are sent here.
login_manager.login_view = 'auth.login'
login_manager.login_message_category = 'info'
login_manager.needs_refresh_message_category = "info"

# CSRF Protection
csrf = CSRFProtect()

# Babel for i18n/l10n of titles and flash messages
babel = Babel()

# Flask-HTMX
htmx = HTMX()


class JSONEncodedDict(TypeDecorator):
    """Enables JSON storage by encoding and decoding on the fly."""
    impl = TEXT
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return json.dumps(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return json.loads(value)
        return value

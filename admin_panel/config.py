# File: admin_panel/config.py
import os
import secrets

class Config:
    """Base configuration class."""
    # Fallback only; deployments must provide SECRET_KEY through the environment
    # so sessions (and the flashed messages stored in them) survive restarts.
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    # Database configuration
    # Default to SQLite in the instance folder.
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(os.path.abspath(os.path.dirname(os.path.dirname(__file__))), 'instance', 'admin_panel.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Application specific settings
    APP_NAME = "Admin Panel"
    APP_VERSION = "0.1.0"

    # Listing page size for the users screen
    USERS_PER_PAGE = 30

    # Flask-Babel
    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en']

    # Display timezone for timestamps; falls back to the TZ environment variable
    APP_TIMEZONE = os.environ.get('APP_TIMEZONE')

    INSTANCE_FOLDER_PATH = os.path.join(os.path.abspath(os.path.dirname(os.path.dirname(__file__))), 'instance')

    @staticmethod
    def init_app(app):
        # Create instance folder if it doesn't exist
        if not os.path.exists(app.instance_path):
            try:
                os.makedirs(app.instance_path)
                app.logger.info(f"Instance folder created at {app.instance_path}")
            except OSError as e:
                app.logger.error(f"Error creating instance folder at {app.instance_path}: {e}")


class DevelopmentConfig(Config):
    DEBUG = True
    # SQLALCHEMY_ECHO = True # Useful for debugging SQL queries


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:' # Use in-memory SQLite for tests
    WTF_CSRF_ENABLED = False # Disable CSRF for easier testing of forms
    SECRET_KEY = 'test_secret_key'


class ProductionConfig(Config):
    DEBUG = False
    # SESSION_COOKIE_SECURE = True
    # SESSION_COOKIE_HTTPONLY = True
    # SESSION_COOKIE_SAMESITE = 'Lax'


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig # Change to ProductionConfig for default deployment
}

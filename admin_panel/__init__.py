# File: admin_panel/__init__.py
import os
import logging
from logging.handlers import RotatingFileHandler
from werkzeug.middleware.proxy_fix import ProxyFix
from flask import Flask, request, redirect, url_for, render_template, current_app

from .config import config
from .extensions import (
    db,
    migrate,
    login_manager,
    csrf,
    babel,
    htmx
)
from .models import User
from .utils import timezone_utils

def get_locale_for_babel():
    return request.accept_languages.best_match(current_app.config.get('LANGUAGES', ['en'])) or 'en'

def register_error_handlers(app):
    @app.errorhandler(403)
    def forbidden_page(error): return render_template("errors/403.html"), 403
    @app.errorhandler(404)
    def page_not_found(error): return render_template("errors/404.html"), 404
    @app.errorhandler(500)
    def server_error_page(error): return render_template("errors/500.html"), 500

def configure_logging(app):
    log_level_name = os.environ.get('FLASK_LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    app.logger.setLevel(log_level)

    if not app.debug and not app.testing:
        log_dir = 'logs'
        if not os.path.exists(log_dir):
            try: os.mkdir(log_dir)
            except OSError: app.logger.error(f"Init.py - configure_logging(): Could not create '{log_dir}' directory for file logging.")

        if os.path.exists(log_dir):
            try:
                file_handler = RotatingFileHandler(os.path.join(log_dir, 'admin_panel.log'), maxBytes=10240, backupCount=10)
                file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
                file_handler.setLevel(log_level)
                app.logger.addHandler(file_handler)
                app.logger.info(f"Init.py - configure_logging(): File logging configured. Level: {log_level_name}")
            except OSError as e_fh:
                app.logger.error(f"Init.py - configure_logging(): Failed to configure file logging: {e_fh}")
    return log_level_name

def create_app(config_name=None):
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')

    app = Flask(__name__, instance_relative_config=True)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    log_level_name = configure_logging(app)
    app.logger.info(f"{app.config.get('APP_NAME')} starting (log level: {log_level_name})")

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    htmx.init_app(app)
    babel.init_app(app, locale_selector=get_locale_for_babel)

    from .services.audit import register_audit_listeners
    register_audit_listeners()

    from .cli import register_commands
    register_commands(app)

    app.jinja_env.filters['format_datetime_tz'] = timezone_utils.format_datetime

    @login_manager.user_loader
    def load_user(user_id):
        return User.find(user_id)

    # Register blueprints
    from .routes.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')
    from .routes.users import bp as users_bp
    app.register_blueprint(users_bp, url_prefix='/users')

    @app.route('/')
    def index():
        return redirect(url_for('users.index'))

    register_error_handlers(app)

    return app

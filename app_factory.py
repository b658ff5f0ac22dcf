"""
Application factory for the career coach consultation service
"""
import logging
import secrets

from flask import Flask, request

from config import config
from utils.database import SQLiteStore
from utils.error_handlers import register_error_handlers

logger = logging.getLogger(__name__)


def configure_logging(app):
    """Configure root logging once from the app config"""
    handlers = [logging.StreamHandler()]
    if app.config.get('LOG_FILE'):
        handlers.append(logging.FileHandler(app.config['LOG_FILE']))

    logging.basicConfig(
        level=getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def create_app(config_name='default', store=None):
    """
    Build the Flask application.

    Args:
        config_name (str): Key into config.config
        store: Record store to use; a SQLiteStore on DATABASE_PATH when omitted

    Returns:
        Flask: The configured application
    """
    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.secret_key = app.config.get('SECRET_KEY') or secrets.token_urlsafe(24)

    configure_logging(app)

    if store is None:
        store = SQLiteStore(app.config['DATABASE_PATH'])
        store.init_db()
    app.extensions['consultation_store'] = store

    # Add request logging
    @app.before_request
    def log_request_info():
        logger.debug('Request: %s %s', request.method, request.path)
        if app.config.get('LOG_REQUEST_BODIES'):
            logger.debug('Body: %s', request.get_data())

    from blueprints.main_routes import main_bp
    from blueprints.api_routes import api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    register_error_handlers(app)

    logger.info(f"Application created with '{config_name}' configuration")
    return app

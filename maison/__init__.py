import logging
import os

from flask import Flask
from flask_talisman import Talisman

from .config import Config
from .errors import error_response, register_error_handlers
from .extensions import db, login_manager, migrate
from . import models  # noqa: F401  (registers every table with the metadata)
from .services.payments import SumUpGateway
from .services.storage import ObjectStorage

# JSON only; uploaded media is served from the same origin
csp = {
    'default-src': "'self'",
    'img-src': ["'self'", 'data:'],
    'object-src': "'none'",
    'base-uri': "'self'",
    'frame-ancestors': "'none'",
}


def create_app(config_object=Config):
    app = Flask(__name__, static_folder='static')
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    from .admin.utils import request_token
    from .services.auth import AuthService

    @login_manager.request_loader
    def load_admin(request):
        # Every admin request carries its own session token; nothing is kept in the Flask session
        return AuthService().resolve(request_token())

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response('Not authenticated', 401)

    Talisman(
        app,
        content_security_policy=csp,
        force_https=app.config['FORCE_HTTPS'],
        session_cookie_secure=app.config['SESSION_COOKIE_SECURE'],
    )

    register_error_handlers(app)

    # Outbound integrations, swapped for fakes in tests
    app.extensions['payment_gateway'] = SumUpGateway.from_config(app.config)
    app.extensions['object_storage'] = ObjectStorage.from_config(app.config)

    from .views.shop import store_bp
    from .views.checkout import checkout_bp
    from .views.auth import auth_bp
    from .admin import admin_bp
    app.register_blueprint(store_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)

    from .cli_commands import register_commands
    register_commands(app)

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
    return app


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger(__name__).setLevel(level)
    app.logger.setLevel(level)

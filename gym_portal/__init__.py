import logging

from flask import Flask
from flask_cors import CORS

from gym_portal.extensions import db, jwt
from gym_portal.errors import register_error_handlers
from gym_portal.services.security import init_security
from config import Config


def create_app(config_class=Config, redis_client=None, clock=None):
    """
    Application factory

    ``redis_client`` and ``clock`` replace the Redis connection built from
    config and the token clock, mainly for tests.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    CORS(app) # Enable CORS for all routes

    init_security(app, redis_client=redis_client, clock=clock)
    register_error_handlers(app)

    # Register Blueprints
    from gym_portal.api import register_blueprints
    register_blueprints(app)

    from gym_portal.db_init.cli import register_commands
    register_commands(app)

    return app

"""
Application Factory
Creates and configures the Flask application
"""
import logging

from flask import Flask
from medicohub.config import get_config
from medicohub.extensions import db, socketio

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """
    Application factory pattern
    Creates and configures Flask app
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from medicohub.config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    socketio.init_app(
        app,
        cors_allowed_origins=app.config['SOCKETIO_CORS_ALLOWED_ORIGINS'],
        async_mode=app.config['SOCKETIO_ASYNC_MODE']
    )

    # Register blueprints
    from medicohub.routes import assessments_bp, competitions_bp, leaderboard_bp, admin_bp

    app.register_blueprint(assessments_bp, url_prefix='/api')
    app.register_blueprint(competitions_bp, url_prefix='/api')
    app.register_blueprint(leaderboard_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    # Register Socket.IO events
    from medicohub.sockets import register_socket_events
    with app.app_context():
        register_socket_events()

    # Create database tables
    with app.app_context():
        from medicohub import models  # noqa: F401
        db.create_all()
        logger.info('Database tables created/verified')

    if not app.config['ADMIN_EMAILS']:
        logger.warning('No admin emails configured (ADMIN_EMAILS)')

    return app

"""
Application Factory
Creates and configures the Flask application
"""
import logging

from flask import Flask
from livepoll.config import get_config
from livepoll.extensions import cors, db, socketio


def _split_origins(origins):
    if isinstance(origins, str) and origins != '*':
        return [origin.strip() for origin in origins.split(',') if origin.strip()]
    return origins


def configure_logging(app):
    """Route the package loggers through one handler at LOG_LEVEL"""
    logging.basicConfig(
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger('livepoll').setLevel(app.config['LOG_LEVEL'])


def create_app(config_name=None):
    """
    Application factory pattern
    Creates and configures Flask app
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from livepoll.config import config
        app.config.from_object(config[config_name])
    else:
        app.config.from_object(get_config())

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    cors.init_app(app, origins=_split_origins(app.config['CORS_ORIGINS']))
    socketio.init_app(
        app,
        cors_allowed_origins=_split_origins(app.config['SOCKETIO_CORS_ALLOWED_ORIGINS']),
        async_mode=app.config['SOCKETIO_ASYNC_MODE']
    )

    # Live classroom state, one coordinator per room
    from livepoll.services import ClassroomRegistry
    from livepoll.sockets import RoomTransport
    app.extensions['classrooms'] = ClassroomRegistry(
        RoomTransport,
        default_room=app.config['DEFAULT_ROOM'],
        teacher_prefix=app.config['TEACHER_USERNAME_PREFIX'],
    )

    # Register blueprints
    from livepoll.routes import auth_bp, polls_bp, public_bp
    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(polls_bp)

    # Register Socket.IO events
    from livepoll.sockets import register_socket_events
    with app.app_context():
        register_socket_events()

    # Create database tables
    from livepoll import models  # noqa: F401
    with app.app_context():
        db.create_all()
        app.logger.info('Database tables created/verified')

    return app

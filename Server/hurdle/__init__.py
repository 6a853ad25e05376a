"""
Hurdle Game Server Application Package

Hurdle Mode for Wordle: a chain of 4-guess puzzles where each solved answer
becomes the first guess of the next one. Served over a JSON HTTP API and a
Socket.IO channel.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, WORD_LIST


def create_app(config_class=Config, dictionary=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        dictionary: Word source to share between games; built from the
            configuration and the bundled word list when omitted

    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    from .services.dictionary import Dictionary
    from .services.session_service import SessionService

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    if dictionary is None:
        dictionary = Dictionary.from_config(app.config, WORD_LIST)

    session_service = SessionService(dictionary, hard_mode=app.config.get('HARD_MODE', False))
    app.extensions['hurdle_dictionary'] = dictionary
    app.extensions['hurdle_sessions'] = session_service

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.hurdle_controller import hurdle_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(hurdle_bp, url_prefix='/api/hurdle')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio, session_service)

    app.socketio = socketio

    return app, socketio

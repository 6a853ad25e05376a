"""
Lookup Decorators

Resolve game and hurdle ids for HTTP and WebSocket handlers before the
handler body runs.
"""

from functools import wraps

from flask import jsonify, request
from flask_socketio import emit

from .helpers import get_session_service
from .game_logger import game_logger


def _missing_service_response():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def require_game(f):
    """
    Decorator for endpoints taking a ``game_id``: passes the GameController
    as ``controller`` or answers 404 when the id is unknown.
    """
    @wraps(f)
    async def decorated_function(game_id, *args, **kwargs):
        session_service = get_session_service()
        if not session_service:
            return _missing_service_response()

        controller = session_service.get_game(game_id)
        if controller is None:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, request.endpoint, False, error_response, game_id)
            return jsonify(error_response), 404

        return await f(game_id, *args, controller=controller, **kwargs)

    return decorated_function


def require_hurdle(f):
    """
    Decorator for endpoints taking a ``hurdle_id``: passes the HurdleController
    as ``controller`` or answers 404 when the id is unknown.
    """
    @wraps(f)
    async def decorated_function(hurdle_id, *args, **kwargs):
        session_service = get_session_service()
        if not session_service:
            return _missing_service_response()

        controller = session_service.get_hurdle(hurdle_id)
        if controller is None:
            error_response = {
                'success': False,
                'error': 'Hurdle session not found'
            }
            game_logger.log_server_response(request, request.endpoint, False, error_response, hurdle_id)
            return jsonify(error_response), 404

        return await f(hurdle_id, *args, controller=controller, **kwargs)

    return decorated_function


def websocket_hurdle_required(session_service):
    """Decorator factory for WebSocket events carrying a ``hurdle_id``."""
    def decorator(f):
        @wraps(f)
        def decorated_function(data=None, *args, **kwargs):
            if not isinstance(data, dict) or not data.get('hurdle_id'):
                emit('error', {'error': 'Hurdle ID is required'})
                return

            controller = session_service.get_hurdle(data['hurdle_id'])
            if controller is None:
                emit('error', {'error': 'Hurdle session not found'})
                return

            kwargs['controller'] = controller
            return f(data, *args, **kwargs)

        return decorated_function
    return decorator

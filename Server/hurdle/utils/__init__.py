"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game, require_hurdle, websocket_hurdle_required
from .helpers import error_response, get_dictionary, get_session_service
from .game_logger import game_logger

__all__ = [
    'require_game', 'require_hurdle', 'websocket_hurdle_required', 'error_response',
    'get_dictionary', 'get_session_service', 'game_logger'
]

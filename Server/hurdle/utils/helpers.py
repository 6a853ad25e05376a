"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional

from flask import current_app, jsonify, request

from .game_logger import game_logger


def get_session_service():
    """Session registry of the current application, or None if it was not set up."""
    return current_app.extensions.get('hurdle_sessions')


def get_dictionary():
    """Dictionary shared by every game of the current application."""
    return current_app.extensions.get('hurdle_dictionary')


def error_response(action: str,
                   error: Exception,
                   status_code: int,
                   game_id: Optional[str] = None,
                   log_error: bool = False):
    """
    Build and log a JSON error response.

    Args:
        action: Action that failed
        error: The exception raised by the service layer
        status_code: HTTP status to return
        game_id: Game or hurdle session identifier if applicable
        log_error: Also record the exception through ``log_error``

    Returns:
        Tuple of (response, status_code) for a Flask view
    """
    if log_error:
        game_logger.log_error(request, error, action, game_id)

    body = {
        'success': False,
        'error': getattr(error, 'message', None) or str(error)
    }
    game_logger.log_server_response(request, action, False, body, game_id, status_code=status_code)
    return jsonify(body), status_code

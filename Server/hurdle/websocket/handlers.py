"""
WebSocket Event Handlers

Real-time guessing and state updates for hurdle chains.
"""

import asyncio

from flask import request
from flask_socketio import emit

from ..controllers.hurdle_controller import log_turn_events
from ..exceptions import HurdleError
from ..utils.decorators import websocket_hurdle_required
from ..utils.game_logger import game_logger


def register_websocket_handlers(socketio, session_service):
    """Register all WebSocket event handlers against one session registry."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('hurdle_state')
    @websocket_hurdle_required(session_service)
    def handle_hurdle_state(data, controller=None):
        """Send the current chain state to the caller."""
        emit('hurdle_update', {
            'success': True,
            'hurdle_id': data['hurdle_id'],
            **controller.to_dict()
        })

    @socketio.on('hurdle_guess')
    @websocket_hurdle_required(session_service)
    def handle_hurdle_guess(data, controller=None):
        """Submit a guess to the current hurdle via WebSocket."""
        hurdle_id = data['hurdle_id']
        guess = data.get('guess')

        if not guess:
            emit('error', {'error': 'Guess is required'})
            return

        try:
            turn = asyncio.run(controller.submit_guess(guess))
        except HurdleError as e:
            emit('error', {'error': e.message})
            return
        except Exception as e:
            game_logger.logger.error(f"WebSocket guess failed for hurdle {hurdle_id}: {e}")
            emit('error', {'error': str(e)})
            return

        log_turn_events(hurdle_id, controller, turn, request.remote_addr)

        emit('hurdle_update', {
            'success': True,
            'hurdle_id': hurdle_id,
            'turn': turn.to_dict(),
            **controller.to_dict()
        })

"""
Hurdle Controller

Handles the Hurdle Mode HTTP endpoints: starting a chain, guessing, reading
state and stopping.
"""

from flask import Blueprint, request, jsonify

from ..exceptions import (
    DuplicateWordExhaustedError, GuessError, HurdleModeError, WordSourceUnavailableError
)
from ..utils.decorators import require_hurdle
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response, get_session_service

hurdle_bp = Blueprint('hurdle', __name__)


def log_turn_events(hurdle_id, controller, turn, user_ip):
    """Record a game event for every hurdle a turn solved or failed."""
    for transition in turn.transitions:
        completed = transition.completed_hurdle
        game_logger.log_game_event(
            hurdle_id, 'hurdle_completed', user_ip,
            hurdle_number=completed.hurdle_number, target_word=completed.target_word,
            guess_count=completed.guess_count, score=completed.score,
            auto_guess=transition.auto_guess
        )

    if turn.session_ended:
        session = controller.get_session()
        game_logger.log_game_event(
            hurdle_id, 'hurdle_failed', user_ip,
            hurdle_number=controller.get_hurdle_state().get_current_hurdle_number(),
            target_word=session.final_hurdle_answer, final_score=session.final_score,
            completed_hurdles=controller.get_hurdle_state().get_completed_hurdles_count()
        )


@hurdle_bp.route('/start', methods=['POST'])
async def start_hurdle():
    """Start a new hurdle chain at hurdle 1."""
    try:
        session_service = get_session_service()
        if not session_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'start_hurdle')

        hurdle_id, controller = await session_service.create_hurdle()

        response_data = {
            'success': True,
            'hurdle_id': hurdle_id,
            **controller.to_dict()
        }

        game_logger.log_server_response(request, 'start_hurdle', True, response_data, hurdle_id)
        game_logger.log_game_event(hurdle_id, 'hurdle_mode_started', request.remote_addr)

        return jsonify(response_data)

    except (WordSourceUnavailableError, DuplicateWordExhaustedError) as e:
        return error_response('start_hurdle', e, 503, log_error=True)
    except Exception as e:
        return error_response('start_hurdle', e, 500, log_error=True)


@hurdle_bp.route('/<hurdle_id>/state', methods=['GET'])
@require_hurdle
async def get_hurdle_state(hurdle_id, controller=None):
    """Get the chain summary and the current hurdle's board."""
    try:
        game_logger.log_user_action(request, 'get_hurdle_state', hurdle_id)

        response_data = {
            'success': True,
            'hurdle_id': hurdle_id,
            **controller.to_dict()
        }

        game_logger.log_server_response(request, 'get_hurdle_state', True, response_data, hurdle_id)

        return jsonify(response_data)

    except Exception as e:
        return error_response('get_hurdle_state', e, 500, hurdle_id, log_error=True)


@hurdle_bp.route('/<hurdle_id>/guess', methods=['POST'])
@require_hurdle
async def make_hurdle_guess(hurdle_id, controller=None):
    """Submit a guess to the current hurdle."""
    try:
        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            error_data = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_hurdle_guess', False, error_data, hurdle_id)
            return jsonify(error_data), 400

        guess = data['guess']

        game_logger.log_user_action(
            request, 'submit_hurdle_guess', hurdle_id,
            guess=guess, hurdle_number=controller.get_hurdle_state().get_current_hurdle_number()
        )

        turn = await controller.submit_guess(guess)

        response_data = {
            'success': True,
            'hurdle_id': hurdle_id,
            'turn': turn.to_dict(),
            **controller.to_dict()
        }

        game_logger.log_server_response(request, 'submit_hurdle_guess', True, response_data, hurdle_id, guess=guess)
        log_turn_events(hurdle_id, controller, turn, request.remote_addr)

        return jsonify(response_data)

    except (GuessError, HurdleModeError) as e:
        return error_response('submit_hurdle_guess', e, 400, hurdle_id)
    except (WordSourceUnavailableError, DuplicateWordExhaustedError) as e:
        return error_response('submit_hurdle_guess', e, 503, hurdle_id, log_error=True)
    except Exception as e:
        return error_response('submit_hurdle_guess', e, 500, hurdle_id, log_error=True)


@hurdle_bp.route('/<hurdle_id>/end', methods=['POST'])
@require_hurdle
async def end_hurdle(hurdle_id, controller=None):
    """Stop the chain and reveal the current hurdle's answer."""
    try:
        game_logger.log_user_action(request, 'end_hurdle', hurdle_id)

        was_active = controller.is_active()
        session = controller.end_hurdle_mode()

        response_data = {
            'success': True,
            'hurdle_id': hurdle_id,
            **controller.to_dict()
        }

        game_logger.log_server_response(request, 'end_hurdle', True, response_data, hurdle_id)

        if was_active:
            game_logger.log_game_event(
                hurdle_id, 'hurdle_mode_ended', request.remote_addr,
                end_reason=session.end_reason.value, final_score=session.final_score,
                final_hurdle_answer=session.final_hurdle_answer
            )

        return jsonify(response_data)

    except HurdleModeError as e:
        return error_response('end_hurdle', e, 400, hurdle_id)
    except Exception as e:
        return error_response('end_hurdle', e, 500, hurdle_id, log_error=True)


@hurdle_bp.route('/<hurdle_id>', methods=['DELETE'])
async def delete_hurdle(hurdle_id):
    """Forget a hurdle chain."""
    try:
        session_service = get_session_service()
        if not session_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_hurdle', hurdle_id)

        success = session_service.delete_hurdle(hurdle_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_hurdle', success, response_data, hurdle_id)

        if not success:
            response_data['error'] = 'Hurdle session not found'
            return jsonify(response_data), 404

        return jsonify(response_data)

    except Exception as e:
        return error_response('delete_hurdle', e, 500, hurdle_id, log_error=True)

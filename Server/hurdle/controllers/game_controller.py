"""
Game Controller

Handles single-game HTTP endpoints and the health check.
"""

from flask import Blueprint, request, jsonify

from ..exceptions import DuplicateWordExhaustedError, GuessError, WordSourceUnavailableError
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response, get_dictionary, get_session_service

game_bp = Blueprint('game', __name__)


@game_bp.route('/new_game', methods=['POST'])
async def new_game():
    """Create a new single game with a random secret word."""
    try:
        session_service = get_session_service()
        if not session_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'new_game')

        game_id, controller = await session_service.create_game()
        state = controller.get_game_state()

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            max_attempts=state.max_attempts
        )

        return jsonify(response_data)

    except (WordSourceUnavailableError, DuplicateWordExhaustedError) as e:
        return error_response('new_game', e, 503, log_error=True)
    except Exception as e:
        return error_response('new_game', e, 500, log_error=True)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
async def get_state(game_id, controller=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = controller.get_game_state()
        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            attempts_used=len(state.guesses), game_over=state.is_game_over()
        )

        return jsonify(response_data)

    except Exception as e:
        return error_response('get_state', e, 500, game_id, log_error=True)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
async def make_guess(game_id, controller=None):
    """Submit a guess for validation and evaluation."""
    try:
        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            error_data = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_data, game_id)
            return jsonify(error_data), 400

        guess = data['guess']

        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        state = await controller.submit_guess(guess)

        response_data = {
            'success': True,
            'state': state.to_dict()
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=guess, attempts_used=len(state.guesses), game_over=state.is_game_over()
        )

        if state.is_game_over():
            event = 'game_won' if response_data['state']['won'] else 'game_lost'
            game_logger.log_game_event(
                game_id, event, request.remote_addr,
                attempts_used=len(state.guesses), target_word=state.target_word,
                final_guess=guess
            )

        return jsonify(response_data)

    except GuessError as e:
        return error_response('submit_guess', e, 400, game_id)
    except Exception as e:
        return error_response('submit_guess', e, 500, game_id, log_error=True)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
async def delete_game(game_id):
    """Delete a game session."""
    try:
        session_service = get_session_service()
        if not session_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = session_service.delete_game(game_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if not success:
            response_data['error'] = 'Game not found'
            return jsonify(response_data), 404

        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
        return jsonify(response_data)

    except Exception as e:
        return error_response('delete_game', e, 500, game_id, log_error=True)


@game_bp.route('/health', methods=['GET'])
async def health_check():
    """Health check endpoint."""
    try:
        session_service = get_session_service()
        dictionary = get_dictionary()

        game_logger.log_user_action(request, 'health_check')

        stats = session_service.get_stats() if session_service else {}

        response_data = {
            'status': 'healthy',
            'active_games': stats.get('active_games', 0),
            'active_hurdles': stats.get('active_hurdles', 0),
            'hurdle_sessions': stats.get('hurdle_sessions', 0),
            'log_stats': game_logger.get_log_stats(),
            'dictionary_size': dictionary.size() if dictionary else 0,
            'api_usage': dictionary.get_api_usage_stats() if dictionary else None
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_data = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_data)
        return jsonify(error_data), 500

"""
Tests for the hurdle chain: completion, auto-guess hand-off, word
uniqueness, failure and manual stop.
"""

import asyncio
import random

import pytest

from conftest import ScriptedDictionary
from hurdle.exceptions import (
    DuplicateWordExhaustedError, HurdleModeError, InvalidLengthError, WordSourceUnavailableError
)
from hurdle.models.game import GameStatus
from hurdle.models.hurdle import ChainStatus, EndReason
from hurdle.services.dictionary import Dictionary
from hurdle.services.hurdle_service import HurdleController


class EmptyApiClient:
    """Enabled WordsAPI stand-in that never produces a word."""

    def is_enabled(self):
        return True

    def can_make_request(self):
        return True

    async def random_word(self, frequency_range=None):
        return None

    async def word_exists(self, word):
        return None


class QueuedApiClient:
    """WordsAPI stand-in that serves queued random words, then nothing."""

    def __init__(self, *words):
        self.words = list(words)

    def is_enabled(self):
        return True

    def can_make_request(self):
        return True

    async def random_word(self, frequency_range=None):
        return self.words.pop(0) if self.words else None

    async def word_exists(self, word):
        return True


def started(*secret_words, words=None):
    dictionary = ScriptedDictionary(secret_words=secret_words) if words is None \
        else ScriptedDictionary(words=words, secret_words=secret_words)
    controller = HurdleController(dictionary)
    asyncio.run(controller.start_hurdle_mode())
    return controller


def test_start_hurdle_mode():
    controller = started('CRANE')

    assert controller.status == ChainStatus.ACTIVE
    assert controller.is_active()
    assert controller.get_session().is_active()
    assert controller.get_hurdle_state().get_current_hurdle_number() == 1
    assert controller.get_current_game_state().target_word == 'CRANE'
    assert controller.get_current_game_state().max_attempts == 4


def test_first_try_solve_scores_and_starts_next_hurdle():
    controller = started('CRANE', 'SLATE')

    turn = asyncio.run(controller.submit_guess('crane'))

    assert turn.game_state.status == GameStatus.WON
    assert len(turn.transitions) == 1
    assert turn.transition.completed_hurdle.score == 175
    assert turn.transition.next_hurdle_number == 2
    assert turn.transition.auto_guess == 'CRANE'

    next_state = turn.next_game_state
    assert next_state is controller.get_current_game_state()
    assert next_state.target_word == 'SLATE'
    assert [guess.word for guess in next_state.guesses] == ['CRANE']
    assert next_state.get_remaining_attempts() == 3

    hurdle_state = controller.get_hurdle_state()
    assert hurdle_state.get_completed_hurdles_count() == 1
    assert hurdle_state.get_total_score() == 175
    assert hurdle_state.get_current_hurdle_number() == 2
    assert not turn.session_ended


def test_auto_guess_counts_toward_next_score():
    controller = started('CRANE', 'SLATE')
    asyncio.run(controller.submit_guess('CRANE'))

    turn = asyncio.run(controller.submit_guess('SLATE'))

    assert turn.transition.completed_hurdle.guess_count == 2
    assert turn.transition.completed_hurdle.score == 300
    assert controller.get_hurdle_state().get_total_score() == 475
    assert controller.get_hurdle_state().get_solved_words() == ['CRANE', 'SLATE']


def test_next_word_never_repeats_previous_answer():
    controller = started('CRANE', 'CRANE', 'CRANE', 'PLANT')

    turn = asyncio.run(controller.submit_guess('CRANE'))

    assert turn.next_game_state.target_word == 'PLANT'
    assert controller.dictionary.draws == 4


def test_scan_fallback_after_repeated_draws():
    controller = started(*(['CRANE'] * 11))

    turn = asyncio.run(controller.submit_guess('CRANE'))

    # first word of the list that differs from CRANE
    assert turn.next_game_state.target_word == 'SLATE'
    assert controller.dictionary.draws == 11


def test_single_word_dictionary_exhausts():
    controller = started(words=['CRANE'])

    with pytest.raises(DuplicateWordExhaustedError):
        asyncio.run(controller.submit_guess('CRANE'))


def test_empty_word_source_is_fatal():
    dictionary = Dictionary([], api_client=EmptyApiClient())
    controller = HurdleController(dictionary)

    with pytest.raises(WordSourceUnavailableError):
        asyncio.run(controller.start_hurdle_mode())

    assert controller.status == ChainStatus.IDLE
    assert controller.get_session() is None


def test_running_out_of_attempts_ends_chain():
    controller = started('CRANE')

    for word in ('SLATE', 'PLANT', 'BRICK'):
        turn = asyncio.run(controller.submit_guess(word))
        assert not turn.session_ended

    turn = asyncio.run(controller.submit_guess('MOUNT'))

    session = controller.get_session()
    assert turn.session_ended
    assert turn.game_state.status == GameStatus.LOST
    assert controller.status == ChainStatus.ENDED
    assert session.end_reason == EndReason.FAILURE
    assert session.final_hurdle_answer == 'CRANE'
    assert session.final_score == 0

    with pytest.raises(HurdleModeError):
        asyncio.run(controller.submit_guess('GHOST'))


def test_failure_keeps_earlier_score():
    controller = started('CRANE', 'SLATE')
    asyncio.run(controller.submit_guess('CRANE'))

    for word in ('PLANT', 'BRICK', 'MOUNT'):
        turn = asyncio.run(controller.submit_guess(word))

    assert turn.session_ended
    assert controller.get_session().final_score == 175
    assert controller.get_session().final_hurdle_answer == 'SLATE'
    assert controller.calculate_final_score() == 175


def test_rejected_guess_leaves_chain_untouched():
    controller = started('CRANE')

    with pytest.raises(InvalidLengthError):
        asyncio.run(controller.submit_guess('CRANES'))

    assert controller.get_current_game_state().guesses == []
    assert controller.is_active()


def test_manual_stop_reveals_answer_and_is_idempotent():
    controller = started('CRANE')

    session = controller.end_hurdle_mode()
    ended_at = session.ended_at

    assert session.end_reason == EndReason.MANUAL_STOP
    assert session.final_hurdle_answer == 'CRANE'
    assert session.final_score == 0
    assert not controller.is_active()

    again = controller.end_hurdle_mode()
    assert again is session
    assert again.ended_at == ended_at


def test_end_without_session_raises():
    controller = HurdleController(ScriptedDictionary())

    with pytest.raises(HurdleModeError):
        controller.end_hurdle_mode()


def test_process_completion_requires_won_state():
    controller = started('CRANE')

    with pytest.raises(HurdleModeError):
        controller.process_hurdle_completion(controller.get_current_game_state())


def test_process_completion_rejects_duplicate():
    controller = started('CRANE')
    game_controller = controller.get_current_game_controller()
    state = asyncio.run(game_controller.submit_guess('CRANE'))

    transition = controller.process_hurdle_completion(state)
    assert transition.completed_hurdle.score == 175

    with pytest.raises(HurdleModeError):
        controller.process_hurdle_completion(state)


def test_process_completion_requires_active_chain():
    controller = HurdleController(ScriptedDictionary())
    state = asyncio.run(controller._new_game_controller().start_new_game())

    with pytest.raises(HurdleModeError):
        controller.process_hurdle_completion(state)


def test_restart_begins_fresh_session():
    controller = started('CRANE', 'SLATE', 'PLANT')
    asyncio.run(controller.submit_guess('CRANE'))
    first_session = controller.get_session()

    session = asyncio.run(controller.start_hurdle_mode())

    assert session is not first_session
    assert not first_session.is_active()
    assert first_session.end_reason == EndReason.MANUAL_STOP
    assert first_session.final_score == 175
    assert controller.get_hurdle_state().get_total_score() == 0
    assert controller.get_hurdle_state().get_current_hurdle_number() == 1
    assert controller.get_current_game_state().target_word == 'PLANT'


def test_restart_keeps_ended_session_record():
    controller = started('CRANE', 'SLATE', 'PLANT')
    asyncio.run(controller.submit_guess('CRANE'))
    ended = controller.end_hurdle_mode()

    asyncio.run(controller.start_hurdle_mode())

    assert ended.final_score == 175
    assert ended.end_reason == EndReason.MANUAL_STOP
    assert ended.hurdle_state.get_completed_hurdles_count() == 1
    assert ended.to_dict()['total_score'] == 175
    assert controller.get_session() is not ended
    assert controller.get_hurdle_state() is not ended.hurdle_state


def test_lost_word_source_mid_chain_ends_session():
    dictionary = Dictionary([], api_client=QueuedApiClient('CRANE'))
    controller = HurdleController(dictionary)
    asyncio.run(controller.start_hurdle_mode())

    with pytest.raises(WordSourceUnavailableError):
        asyncio.run(controller.submit_guess('CRANE'))

    session = controller.get_session()
    assert controller.status == ChainStatus.ENDED
    assert session.end_reason == EndReason.FAILURE
    assert session.final_score == 175
    assert controller.get_hurdle_state().get_completed_hurdles_count() == 1

    with pytest.raises(HurdleModeError):
        asyncio.run(controller.submit_guess('SLATE'))


def test_exhausted_dictionary_ends_session():
    controller = started(words=['CRANE'])

    with pytest.raises(DuplicateWordExhaustedError):
        asyncio.run(controller.submit_guess('CRANE'))

    assert controller.status == ChainStatus.ENDED
    assert controller.get_session().end_reason == EndReason.FAILURE


def test_scan_fallback_skips_proper_nouns():
    controller = started(*(['CRANE'] * 11), words=['crane', 'Paris', 'slate'])

    turn = asyncio.run(controller.submit_guess('CRANE'))

    assert turn.next_game_state.target_word == 'SLATE'


def test_scan_fallback_uses_proper_noun_as_last_resort():
    controller = started(*(['CRANE'] * 11), words=['crane', 'Paris'])

    turn = asyncio.run(controller.submit_guess('CRANE'))

    assert turn.next_game_state.target_word == 'PARIS'


@pytest.mark.parametrize('words', [
    ['crane', 'slate'],
    ['crane', 'slate', 'plant', 'ghost', 'brick'],
])
@pytest.mark.parametrize('seed', range(8))
def test_next_hurdle_never_repeats_over_random_draws(words, seed):
    dictionary = Dictionary(words, rng=random.Random(seed))
    controller = HurdleController(dictionary)
    asyncio.run(controller.start_hurdle_mode())

    for _ in range(25):
        previous = controller.get_current_game_state().target_word
        turn = asyncio.run(controller.submit_guess(previous))

        assert turn.next_game_state.target_word != previous
        assert turn.next_game_state.guesses[0].word == previous

    assert controller.get_hurdle_state().get_completed_hurdles_count() == 25
    assert controller.get_hurdle_state().validate_state()

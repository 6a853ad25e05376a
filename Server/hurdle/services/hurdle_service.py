"""
Hurdle Service

Orchestrates Hurdle Mode: an unbroken chain of 4-guess puzzles where every
solved answer becomes the first guess of the next puzzle.
"""

import logging
from typing import Dict, List, Optional

from ..config.game_settings import MAX_ATTEMPTS, MAX_WORD_DRAWS
from ..exceptions import (
    DuplicateWordExhaustedError, GuessError, HurdleModeError, WordSourceUnavailableError
)
from ..models.game import GameState, GameStatus
from ..models.hurdle import (
    ChainStatus, CompletedHurdle, EndReason, HurdleSession, HurdleState,
    HurdleTransition, HurdleTurn
)
from .dictionary import Dictionary
from .game_service import GameController
from .scoring import ScoreCalculator

logger = logging.getLogger('hurdle_game.hurdle')


class HurdleController:
    """
    Owns the hurdle chain.

    Chain status moves idle -> active -> ended. ``start_hurdle_mode`` can be
    called from any status and always begins a fresh session. The hurdle state
    and the current game controller are only ever mutated from here.
    """

    def __init__(self, dictionary: Dictionary, hard_mode: bool = False, max_attempts: int = MAX_ATTEMPTS):
        if dictionary is None:
            raise ValueError("Dictionary is required")

        self.dictionary = dictionary
        self.hard_mode = hard_mode
        self.max_attempts = max_attempts
        self.hurdle_state = HurdleState()
        self.session: Optional[HurdleSession] = None
        self.current_game_controller: Optional[GameController] = None
        self.status = ChainStatus.IDLE
        self.previous_answer: Optional[str] = None
        self._last_completed: Optional[GameState] = None

    def _new_game_controller(self) -> GameController:
        return GameController(self.dictionary, hard_mode=self.hard_mode, max_attempts=self.max_attempts)

    def _require_active(self) -> None:
        if self.status != ChainStatus.ACTIVE or self.session is None:
            raise HurdleModeError("Hurdle mode is not active. Start a new hurdle session first.")

    async def start_hurdle_mode(self) -> HurdleSession:
        """
        Start a new session at hurdle 1.

        A session that is still running is stopped first; earlier sessions
        keep their own hurdle state.

        Returns:
            HurdleSession: The new session

        Raises:
            WordSourceUnavailableError: If no secret word can be drawn
        """
        controller = self._new_game_controller()
        game_state = await controller.start_new_game()

        if self.status == ChainStatus.ACTIVE:
            self.end_hurdle_mode(EndReason.MANUAL_STOP)

        self.hurdle_state = HurdleState()
        self.session = HurdleSession(self.hurdle_state)
        self.current_game_controller = controller
        self.previous_answer = game_state.target_word
        self._last_completed = None
        self.status = ChainStatus.ACTIVE

        logger.info(f"Hurdle session {self.session.session_id} started")
        return self.session

    def process_hurdle_completion(self, game_state: GameState) -> HurdleTransition:
        """
        Score a won hurdle and record it.

        Does not start the next hurdle; call ``start_next_hurdle`` with the
        solved word for that.

        Raises:
            HurdleModeError: If the chain is not active, the game was not won
                or the same game was already recorded
        """
        self._require_active()

        if game_state is None:
            raise ValueError("Game state is required")

        if game_state.status != GameStatus.WON:
            raise HurdleModeError("Can only process completed (won) hurdles")

        if game_state is self._last_completed:
            raise HurdleModeError("This hurdle has already been recorded")

        hurdle_number = self.hurdle_state.get_current_hurdle_number()
        guesses = game_state.get_guesses()
        score = ScoreCalculator.calculate_hurdle_score(hurdle_number, len(guesses))

        completed = CompletedHurdle(
            hurdle_number=hurdle_number,
            target_word=game_state.target_word,
            guess_count=len(guesses),
            score=score,
            guesses=tuple(guesses)
        )
        self.hurdle_state.add_completed_hurdle(completed)
        self._last_completed = game_state

        logger.info(
            f"Hurdle {hurdle_number} solved in {len(guesses)} guess(es): "
            f"+{score} (total {self.hurdle_state.get_total_score()})"
        )

        return HurdleTransition(
            completed_hurdle=completed,
            next_hurdle_number=self.hurdle_state.get_current_hurdle_number(),
            auto_guess=game_state.target_word
        )

    async def start_next_hurdle(self,
                                previous_answer: str,
                                transitions: Optional[List[HurdleTransition]] = None) -> GameState:
        """
        Start the next hurdle with the previous answer as automatic first guess.

        The new secret word always differs from ``previous_answer``. If the
        auto-guess wins anyway, the hurdle is recorded and the chain moves on
        by itself; any such transitions are appended to ``transitions``.

        Returns:
            GameState: The new hurdle's state, auto-guess applied

        Raises:
            WordSourceUnavailableError: If no word source is left
            DuplicateWordExhaustedError: If every word equals the previous answer

            Either word-source error ends the session with a failure first.
        """
        self._require_active()

        if not previous_answer or not isinstance(previous_answer, str):
            raise ValueError("Previous answer is required for auto-guess")

        previous_answer = previous_answer.upper()
        try:
            new_word = await self._select_different_word(previous_answer)
        except (WordSourceUnavailableError, DuplicateWordExhaustedError) as e:
            self._end(EndReason.FAILURE, None)
            logger.error(f"Hurdle session {self.session.session_id} ended, no next word: {e.message}")
            raise

        controller = self._new_game_controller()
        game_state = controller.start_with_word(new_word)

        try:
            await controller.submit_guess(previous_answer, validate_word=False)
        except GuessError as e:
            raise HurdleModeError(f"Auto-guess failed: {e.message}") from e

        self.current_game_controller = controller
        self.previous_answer = new_word

        if game_state.status == GameStatus.WON:
            transition = self.process_hurdle_completion(game_state)
            if transitions is not None:
                transitions.append(transition)
            return await self.start_next_hurdle(new_word, transitions)

        if game_state.status == GameStatus.LOST:
            self.process_hurdle_failure(game_state)

        return game_state

    async def _select_different_word(self, previous_answer: str) -> str:
        for attempt in range(1, MAX_WORD_DRAWS + 1):
            try:
                candidate = await self.dictionary.get_random_word()
            except WordSourceUnavailableError as e:
                logger.warning(f"Word draw {attempt} failed: {e.message}")
                break

            if candidate.upper() != previous_answer:
                return candidate.upper()

        logger.warning(f"Random draws kept returning '{previous_answer}', scanning word list")
        return await self._scan_for_different_word(previous_answer)

    async def _scan_for_different_word(self, previous_answer: str) -> str:
        """First listed word other than ``previous_answer``, preferring common words."""
        words = self.dictionary.words
        if not words:
            raise WordSourceUnavailableError()

        candidates = [word for word in words if word != previous_answer]
        if not candidates:
            raise DuplicateWordExhaustedError()

        for word in candidates:
            if not await self.dictionary.is_proper_noun(word):
                return word

        logger.warning("Every remaining word is a proper noun, using the first one")
        return candidates[0]

    async def submit_guess(self, raw_input: str) -> HurdleTurn:
        """
        Submit a player guess to the current hurdle and advance the chain.

        A winning guess records the hurdle and starts the next one; a guess
        that uses up the last attempt ends the session with a failure.

        Raises:
            HurdleModeError: If no session is active
            GuessError subclass: If the guess is rejected (state unchanged)
        """
        self._require_active()

        game_state = await self.current_game_controller.submit_guess(raw_input)
        turn = HurdleTurn(game_state=game_state)

        if game_state.status == GameStatus.WON:
            turn.transitions.append(self.process_hurdle_completion(game_state))
            turn.next_game_state = await self.start_next_hurdle(game_state.target_word, turn.transitions)
        elif game_state.status == GameStatus.LOST:
            self.process_hurdle_failure(game_state)

        turn.session_ended = self.status == ChainStatus.ENDED
        return turn

    def process_hurdle_failure(self, game_state: GameState) -> HurdleSession:
        """End the chain after a hurdle ran out of attempts."""
        self._require_active()

        if game_state.status != GameStatus.LOST:
            raise HurdleModeError("Can only fail a lost hurdle")

        self._end(EndReason.FAILURE, game_state.target_word)
        logger.info(
            f"Hurdle session {self.session.session_id} failed on hurdle "
            f"{self.hurdle_state.get_current_hurdle_number()} ({game_state.target_word}), "
            f"final score {self.session.final_score}"
        )
        return self.session

    def end_hurdle_mode(self,
                        reason: EndReason = EndReason.MANUAL_STOP,
                        final_hurdle_answer: Optional[str] = None) -> HurdleSession:
        """
        Stop the chain. Ending an already ended session returns it unchanged.

        Raises:
            HurdleModeError: If no session was ever started
        """
        if self.session is None:
            raise HurdleModeError("No active session to end")

        if self.status == ChainStatus.ENDED:
            return self.session

        if final_hurdle_answer is None and self.current_game_controller is not None:
            final_hurdle_answer = self.current_game_controller.get_game_state().target_word

        self._end(reason, final_hurdle_answer)
        logger.info(f"Hurdle session {self.session.session_id} ended ({reason.value})")
        return self.session

    def _end(self, reason: EndReason, final_hurdle_answer: Optional[str]) -> None:
        self.session.end(reason, self.calculate_final_score(), final_hurdle_answer)
        self.status = ChainStatus.ENDED

    def calculate_final_score(self) -> int:
        if self.session is None:
            return 0
        return ScoreCalculator.calculate_final_score(self.hurdle_state.get_completed_hurdles())

    def get_hurdle_state(self) -> HurdleState:
        return self.hurdle_state

    def get_session(self) -> Optional[HurdleSession]:
        return self.session

    def get_current_game_controller(self) -> Optional[GameController]:
        return self.current_game_controller

    def get_current_game_state(self) -> Optional[GameState]:
        if self.current_game_controller is None:
            return None
        return self.current_game_controller.get_game_state()

    def is_active(self) -> bool:
        return self.status == ChainStatus.ACTIVE

    def to_dict(self) -> Dict:
        game_state = self.get_current_game_state()
        return {
            'status': self.status.value,
            'session': self.session.to_dict() if self.session else None,
            'current_hurdle_number': self.hurdle_state.get_current_hurdle_number(),
            'state': game_state.to_dict() if game_state else None
        }

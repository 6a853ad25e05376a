"""
Game Service

Contains the per-puzzle game logic: starting a game, validating guesses and
applying them to the game state.
"""

import logging
from typing import Optional

from ..config.game_settings import MAX_ATTEMPTS, WORD_LENGTH
from ..exceptions import (
    AlreadyGuessedError, EmptyInputError, GameOverError, InvalidCharactersError,
    InvalidLengthError, NoActiveGameError, NotInDictionaryError
)
from ..models.game import GameState, Guess
from .dictionary import Dictionary
from .feedback import generate_feedback
from .hard_mode import HardModeValidator

logger = logging.getLogger('hurdle_game.game')


class GameController:
    """
    Drives a single puzzle.

    This class handles:
    - Secret word selection through the Dictionary
    - Guess validation (rejected guesses never touch the game state)
    - Feedback generation and status updates
    - Optional hard mode rules
    """

    def __init__(self, dictionary: Dictionary, hard_mode: bool = False, max_attempts: int = MAX_ATTEMPTS):
        if dictionary is None:
            raise ValueError("Dictionary is required")

        self.dictionary = dictionary
        self.max_attempts = max_attempts
        self.hard_mode = hard_mode
        self.hard_mode_validator = HardModeValidator() if hard_mode else None
        self.game_state: Optional[GameState] = None

    async def start_new_game(self) -> GameState:
        """
        Creates a new game with a randomly selected word.

        Returns:
            GameState: A fresh state, unconnected to any previous game

        Raises:
            WordSourceUnavailableError: If the dictionary cannot produce a word
        """
        target_word = await self.dictionary.get_random_word()
        return self.start_with_word(target_word)

    def start_with_word(self, target_word: str) -> GameState:
        """Creates a new game with a given secret word."""
        self.game_state = GameState(target_word, self.max_attempts)

        if self.hard_mode_validator:
            self.hard_mode_validator.reset()

        return self.game_state

    def get_game_state(self) -> Optional[GameState]:
        return self.game_state

    def _normalize_and_check(self, raw_input) -> str:
        """
        Runs every local validation rule.

        Returns:
            str: The upper-cased guess

        Raises:
            GuessError subclass describing the first rule that failed
        """
        if self.game_state is None:
            raise NoActiveGameError()

        if self.game_state.is_game_over():
            raise GameOverError()

        if not isinstance(raw_input, str) or not raw_input.strip():
            raise EmptyInputError()

        normalized_guess = raw_input.strip().upper()

        if len(normalized_guess) != WORD_LENGTH:
            raise InvalidLengthError(f"Word must be exactly {WORD_LENGTH} letters")

        if not normalized_guess.isalpha():
            raise InvalidCharactersError()

        if any(guess.word == normalized_guess for guess in self.game_state.guesses):
            raise AlreadyGuessedError()

        if self.hard_mode_validator:
            self.hard_mode_validator.validate_guess(normalized_guess)

        return normalized_guess

    async def submit_guess(self, raw_input: str, validate_word: bool = True) -> GameState:
        """
        Validates a guess and, if accepted, adds it to the game.

        Args:
            raw_input: The player's input, any case, surrounding spaces ignored
            validate_word: Skip the dictionary lookup when False (used for the
                hurdle auto-guess, which is a previously drawn secret word)

        Returns:
            GameState: The updated state

        Raises:
            GuessError subclass: If the guess is rejected; no attempt is consumed
        """
        normalized_guess = self._normalize_and_check(raw_input)
        game_state = self.game_state

        if validate_word and not await self.dictionary.is_valid_word(normalized_guess):
            raise NotInDictionaryError()

        # A new game may have replaced the state while the lookup was pending
        if self.game_state is not game_state or game_state.is_game_over():
            raise GameOverError()

        feedback = generate_feedback(normalized_guess, game_state.target_word)
        guess = Guess(normalized_guess, tuple(feedback))

        if self.hard_mode_validator:
            self.hard_mode_validator.update_from_feedback(feedback)

        game_state.add_guess(guess)
        logger.debug(f"Guess {len(game_state.guesses)}/{game_state.max_attempts}: {normalized_guess} -> {game_state.status.value}")

        return game_state

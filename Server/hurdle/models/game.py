"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import MAX_ATTEMPTS, WORD_LENGTH
from ..exceptions import GameOverError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class LetterStatus(Enum):
    """Letter evaluation status. UNUSED only appears in the keyboard summary."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNUSED = "unused"


class GameStatus(Enum):
    IN_PROGRESS = "in-progress"
    WON = "won"
    LOST = "lost"


# Keyboard summary only ever moves up this ladder
_STATUS_PRIORITY = {
    LetterStatus.UNUSED: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


@dataclass(frozen=True)
class LetterFeedback:
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {'letter': self.letter, 'status': self.status.value}


@dataclass(frozen=True)
class Guess:
    """A submitted word together with its per-letter feedback."""
    word: str
    feedback: Tuple[LetterFeedback, ...]

    def __post_init__(self):
        if len(self.word) != len(self.feedback):
            raise ValueError("Feedback length must match word length")

    def is_all_correct(self) -> bool:
        return all(item.status == LetterStatus.CORRECT for item in self.feedback)

    def to_dict(self) -> Dict:
        return {
            'word': self.word,
            'feedback': [item.to_dict() for item in self.feedback]
        }


@dataclass
class GameState:
    """
    State of a single puzzle.

    Only ``add_guess`` mutates it; once the status is WON or LOST the state is
    frozen and a new game must be started instead.
    """
    target_word: str
    max_attempts: int = MAX_ATTEMPTS
    guesses: List[Guess] = field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS

    def __post_init__(self):
        if not isinstance(self.target_word, str) or len(self.target_word) != WORD_LENGTH:
            raise ValueError(f"Target word must be exactly {WORD_LENGTH} letters")
        if not isinstance(self.max_attempts, int) or self.max_attempts <= 0:
            raise ValueError("Max attempts must be a positive number")
        self.target_word = self.target_word.upper()

    def add_guess(self, guess: Guess) -> None:
        """
        Append a guess and recompute the status.

        Raises:
            GameOverError: If the game already ended or every attempt is used
        """
        if guess is None:
            raise ValueError("Guess cannot be None")

        if self.status != GameStatus.IN_PROGRESS or len(self.guesses) >= self.max_attempts:
            raise GameOverError("Cannot add guess: game is already over")

        self.guesses.append(guess)

        if guess.word == self.target_word:
            self.status = GameStatus.WON
        elif len(self.guesses) >= self.max_attempts:
            self.status = GameStatus.LOST

    def get_remaining_attempts(self) -> int:
        return self.max_attempts - len(self.guesses)

    def is_game_over(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS

    def get_guesses(self) -> List[Guess]:
        return list(self.guesses)

    def get_game_status(self) -> GameStatus:
        return self.status

    def get_target_word(self) -> str:
        return self.target_word

    def letter_status(self) -> Dict[str, str]:
        """Best status seen for every letter of the alphabet, for the on-screen keyboard."""
        summary = {letter: LetterStatus.UNUSED for letter in ALPHABET}
        for guess in self.guesses:
            for item in guess.feedback:
                current = summary.get(item.letter, LetterStatus.UNUSED)
                if _STATUS_PRIORITY[item.status] > _STATUS_PRIORITY[current]:
                    summary[item.letter] = item.status
        return {letter: status.value for letter, status in summary.items()}

    def to_dict(self) -> Dict:
        """JSON-ready view of the game. The answer is only revealed once the game is over."""
        answer: Optional[str] = self.target_word if self.is_game_over() else None
        return {
            'attempts_used': len(self.guesses),
            'max_attempts': self.max_attempts,
            'remaining_attempts': self.get_remaining_attempts(),
            'status': self.status.value,
            'game_over': self.is_game_over(),
            'won': self.status == GameStatus.WON,
            'guesses': [guess.to_dict() for guess in self.guesses],
            'letter_status': self.letter_status(),
            'answer': answer
        }

"""
Hard Mode Validator

In hard mode every revealed hint must be used: letters marked correct stay in
place and letters marked present must appear somewhere in later guesses.
"""

from typing import Dict, Iterable, Set

from ..exceptions import HardModeViolationError
from ..models.game import LetterFeedback, LetterStatus


def _ordinal(number: int) -> str:
    if number % 10 == 1 and number % 100 != 11:
        return f"{number}st"
    if number % 10 == 2 and number % 100 != 12:
        return f"{number}nd"
    if number % 10 == 3 and number % 100 != 13:
        return f"{number}rd"
    return f"{number}th"


class HardModeValidator:
    """Tracks revealed hints for one game and rejects guesses that ignore them."""

    def __init__(self):
        self.correct_positions: Dict[int, str] = {}
        self.included_letters: Set[str] = set()
        self.excluded_letters: Set[str] = set()

    def update_from_feedback(self, feedback: Iterable[LetterFeedback]) -> None:
        for position, item in enumerate(feedback):
            if item.status == LetterStatus.CORRECT:
                self.correct_positions[position] = item.letter
                self.included_letters.add(item.letter)
            elif item.status == LetterStatus.PRESENT:
                self.included_letters.add(item.letter)
            elif item.status == LetterStatus.ABSENT and item.letter not in self.included_letters:
                self.excluded_letters.add(item.letter)

    def validate_guess(self, guess: str) -> None:
        """
        Raises:
            HardModeViolationError: If the guess drops a revealed hint
        """
        guess = guess.upper()

        for position, letter in sorted(self.correct_positions.items()):
            if guess[position] != letter:
                raise HardModeViolationError(f"{_ordinal(position + 1)} letter must be {letter}")

        for letter in sorted(self.included_letters):
            if letter not in guess:
                raise HardModeViolationError(f"Guess must contain {letter}")

    def reset(self) -> None:
        self.correct_positions.clear()
        self.included_letters.clear()
        self.excluded_letters.clear()

    def get_constraints(self) -> Dict:
        return {
            'correct_positions': dict(self.correct_positions),
            'included_letters': sorted(self.included_letters),
            'excluded_letters': sorted(self.excluded_letters)
        }

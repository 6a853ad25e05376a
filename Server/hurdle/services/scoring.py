"""
Score Calculator

Hurdle score = hurdle_number x 100 x guess multiplier.

Scores are computed with exact decimals and rounded half-up to a whole
number, so 2.5 becomes 3 and the result never depends on float
representation.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable

from ..config.game_settings import BASE_HURDLE_POINTS, GUESS_MULTIPLIERS, MAX_ATTEMPTS
from ..models.hurdle import CompletedHurdle


class ScoreCalculator:
    """Stateless scoring rules for Hurdle Mode."""

    @staticmethod
    def get_guess_multiplier(guess_count: int) -> float:
        return float(ScoreCalculator._multiplier(guess_count))

    @staticmethod
    def _multiplier(guess_count: int) -> Decimal:
        if not isinstance(guess_count, int) or guess_count not in GUESS_MULTIPLIERS:
            raise ValueError(f"Invalid guess count: must be between 1 and {MAX_ATTEMPTS}")
        return Decimal(GUESS_MULTIPLIERS[guess_count])

    @staticmethod
    def calculate_hurdle_score(hurdle_number: int, guess_count: int) -> int:
        """
        Calculate the score for one solved hurdle.

        Args:
            hurdle_number: 1-based position of the hurdle in the chain
            guess_count: Guesses used, auto-guess included (1-4)

        Returns:
            int: Points earned, rounded half-up

        Raises:
            ValueError: If either argument is out of range
        """
        if not isinstance(hurdle_number, int) or hurdle_number < 1:
            raise ValueError("Hurdle number must be a positive number")

        base_score = Decimal(hurdle_number * BASE_HURDLE_POINTS)
        score = base_score * ScoreCalculator._multiplier(guess_count)
        return int(score.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    @staticmethod
    def calculate_final_score(completed_hurdles: Iterable[CompletedHurdle]) -> int:
        """Sum of the stored scores; 0 when nothing was completed."""
        return sum(hurdle.score for hurdle in completed_hurdles)

    @staticmethod
    def validate_score(hurdle_number: int, guess_count: int, actual_score: int) -> bool:
        try:
            return ScoreCalculator.calculate_hurdle_score(hurdle_number, guess_count) == actual_score
        except ValueError:
            return False

    @staticmethod
    def get_score_breakdown(hurdle_number: int, guess_count: int) -> Dict:
        """Breakdown of a hurdle score for display."""
        multiplier = ScoreCalculator.get_guess_multiplier(guess_count)
        final_score = ScoreCalculator.calculate_hurdle_score(hurdle_number, guess_count)
        return {
            'hurdle_number': hurdle_number,
            'guess_count': guess_count,
            'base_score': hurdle_number * BASE_HURDLE_POINTS,
            'multiplier': multiplier,
            'final_score': final_score,
            'formula': f"{hurdle_number} x {BASE_HURDLE_POINTS} x {multiplier} = {final_score}"
        }

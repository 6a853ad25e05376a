"""
Feedback Generator

Implements the Wordle letter evaluation used by every hurdle.
"""

from typing import Dict, List, Optional

from ..models.game import LetterFeedback, LetterStatus


def generate_feedback(guess: str, target_word: str) -> List[LetterFeedback]:
    """
    Compare a guess to the target word letter by letter.

    Two passes keep duplicate letters honest: exact position matches are
    claimed first, then the remaining target letters are handed out left to
    right as PRESENT until each letter's count is used up.

    Args:
        guess: The guessed word
        target_word: The secret word

    Returns:
        List[LetterFeedback]: One entry per letter of the guess

    Raises:
        ValueError: If the words are not strings of the same length
    """
    if not isinstance(guess, str) or not isinstance(target_word, str):
        raise ValueError("Both guess and target word must be strings")

    if len(guess) != len(target_word):
        raise ValueError("Guess and target word must have the same length")

    guess = guess.upper()
    target_word = target_word.upper()

    statuses: List[Optional[LetterStatus]] = [None] * len(guess)

    available: Dict[str, int] = {}
    for letter in target_word:
        available[letter] = available.get(letter, 0) + 1

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == target_word[i]:
            statuses[i] = LetterStatus.CORRECT
            available[letter] -= 1

    # Second pass: right letter, wrong position
    for i, letter in enumerate(guess):
        if statuses[i] is not None:
            continue
        if available.get(letter, 0) > 0:
            statuses[i] = LetterStatus.PRESENT
            available[letter] -= 1
        else:
            statuses[i] = LetterStatus.ABSENT

    return [LetterFeedback(letter, status) for letter, status in zip(guess, statuses)]

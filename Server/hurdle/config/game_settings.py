"""
Game Configuration Constants Module

This module defines all Hurdle rule constants: word length, attempts per hurdle,
the scoring multipliers and the curated word list. All game parameters are
centralized here to enable easy modification.
"""

import json
import os
from typing import Dict, Final, List, Tuple

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5

MAX_ATTEMPTS: Final[int] = 4
"""
Maximum number of guess attempts allowed per hurdle.
Scoring multipliers are only defined for 1..MAX_ATTEMPTS guesses.
"""

BASE_HURDLE_POINTS: Final[int] = 100

GUESS_MULTIPLIERS: Final[Dict[int, str]] = {
    1: "1.75",
    2: "1.5",
    3: "1.25",
    4: "1.0",
}
"""
Score multiplier per number of guesses used. Kept as strings so the score
calculator can build exact Decimals from them.
"""

MAX_WORD_DRAWS: Final[int] = 10
"""Random draws attempted when picking a secret word that differs from the previous answer."""

# WordsAPI frequency ranges (Zipf scale) per difficulty
FREQUENCY_RANGES: Final[Dict[str, Tuple[float, float]]] = {
    'easy': (5.5, 7.0),
    'medium': (4.0, 5.49),
    'hard': (0.0, 4.0),
}

DIFFICULTY_NAMES: Final[Dict[str, str]] = {
    'easy': 'Easy (Common Words)',
    'medium': 'Medium (Moderate Words)',
    'hard': 'Hard (Rare Words)',
}


def get_frequency_range(difficulty: str) -> Tuple[float, float]:
    """Return the WordsAPI frequency range for a difficulty, defaulting to medium."""
    return FREQUENCY_RANGES.get(difficulty, FREQUENCY_RANGES['medium'])


# Load word list from JSON file
def _load_word_list() -> List[str]:
    """
    Load word list from wordles.json file.

    Entries keep their original case so that capitalised entries can be
    recognised as proper nouns by the dictionary.

    Returns:
        List[str]: List of 5-letter words

    Raises:
        FileNotFoundError: If wordles.json file is not found
        ValueError: If JSON is malformed, the list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'wordles.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in wordles.json: {e}") from e

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    for word in word_list:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return word_list


# Curated Word Database loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()


def validate_word_list_integrity(words: List[str] = WORD_LIST) -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly 5 characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries (case-insensitive)
    4. Variety validation: At least two distinct words, so consecutive
       hurdles can always get different answers

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

    normalized = [word.upper() for word in words]
    if len(normalized) != len(set(normalized)):
        duplicates = sorted({word for word in normalized if normalized.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    if len(set(normalized)) < 2:
        raise ValueError("Word list must contain at least two distinct words")

    return True


def get_word_statistics(words: List[str] = WORD_LIST) -> dict:
    """
    Analyzes word list and returns statistical information for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in database
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters
    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    upper_words = [word.upper() for word in words]
    total_vowels = sum(len([char for char in word if char in vowels]) for word in upper_words)

    letter_frequency = {}
    for word in upper_words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(upper_words),
        "avg_vowel_count": round(total_vowels / len(upper_words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)

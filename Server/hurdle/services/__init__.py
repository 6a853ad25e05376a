"""
Services Package

Contains all business logic and service classes.
"""

from .dictionary import Dictionary
from .feedback import generate_feedback
from .game_service import GameController
from .hard_mode import HardModeValidator
from .hurdle_service import HurdleController
from .proper_nouns import (
    ApiProperNounFilter, CombinedProperNounFilter, PatternProperNounFilter, ProperNounFilter
)
from .scoring import ScoreCalculator
from .session_service import SessionService
from .words_api import WordsApiClient, WordsApiUsageTracker

__all__ = [
    'Dictionary', 'generate_feedback', 'GameController', 'HardModeValidator',
    'HurdleController', 'ProperNounFilter', 'PatternProperNounFilter',
    'ApiProperNounFilter', 'CombinedProperNounFilter', 'ScoreCalculator',
    'SessionService', 'WordsApiClient', 'WordsApiUsageTracker'
]

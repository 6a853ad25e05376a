"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameState, GameStatus, Guess, LetterFeedback, LetterStatus
from .hurdle import (
    ChainStatus, CompletedHurdle, EndReason, HurdleSession, HurdleState,
    HurdleTransition, HurdleTurn
)

__all__ = [
    'GameState', 'GameStatus', 'Guess', 'LetterFeedback', 'LetterStatus',
    'ChainStatus', 'CompletedHurdle', 'EndReason', 'HurdleSession', 'HurdleState',
    'HurdleTransition', 'HurdleTurn'
]

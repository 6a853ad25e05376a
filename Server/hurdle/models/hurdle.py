"""
Hurdle Data Models

Chain-level structures for Hurdle Mode: completed hurdles, the running
hurdle state and the session wrapper handed to clients.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import GUESS_MULTIPLIERS, MAX_ATTEMPTS, WORD_LENGTH
from .game import GameState, Guess


class EndReason(Enum):
    NONE = "none"
    FAILURE = "failure"
    MANUAL_STOP = "manual-stop"


class ChainStatus(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class CompletedHurdle:
    """Record of one solved hurdle."""
    hurdle_number: int
    target_word: str
    guess_count: int
    score: int
    guesses: Tuple[Guess, ...]
    completed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not isinstance(self.hurdle_number, int) or self.hurdle_number < 1:
            raise ValueError("Hurdle number must be a positive number")
        if not isinstance(self.target_word, str) or len(self.target_word) != WORD_LENGTH:
            raise ValueError(f"Target word must be a {WORD_LENGTH}-letter string")
        if not isinstance(self.guess_count, int) or not 1 <= self.guess_count <= MAX_ATTEMPTS:
            raise ValueError(f"Guess count must be between 1 and {MAX_ATTEMPTS}")
        if not isinstance(self.score, int) or self.score < 0:
            raise ValueError("Score must be a non-negative number")
        if len(self.guesses) != self.guess_count:
            raise ValueError("Guesses length must match guess count")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'target_word', self.target_word.upper())
        object.__setattr__(self, 'guesses', tuple(self.guesses))

    @property
    def guess_multiplier(self) -> float:
        return float(GUESS_MULTIPLIERS[self.guess_count])

    def to_dict(self) -> Dict:
        return {
            'hurdle_number': self.hurdle_number,
            'target_word': self.target_word,
            'guess_count': self.guess_count,
            'score': self.score,
            'guess_multiplier': self.guess_multiplier,
            'guesses': [guess.to_dict() for guess in self.guesses],
            'completed_at': self.completed_at.isoformat()
        }


class HurdleState:
    """
    Running totals of a hurdle chain.

    Invariants kept by ``add_completed_hurdle``:
    - current_hurdle_number == len(completed_hurdles) + 1
    - total_score == sum of completed hurdle scores
    - solved_words lists the completed target words in order
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.current_hurdle_number = 1
        self.total_score = 0
        self.completed_hurdles: List[CompletedHurdle] = []
        self.solved_words: List[str] = []
        self.end_reason = EndReason.NONE

    def get_current_hurdle_number(self) -> int:
        return self.current_hurdle_number

    def get_completed_hurdles_count(self) -> int:
        return len(self.completed_hurdles)

    def get_total_score(self) -> int:
        return self.total_score

    def get_completed_hurdles(self) -> List[CompletedHurdle]:
        return list(self.completed_hurdles)

    def get_solved_words(self) -> List[str]:
        return list(self.solved_words)

    def get_end_reason(self) -> EndReason:
        return self.end_reason

    def add_completed_hurdle(self, hurdle: CompletedHurdle) -> None:
        """
        Record a solved hurdle and advance to the next hurdle number.

        Raises:
            ValueError: If the hurdle is missing or out of sequence
        """
        if hurdle is None:
            raise ValueError("Hurdle cannot be None")

        if hurdle.hurdle_number != self.current_hurdle_number:
            raise ValueError(
                f"Expected hurdle number {self.current_hurdle_number}, but got {hurdle.hurdle_number}"
            )

        self.completed_hurdles.append(hurdle)
        self.total_score += hurdle.score
        self.solved_words.append(hurdle.target_word)
        self.current_hurdle_number += 1

    def set_end_reason(self, reason: EndReason) -> None:
        self.end_reason = reason

    def validate_state(self) -> bool:
        """Check the internal counters against the completed hurdle list."""
        if self.current_hurdle_number != len(self.completed_hurdles) + 1:
            return False

        if self.total_score != sum(hurdle.score for hurdle in self.completed_hurdles):
            return False

        if self.solved_words != [hurdle.target_word for hurdle in self.completed_hurdles]:
            return False

        return all(
            hurdle.hurdle_number == index + 1
            for index, hurdle in enumerate(self.completed_hurdles)
        )

    def get_session_summary(self) -> Dict:
        return {
            'current_hurdle_number': self.current_hurdle_number,
            'completed_hurdles_count': len(self.completed_hurdles),
            'total_score': self.total_score,
            'solved_words': list(self.solved_words),
            'end_reason': self.end_reason.value
        }


@dataclass
class HurdleSession:
    """A hurdle chain from start to failure or manual stop."""
    hurdle_state: HurdleState
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None
    final_hurdle_answer: Optional[str] = None
    final_score: Optional[int] = None

    @property
    def end_reason(self) -> EndReason:
        return self.hurdle_state.get_end_reason()

    def is_active(self) -> bool:
        return self.ended_at is None

    def end(self, reason: EndReason, final_score: int, final_hurdle_answer: Optional[str] = None) -> None:
        if reason == EndReason.NONE:
            raise ValueError("End reason must be either failure or manual-stop")
        self.hurdle_state.set_end_reason(reason)
        self.ended_at = datetime.now()
        self.final_score = final_score
        self.final_hurdle_answer = final_hurdle_answer

    def to_dict(self) -> Dict:
        return {
            'session_id': self.session_id,
            'started_at': self.started_at.isoformat(),
            'ended_at': self.ended_at.isoformat() if self.ended_at else None,
            'active': self.is_active(),
            'end_reason': self.end_reason.value,
            'final_hurdle_answer': self.final_hurdle_answer,
            'final_score': self.final_score,
            **self.hurdle_state.get_session_summary(),
            'completed_hurdles': [hurdle.to_dict() for hurdle in self.hurdle_state.get_completed_hurdles()]
        }


@dataclass(frozen=True)
class HurdleTransition:
    """Hand-off data between a solved hurdle and the next one."""
    completed_hurdle: CompletedHurdle
    next_hurdle_number: int
    auto_guess: str
    should_continue: bool = True

    def to_dict(self) -> Dict:
        return {
            'completed_hurdle': self.completed_hurdle.to_dict(),
            'next_hurdle_number': self.next_hurdle_number,
            'auto_guess': self.auto_guess,
            'should_continue': self.should_continue
        }


@dataclass
class HurdleTurn:
    """Outcome of one guess submitted through the hurdle chain."""
    game_state: GameState
    transitions: List[HurdleTransition] = field(default_factory=list)
    next_game_state: Optional[GameState] = None
    session_ended: bool = False

    @property
    def transition(self) -> Optional[HurdleTransition]:
        return self.transitions[0] if self.transitions else None

    def to_dict(self) -> Dict:
        return {
            'state': self.game_state.to_dict(),
            'transitions': [transition.to_dict() for transition in self.transitions],
            'next_state': self.next_game_state.to_dict() if self.next_game_state else None,
            'session_ended': self.session_ended
        }

"""
Dictionary Service

Word validity and secret-word selection for the game. The local word list is
always available; WordsAPI, when configured, widens the accepted vocabulary
and supplies rarer secret words. Every external call is bounded by a timeout
and falls back to the local list.
"""

import asyncio
import logging
import random
from typing import Awaitable, Dict, Iterable, List, Mapping, Optional, Tuple, TypeVar

from ..config.game_settings import MAX_WORD_DRAWS, WORD_LENGTH, get_frequency_range
from ..exceptions import WordSourceUnavailableError
from .proper_nouns import (
    ApiProperNounFilter, CombinedProperNounFilter, PatternProperNounFilter, ProperNounFilter
)
from .words_api import WordsApiClient, WordsApiUsageTracker

logger = logging.getLogger('hurdle_game.dictionary')

T = TypeVar('T')


class Dictionary:
    """
    Word source shared by every game controller.

    Args:
        words: Local word list; entries keep their case for proper-noun checks
        api_client: Optional WordsAPI client
        proper_noun_filter: Strategy keeping names out of the secret-word pool
        timeout_seconds: Upper bound for any awaited external call
        frequency_range: Default WordsAPI frequency range for secret words
        rng: Random source, injectable for deterministic tests
    """

    def __init__(self,
                 words: Iterable[str],
                 api_client: Optional[WordsApiClient] = None,
                 proper_noun_filter: Optional[ProperNounFilter] = None,
                 timeout_seconds: float = 3.0,
                 frequency_range: Optional[Tuple[float, float]] = None,
                 rng: Optional[random.Random] = None):
        self._entries: Dict[str, str] = {}
        for word in words:
            if not self.validate_word_format(word):
                raise ValueError(f"Invalid dictionary word: {word!r}")
            self._entries.setdefault(word.upper(), word)

        if not self._entries and not (api_client and api_client.is_enabled()):
            raise ValueError("Dictionary cannot be empty")

        self.api_client = api_client
        self.proper_noun_filter = proper_noun_filter or PatternProperNounFilter()
        self.timeout_seconds = timeout_seconds
        self.frequency_range = frequency_range
        self._random = rng or random.Random()

        logger.info(
            f"Dictionary initialized with {len(self._entries)} local words, "
            f"WordsAPI {'ENABLED' if self._api_enabled() else 'DISABLED'}"
        )

    @classmethod
    def from_config(cls, config: Mapping, words: Iterable[str]) -> 'Dictionary':
        """Build a dictionary (and its WordsAPI client when a key is set) from app config."""
        api_client = None
        noun_filter: ProperNounFilter = PatternProperNounFilter()

        if config.get('WORDS_API_KEY'):
            api_client = WordsApiClient(
                api_key=config['WORDS_API_KEY'],
                host=config.get('WORDS_API_HOST', 'wordsapiv1.p.rapidapi.com'),
                base_url=config.get('WORDS_API_URL', 'https://wordsapiv1.p.rapidapi.com'),
                timeout_seconds=config.get('WORDS_API_TIMEOUT_SECONDS', 3.0),
                tracker=WordsApiUsageTracker(config.get('WORDS_API_MONTHLY_LIMIT', 2500)),
            )
            noun_filter = CombinedProperNounFilter([noun_filter, ApiProperNounFilter(api_client)])

        return cls(
            words,
            api_client=api_client,
            proper_noun_filter=noun_filter,
            timeout_seconds=config.get('WORDS_API_TIMEOUT_SECONDS', 3.0),
            frequency_range=get_frequency_range(config.get('DIFFICULTY', 'medium')),
        )

    @property
    def words(self) -> List[str]:
        """Local words, upper case, in list order."""
        return list(self._entries)

    def size(self) -> int:
        return len(self._entries)

    @staticmethod
    def validate_word_format(word) -> bool:
        return isinstance(word, str) and len(word) == WORD_LENGTH and word.isalpha()

    def _api_enabled(self) -> bool:
        return self.api_client is not None and self.api_client.is_enabled()

    async def _bounded(self, awaitable: Awaitable[T], fallback: T, action: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(f"{action} timed out after {self.timeout_seconds}s, using local fallback")
            return fallback

    async def is_proper_noun(self, word: str) -> bool:
        """Ask the proper noun filter about a word as it appears in the local list."""
        entry = self._entries.get(word.upper(), word)
        return await self._bounded(self.proper_noun_filter.is_proper_noun(entry), False, 'Proper noun check')

    def is_valid_word_sync(self, word: str) -> bool:
        """Local-only validity check."""
        return self.validate_word_format(word) and word.upper() in self._entries

    async def is_valid_word(self, word: str) -> bool:
        """
        Whether a word is accepted as a guess.

        Local words are always accepted. Other words are checked against
        WordsAPI while it is reachable and within budget.
        """
        if not self.validate_word_format(word):
            return False

        normalized = word.upper()
        if normalized in self._entries:
            return True

        if self._api_enabled() and self.api_client.can_make_request():
            result = await self._bounded(self.api_client.word_exists(normalized), None, 'Word validation')
            if result is not None:
                return result
        elif self._api_enabled():
            logger.warning(self.api_client.tracker.get_usage_message())

        return False

    async def get_random_word(self, frequency_range: Optional[Tuple[float, float]] = None) -> str:
        """
        Pick a secret word candidate.

        Raises:
            WordSourceUnavailableError: If WordsAPI yields nothing and the local list is empty
        """
        if self._api_enabled() and self.api_client.can_make_request():
            word = await self._bounded(
                self.api_client.random_word(frequency_range or self.frequency_range),
                None,
                'Random word request'
            )
            if word:
                return word

        return await self.get_random_local_word()

    async def get_random_local_word(self) -> str:
        """Random local word, skipping proper nouns for up to MAX_WORD_DRAWS candidates."""
        if not self._entries:
            raise WordSourceUnavailableError("Local word list is empty and WordsAPI returned no word")

        entries = list(self._entries.values())
        for _ in range(MAX_WORD_DRAWS):
            candidate = self._random.choice(entries)
            if not await self.is_proper_noun(candidate):
                return candidate.upper()
            logger.info(f"Skipped proper noun '{candidate}'")

        logger.warning(f"No common word found after {MAX_WORD_DRAWS} draws, returning random word")
        return self._random.choice(entries).upper()

    def get_api_usage_stats(self) -> Optional[Dict]:
        return self.api_client.tracker.get_usage_stats() if self.api_client else None

    def get_api_usage_message(self) -> Optional[str]:
        return self.api_client.tracker.get_usage_message() if self.api_client else None

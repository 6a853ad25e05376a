"""
WordsAPI Client

Thin async client for the RapidAPI WordsAPI service plus the monthly request
budget that keeps the game inside the free tier. Every call returns None (or
False) on failure; the dictionary falls back to its local word list.
"""

import asyncio
import logging
import random
import re
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import aiohttp

logger = logging.getLogger('hurdle_game.words_api')

WORD_PATTERN = re.compile(r'^[a-zA-Z]{5}$')


class WordsApiUsageTracker:
    """
    Counts WordsAPI requests per calendar month.

    The count resets whenever the month changes. When the API reports its
    own rate-limit headers those take precedence over the local count.
    """

    def __init__(self, monthly_limit: int = 2500, clock: Callable[[], datetime] = datetime.now):
        self.monthly_limit = monthly_limit
        self._clock = clock
        self.month = self._current_month()
        self.count = 0
        self.last_request: Optional[datetime] = None
        self.last_reset = self._clock()

    def _current_month(self) -> str:
        return self._clock().strftime('%Y-%m')

    def _roll_month(self) -> None:
        current = self._current_month()
        if current != self.month:
            self.month = current
            self.count = 0
            self.last_reset = self._clock()

    def record_request(self) -> None:
        self._roll_month()
        self.count += 1
        self.last_request = self._clock()

    def update_from_headers(self, headers: Mapping[str, str]) -> Optional[Dict[str, int]]:
        """
        Sync the count with the X-RateLimit-Requests-* headers.

        Returns:
            The parsed limits, or None when the headers are missing
        """
        lowered = {key.lower(): value for key, value in headers.items()}
        remaining = lowered.get('x-ratelimit-requests-remaining')
        limit = lowered.get('x-ratelimit-requests-limit')
        if remaining is None or limit is None:
            return None

        try:
            remaining_count = int(remaining)
            limit_count = int(limit)
        except ValueError:
            return None

        self._roll_month()
        self.monthly_limit = limit_count
        self.count = max(limit_count - remaining_count, 0)
        self.last_request = self._clock()

        if remaining_count <= limit_count * 0.1:
            logger.warning(f"WordsAPI usage high: {remaining_count} of {limit_count} requests left this month")

        return {'remaining': remaining_count, 'limit': limit_count}

    def should_use_api(self) -> bool:
        self._roll_month()
        return self.count < self.monthly_limit

    def get_usage_stats(self) -> Dict[str, Any]:
        self._roll_month()
        percentage = round(self.count / self.monthly_limit * 100) if self.monthly_limit else 100
        return {
            'used': self.count,
            'limit': self.monthly_limit,
            'remaining': max(self.monthly_limit - self.count, 0),
            'month': self.month,
            'percentage': percentage,
            'last_request': self.last_request.isoformat() if self.last_request else None,
            'last_reset': self.last_reset.isoformat()
        }

    def get_usage_message(self) -> str:
        stats = self.get_usage_stats()
        usage = f"{stats['used']}/{stats['limit']} requests"

        if stats['used'] >= stats['limit']:
            return (f"WordsAPI limit reached! Used {usage} this month ({stats['month']}). "
                    "The game will use the local dictionary until next month.")
        if stats['percentage'] >= 90:
            return f"WordsAPI usage high: {usage} ({stats['percentage']}%) used this month."
        return f"WordsAPI usage: {usage} ({stats['percentage']}%) used this month."


class WordsApiClient:
    """Async WordsAPI access. Disabled when no API key is configured."""

    def __init__(self,
                 api_key: str,
                 host: str = 'wordsapiv1.p.rapidapi.com',
                 base_url: str = 'https://wordsapiv1.p.rapidapi.com',
                 timeout_seconds: float = 3.0,
                 tracker: Optional[WordsApiUsageTracker] = None):
        self.api_key = api_key
        self.host = host
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.tracker = tracker or WordsApiUsageTracker()

    def is_enabled(self) -> bool:
        return bool(self.api_key)

    def can_make_request(self) -> bool:
        return self.is_enabled() and self.tracker.should_use_api()

    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Tuple[int, Optional[Dict]]:
        """
        Issue a GET request.

        Returns:
            (status, json body or None)

        Raises:
            aiohttp.ClientError, asyncio.TimeoutError: On transport failures
        """
        headers = {
            'X-RapidAPI-Key': self.api_key,
            'X-RapidAPI-Host': self.host,
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(f"{self.base_url}{path}", headers=headers, params=params) as response:
                if self.tracker.update_from_headers(response.headers) is None:
                    self.tracker.record_request()

                if response.status != 200:
                    return response.status, None

                return response.status, await response.json()

    async def word_exists(self, word: str) -> Optional[bool]:
        """
        True/False when WordsAPI knows/doesn't know the word, None when the
        answer is unavailable (no key, budget spent, 403, network error).
        """
        if not self.can_make_request():
            return None

        try:
            status, _ = await self._get(f"/words/{word.lower()}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"WordsAPI lookup failed for '{word}': {e}")
            return None

        if status == 200:
            return True
        if status == 404:
            return False
        return None

    async def lookup(self, word: str) -> Optional[Dict]:
        """Full WordsAPI entry for a word, or None."""
        if not self.can_make_request():
            return None

        try:
            status, data = await self._get(f"/words/{word.lower()}")
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"WordsAPI lookup failed for '{word}': {e}")
            return None

        return data if status == 200 else None

    async def has_definition(self, word: str) -> bool:
        """
        True if the word has a substantial definition describing a common
        concept (a 'typeOf' entry and no 'instanceOf' entry).
        """
        data = await self.lookup(word)
        if not data:
            return False

        for result in data.get('results') or []:
            definition = (result.get('definition') or '').strip()
            if len(definition) > 10 and result.get('typeOf') and not result.get('instanceOf'):
                return True

        logger.info(f"Word '{word}' rejected - no common-concept definition")
        return False

    async def random_word(self, frequency_range: Optional[Tuple[float, float]] = None) -> Optional[str]:
        """Random 5-letter word from WordsAPI that has a definition, or None."""
        if not self.can_make_request():
            return None

        params = {
            'letterPattern': '^[a-zA-Z]{5}$',
            'random': 'true',
        }
        if frequency_range:
            params['frequencyMin'] = str(frequency_range[0])
            params['frequencyMax'] = str(frequency_range[1])

        try:
            status, data = await self._get('/words/', params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(f"WordsAPI random word request failed: {e}")
            return None

        if status != 200 or not data:
            return None

        word = None
        if isinstance(data.get('word'), str) and WORD_PATTERN.match(data['word']):
            word = data['word']
        else:
            candidates = [
                candidate for candidate in (data.get('results') or {}).get('data') or []
                if isinstance(candidate, str) and WORD_PATTERN.match(candidate)
            ]
            if candidates:
                word = random.choice(candidates)

        if word and await self.has_definition(word):
            return word.upper()

        return None

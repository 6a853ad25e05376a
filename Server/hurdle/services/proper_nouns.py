"""
Proper Noun Filters

Strategies the dictionary uses to keep names and places out of the secret
word pool. Guesses are never filtered, only secret-word candidates.
"""

from typing import Iterable

from .words_api import WordsApiClient


class ProperNounFilter:
    """Yes/no proper-noun check for a word as it appears in the word list."""

    async def is_proper_noun(self, word: str) -> bool:
        raise NotImplementedError


class PatternProperNounFilter(ProperNounFilter):
    """Treats Title-case entries ('Paris') as proper nouns; all-lower and all-upper entries are common words."""

    async def is_proper_noun(self, word: str) -> bool:
        if not word:
            return False
        return word[0].isupper() and not word.isupper()


class ApiProperNounFilter(ProperNounFilter):
    """Asks WordsAPI: an entry that only describes instances (names) is a proper noun."""

    def __init__(self, client: WordsApiClient):
        self.client = client

    async def is_proper_noun(self, word: str) -> bool:
        data = await self.client.lookup(word)
        if not data:
            return False

        results = data.get('results') or []
        has_instance = any(result.get('instanceOf') for result in results)
        has_type = any(result.get('typeOf') and not result.get('instanceOf') for result in results)
        return has_instance and not has_type


class CombinedProperNounFilter(ProperNounFilter):
    """A word is a proper noun if any of the wrapped filters says so."""

    def __init__(self, filters: Iterable[ProperNounFilter]):
        self.filters = list(filters)

    async def is_proper_noun(self, word: str) -> bool:
        for noun_filter in self.filters:
            if await noun_filter.is_proper_noun(word):
                return True
        return False

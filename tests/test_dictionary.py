"""
Tests for the dictionary, its proper noun filters and the WordsAPI budget.

No test touches the network: WordsAPI is replaced by small in-process
clients.
"""

import asyncio
import random
from datetime import datetime

import pytest

from hurdle.exceptions import WordSourceUnavailableError
from hurdle.services.dictionary import Dictionary
from hurdle.services.proper_nouns import (
    ApiProperNounFilter, CombinedProperNounFilter, PatternProperNounFilter
)
from hurdle.services.words_api import WordsApiClient, WordsApiUsageTracker


class ScriptedRandom(random.Random):
    """Random source whose ``choice`` follows a fixed script."""

    def __init__(self, picks):
        super().__init__(0)
        self.picks = list(picks)

    def choice(self, seq):
        return self.picks.pop(0) if self.picks else seq[0]


class FakeApiClient:
    def __init__(self, exists=None, word=None, delay=0.0, entries=None):
        self.exists = exists
        self.word = word
        self.delay = delay
        self.entries = entries or {}
        self.tracker = WordsApiUsageTracker()

    def is_enabled(self):
        return True

    def can_make_request(self):
        return True

    async def word_exists(self, word):
        await asyncio.sleep(self.delay)
        return self.exists

    async def random_word(self, frequency_range=None):
        await asyncio.sleep(self.delay)
        return self.word

    async def lookup(self, word):
        return self.entries.get(word.lower())


class CannedWordsApiClient(WordsApiClient):
    """Real client with the HTTP layer replaced by canned responses."""

    def __init__(self, responses, **kwargs):
        super().__init__('test-key', **kwargs)
        self.responses = responses
        self.paths = []

    async def _get(self, path, params=None):
        self.paths.append(path)
        self.tracker.record_request()
        return self.responses.get(path, (404, None))


def test_local_words_are_valid():
    dictionary = Dictionary(['crane', 'SLATE'])

    assert asyncio.run(dictionary.is_valid_word('CRANE'))
    assert asyncio.run(dictionary.is_valid_word('slate'))
    assert not asyncio.run(dictionary.is_valid_word('GHOST'))
    assert not asyncio.run(dictionary.is_valid_word('CRANES'))
    assert dictionary.is_valid_word_sync('crane')
    assert dictionary.size() == 2
    assert dictionary.words == ['CRANE', 'SLATE']


def test_empty_dictionary_without_api_rejected():
    with pytest.raises(ValueError):
        Dictionary([])


def test_malformed_word_rejected():
    with pytest.raises(ValueError):
        Dictionary(['crane', 'toolong'])


def test_random_local_word_skips_proper_nouns():
    dictionary = Dictionary(['Paris', 'crane'], rng=ScriptedRandom(['Paris', 'crane']))

    assert asyncio.run(dictionary.get_random_word()) == 'CRANE'


def test_random_local_word_gives_up_after_draw_limit():
    dictionary = Dictionary(['Paris', 'Tokyo'], rng=random.Random(3))

    assert asyncio.run(dictionary.get_random_local_word()) in ('PARIS', 'TOKYO')


def test_api_widens_vocabulary():
    dictionary = Dictionary(['crane'], api_client=FakeApiClient(exists=True))

    assert asyncio.run(dictionary.is_valid_word('GHOST'))


def test_api_failure_falls_back_to_local():
    dictionary = Dictionary(['crane'], api_client=FakeApiClient(exists=None))

    assert not asyncio.run(dictionary.is_valid_word('GHOST'))
    assert asyncio.run(dictionary.get_random_word()) == 'CRANE'


def test_slow_api_times_out_to_local():
    client = FakeApiClient(exists=True, word='GHOST', delay=1.0)
    dictionary = Dictionary(['crane'], api_client=client, timeout_seconds=0.01)

    assert not asyncio.run(dictionary.is_valid_word('GHOST'))
    assert asyncio.run(dictionary.get_random_word()) == 'CRANE'


def test_api_random_word_preferred():
    dictionary = Dictionary(['crane'], api_client=FakeApiClient(word='GHOST'))

    assert asyncio.run(dictionary.get_random_word()) == 'GHOST'


def test_exhausted_budget_skips_api():
    tracker = WordsApiUsageTracker(monthly_limit=1)
    tracker.record_request()
    client = CannedWordsApiClient({'/words/ghost': (200, {'word': 'ghost'})}, tracker=tracker)
    dictionary = Dictionary(['crane'], api_client=client)

    assert not asyncio.run(dictionary.is_valid_word('GHOST'))
    assert client.paths == []


def test_no_word_source_raises():
    dictionary = Dictionary([], api_client=FakeApiClient(word=None))

    with pytest.raises(WordSourceUnavailableError):
        asyncio.run(dictionary.get_random_word())


def test_from_config_without_key_is_local_only():
    dictionary = Dictionary.from_config({'WORDS_API_KEY': '', 'DIFFICULTY': 'hard'}, ['crane'])

    assert dictionary.api_client is None
    assert dictionary.frequency_range == (0.0, 4.0)
    assert dictionary.get_api_usage_stats() is None


def test_from_config_with_key_builds_client():
    dictionary = Dictionary.from_config(
        {'WORDS_API_KEY': 'key', 'WORDS_API_MONTHLY_LIMIT': 100, 'WORDS_API_TIMEOUT_SECONDS': 1.5},
        ['crane']
    )

    assert isinstance(dictionary.api_client, WordsApiClient)
    assert isinstance(dictionary.proper_noun_filter, CombinedProperNounFilter)
    assert dictionary.timeout_seconds == 1.5
    assert dictionary.get_api_usage_stats()['limit'] == 100


def test_pattern_filter():
    noun_filter = PatternProperNounFilter()

    assert asyncio.run(noun_filter.is_proper_noun('Paris'))
    assert not asyncio.run(noun_filter.is_proper_noun('crane'))
    assert not asyncio.run(noun_filter.is_proper_noun('CRANE'))


def test_api_filter_uses_instance_and_type():
    client = FakeApiClient(entries={
        'paris': {'results': [{'instanceOf': ['city']}]},
        'crane': {'results': [{'typeOf': ['bird']}, {'instanceOf': ['poet']}]},
    })
    noun_filter = ApiProperNounFilter(client)

    assert asyncio.run(noun_filter.is_proper_noun('Paris'))
    assert not asyncio.run(noun_filter.is_proper_noun('crane'))
    assert not asyncio.run(noun_filter.is_proper_noun('ghost'))


def test_combined_filter_any_match():
    client = FakeApiClient(entries={'tokyo': {'results': [{'instanceOf': ['city']}]}})
    noun_filter = CombinedProperNounFilter([PatternProperNounFilter(), ApiProperNounFilter(client)])

    assert asyncio.run(noun_filter.is_proper_noun('Paris'))
    assert asyncio.run(noun_filter.is_proper_noun('tokyo'))
    assert not asyncio.run(noun_filter.is_proper_noun('crane'))


def test_client_word_exists_statuses():
    client = CannedWordsApiClient({'/words/crane': (200, {'word': 'crane'}), '/words/broke': (403, None)})

    assert asyncio.run(client.word_exists('CRANE')) is True
    assert asyncio.run(client.word_exists('GHOST')) is False
    assert asyncio.run(client.word_exists('BROKE')) is None
    assert client.tracker.count == 3


def test_client_random_word_requires_definition():
    definition = {'results': [{'definition': 'a large long-necked wading bird', 'typeOf': ['wading bird']}]}
    client = CannedWordsApiClient({
        '/words/': (200, {'word': 'crane'}),
        '/words/crane': (200, definition),
    })

    assert asyncio.run(client.random_word((4.0, 5.49))) == 'CRANE'

    client.responses['/words/crane'] = (200, {'results': [{'definition': 'a poet', 'instanceOf': ['poet']}]})
    assert asyncio.run(client.random_word()) is None


def test_disabled_client_makes_no_requests():
    client = WordsApiClient('')

    assert not client.is_enabled()
    assert asyncio.run(client.word_exists('CRANE')) is None
    assert asyncio.run(client.random_word()) is None


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_tracker_budget_and_month_rollover():
    clock = Clock(datetime(2024, 1, 31, 12, 0))
    tracker = WordsApiUsageTracker(monthly_limit=2, clock=clock)

    tracker.record_request()
    tracker.record_request()
    assert not tracker.should_use_api()
    assert tracker.get_usage_message().startswith('WordsAPI limit reached!')

    clock.now = datetime(2024, 2, 1, 0, 5)
    assert tracker.should_use_api()
    assert tracker.get_usage_stats()['used'] == 0
    assert tracker.get_usage_stats()['month'] == '2024-02'


def test_tracker_learns_from_headers():
    tracker = WordsApiUsageTracker(monthly_limit=2500)

    limits = tracker.update_from_headers({
        'x-ratelimit-requests-remaining': '100',
        'X-RateLimit-Requests-Limit': '2500',
    })

    assert limits == {'remaining': 100, 'limit': 2500}
    assert tracker.count == 2400
    assert tracker.get_usage_stats()['percentage'] == 96
    assert 'usage high' in tracker.get_usage_message()
    assert tracker.update_from_headers({}) is None

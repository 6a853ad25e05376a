"""
Shared fixtures for the Hurdle server tests.

Logs go to a temporary directory and secret words come from a scripted
dictionary, so every test is deterministic and offline.
"""

import os
import random
import tempfile

os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='hurdle-logs-'))

import pytest

from hurdle.services.dictionary import Dictionary

WORDS = [
    'CRANE', 'SLATE', 'PLANT', 'SPEED', 'ERASE', 'STALE', 'TRAIN',
    'BRICK', 'MOUNT', 'GHOST', 'ABBEY', 'Paris'
]


class ScriptedDictionary(Dictionary):
    """Dictionary whose random words are served from a queue first."""

    def __init__(self, words=WORDS, secret_words=(), **kwargs):
        kwargs.setdefault('rng', random.Random(7))
        super().__init__(words, **kwargs)
        self.secret_words = list(secret_words)
        self.draws = 0

    def queue(self, *words):
        self.secret_words.extend(words)

    async def get_random_word(self, frequency_range=None):
        self.draws += 1
        if self.secret_words:
            return self.secret_words.pop(0)
        return await super().get_random_word(frequency_range)


@pytest.fixture
def dictionary():
    return ScriptedDictionary()


@pytest.fixture
def app(dictionary):
    from hurdle import create_app
    from hurdle.config import TestingConfig

    app, socketio = create_app(TestingConfig, dictionary=dictionary)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    return app.socketio.test_client(app)

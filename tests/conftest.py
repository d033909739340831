import random

import pytest

from wordplay.bot import GreedyBot
from wordplay.dictionary import Dictionary
from wordplay.gamestate import GameConfig, GameStateManager

WORDS = [
    "AT",
    "CAT", "CATS", "ACT", "ACTS", "CAST", "SCAT", "COAT", "COATS", "TACO",
    "BAT", "BATS", "TABS", "STAB",
    "TASK", "TASKS", "STALK", "TALK", "TALKS",
    "DOG", "DOGS", "GOD",
    "WORD", "WORDS", "SWORD", "LORD",
    "GAME", "GAMES", "SAME",
    "NAG", "LANG",
]


class SequenceRandom:
    """Deterministic stand-in for ``random.random``: cycles through values."""

    def __init__(self, values=(0.1, 0.5, 0.9, 0.3, 0.7)):
        self.values = list(values)
        self.i = 0

    def __call__(self):
        value = self.values[self.i % len(self.values)]
        self.i += 1
        return value


@pytest.fixture
def dictionary():
    return Dictionary.from_words(WORDS, rng=random.Random(7))


@pytest.fixture
def bot(dictionary):
    return GreedyBot(dictionary, random_source=SequenceRandom())


@pytest.fixture
def make_manager(dictionary, bot):
    def _make(**config):
        config.setdefault("initial_word", "CAT")
        return GameStateManager(
            dictionary, GameConfig(**config), bot=bot, rng=random.Random(0),
        )
    return _make

"""Dictionary capability and a word-list backed implementation."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from typing import Iterable, Protocol

from wordfreq import top_n_list

from wordplay.constants import (
    EMPTY_WORD,
    INVALID_CHARACTERS,
    LENGTH_CHANGE_TOO_LARGE,
    MAX_LENGTH_CHANGE,
    MAX_WORD_LENGTH,
    MIN_WORD_LENGTH,
    NOT_IN_DICTIONARY,
    TOO_SHORT,
)

log = logging.getLogger("wordplay")

WORDFREQ_TOP_N = 50_000


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    word: str
    reason: str | None = None


class DictionaryCapability(Protocol):
    """What the turn engine needs from a dictionary."""

    def validate(
        self,
        word: str | None,
        *,
        is_bot: bool = False,
        previous_word: str | None = None,
        check_length: bool = True,
    ) -> ValidationResult: ...

    def random_word_of_length(self, length: int) -> str | None: ...

    def is_dictionary_word(self, word: str) -> bool: ...


class Dictionary:
    """Word list with set lookup, optional slang, and random word picks.

    Pass *words* to build from memory; otherwise a word list is loaded
    from *dict_path* or the usual search locations.
    """

    def __init__(
        self,
        dict_path: str | None = None,
        words: Iterable[str] | None = None,
        slang_words: Iterable[str] = (),
        allow_slang: bool = True,
        rng: random.Random | None = None,
    ):
        self.words: set[str] = set()
        self.slang_words: set[str] = {w.strip().upper() for w in slang_words}
        self.allow_slang = allow_slang
        self._rng = rng or random.Random()
        self._by_length: dict[int, tuple[str, ...]] = {}
        if words is not None:
            self._add_all(words)
        else:
            self._load(dict_path)

    @classmethod
    def from_words(cls, words: Iterable[str], **kwargs) -> Dictionary:
        return cls(words=words, **kwargs)

    # loading

    def _add_all(self, words: Iterable[str]) -> None:
        for line in words:
            word = line.strip().upper()
            if 2 <= len(word) <= MAX_WORD_LENGTH and word.isalpha():
                self.words.add(word)
        self._by_length.clear()

    def _load(self, dict_path: str | None) -> None:
        search_paths: list[str] = []
        if dict_path:
            search_paths.append(dict_path)

        search_paths.extend([
            "dictionary.txt",
            "enable.txt",
            "enable1.txt",
            "words.txt",
            os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "dictionary.txt"),
            "/usr/share/dict/words",
        ])

        for path in search_paths:
            if os.path.exists(path):
                with open(path, "r", encoding="utf-8") as f:
                    self._add_all(f)
                if self.words:
                    log.info("Loaded %s words from %s", f"{len(self.words):,}", path)
                    return

        log.warning("No dictionary file found -- using the wordfreq top %s list.", f"{WORDFREQ_TOP_N:,}")
        self._add_all(
            w for w in top_n_list("en", WORDFREQ_TOP_N) if len(w) >= MIN_WORD_LENGTH
        )
        if self.words:
            return

        log.warning("wordfreq list is empty -- using built-in minimal word list.")
        self._load_minimal()

    def _load_minimal(self) -> None:
        self._add_all([
            "CAT", "CATS", "COAT", "COATS", "BAT", "BATS", "TABS", "STAB",
            "CAST", "ACTS", "SCAT", "TACO", "TACOS", "COST", "COTS", "SCOT",
            "DOG", "DOGS", "GOD", "GODS", "WORD", "WORDS", "SWORD", "LORD",
            "LORDS", "WORE", "WORN", "GAME", "GAMES", "SAME", "TAME", "TEAM",
            "MATE", "MEAT", "TASK", "TASKS", "TALK", "TALKS", "STALK",
            "PLAY", "PLAYS", "CLAY", "MOVE", "MOVES", "LOVE", "LOVES",
            "TEST", "TESTS", "SETT", "STET", "NEST", "NETS", "TENS", "SENT",
            "REST", "RATS", "STAR", "ARTS", "TSAR", "TARS", "RAT", "ART",
            "TAR", "CAR", "ARC", "CARS", "SCAR", "ARCS", "CART", "CARTS",
        ])

    # lookups

    def is_dictionary_word(self, word: str) -> bool:
        w = word.strip().upper()
        return w in self.words or (self.allow_slang and w in self.slang_words)

    def __contains__(self, word: str) -> bool:
        return self.is_dictionary_word(word)

    def __len__(self) -> int:
        return len(self.words)

    def words_of_length(self, length: int) -> tuple[str, ...]:
        """Sorted dictionary words of exactly *length* letters."""
        pool = self._by_length.get(length)
        if pool is None:
            pool = tuple(sorted(w for w in self.words if len(w) == length))
            self._by_length[length] = pool
        return pool

    def random_word_of_length(self, length: int) -> str | None:
        """Random dictionary word of exactly *length* letters, or ``None``."""
        pool = self.words_of_length(length)
        if not pool:
            return None
        return self._rng.choice(pool)

    def validate(
        self,
        word: str | None,
        *,
        is_bot: bool = False,
        previous_word: str | None = None,
        check_length: bool = True,
    ) -> ValidationResult:
        """Check a word against the format and dictionary rules.

        Bots skip every rule; the word is only normalized.
        """
        if word is None:
            return ValidationResult(False, "", EMPTY_WORD)

        normalized = word.strip().upper()
        if is_bot:
            return ValidationResult(True, normalized)
        if not normalized:
            return ValidationResult(False, normalized, EMPTY_WORD)
        if not (normalized.isascii() and normalized.isalpha()):
            return ValidationResult(False, normalized, INVALID_CHARACTERS)
        if check_length and len(normalized) < MIN_WORD_LENGTH:
            return ValidationResult(False, normalized, TOO_SHORT)
        if check_length and previous_word:
            if abs(len(normalized) - len(previous_word.strip())) > MAX_LENGTH_CHANGE:
                return ValidationResult(False, normalized, LENGTH_CHANGE_TOO_LARGE)
        if not self.is_dictionary_word(normalized):
            return ValidationResult(False, normalized, NOT_IN_DICTIONARY)
        return ValidationResult(True, normalized)

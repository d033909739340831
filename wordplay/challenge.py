"""Daily challenge: turn a start word into a target word.

Everyone gets the same puzzle on the same day.  The date string seeds a
``random.Random`` that picks:

  1. Start word   (5 letters, no repeated letter)
  2. Target word  (5-8 letters, no repeated letter, at most two letters
                   shared with the start word)

Moves follow the normal game rules (dictionary, one add / one remove,
free rearranging, no replays).  Scores are not kept; the step count is.
"""

from __future__ import annotations

import logging
import random
import time
from collections import Counter
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable

from wordplay.constants import (
    ALREADY_PLAYED,
    CHALLENGE_EPOCH,
    CHALLENGE_MAX_COMMON_LETTERS,
    CHALLENGE_MAX_TARGET_LENGTH,
    CHALLENGE_MIN_TARGET_LENGTH,
    CHALLENGE_START_LENGTH,
    EMPTY_WORD,
    GAME_NOT_PLAYING,
)
from wordplay.dictionary import Dictionary
from wordplay.diff import analyze_word_change, normalize
from wordplay.legality import check_move_legality

log = logging.getLogger("wordplay")

FALLBACK_START_WORDS = (
    "GAMES", "WORDS", "PLAYS", "TIMES", "MAKES",
    "WORLD", "HOUSE", "LIGHT", "SOUND", "NIGHT",
)

FALLBACK_TARGET_WORDS = (
    "QUICK", "JUMPY", "BLITZ", "WALTZ", "QUIRK", "FJORD", "BUMPH",
    "ZINGY", "PROXY", "WHISK", "JERKY", "MIXED", "VINYL", "ZEBRA",
    "QUARTZ", "JOCKEY", "WHISKY", "ZEPHYR", "OXYGEN", "PYTHON",
    "RHYTHM", "SPHINX", "FLYWAY", "GIZMOS", "HIJACK", "JAUNTY",
    "QUICKLY", "JOCKEYS", "WHISKEY", "ZEPHYRS", "PYTHONS",
    "RHYTHMS", "FLYWAYS", "HIJACKS", "JAUNTED", "COMPLEX", "DYNASTY",
    "JOCKEYED", "WHISKEYS", "RHYTHMIC", "HIJACKED", "DYNAMITE", "SYMPHONY",
)

NEW_LETTER = "\U0001F02B"   # mahjong tile back
KEPT_LETTER = "*"


@dataclass(frozen=True)
class ChallengeState:
    date: str
    start_word: str
    target_word: str
    current_word: str
    word_sequence: tuple[str, ...]
    step_count: int = 0
    completed: bool = False
    failed: bool = False
    failed_at_word: str | None = None

    @classmethod
    def new(cls, date_string: str, start_word: str, target_word: str) -> ChallengeState:
        start = normalize(start_word)
        return cls(date_string, start, normalize(target_word), start, (start,))

    @property
    def is_over(self) -> bool:
        return self.completed or self.failed


@dataclass(frozen=True)
class ChallengeSubmission:
    new_state: ChallengeState
    is_valid: bool
    is_complete: bool
    reason: str | None = None


# ── Word selection ──────────────────────────────────────────────────────

def daily_seed(date_string: str) -> int:
    """Stable 31-multiplier string hash, folded to 32 bits and made positive."""
    h = 0
    for ch in date_string:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 1 << 32
    return abs(h)


def has_repeating_letters(word: str) -> bool:
    word = normalize(word)
    return len(set(word)) != len(word)


def count_common_letters(a: str, b: str) -> int:
    return sum((Counter(normalize(a)) & Counter(normalize(b))).values())


def is_valid_target_word(start_word: str, target_word: str) -> bool:
    start, target = normalize(start_word), normalize(target_word)
    return (
        bool(target)
        and target != start
        and len(target) >= CHALLENGE_MIN_TARGET_LENGTH
        and count_common_letters(start, target) <= CHALLENGE_MAX_COMMON_LETTERS
        and not has_repeating_letters(target)
    )


def fallback_target_words(start_word: str, length: int) -> list[str]:
    exact = [w for w in FALLBACK_TARGET_WORDS
             if len(w) == length and is_valid_target_word(start_word, w)]
    if exact:
        return exact
    any_length = [w for w in FALLBACK_TARGET_WORDS if is_valid_target_word(start_word, w)]
    return any_length or ["QUICK", "JUMPY", "BLITZ"]


# ── Sharing ─────────────────────────────────────────────────────────────

def sharing_pattern(word_sequence: list[str] | tuple[str, ...]) -> list[str]:
    """One row per step: a tile for each new letter, ``*`` for kept ones."""
    rows: list[str] = []
    for prev, curr in zip(word_sequence, word_sequence[1:]):
        added = list(analyze_word_change(prev, curr).added_letters)
        row = []
        for ch in normalize(curr):
            if ch in added:
                added.remove(ch)
                row.append(NEW_LETTER)
            else:
                row.append(KEPT_LETTER)
        rows.append("".join(row))
    return rows


def challenge_number(date_string: str) -> int | None:
    """Day number counted from the first challenge, or ``None`` for non-dates."""
    try:
        day = date.fromisoformat(date_string)
    except ValueError:
        return None
    return (day - date.fromisoformat(CHALLENGE_EPOCH)).days + 1


def sharing_text(state: ChallengeState) -> str:
    number = challenge_number(state.date)
    header = f"Challenge #{number}" if number is not None else "Challenge"
    if state.completed:
        header += " ✓"
    elif state.failed:
        header += " ❌"
    header += f" {state.start_word} → {state.target_word}"
    if not state.is_over:
        header += " (in progress)"

    text = header + "\n\n" + "\n".join(sharing_pattern(state.word_sequence))
    if state.completed:
        text += f"\n{state.step_count} turns"
    return text


class ChallengeEngine:
    """Builds daily puzzles and plays moves against them.

    States are immutable; every operation returns a new ``ChallengeState``.
    Nothing is stored between calls.

    Parameters
    ----------
    dictionary : Dictionary
        Word list used for selection and move validation.
    today : callable
        Returns the current ``datetime.date``.
    clock : callable
        Wall-clock seconds, used to seed random challenges.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        *,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.time,
    ):
        self.dict = dictionary
        self._today = today
        self._clock = clock

    # public API

    def daily_challenge(self, day: str | date | None = None) -> ChallengeState:
        """The puzzle for *day* (ISO date or ``date``; default today)."""
        if day is None:
            day = self._today()
        date_string = day.isoformat() if isinstance(day, date) else day
        start, target = self.generate_words(daily_seed(date_string))
        log.debug("Challenge for %s: %s -> %s", date_string, start, target)
        return ChallengeState.new(date_string, start, target)

    def random_challenge(self, seed: int | None = None) -> ChallengeState:
        if seed is None:
            seed = int(self._clock() * 1000)
        start, target = self.generate_words(seed)
        return ChallengeState.new(f"random-{seed}", start, target)

    def generate_words(self, seed: int) -> tuple[str, str]:
        """Start and target word for *seed*."""
        rng = random.Random(seed)

        starts = [w for w in self.dict.words_of_length(CHALLENGE_START_LENGTH)
                  if not has_repeating_letters(w)]
        start = rng.choice(starts) if starts else rng.choice(FALLBACK_START_WORDS)

        length = len(start) + rng.randint(-1, 1)
        length = max(CHALLENGE_MIN_TARGET_LENGTH, min(CHALLENGE_MAX_TARGET_LENGTH, length))
        targets = [w for w in self.dict.words_of_length(length)
                   if is_valid_target_word(start, w)]
        if not targets:
            targets = fallback_target_words(start, length)
        return start, rng.choice(targets)

    def check_move(self, from_word: str, to_word: str) -> str | None:
        """Reason code if *from_word* -> *to_word* breaks a game rule, else ``None``."""
        prev, curr = normalize(from_word), normalize(to_word)
        if not prev or not curr:
            return EMPTY_WORD
        if prev == curr:
            return ALREADY_PLAYED
        validation = self.dict.validate(curr, previous_word=prev)
        if not validation.is_valid:
            return validation.reason
        return check_move_legality(prev, curr)

    def is_valid_move(self, from_word: str, to_word: str) -> bool:
        return self.check_move(from_word, to_word) is None

    def submit_word(self, word: str, state: ChallengeState) -> ChallengeSubmission:
        """Play *word*; the state is returned unchanged when it is rejected."""
        new_word = normalize(word)
        if state.is_over:
            return ChallengeSubmission(state, False, False, GAME_NOT_PLAYING)
        if new_word in state.word_sequence:
            return ChallengeSubmission(state, False, False, ALREADY_PLAYED)
        reason = self.check_move(state.current_word, new_word)
        if reason is not None:
            return ChallengeSubmission(state, False, False, reason)

        complete = new_word == state.target_word
        new_state = replace(
            state,
            current_word=new_word,
            word_sequence=state.word_sequence + (new_word,),
            step_count=state.step_count + 1,
            completed=complete,
        )
        if complete:
            log.debug("Challenge %s solved in %d steps", state.date, new_state.step_count)
        return ChallengeSubmission(new_state, True, complete)

    def forfeit(self, state: ChallengeState) -> ChallengeState:
        if state.is_over:
            return state
        return replace(state, failed=True, failed_at_word=state.current_word)

"""Word diff: multiset comparison of two words."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class WordDiff:
    """Letters gained and lost between two words.

    ``added_letters`` and ``removed_letters`` repeat a letter once per
    occurrence, so ``CAT -> CATTT`` reports ``("T", "T")``.
    """

    added_letters: tuple[str, ...] = ()
    removed_letters: tuple[str, ...] = ()
    is_rearranged: bool = False
    key_letters_used: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.added_letters and not self.removed_letters


def normalize(word: str | None) -> str:
    """Uppercase and strip a word; ``None`` becomes ``""``."""
    if word is None:
        return ""
    return word.strip().upper()


def analyze_word_change(
    previous_word: str,
    current_word: str,
    key_letters: Iterable[str] = (),
) -> WordDiff:
    """Compare *previous_word* and *current_word* by letter frequency.

    Parameters
    ----------
    previous_word : str
        The word before the move.
    current_word : str
        The word after the move.
    key_letters : Iterable[str]
        Active key letters; any of them appearing in *current_word* is
        reported in ``key_letters_used`` whatever the kind of move.
    """
    prev = normalize(previous_word)
    curr = normalize(current_word)
    keys = {normalize(k) for k in key_letters}

    prev_freq = Counter(prev)
    curr_freq = Counter(curr)

    added: list[str] = []
    removed: list[str] = []
    # dict.fromkeys keeps first-seen order across both words
    for ch in dict.fromkeys(prev + curr):
        delta = curr_freq[ch] - prev_freq[ch]
        if delta > 0:
            added.extend([ch] * delta)
        elif delta < 0:
            removed.extend([ch] * -delta)

    is_rearranged = (
        len(prev) == len(curr)
        and not added
        and not removed
        and prev != curr
    )

    used = tuple(ch for ch in dict.fromkeys(curr) if ch in keys)

    return WordDiff(
        added_letters=tuple(added),
        removed_letters=tuple(removed),
        is_rearranged=is_rearranged,
        key_letters_used=used,
    )

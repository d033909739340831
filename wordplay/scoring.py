"""Scoring for WordPlay moves.

Each kind of change earns one point, independent of how many letters it
touched:

  1. Add a letter          +1
  2. Remove a letter       +1
  3. Rearrange letters     +1
  4. Use a key letter      +1

A substitution is an add plus a remove (2 points).  Examples:

  CAT  -> CATS   1  (add)
  CATS -> BATS   2  (remove C, add B)
  CATS -> TABS   3  (remove C, add T, rearrange)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from wordplay.constants import ACTION_PASS
from wordplay.diff import WordDiff, analyze_word_change, normalize


@dataclass(frozen=True)
class ScoringResult:
    """Point breakdown for one move.  Every field is 0 or 1."""

    add_letter_points: int = 0
    remove_letter_points: int = 0
    rearrange_points: int = 0
    key_letter_usage_points: int = 0
    actions: tuple[str, ...] = ()
    key_letters_used: tuple[str, ...] = ()

    @property
    def total_score(self) -> int:
        return (
            self.add_letter_points
            + self.remove_letter_points
            + self.rearrange_points
            + self.key_letter_usage_points
        )

    @property
    def breakdown(self) -> dict[str, int]:
        return {
            "add_letter_points": self.add_letter_points,
            "remove_letter_points": self.remove_letter_points,
            "rearrange_points": self.rearrange_points,
            "key_letter_usage_points": self.key_letter_usage_points,
        }

    @property
    def is_pass(self) -> bool:
        return self.actions == (ACTION_PASS,)


EMPTY_RESULT = ScoringResult()


def pass_result() -> ScoringResult:
    """Zero-point result recorded for a passed turn."""
    return ScoringResult(actions=(ACTION_PASS,))


# ── Rearrangement after an edit ─────────────────────────────────────────
#
# Approximate by nature: a move that adds or removes letters may also
# shuffle the letters it kept.  NAG -> LANG keeps N, A, G but reorders
# them, so it earns the rearrange point on top of the add point.

def _is_subsequence(short: str, long: str) -> bool:
    it = iter(long)
    return all(ch in it for ch in short)


def _retained_letters(prev: str, curr: str) -> Counter:
    return Counter(prev) & Counter(curr)


def _retained_sequence(word: str, retained: Counter) -> str:
    remaining = Counter(retained)
    seq: list[str] = []
    for ch in word:
        if remaining[ch] > 0:
            seq.append(ch)
            remaining[ch] -= 1
    return "".join(seq)


def retained_letters_shifted(previous_word: str, current_word: str, diff: WordDiff) -> bool:
    """True if the letters kept across an add/remove move changed order.

    A pure insertion whose old word is still a subsequence of the new one
    (or a pure deletion the other way round) is a natural shift and never
    counts.  Otherwise at least two retained letters are needed for an
    order to exist.
    """
    prev = normalize(previous_word)
    curr = normalize(current_word)

    if diff.added_letters and not diff.removed_letters and _is_subsequence(prev, curr):
        return False
    if diff.removed_letters and not diff.added_letters and _is_subsequence(curr, prev):
        return False

    retained = _retained_letters(prev, curr)
    if sum(retained.values()) < 2:
        return False
    return _retained_sequence(prev, retained) != _retained_sequence(curr, retained)


# ── Public API ───────────────────────────────────────────────────────────

def calculate_score(
    previous_word: str,
    current_word: str,
    key_letters: Iterable[str] = (),
) -> ScoringResult:
    """Score the move *previous_word* -> *current_word*.

    Empty input on either side scores zero rather than raising.
    """
    if not normalize(previous_word) or not normalize(current_word):
        return EMPTY_RESULT

    diff = analyze_word_change(previous_word, current_word, key_letters)

    add_points = 1 if diff.added_letters else 0
    remove_points = 1 if diff.removed_letters else 0
    if diff.is_rearranged:
        rearrange_points = 1
    elif not diff.is_empty and retained_letters_shifted(previous_word, current_word, diff):
        rearrange_points = 1
    else:
        rearrange_points = 0
    key_points = 1 if diff.key_letters_used else 0

    actions: list[str] = []
    if add_points:
        actions.append(f"Added letter(s): {', '.join(diff.added_letters)}")
    if remove_points:
        actions.append(f"Removed letter(s): {', '.join(diff.removed_letters)}")
    if rearrange_points:
        actions.append("Rearranged letters")
    if key_points:
        actions.append(f"Used key letter(s): {', '.join(diff.key_letters_used)}")

    return ScoringResult(
        add_letter_points=add_points,
        remove_letter_points=remove_points,
        rearrange_points=rearrange_points,
        key_letter_usage_points=key_points,
        actions=tuple(actions),
        key_letters_used=diff.key_letters_used,
    )


def get_score_for_move(previous_word: str, current_word: str, key_letters: Iterable[str] = ()) -> int:
    return calculate_score(previous_word, current_word, key_letters).total_score


def validate_scoring_result(result: ScoringResult) -> bool:
    """Sanity check: every field is 0 or 1 and the total matches."""
    points = result.breakdown.values()
    if any(p not in (0, 1) for p in points):
        return False
    return result.total_score == sum(points)


def format_score_breakdown(result: ScoringResult) -> str:
    parts: list[str] = []
    if result.add_letter_points:
        parts.append(f"Add: +{result.add_letter_points}")
    if result.remove_letter_points:
        parts.append(f"Remove: +{result.remove_letter_points}")
    if result.rearrange_points:
        parts.append(f"Rearrange: +{result.rearrange_points}")
    if result.key_letter_usage_points:
        parts.append(f"Key Usage: +{result.key_letter_usage_points}")
    return ", ".join(parts) if parts else "No score"

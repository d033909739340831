"""Move legality: at most one added and one removed letter per turn."""

from __future__ import annotations

from wordplay.constants import TOO_MANY_ADDS, TOO_MANY_REMOVES
from wordplay.diff import analyze_word_change


def check_move_legality(previous_word: str, current_word: str) -> str | None:
    """Reason code if the move is illegal, else ``None``.

    Rearranging is unrestricted and may be combined with one add and one
    remove in the same turn.
    """
    diff = analyze_word_change(previous_word, current_word)
    if len(diff.added_letters) > 1:
        return TOO_MANY_ADDS
    if len(diff.removed_letters) > 1:
        return TOO_MANY_REMOVES
    return None


def is_valid_move(previous_word: str, current_word: str) -> bool:
    return check_move_legality(previous_word, current_word) is None

"""Bot personalities for WordPlay.

A strategy narrows the greedy bot's ranked moves to give each opponent a
distinct feel.  It considers:

  1. Point window          (min / max points a move may score)
  2. Key letter behavior   (ignore, avoid, allow or prioritize)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from wordplay.move import BotMove
from wordplay.scoring import calculate_score

IGNORE = "ignore"
AVOID = "avoid"
ALLOW = "allow"
PRIORITIZE = "prioritize"


@dataclass(frozen=True)
class BotStrategy:
    id: str
    display_name: str
    max_points: int
    key_letter_behavior: str
    description: str
    min_points: int = 0


BOT_STRATEGIES: dict[str, BotStrategy] = {
    "trainer-bot": BotStrategy(
        "trainer-bot", "trainerbot", 2, IGNORE,
        "Plays 1-2 point moves, completely ignores key letters",
    ),
    "easy-bot": BotStrategy(
        "easy-bot", "easybot", 2, AVOID,
        "Plays 1-2 point moves, never uses key letters",
    ),
    "medium-bot": BotStrategy(
        "medium-bot", "mediumbot", 3, ALLOW,
        "Plays 1-3 point moves, can use key letters",
    ),
    "hard-bot": BotStrategy(
        "hard-bot", "hardbot", 4, ALLOW,
        "Plays 1-4 point moves, can use key letters",
    ),
    "boss-bot": BotStrategy(
        "boss-bot", "bossbot", 4, PRIORITIZE,
        "Plays 3-4 point moves, prioritizes key letter usage",
        min_points=3,
    ),
}

DEFAULT_STRATEGY_ID = "trainer-bot"


def get_bot_strategy(bot_id: str) -> BotStrategy:
    """Strategy for *bot_id*, falling back to the trainer bot."""
    return BOT_STRATEGIES.get(bot_id, BOT_STRATEGIES[DEFAULT_STRATEGY_ID])


# ── 1. Rescoring ────────────────────────────────────────────────────────

def _without_key_letters(move: BotMove, previous_word: str) -> BotMove:
    scoring = calculate_score(previous_word, move.word)
    return BotMove(
        word=move.word,
        score=scoring.total_score,
        confidence=move.confidence,
        reasoning=list(move.reasoning),
        scoring=scoring,
        kind=move.kind,
    )


# ── 2. Point window ─────────────────────────────────────────────────────

def _in_window(move: BotMove, strategy: BotStrategy) -> bool:
    return strategy.min_points <= move.score <= strategy.max_points


# ── Public API ───────────────────────────────────────────────────────────

def apply_strategy(
    moves: Iterable[BotMove],
    strategy: BotStrategy,
    previous_word: str,
    key_letters: Iterable[str] = (),
) -> list[BotMove]:
    """Filter and reorder ranked *moves* according to *strategy*.

    The relative order of *moves* is kept wherever the strategy does not
    say otherwise, so the greedy ranking still decides between equals.
    """
    has_keys = bool(tuple(key_letters))
    filtered = list(moves)

    if strategy.key_letter_behavior == IGNORE and has_keys:
        filtered = [_without_key_letters(m, previous_word) for m in filtered]
        filtered.sort(key=lambda m: m.score, reverse=True)

    filtered = [m for m in filtered if _in_window(m, strategy)]

    if strategy.key_letter_behavior == AVOID:
        filtered = [m for m in filtered if not m.uses_key_letters]
    elif strategy.key_letter_behavior == PRIORITIZE:
        filtered.sort(key=lambda m: (not m.uses_key_letters, -m.score))

    return filtered

"""Bot self-play simulation for WordPlay.

Plays the greedy bot against itself from a seed word to measure how long
it can keep finding moves and how fast each search is:

  1. Ask the bot for its best move from the current word.
  2. Play it: the word joins the used set and any key letter it kept
     becomes locked for the next search.
  3. Repeat for N turns or until the bot finds nothing.

Useful for endurance checks of a word list (dead ends show up as early
"no move" errors) and for timing the generator.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable

from wordplay.diff import normalize

if TYPE_CHECKING:
    from wordplay.bot import GreedyBot
    from wordplay.move import BotMove

logger = logging.getLogger("wordplay.sim")


@dataclass
class SimulationReport:
    success: bool
    completed_turns: int
    total_time: float
    average_time_per_turn: float
    moves: list["BotMove"] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def total_score(self) -> int:
        return sum(m.score for m in self.moves)


def simulate_bot_game(
    bot: "GreedyBot",
    initial_word: str,
    turns: int = 100,
    key_letters: Iterable[str] = (),
    progress_callback: Callable[[int, int], None] | None = None,
) -> SimulationReport:
    """Run the bot against itself for up to *turns* moves.

    Parameters
    ----------
    bot : GreedyBot
        The move generator under test.
    initial_word : str
        Seed word; counts as already played.
    turns : int
        Number of moves to attempt.
    key_letters : Iterable[str]
        Fixed key letters offered on every turn.
    progress_callback : callable, optional
        Called with ``(completed_turns, turns)`` after each move.
    """
    start = time.perf_counter()
    keys = [normalize(k) for k in key_letters]
    word = normalize(initial_word)
    used = {word}
    locked: list[str] = []
    moves: list["BotMove"] = []
    errors: list[str] = []

    for turn in range(turns):
        result = bot.generate_move(word, keys, locked, used)
        if result.move is None:
            reason = "time budget exceeded" if result.timed_out else "no valid move found"
            errors.append(f"Turn {turn + 1}: {reason}")
            break

        move = result.move
        logger.debug("SIM turn %d: %s -> %s (+%d)", turn + 1, word, move.word, move.score)
        moves.append(move)
        word = move.word
        used.add(word)
        locked = [k for k in keys if k in word]

        if progress_callback:
            progress_callback(len(moves), turns)

    total = time.perf_counter() - start
    completed = len(moves)
    return SimulationReport(
        success=completed == turns,
        completed_turns=completed,
        total_time=total,
        average_time_per_turn=total / completed if completed else 0.0,
        moves=moves,
        errors=errors,
    )

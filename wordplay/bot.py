"""Greedy bot: brute-force move generation, dictionary filtering, scoring."""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable

from wordplay.constants import (
    BOT_MAX_CANDIDATES,
    BOT_MAX_REARRANGEMENTS,
    BOT_TIME_LIMIT,
    BOT_TOP_CANDIDATES,
    COMMON_LETTERS,
)
from wordplay.dictionary import DictionaryCapability
from wordplay.diff import normalize
from wordplay.legality import is_valid_move
from wordplay.move import BotMove, BotResult, MoveCandidate
from wordplay.scoring import calculate_score
from wordplay.strategies import BotStrategy, apply_strategy

log = logging.getLogger("wordplay.bot")

RandomSource = Callable[[], float]


# candidate generation

def generate_add_moves(word: str) -> list[MoveCandidate]:
    """Every single-letter insertion, common letters first."""
    word = normalize(word)
    candidates: list[MoveCandidate] = []
    for pos in range(len(word) + 1):
        for letter in COMMON_LETTERS:
            candidates.append(MoveCandidate(
                word[:pos] + letter + word[pos:], "add",
                [f"Add {letter} at position {pos}"],
            ))
    return candidates


def generate_remove_moves(word: str) -> list[MoveCandidate]:
    word = normalize(word)
    return [
        MoveCandidate(word[:pos] + word[pos + 1:], "remove",
                      [f"Remove {word[pos]} from position {pos}"])
        for pos in range(len(word))
    ]


def generate_substitute_moves(word: str) -> list[MoveCandidate]:
    """Every single-letter replacement (one add plus one remove)."""
    word = normalize(word)
    candidates: list[MoveCandidate] = []
    for pos, original in enumerate(word):
        for letter in COMMON_LETTERS:
            if letter == original:
                continue
            candidates.append(MoveCandidate(
                word[:pos] + letter + word[pos + 1:], "substitute",
                [f"Substitute {original} -> {letter} at position {pos}"],
            ))
    return candidates


def generate_rearrange_moves(
    word: str,
    max_variations: int = BOT_MAX_REARRANGEMENTS,
    random_source: RandomSource = random.random,
) -> list[MoveCandidate]:
    """Up to *max_variations* distinct permutations of *word*.

    The first 10 tries swap a random adjacent pair, the next 10 swap any
    random pair, and the rest fully shuffle.  The original word and
    repeats are skipped.
    """
    word = normalize(word)
    n = len(word)
    if n < 2:
        return []

    def pick(limit: int) -> int:
        return min(int(random_source() * limit), limit - 1)

    seen = {word}
    candidates: list[MoveCandidate] = []
    for i in range(max_variations):
        if len(seen) >= max_variations + 1:
            break
        letters = list(word)
        if i < 10:
            a = pick(n)
            b = (a + 1) % n
            letters[a], letters[b] = letters[b], letters[a]
        elif i < 20:
            a, b = pick(n), pick(n)
            letters[a], letters[b] = letters[b], letters[a]
        else:
            for j in range(n - 1, 0, -1):
                k = pick(j + 1)
                letters[j], letters[k] = letters[k], letters[j]

        shuffled = "".join(letters)
        if shuffled not in seen:
            seen.add(shuffled)
            candidates.append(MoveCandidate(
                shuffled, "rearrange", [f"Rearrange letters: {word} -> {shuffled}"],
            ))
    return candidates


def confidence_for(word: str, score: int, uses_key_letters: bool) -> float:
    """Tie-break heuristic in [0, 1]."""
    confidence = 0.5
    confidence += min(score * 0.2, 0.3)
    if uses_key_letters:
        confidence += 0.2
    if 4 <= len(word) <= 6:
        confidence += 0.1
    return max(0.0, min(1.0, confidence))


class GreedyBot:
    """Picks the single highest-scoring legal word, with no lookahead.

    The bot never raises: malformed input, an exhausted search or a blown
    time budget all come back as a ``BotResult`` whose ``move`` is ``None``.
    """

    def __init__(
        self,
        dictionary: DictionaryCapability,
        *,
        max_candidates: int = BOT_MAX_CANDIDATES,
        time_limit: float = BOT_TIME_LIMIT,
        max_rearrangements: int = BOT_MAX_REARRANGEMENTS,
        random_source: RandomSource = random.random,
        clock: Callable[[], float] = time.perf_counter,
        strategy: BotStrategy | None = None,
    ):
        self.dict = dictionary
        self.max_candidates = max_candidates
        self.time_limit = time_limit
        self.max_rearrangements = max_rearrangements
        self.random_source = random_source
        self.clock = clock
        self.strategy = strategy

    # public API

    def generate_move(
        self,
        current_word: str,
        key_letters: Iterable[str] = (),
        locked_letters: Iterable[str] = (),
        used_words: Iterable[str] = (),
    ) -> BotResult:
        """Search for the best move from *current_word*."""
        start = self.clock()
        total = 0
        try:
            keys = [normalize(k) for k in key_letters]
            word = normalize(current_word)
            candidates = self.generate_candidates(word)
            total = len(candidates)

            if self._over_budget(start):
                log.debug("Bot budget exceeded after generating %d candidates", total)
                return BotResult(None, processing_time=self.clock() - start,
                                 total_candidates_generated=total, timed_out=True)

            valid = self.filter_valid_candidates(candidates, word, locked_letters, used_words)
            valid = valid[:self.max_candidates]

            if self._over_budget(start):
                log.debug("Bot budget exceeded after filtering to %d candidates", len(valid))
                return BotResult(None, processing_time=self.clock() - start,
                                 total_candidates_generated=total, timed_out=True)

            ranked = self.score_candidates(valid, word, keys)
            if self.strategy is not None:
                ranked = apply_strategy(ranked, self.strategy, word, keys)
        except Exception:
            log.exception("Bot move generation failed for %r", current_word)
            return BotResult(None, processing_time=self.clock() - start,
                             total_candidates_generated=total)

        elapsed = self.clock() - start
        best = ranked[0] if ranked else None
        log.debug(
            "Bot searched %s: %d generated, %d ranked, best=%s (%.1fms)",
            word, total, len(ranked), best.word if best else None, elapsed * 1000,
        )
        return BotResult(
            best,
            candidates=ranked[:BOT_TOP_CANDIDATES],
            processing_time=elapsed,
            total_candidates_generated=total,
        )

    def find_best_moves(
        self,
        current_word: str,
        key_letters: Iterable[str] = (),
        top_n: int = BOT_TOP_CANDIDATES,
    ) -> list[BotMove]:
        """Top N ranked moves, ignoring locks and game history."""
        return self.generate_move(current_word, key_letters).candidates[:top_n]

    def explain_move(
        self,
        current_word: str,
        key_letters: Iterable[str] = (),
        show_top: int = 5,
    ) -> tuple[str, list[BotMove]]:
        """Human-readable account of the bot's decision and its top moves."""
        keys = list(key_letters)
        result = self.generate_move(current_word, keys)
        lines = [
            f"Analyzed {result.total_candidates_generated} possible moves",
            f"Processing completed in {result.processing_time * 1000:.2f}ms",
            f"Found {len(result.candidates)} valid candidates",
        ]
        if result.move:
            lines.append(
                f"Selected move: {normalize(current_word)} -> {result.move.word} "
                f"({result.move.score} points)"
            )
            lines.extend(result.move.reasoning)
        else:
            lines.append("No valid moves found")
        return "\n".join(lines), result.candidates[:show_top]

    # stages

    def generate_candidates(self, word: str) -> list[MoveCandidate]:
        return (
            generate_add_moves(word)
            + generate_remove_moves(word)
            + generate_rearrange_moves(word, self.max_rearrangements, self.random_source)
            + generate_substitute_moves(word)
        )

    def filter_valid_candidates(
        self,
        candidates: list[MoveCandidate],
        current_word: str,
        locked_letters: Iterable[str] = (),
        used_words: Iterable[str] = (),
    ) -> list[MoveCandidate]:
        """Keep candidates a human could legally play from *current_word*."""
        used = {normalize(w) for w in used_words}
        locked = [normalize(l) for l in locked_letters if normalize(l) in current_word]

        seen: set[str] = set()
        valid: list[MoveCandidate] = []
        for cand in candidates:
            if cand.word in seen or cand.word == current_word:
                continue
            seen.add(cand.word)
            if cand.word in used:
                continue
            if any(letter not in cand.word for letter in locked):
                continue
            result = self.dict.validate(cand.word, previous_word=current_word)
            if not result.is_valid or not self.dict.is_dictionary_word(cand.word):
                continue
            if not is_valid_move(current_word, cand.word):
                continue
            valid.append(cand)
        return valid

    def score_candidates(
        self,
        candidates: list[MoveCandidate],
        current_word: str,
        key_letters: Iterable[str] = (),
    ) -> list[BotMove]:
        """Score and rank; ties keep generation order."""
        keys = list(key_letters)
        moves: list[BotMove] = []
        for cand in candidates:
            scoring = calculate_score(current_word, cand.word, keys)
            uses_keys = bool(scoring.key_letters_used)
            confidence = confidence_for(cand.word, scoring.total_score, uses_keys)
            reasoning = [
                f"{cand.kind} operation: {', '.join(cand.operations)}",
                f"Score: {scoring.total_score} points",
            ]
            if uses_keys:
                reasoning.append("Uses key letters")
            reasoning.append(f"Confidence: {round(confidence * 100)}%")
            moves.append(BotMove(cand.word, scoring.total_score, confidence,
                                 reasoning, scoring, cand.kind))
        moves.sort(key=lambda m: (m.score, m.confidence), reverse=True)
        return moves

    def _over_budget(self, start: float) -> bool:
        return self.clock() - start > self.time_limit

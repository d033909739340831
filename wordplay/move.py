"""Move representations for the WordPlay bot."""

from __future__ import annotations

from wordplay.scoring import ScoringResult


class MoveCandidate:
    """An unscored word the bot could play."""

    __slots__ = ("word", "kind", "operations")

    def __init__(self, word: str, kind: str, operations: list[str] | None = None):
        self.word = word
        self.kind = kind  # 'add', 'remove', 'substitute' or 'rearrange'
        self.operations = operations or []

    def __repr__(self) -> str:
        return f"MoveCandidate({self.word!r}, {self.kind})"


class BotMove:
    """A scored candidate, ranked by score then confidence."""

    __slots__ = ("word", "score", "confidence", "reasoning", "scoring", "kind")

    def __init__(
        self,
        word: str,
        score: int,
        confidence: float,
        reasoning: list[str] | None = None,
        scoring: ScoringResult | None = None,
        kind: str = "",
    ):
        self.word = word
        self.score = score
        self.confidence = confidence
        self.reasoning = reasoning or []
        self.scoring = scoring      # full breakdown from the scoring engine
        self.kind = kind

    @property
    def uses_key_letters(self) -> bool:
        return bool(self.scoring and self.scoring.key_letters_used)

    def __repr__(self) -> str:
        return f"{self.word} = {self.score} pts  confidence={self.confidence:.2f}"


class BotResult:
    """Outcome of one bot search.  ``move`` is ``None`` when nothing was found."""

    __slots__ = ("move", "candidates", "processing_time", "total_candidates_generated", "timed_out")

    def __init__(
        self,
        move: BotMove | None,
        candidates: list[BotMove] | None = None,
        processing_time: float = 0.0,
        total_candidates_generated: int = 0,
        timed_out: bool = False,
    ):
        self.move = move
        self.candidates = candidates or []
        self.processing_time = processing_time
        self.total_candidates_generated = total_candidates_generated
        self.timed_out = timed_out

    def __repr__(self) -> str:
        best = self.move.word if self.move else None
        return (
            f"BotResult(move={best!r}, candidates={len(self.candidates)}, "
            f"generated={self.total_candidates_generated}, {self.processing_time * 1000:.1f}ms)"
        )

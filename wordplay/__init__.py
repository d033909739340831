"""WordPlay turn engine."""

from wordplay.bot import GreedyBot
from wordplay.challenge import ChallengeEngine, ChallengeState, ChallengeSubmission
from wordplay.dictionary import Dictionary, DictionaryCapability, ValidationResult
from wordplay.diff import WordDiff, analyze_word_change
from wordplay.gamestate import (
    GameConfig,
    GameSnapshot,
    GameStateError,
    GameStateManager,
    MoveAttempt,
    PlayerState,
    TurnRecord,
)
from wordplay.legality import check_move_legality, is_valid_move
from wordplay.move import BotMove, BotResult, MoveCandidate
from wordplay.scoring import ScoringResult, calculate_score, get_score_for_move
from wordplay.simulation import SimulationReport, simulate_bot_game
from wordplay.strategies import BOT_STRATEGIES, BotStrategy, get_bot_strategy

__all__ = [
    "BOT_STRATEGIES",
    "BotMove",
    "BotResult",
    "BotStrategy",
    "ChallengeEngine",
    "ChallengeState",
    "ChallengeSubmission",
    "Dictionary",
    "DictionaryCapability",
    "GameConfig",
    "GameSnapshot",
    "GameStateError",
    "GameStateManager",
    "GreedyBot",
    "MoveAttempt",
    "MoveCandidate",
    "PlayerState",
    "ScoringResult",
    "SimulationReport",
    "TurnRecord",
    "ValidationResult",
    "WordDiff",
    "analyze_word_change",
    "calculate_score",
    "check_move_legality",
    "get_bot_strategy",
    "get_score_for_move",
    "is_valid_move",
    "simulate_bot_game",
]

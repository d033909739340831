"""Turn state machine for a WordPlay game.

``GameStateManager`` owns the current word, the players, the key-letter
lifecycle, locked letters, the used-word set and the turn history.  All
mutation goes through its public methods; callers read the game through
``get_state()`` snapshots.

Lifecycle: ``waiting -> playing -> finished``, never backwards except by
``reset_game()``.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from wordplay.bot import GreedyBot
from wordplay.constants import (
    ACTION_MOVE,
    ACTION_PASS,
    ALPHABET,
    ALREADY_PLAYED,
    DEFAULT_MAX_TURNS,
    FALLBACK_WORD,
    GAME_NOT_PLAYING,
    INITIAL_WORD_LENGTH,
    INVALID_ACTION,
    NO_PLAYER,
    NOT_YOUR_TURN,
    STATUS_FINISHED,
    STATUS_PLAYING,
    STATUS_WAITING,
)
from wordplay.dictionary import DictionaryCapability, ValidationResult
from wordplay.diff import normalize
from wordplay.legality import check_move_legality
from wordplay.move import BotMove
from wordplay.scoring import ScoringResult, calculate_score, pass_result

log = logging.getLogger("wordplay")

# Update types delivered to listeners
GAME_STARTED = "game_started"
WORD_CHANGED = "word_changed"
TURN_COMPLETED = "turn_completed"
LETTERS_UPDATED = "letters_updated"
GAME_FINISHED = "game_finished"
GAME_RESET = "game_reset"


class GameStateError(RuntimeError):
    """Raised when a lifecycle call is made in the wrong state."""


@dataclass(frozen=True)
class GameConfig:
    max_turns: int = DEFAULT_MAX_TURNS
    initial_word: str | None = None
    allow_bot_player: bool = True
    enable_key_letters: bool = True
    enable_locked_letters: bool = True


@dataclass
class PlayerState:
    id: str
    name: str
    is_bot: bool = False
    score: int = 0
    is_current_player: bool = False


@dataclass(frozen=True)
class TurnRecord:
    turn_number: int
    player_id: str
    previous_word: str
    new_word: str
    score: int
    scoring: ScoringResult
    timestamp: float
    action: str = ACTION_MOVE


@dataclass(frozen=True)
class MoveAttempt:
    """Result of checking a word against the current game, without playing it."""

    new_word: str
    is_valid: bool
    validation_result: ValidationResult | None
    scoring_result: ScoringResult | None
    reason: str | None = None

    @property
    def can_apply(self) -> bool:
        return self.is_valid and self.scoring_result is not None


@dataclass(frozen=True)
class GameStateUpdate:
    type: str
    data: dict[str, Any]
    timestamp: float


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the game at one instant."""

    current_word: str
    key_letters: tuple[str, ...]
    locked_letters: tuple[str, ...]
    locked_key_letters: tuple[str, ...]
    used_words: tuple[str, ...]
    used_key_letters: tuple[str, ...]
    players: tuple[PlayerState, ...]
    current_turn: int
    max_turns: int
    game_status: str
    winner: PlayerState | None
    turn_history: tuple[TurnRecord, ...]
    total_moves: int
    config: GameConfig
    game_start_time: float
    last_move_time: float


@dataclass(frozen=True)
class PlayerStats:
    id: str
    name: str
    score: int
    move_count: int
    average_score_per_move: float


@dataclass(frozen=True)
class GameStats:
    duration: float
    total_moves: int
    average_score: float
    player_stats: tuple[PlayerStats, ...]


@dataclass
class _State:
    current_word: str
    players: list[PlayerState]
    max_turns: int
    config: GameConfig
    game_start_time: float
    last_move_time: float
    key_letters: list[str] = field(default_factory=list)
    locked_letters: list[str] = field(default_factory=list)
    locked_key_letters: list[str] = field(default_factory=list)
    # dicts used as insertion-ordered sets
    used_words: dict[str, None] = field(default_factory=dict)
    used_key_letters: dict[str, None] = field(default_factory=dict)
    current_turn: int = 1
    game_status: str = STATUS_WAITING
    winner: PlayerState | None = None
    turn_history: list[TurnRecord] = field(default_factory=list)
    total_moves: int = 0


Listener = Callable[[GameStateUpdate], None]


class GameStateManager:
    """Runs one game between two players (human/bot or human/human).

    Parameters
    ----------
    dictionary : DictionaryCapability
        Word validation and random seed words.
    config : GameConfig | None
        Game options; defaults to ``GameConfig()``.
    bot : GreedyBot | None
        Move generator for bot turns; built from *dictionary* if omitted.
    rng : random.Random | None
        Source for key-letter generation.
    clock : callable
        Wall-clock seconds for timestamps.
    """

    def __init__(
        self,
        dictionary: DictionaryCapability,
        config: GameConfig | None = None,
        *,
        bot: GreedyBot | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.dict = dictionary
        self.bot = bot or GreedyBot(dictionary)
        self._rng = rng or random.Random()
        self._clock = clock
        self._listeners: list[Listener] = []
        self._bot_move_in_progress = False
        self._config = config or GameConfig()
        self._state = self._initial_state(self._config)

    def _initial_state(self, config: GameConfig) -> _State:
        initial_word = config.initial_word
        if not initial_word:
            initial_word = self.dict.random_word_of_length(INITIAL_WORD_LENGTH) or FALLBACK_WORD
        config = replace(config, initial_word=normalize(initial_word))

        if config.allow_bot_player:
            players = [
                PlayerState("human", "Player", is_current_player=True),
                PlayerState("bot", "Bot AI", is_bot=True),
            ]
        else:
            players = [
                PlayerState("player1", "Player 1", is_current_player=True),
                PlayerState("player2", "Player 2"),
            ]

        now = self._clock()
        return _State(
            current_word=config.initial_word,
            players=players,
            max_turns=config.max_turns,
            config=config,
            game_start_time=now,
            last_move_time=now,
        )

    # queries

    def get_state(self) -> GameSnapshot:
        s = self._state
        return GameSnapshot(
            current_word=s.current_word,
            key_letters=tuple(s.key_letters),
            locked_letters=tuple(s.locked_letters),
            locked_key_letters=tuple(s.locked_key_letters),
            used_words=tuple(s.used_words),
            used_key_letters=tuple(s.used_key_letters),
            players=tuple(replace(p) for p in s.players),
            current_turn=s.current_turn,
            max_turns=s.max_turns,
            game_status=s.game_status,
            winner=replace(s.winner) if s.winner else None,
            turn_history=tuple(s.turn_history),
            total_moves=s.total_moves,
            config=s.config,
            game_start_time=s.game_start_time,
            last_move_time=s.last_move_time,
        )

    def get_current_player(self) -> PlayerState | None:
        for p in self._state.players:
            if p.is_current_player:
                return replace(p)
        return None

    def get_other_player(self) -> PlayerState | None:
        for p in self._state.players:
            if not p.is_current_player:
                return replace(p)
        return None

    def _current(self) -> PlayerState | None:
        return next((p for p in self._state.players if p.is_current_player), None)

    def get_game_stats(self) -> GameStats:
        s = self._state
        total_score = sum(p.score for p in s.players)
        per_player: list[PlayerStats] = []
        for p in s.players:
            moves = sum(
                1 for t in s.turn_history
                if t.player_id == p.id and t.action == ACTION_MOVE
            )
            per_player.append(PlayerStats(
                p.id, p.name, p.score, moves, p.score / moves if moves else 0.0,
            ))
        return GameStats(
            duration=self._clock() - s.game_start_time,
            total_moves=s.total_moves,
            average_score=total_score / s.total_moves if s.total_moves else 0.0,
            player_stats=tuple(per_player),
        )

    # lifecycle

    def start_game(self) -> None:
        s = self._state
        if s.game_status != STATUS_WAITING:
            raise GameStateError(f"Cannot start a game that is {s.game_status}")

        s.game_status = STATUS_PLAYING
        s.game_start_time = s.last_move_time = self._clock()
        s.used_words[s.current_word] = None
        if s.config.enable_key_letters:
            self._generate_key_letter()

        log.debug("Game started with %s, key letters %s", s.current_word, s.key_letters)
        self._notify(GAME_STARTED, current_word=s.current_word, key_letters=list(s.key_letters))

    def reset_game(self, config: GameConfig | None = None) -> None:
        """Start over in ``waiting``.  Without *config* the previous options
        are reused, except that a random seed word is drawn again."""
        if config is not None:
            self._config = config
        self._state = self._initial_state(self._config)
        self._bot_move_in_progress = False
        self._notify(GAME_RESET)

    # moves

    def attempt_move(self, word: str, player_id: str | None = None) -> MoveAttempt:
        """Check *word* as the current player's move.  Never mutates state."""
        s = self._state
        new_word = normalize(word)

        if s.game_status != STATUS_PLAYING:
            return self._rejected(new_word, GAME_NOT_PLAYING)
        current = self._current()
        if current is None:
            return self._rejected(new_word, NO_PLAYER)
        if player_id is not None and player_id != current.id:
            return self._rejected(new_word, NOT_YOUR_TURN)

        if new_word in s.used_words:
            return self._rejected(new_word, ALREADY_PLAYED)

        for letter in self._active_locks():
            if letter in s.current_word and letter not in new_word:
                return self._rejected(new_word, INVALID_ACTION)

        validation = self.dict.validate(word, previous_word=s.current_word)
        if not validation.is_valid:
            return MoveAttempt(new_word, False, validation, None, validation.reason)

        reason = check_move_legality(s.current_word, validation.word)
        if reason is not None:
            return MoveAttempt(validation.word, False, validation, None, reason)

        scoring = calculate_score(s.current_word, validation.word, s.key_letters)
        return MoveAttempt(validation.word, True, validation, scoring)

    def apply_move(self, move: MoveAttempt | str, player_id: str | None = None) -> bool:
        """Commit a move for the current player (or for *player_id*, which must be current).

        A ``MoveAttempt`` is re-checked against the live state first, so a
        stale attempt cannot slip through.  Nothing changes on failure.
        """
        word = move.new_word if isinstance(move, MoveAttempt) else move
        attempt = self.attempt_move(word, player_id)
        if not attempt.can_apply:
            log.debug("Rejected move %s: %s", attempt.new_word, attempt.reason)
            return False

        s = self._state
        player = self._current()
        scoring = attempt.scoring_result
        previous_word = s.current_word
        new_word = attempt.new_word
        now = self._clock()

        s.current_word = new_word
        s.last_move_time = now
        s.total_moves += 1
        s.used_words[new_word] = None
        player.score += scoring.total_score
        s.turn_history.append(TurnRecord(
            turn_number=s.current_turn,
            player_id=player.id,
            previous_word=previous_word,
            new_word=new_word,
            score=scoring.total_score,
            scoring=scoring,
            timestamp=now,
        ))

        # Key letters the mover used and kept must survive the next turn.
        s.locked_key_letters = []
        if s.config.enable_locked_letters:
            s.locked_key_letters = [k for k in scoring.key_letters_used if k in new_word]

        if s.config.enable_key_letters:
            for letter in s.key_letters:
                s.used_key_letters[letter] = None
            s.key_letters = []
            self._generate_key_letter()

        log.debug(
            "%s played %s -> %s for %d (locked %s)",
            player.id, previous_word, new_word, scoring.total_score, s.locked_key_letters,
        )
        self._notify(
            WORD_CHANGED,
            previous_word=previous_word, new_word=new_word, score=scoring.total_score,
        )
        self._advance_turn()
        return True

    def pass_turn(self, player_id: str | None = None) -> bool:
        """Skip the current player's turn.  Locks lapse; key letters stay."""
        s = self._state
        if s.game_status != STATUS_PLAYING:
            return False
        player = self._current()
        if player is None:
            return False
        if player_id is not None and player_id != player.id:
            return False

        s.locked_key_letters = []
        s.turn_history.append(TurnRecord(
            turn_number=s.current_turn,
            player_id=player.id,
            previous_word=s.current_word,
            new_word=s.current_word,
            score=0,
            scoring=pass_result(),
            timestamp=self._clock(),
            action=ACTION_PASS,
        ))

        log.debug("%s passed on turn %d", player.id, s.current_turn)
        self._notify(TURN_COMPLETED, type=ACTION_PASS, player_id=player.id, player_name=player.name)
        self._advance_turn()
        return True

    async def make_bot_move(self) -> BotMove | None:
        """Let the bot take its turn.

        Returns the played move, or ``None`` if it is not a bot's turn, a
        bot move is already running, the bot had to pass, or the turn ended
        (pass, reset) while the search ran.  The result is only ever
        committed for the bot that started the search.
        """
        s = self._state
        player = self._current()
        if s.game_status != STATUS_PLAYING or player is None or not player.is_bot:
            return None
        if self._bot_move_in_progress:
            log.debug("Bot move already in progress, ignoring request")
            return None

        self._bot_move_in_progress = True
        state_at_start = s
        bot_id = player.id
        turn_at_start = s.current_turn
        try:
            try:
                result = await asyncio.to_thread(
                    self.bot.generate_move,
                    s.current_word,
                    tuple(s.key_letters),
                    tuple(self._active_locks()),
                    tuple(s.used_words),
                )
            except Exception:
                log.exception("Bot move generation raised")
                result = None

            if self._state is not state_at_start:
                # reset while the bot was thinking
                return None
            if s.game_status != STATUS_PLAYING or s.current_turn != turn_at_start:
                log.debug("Turn %d ended during the bot search, discarding result", turn_at_start)
                return None

            move = result.move if result else None
            if move is not None and self.apply_move(move.word, player_id=bot_id):
                return move

            log.info("Bot found no playable move from %s, passing", s.current_word)
            self.pass_turn(player_id=bot_id)
            return None
        finally:
            if self._state is state_at_start:
                self._bot_move_in_progress = False

    # key / locked letters

    def add_key_letter(self, letter: str) -> bool:
        """Set the active key letter.  Fails while one is already active."""
        s = self._state
        letter = normalize(letter)
        if not self._can_edit_letters(letter) or not s.config.enable_key_letters:
            return False
        # at most one active key letter
        if s.key_letters:
            return False
        s.key_letters.append(letter)
        self._notify(LETTERS_UPDATED, action="key_added", letter=letter, key_letters=list(s.key_letters))
        return True

    def remove_key_letter(self, letter: str) -> bool:
        s = self._state
        letter = normalize(letter)
        if s.game_status == STATUS_FINISHED or letter not in s.key_letters:
            return False
        s.key_letters.remove(letter)
        self._notify(LETTERS_UPDATED, action="key_removed", letter=letter, key_letters=list(s.key_letters))
        return True

    def add_locked_letter(self, letter: str) -> bool:
        s = self._state
        letter = normalize(letter)
        if not self._can_edit_letters(letter) or not s.config.enable_locked_letters:
            return False
        if letter in s.locked_letters:
            return False
        s.locked_letters.append(letter)
        self._notify(LETTERS_UPDATED, action="locked_added", letter=letter,
                     locked_letters=list(s.locked_letters))
        return True

    def remove_locked_letter(self, letter: str) -> bool:
        s = self._state
        letter = normalize(letter)
        if s.game_status == STATUS_FINISHED or letter not in s.locked_letters:
            return False
        s.locked_letters.remove(letter)
        self._notify(LETTERS_UPDATED, action="locked_removed", letter=letter,
                     locked_letters=list(s.locked_letters))
        return True

    def _can_edit_letters(self, letter: str) -> bool:
        return (
            len(letter) == 1
            and letter in ALPHABET
            and self._state.game_status != STATUS_FINISHED
        )

    def _active_locks(self) -> list[str]:
        s = self._state
        locks = list(s.locked_key_letters)
        locks.extend(l for l in s.locked_letters if l not in locks)
        return locks

    def _generate_key_letter(self) -> None:
        """Draw one key letter never used this game and absent from the word."""
        s = self._state
        if s.key_letters:
            return
        available = [
            ch for ch in ALPHABET
            if ch not in s.used_key_letters and ch not in s.current_word
        ]
        if not available:
            log.debug("No letters left to use as a key letter")
            return
        letter = self._rng.choice(available)
        s.key_letters.append(letter)
        log.debug("Generated key letter %s on turn %d", letter, s.current_turn)
        self._notify(LETTERS_UPDATED, action="key_letter_generated", letter=letter,
                     key_letters=list(s.key_letters))

    # turn flow

    def _advance_turn(self) -> None:
        s = self._state
        index = next(i for i, p in enumerate(s.players) if p.is_current_player)
        s.players[index].is_current_player = False
        nxt = s.players[(index + 1) % len(s.players)]
        nxt.is_current_player = True
        s.current_turn += 1

        self._notify(TURN_COMPLETED, current_turn=s.current_turn, current_player=nxt.id)

        if s.current_turn > s.max_turns:
            self._finish_game()

    def _finish_game(self) -> None:
        s = self._state
        s.game_status = STATUS_FINISHED
        ranked = sorted(s.players, key=lambda p: p.score, reverse=True)
        if len(ranked) == 1 or ranked[0].score > ranked[1].score:
            s.winner = ranked[0]
        else:
            s.winner = None

        log.debug("Game finished, winner %s", s.winner.id if s.winner else "none (tie)")
        self._notify(
            GAME_FINISHED,
            winner=s.winner.id if s.winner else None,
            final_scores={p.id: p.score for p in s.players},
        )

    # listeners

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: str, **data: Any) -> None:
        update = GameStateUpdate(kind, data, self._clock())
        for listener in list(self._listeners):
            try:
                listener(update)
            except Exception:
                log.exception("Game state listener failed on %s", kind)

    @staticmethod
    def _rejected(word: str, reason: str) -> MoveAttempt:
        return MoveAttempt(word, False, ValidationResult(False, word, reason), None, reason)

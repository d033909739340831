"""Game constants and reason codes for the WordPlay engine."""

from __future__ import annotations

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# English letter frequency order; the bot tries common letters first so
# candidate truncation keeps the likelier words.
COMMON_LETTERS = "ETAOINSHRDLCUMWFGYPBVKJXQZ"

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 15
MAX_LENGTH_CHANGE = 1

DEFAULT_MAX_TURNS = 10
INITIAL_WORD_LENGTH = 4
FALLBACK_WORD = "WORD"

# ── Bot defaults ────────────────────────────────────────────────────────

BOT_MAX_CANDIDATES = 1000
BOT_TIME_LIMIT = 1.0        # seconds
BOT_MAX_REARRANGEMENTS = 50
BOT_TOP_CANDIDATES = 10

# ── Daily challenge ─────────────────────────────────────────────────────

CHALLENGE_START_LENGTH = 5
CHALLENGE_MIN_TARGET_LENGTH = 5
CHALLENGE_MAX_TARGET_LENGTH = 8
CHALLENGE_MAX_COMMON_LETTERS = 2
CHALLENGE_EPOCH = "2024-01-01"    # Challenge #1

# ── Game status ─────────────────────────────────────────────────────────

STATUS_WAITING = "waiting"
STATUS_PLAYING = "playing"
STATUS_FINISHED = "finished"

ACTION_MOVE = "MOVE"
ACTION_PASS = "PASS"

# ── Reason codes ────────────────────────────────────────────────────────

EMPTY_WORD = "EMPTY_WORD"
INVALID_CHARACTERS = "INVALID_CHARACTERS"
TOO_SHORT = "TOO_SHORT"
LENGTH_CHANGE_TOO_LARGE = "LENGTH_CHANGE_TOO_LARGE"
NOT_IN_DICTIONARY = "NOT_IN_DICTIONARY"
ALREADY_PLAYED = "ALREADY_PLAYED"
TOO_MANY_ADDS = "TOO_MANY_ADDS"
TOO_MANY_REMOVES = "TOO_MANY_REMOVES"
INVALID_ACTION = "INVALID_ACTION"
GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
NO_PLAYER = "NO_PLAYER"
NOT_YOUR_TURN = "NOT_YOUR_TURN"

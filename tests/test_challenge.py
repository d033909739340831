from datetime import date

from wordplay.challenge import (
    NEW_LETTER,
    ChallengeEngine,
    ChallengeState,
    challenge_number,
    count_common_letters,
    daily_seed,
    has_repeating_letters,
    is_valid_target_word,
    sharing_pattern,
    sharing_text,
)
from wordplay.constants import (
    ALREADY_PLAYED,
    GAME_NOT_PLAYING,
    NOT_IN_DICTIONARY,
    TOO_MANY_ADDS,
)


def _state():
    return ChallengeState.new("2024-01-10", "cat", "bats")


def test_daily_seed_is_stable_and_positive():
    assert daily_seed("2024-05-01") == daily_seed("2024-05-01")
    assert daily_seed("2024-05-01") != daily_seed("2024-05-02")
    assert all(daily_seed(f"2024-01-{d:02d}") >= 0 for d in range(1, 32))
    assert daily_seed("") == 0


def test_same_day_same_puzzle(dictionary):
    a = ChallengeEngine(dictionary).daily_challenge("2024-05-01")
    b = ChallengeEngine(dictionary).daily_challenge(date(2024, 5, 1))
    assert (a.start_word, a.target_word) == (b.start_word, b.target_word)
    assert a.date == "2024-05-01"


def test_daily_words_follow_the_puzzle_rules(dictionary):
    engine = ChallengeEngine(dictionary)
    for day in range(1, 15):
        state = engine.daily_challenge(f"2024-02-{day:02d}")
        assert state.start_word in dictionary
        assert len(state.start_word) == 5
        assert not has_repeating_letters(state.start_word)
        assert is_valid_target_word(state.start_word, state.target_word)
        assert state.current_word == state.start_word
        assert state.word_sequence == (state.start_word,)
        assert state.step_count == 0


def test_today_is_injected(dictionary):
    engine = ChallengeEngine(dictionary, today=lambda: date(2024, 1, 10))
    assert engine.daily_challenge().date == "2024-01-10"


def test_random_challenge(dictionary):
    state = ChallengeEngine(dictionary).random_challenge(seed=42)
    assert state.date == "random-42"
    assert is_valid_target_word(state.start_word, state.target_word)


def test_target_word_rules():
    assert count_common_letters("GAMES", "STALK") == 2
    assert is_valid_target_word("GAMES", "QUICK")
    assert not is_valid_target_word("GAMES", "GAMES")
    assert not is_valid_target_word("GAMES", "SAME")
    assert not is_valid_target_word("GAMES", "MATES")
    assert not is_valid_target_word("CAT", "JERRY")


def test_solving_a_challenge(dictionary):
    engine = ChallengeEngine(dictionary)
    state = _state()

    first = engine.submit_word("cats", state)
    assert first.is_valid and not first.is_complete
    assert state.current_word == "CAT"

    second = engine.submit_word("BATS", first.new_state)
    assert second.is_complete
    solved = second.new_state
    assert solved.completed
    assert solved.step_count == 2
    assert solved.word_sequence == ("CAT", "CATS", "BATS")

    assert engine.submit_word("TABS", solved).reason == GAME_NOT_PLAYING


def test_rejected_submissions_keep_the_state(dictionary):
    engine = ChallengeEngine(dictionary)
    state = _state()
    for word, reason in (("CAT", ALREADY_PLAYED), ("DOG", TOO_MANY_ADDS),
                         ("CATZ", NOT_IN_DICTIONARY)):
        result = engine.submit_word(word, state)
        assert not result.is_valid
        assert result.reason == reason
        assert result.new_state is state


def test_is_valid_move(dictionary):
    engine = ChallengeEngine(dictionary)
    assert engine.is_valid_move("CATS", "TABS")
    assert not engine.is_valid_move("CAT", "CAT")
    assert not engine.is_valid_move("", "CAT")
    assert not engine.is_valid_move("CAT", "COATS")


def test_forfeit(dictionary):
    engine = ChallengeEngine(dictionary)
    state = engine.submit_word("CATS", _state()).new_state
    given_up = engine.forfeit(state)
    assert given_up.failed
    assert given_up.failed_at_word == "CATS"
    assert engine.forfeit(given_up) is given_up
    assert engine.submit_word("BATS", given_up).reason == GAME_NOT_PLAYING


def test_sharing_pattern():
    assert sharing_pattern(["CAT"]) == []
    assert sharing_pattern(["CAT", "CATS", "BATS", "TABS"]) == [
        "***" + NEW_LETTER, NEW_LETTER + "***", "****",
    ]


def test_sharing_text(dictionary):
    engine = ChallengeEngine(dictionary)
    state = _state()
    assert sharing_text(state) == "Challenge #10 CAT → BATS (in progress)\n\n"

    state = engine.submit_word("CATS", state).new_state
    solved = engine.submit_word("BATS", state).new_state
    assert sharing_text(solved) == (
        "Challenge #10 ✓ CAT → BATS\n\n"
        f"***{NEW_LETTER}\n{NEW_LETTER}***\n2 turns"
    )
    assert sharing_text(engine.forfeit(state)).startswith("Challenge #10 ❌ CAT → BATS\n\n")


def test_challenge_number():
    assert challenge_number("2024-01-01") == 1
    assert challenge_number("2025-01-01") == 367
    assert challenge_number("random-42") is None

from wordplay.scoring import (
    EMPTY_RESULT,
    calculate_score,
    format_score_breakdown,
    get_score_for_move,
    pass_result,
    retained_letters_shifted,
    validate_scoring_result,
)
from wordplay.diff import analyze_word_change


def test_add_letter_scores_one():
    result = calculate_score("CAT", "CATS")
    assert result.total_score == 1
    assert result.add_letter_points == 1
    assert result.rearrange_points == 0


def test_add_key_letter_scores_two():
    result = calculate_score("CAT", "CATS", ["S"])
    assert result.total_score == 2
    assert result.key_letter_usage_points == 1
    assert result.key_letters_used == ("S",)


def test_insertion_in_the_middle_is_not_a_rearrangement():
    assert get_score_for_move("CAT", "COAT") == 1


def test_substitution_scores_two():
    result = calculate_score("CATS", "BATS")
    assert (result.add_letter_points, result.remove_letter_points, result.rearrange_points) == (1, 1, 0)
    assert result.total_score == 2


def test_substitution_with_shifted_letters_scores_rearrangement():
    assert get_score_for_move("CATS", "TABS") == 3
    assert get_score_for_move("TASKS", "STALK") == 3


def test_add_with_reordering():
    result = calculate_score("NAG", "LANG")
    assert result.add_letter_points == 1
    assert result.rearrange_points == 1


def test_pure_rearrangement_scores_one():
    result = calculate_score("CAT", "ACT")
    assert result.rearrange_points == 1
    assert result.total_score == 1


def test_unused_key_letters_score_nothing():
    result = calculate_score("CAT", "CATS", ["Z"])
    assert result.key_letter_usage_points == 0
    assert result.key_letters_used == ()


def test_key_letter_already_in_word_still_counts():
    assert calculate_score("CAT", "CATS", ["A"]).key_letter_usage_points == 1


def test_empty_input_scores_zero():
    assert calculate_score("", "CAT") == EMPTY_RESULT
    assert calculate_score("CAT", "   ").total_score == 0
    assert calculate_score(None, "CAT").total_score == 0


def test_retained_letters_shifted_heuristic():
    assert not retained_letters_shifted("CAT", "CATS", analyze_word_change("CAT", "CATS"))
    assert retained_letters_shifted("CAT", "ACTS", analyze_word_change("CAT", "ACTS"))
    assert not retained_letters_shifted("AT", "BY", analyze_word_change("AT", "BY"))


def test_validate_and_format():
    result = calculate_score("CAT", "CATS", ["S"])
    assert validate_scoring_result(result)
    assert format_score_breakdown(result) == "Add: +1, Key Usage: +1"
    assert format_score_breakdown(EMPTY_RESULT) == "No score"


def test_pass_result():
    result = pass_result()
    assert result.is_pass
    assert result.total_score == 0
    assert not calculate_score("CAT", "CATS").is_pass

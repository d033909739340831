import random

from wordplay.constants import (
    EMPTY_WORD,
    INVALID_CHARACTERS,
    LENGTH_CHANGE_TOO_LARGE,
    NOT_IN_DICTIONARY,
    TOO_SHORT,
)
from wordplay.dictionary import Dictionary


def test_validate_reason_codes(dictionary):
    assert dictionary.validate(None).reason == EMPTY_WORD
    assert dictionary.validate("   ").reason == EMPTY_WORD
    assert dictionary.validate("C4T").reason == INVALID_CHARACTERS
    assert dictionary.validate("AT").reason == TOO_SHORT
    assert dictionary.validate("COATS", previous_word="CAT").reason == LENGTH_CHANGE_TOO_LARGE
    assert dictionary.validate("XYZZY").reason == NOT_IN_DICTIONARY


def test_validate_normalizes(dictionary):
    result = dictionary.validate(" cats ")
    assert result.is_valid
    assert result.word == "CATS"
    assert result.reason is None


def test_length_rules_can_be_skipped(dictionary):
    assert dictionary.validate("AT", check_length=False).is_valid


def test_bot_validation_skips_rules(dictionary):
    result = dictionary.validate(" qq ", is_bot=True)
    assert result.is_valid
    assert result.word == "QQ"


def test_slang_words():
    d = Dictionary.from_words(["CAT"], slang_words=["yeet"])
    assert d.validate("YEET").is_valid
    assert "yeet" in d

    strict = Dictionary.from_words(["CAT"], slang_words=["yeet"], allow_slang=False)
    assert strict.validate("YEET").reason == NOT_IN_DICTIONARY


def test_membership(dictionary):
    assert dictionary.is_dictionary_word("stalk")
    assert "CATS" in dictionary
    assert "CATZ" not in dictionary


def test_random_word_of_length(dictionary):
    for _ in range(20):
        word = dictionary.random_word_of_length(4)
        assert len(word) == 4
        assert word in dictionary
    assert dictionary.random_word_of_length(9) is None


def test_random_word_is_reproducible_with_seed():
    words = ["CATS", "BATS", "TABS", "STAB", "TASK"]
    a = Dictionary.from_words(words, rng=random.Random(3))
    b = Dictionary.from_words(reversed(words), rng=random.Random(3))
    assert [a.random_word_of_length(4) for _ in range(5)] == \
        [b.random_word_of_length(4) for _ in range(5)]


def test_load_from_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("cat\nDogs\n12ab\na\n\n", encoding="utf-8")
    d = Dictionary(str(path))
    assert d.words == {"CAT", "DOGS"}
    assert len(d) == 2

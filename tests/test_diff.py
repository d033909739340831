from wordplay.diff import analyze_word_change, normalize


def test_identical_words_have_empty_diff():
    for word in ("CAT", "BOOK", "A", ""):
        diff = analyze_word_change(word, word)
        assert diff.added_letters == ()
        assert diff.removed_letters == ()
        assert diff.is_rearranged is False


def test_single_insertion_reports_one_added_letter():
    diff = analyze_word_change("CAT", "CATS")
    assert diff.added_letters == ("S",)
    assert diff.removed_letters == ()
    assert not diff.is_rearranged


def test_repeated_letters_counted_by_frequency():
    assert analyze_word_change("BOOK", "BOK").removed_letters == ("O",)
    assert analyze_word_change("CAT", "CATTT").added_letters == ("T", "T")


def test_pure_rearrangement():
    diff = analyze_word_change("CAT", "ACT")
    assert diff.is_rearranged
    assert diff.is_empty


def test_substitution_is_add_and_remove_not_rearrangement():
    diff = analyze_word_change("CATS", "BATS")
    assert diff.added_letters == ("B",)
    assert diff.removed_letters == ("C",)
    assert not diff.is_rearranged


def test_input_is_normalized():
    diff = analyze_word_change("cat", " Cats ")
    assert diff.added_letters == ("S",)
    assert normalize(None) == ""


def test_key_letters_used_regardless_of_move_kind():
    diff = analyze_word_change("CAT", "ACT", ["a", "Z"])
    assert diff.key_letters_used == ("A",)
    assert analyze_word_change("CAT", "CATS", ["Q"]).key_letters_used == ()

# test_wordset.py
# SPDX-License-Identifier: MIT
from listlicenses.core.wordset import clean_license_text, normalize, ordered_words


def test_empty_text_gives_empty_word_set():
    assert normalize(b"") == {}
    assert normalize("") == {}


def test_normalize_is_deterministic(mit_text):
    assert normalize(mit_text) == normalize(mit_text)
    assert list(normalize(mit_text)) == list(normalize(mit_text))


def test_copyright_line_is_stripped():
    words = normalize("Copyright (c) 2020 Jane Doe\nMIT License text...")
    assert words == {"mit": 0, "license": 1, "text": 2}
    for noise in ("copyright", "2020", "jane", "doe"):
        assert noise not in words


def test_copyright_placeholders_and_glyphs_are_stripped():
    assert normalize("Copyright [year] [fullname]\nfoo") == {"foo": 0}
    assert normalize("COPYRIGHT © 1999 Someone\nbar") == {"bar": 0}
    assert normalize("Copyright 2001-2020 Someone\nbaz") == {"baz": 0}


def test_copyright_without_year_is_kept():
    words = normalize("the copyright holders and contributors")
    assert "copyright" in words
    assert "holders" in words


def test_first_occurrence_position_wins():
    assert normalize("a b a c") == {"a": 0, "b": 1, "c": 3}


def test_tokens_keep_apostrophes_and_ignore_punctuation():
    assert normalize("Don't stop, (ever).") == {"don't": 0, "stop": 1, "ever": 2}


def test_invalid_utf8_bytes_do_not_fail():
    words = normalize(b"valid \xff text")
    assert "valid" in words
    assert "text" in words


def test_clean_license_text_lowercases():
    assert clean_license_text(b"Hello WORLD") == "hello world"


def test_ordered_words_follow_positions_not_alphabet():
    words = {"zeta": 0, "alpha": 2, "eta": 1}
    assert ordered_words(words, lambda w: True) == ("zeta", "eta", "alpha")
    assert ordered_words(words, lambda w: w != "eta") == ("zeta", "alpha")

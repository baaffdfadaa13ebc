# test_matcher.py
# SPDX-License-Identifier: MIT
import pytest

from conftest import template_body
from listlicenses.core.interfaces import LicenseRecord, Template
from listlicenses.core.matcher import dice_score, match_templates
from listlicenses.core.templates import load_templates
from listlicenses.core.wordset import normalize
from listlicenses.sinks.render import classify


def _template(title: str, text: str) -> Template:
    return Template(title=title, words=normalize(text))


def test_text_matches_its_own_word_set_exactly():
    text = "Some arbitrary license text, with words and more words."
    result = match_templates(text.encode(), [_template("self", text)])
    assert result.score == 1.0
    assert result.extra_words == ()
    assert result.missing_words == ()


def test_mit_file_matches_mit_template(mit_text):
    result = match_templates(mit_text.encode("utf-8"), load_templates())
    assert result.template is not None
    assert result.template.title == "MIT License"
    assert result.score == 1.0
    assert result.extra_words == ()
    assert result.missing_words == ()


def test_reworded_license_reports_differences_in_reading_order():
    templates = [_template("T", "alpha beta gamma delta")]
    result = match_templates(b"zeta alpha beta eta", templates)
    assert result.score == 0.5
    assert result.extra_words == ("zeta", "eta")
    assert result.missing_words == ("gamma", "delta")


def test_best_template_is_selected():
    templates = [_template("short", "a b c"), _template("long", "a b c d")]
    result = match_templates(b"a b c d", templates)
    assert result.template.title == "long"
    assert result.score == 1.0


def test_first_template_wins_ties():
    templates = [_template("first", "a b"), _template("second", "a b")]
    result = match_templates(b"a b", templates)
    assert result.template.title == "first"


def test_differences_belong_to_the_best_template():
    templates = [_template("worse", "x y z"), _template("better", "a b c")]
    result = match_templates(b"a b q", templates)
    assert result.template.title == "better"
    assert result.extra_words == ("q",)
    assert result.missing_words == ("c",)


def test_no_templates_gives_no_match():
    result = match_templates(b"anything", [])
    assert result.template is None
    assert result.score == 0.0
    assert result.file_content == b"anything"


def test_file_content_is_raw_bytes():
    raw = b"Copyright (c) 2021 Someone\nhello"
    result = match_templates(raw, [_template("t", "hello")])
    assert result.file_content == raw
    assert result.score == 1.0


def test_dice_score_edges():
    assert dice_score({}, {}) == 0.0
    assert dice_score({"a": 0}, {}) == 0.0
    assert dice_score({"a": 0, "b": 1}, {"b": 0, "c": 1}) == 0.5


COPYLEFT_AND_PUBLIC_DOMAIN = [
    ("mpl-2.0.txt", "Mozilla Public License 2.0"),
    ("gpl-2.0.txt", "GNU General Public License v2.0"),
    ("gpl-3.0.txt", "GNU General Public License v3.0"),
    ("lgpl-2.1.txt", "GNU Lesser General Public License v2.1"),
    ("lgpl-3.0.txt", "GNU Lesser General Public License v3.0"),
    ("agpl-3.0.txt", "GNU Affero General Public License v3.0"),
    ("epl-1.0.txt", "Eclipse Public License 1.0"),
    ("epl-2.0.txt", "Eclipse Public License 2.0"),
    ("cc0-1.0.txt", "Creative Commons Zero v1.0 Universal"),
]


def _as_record(result):
    return LicenseRecord.from_match("example.com/dep", "example.com/dep/LICENSE", result)


@pytest.mark.parametrize(("asset", "title"), COPYLEFT_AND_PUBLIC_DOMAIN)
def test_catalog_license_bodies_match_their_own_template(asset, title):
    result = match_templates(template_body(asset).encode("utf-8"), load_templates())
    assert result.template.title == title
    assert result.score > 0.99
    assert classify(_as_record(result), print_confidence=True) == (title, True)


def test_catalog_titles_are_unique_and_cover_copyleft_family():
    titles = [t.title for t in load_templates()]
    assert len(set(titles)) == len(titles)
    assert {title for _, title in COPYLEFT_AND_PUBLIC_DOMAIN} <= set(titles)

from __future__ import annotations

import pytest

from histlint.parser.text import (
    codepoint_length,
    column_span,
    first_word,
    has_leading_whitespace,
    has_trailing_whitespace,
    is_blank,
    is_closing_punctuation,
    is_punctuation,
    leading_emoji_length,
    split_words,
)

pytestmark = pytest.mark.unit


def test_codepoint_length_counts_codepoints_not_bytes() -> None:
    assert codepoint_length("") == 0
    assert codepoint_length("abc") == 3
    assert codepoint_length("café") == 4
    assert codepoint_length("日本語") == 3


@pytest.mark.parametrize(
    ("line", "blank", "leading", "trailing"),
    [
        ("", True, False, False),
        ("   ", True, True, True),
        ("text", False, False, False),
        (" text", False, True, False),
        ("\ttext ", False, True, True),
    ],
)
def test_whitespace_predicates(line: str, blank: bool, leading: bool, trailing: bool) -> None:
    assert is_blank(line) is blank
    assert has_leading_whitespace(line) is leading
    assert has_trailing_whitespace(line) is trailing


def test_punctuation_classification() -> None:
    assert is_punctuation(".")
    assert is_punctuation("!")
    assert is_punctuation("。")
    assert not is_punctuation("a")
    assert not is_punctuation("")
    assert not is_punctuation("..")
    assert is_closing_punctuation(")")
    assert is_closing_punctuation("]")
    assert is_closing_punctuation('"')
    assert is_closing_punctuation("`")
    assert not is_closing_punctuation(".")
    assert not is_closing_punctuation("(")


def test_leading_emoji_length_handles_sequences() -> None:
    assert leading_emoji_length("") == 0
    assert leading_emoji_length("Fix bug") == 0
    assert leading_emoji_length("# heading") == 0
    assert leading_emoji_length("\U0001f41b Fix bug") == 1
    assert leading_emoji_length("\u2728\ufe0f Add sparkle") == 2
    assert leading_emoji_length("\U0001f44d\U0001f3fd Approve") == 2
    assert leading_emoji_length("\U0001f468\u200d\U0001f4bb Code") == 3


def test_split_words_reports_one_based_columns() -> None:
    assert split_words("  Fix  the bug") == (("Fix", 3), ("the", 8), ("bug", 12))
    assert split_words("") == ()
    assert first_word(" Add tests") == ("Add", 2)
    assert first_word("   ") is None


def test_column_span_is_inclusive_and_never_empty() -> None:
    assert column_span(0, 3) == (1, 3)
    assert column_span(50, 60) == (51, 60)
    assert column_span(0, 0) == (1, 1)
    assert column_span(4, 4) == (5, 5)

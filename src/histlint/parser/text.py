"""Text measurement helpers shared by the parsers and the rules.

Every length and column in histlint is measured in Unicode codepoints, which
is what ``len`` and string indexing count in Python. Columns are 1-based and
column spans are inclusive on both ends.
"""

from __future__ import annotations

import re
import unicodedata

_WORD_PATTERN = re.compile(r"\S+")
_EMOJI_JOINERS = frozenset({"\u200d", "\ufe0e", "\ufe0f", "\u20e3"})
_CLOSING_CATEGORIES = frozenset({"Pe", "Pf"})
_QUOTE_CHARACTERS = frozenset({'"', "'", "`"})


def codepoint_length(text: str) -> int:
    return len(text)


def is_blank(line: str) -> bool:
    return not line.strip()


def has_leading_whitespace(line: str) -> bool:
    return bool(line) and line[0].isspace()


def has_trailing_whitespace(line: str) -> bool:
    return bool(line) and line[-1].isspace()


def is_punctuation(character: str) -> bool:
    if len(character) != 1:
        return False
    return unicodedata.category(character).startswith("P")


def is_closing_punctuation(character: str) -> bool:
    if character in _QUOTE_CHARACTERS:
        return True
    return len(character) == 1 and unicodedata.category(character) in _CLOSING_CATEGORIES


def _is_emoji_base(character: str) -> bool:
    # ASCII symbols such as '#' and '*' carry emoji presentations too; they are excluded.
    if character.isascii():
        return False
    return unicodedata.category(character) == "So"


def _is_emoji_modifier(character: str) -> bool:
    return "\U0001f3fb" <= character <= "\U0001f3ff" or "\U000e0020" <= character <= "\U000e007f"


def leading_emoji_length(text: str) -> int:
    """Return the codepoint length of the emoji sequence that starts ``text``, or 0."""
    if not text or not _is_emoji_base(text[0]):
        return 0
    index = 1
    while index < len(text):
        character = text[index]
        if character == "\u200d" and index + 1 < len(text) and _is_emoji_base(text[index + 1]):
            index += 2
            continue
        if character in _EMOJI_JOINERS or _is_emoji_modifier(character):
            index += 1
            continue
        break
    return index


def split_words(text: str) -> tuple[tuple[str, int], ...]:
    """Split on whitespace, returning each word with its 1-based start column."""
    return tuple((match.group(0), match.start() + 1) for match in _WORD_PATTERN.finditer(text))


def first_word(text: str) -> tuple[str, int] | None:
    words = split_words(text)
    if not words:
        return None
    return words[0]


def column_span(start_index: int, end_index: int) -> tuple[int, int]:
    """Convert a half-open 0-based index range into an inclusive 1-based column span."""
    start = start_index + 1
    return (start, max(start, end_index))

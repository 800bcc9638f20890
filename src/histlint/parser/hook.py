from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

from .records import CommitRecord

logger = logging.getLogger(__name__)

SCISSORS = "------------------------ >8 ------------------------"
DEFAULT_COMMENT_CHAR = "#"


class CleanupMode(StrEnum):
    DEFAULT = "default"
    STRIP = "strip"
    WHITESPACE = "whitespace"
    VERBATIM = "verbatim"
    SCISSORS = "scissors"


def cleanup_mode_from_config(value: str) -> CleanupMode:
    normalized = value.strip()
    if not normalized:
        return CleanupMode.DEFAULT
    try:
        return CleanupMode(normalized)
    except ValueError:
        logger.warning("Unsupported commit.cleanup config '%s', using 'default'", normalized)
        return CleanupMode.DEFAULT


def parse_hook_message(
    text: str,
    *,
    cleanup_mode: CleanupMode = CleanupMode.DEFAULT,
    comment_char: str = DEFAULT_COMMENT_CHAR,
    changed_file_paths: Iterable[str] | None = None,
) -> CommitRecord:
    """Build a record from the message file git hands to the commit-msg hook.

    Everything below the scissors line is dropped: git writes it in scissors
    cleanup mode and for ``git commit --verbose``. Outside verbatim mode the
    first non-empty line is the subject.
    """
    comment_char = comment_char or DEFAULT_COMMENT_CHAR
    scissors_line = f"{comment_char} {SCISSORS}"
    logger.debug("Using cleanup mode %s and comment char %r", cleanup_mode, comment_char)

    subject: str | None = None
    body_lines: list[str] = []
    for line in text.splitlines():
        if line == scissors_line:
            logger.debug("Found scissors line, ignoring the rest of the message")
            break
        cleaned = _cleanup_line(line, cleanup_mode, comment_char)
        if subject is None:
            if cleanup_mode is CleanupMode.VERBATIM:
                subject = line
            elif cleaned:
                subject = cleaned
            continue
        if cleaned is not None:
            body_lines.append(cleaned)

    return CommitRecord.from_message(
        "\n".join([subject or "", *body_lines]),
        changed_file_paths=changed_file_paths,
    )


def _cleanup_line(line: str, cleanup_mode: CleanupMode, comment_char: str) -> str | None:
    if cleanup_mode in (CleanupMode.DEFAULT, CleanupMode.STRIP):
        if line.startswith(comment_char):
            return None
        return line.rstrip()
    if cleanup_mode is CleanupMode.VERBATIM:
        return line
    return line.rstrip()

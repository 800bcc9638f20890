from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum

from histlint.diagnostics.models import RuleId, rule_id_by_name

from .records import CommitRecord, Trailer
from .text import codepoint_length, has_leading_whitespace, has_trailing_whitespace, is_blank

logger = logging.getLogger(__name__)

DISABLE_DIRECTIVE_PREFIX = "histlint:disable "

_TRAILER_PATTERN = re.compile(r"^([A-Za-z0-9][A-Za-z0-9-]*):\s+(\S.*)$")
_REMOTE_MERGE_PATTERN = re.compile(r"^Merge branch '.+' of .+ into .+")
_SQUASH_PR_PATTERN = re.compile(r".+ \(#\d+\)$")
_MERGE_REQUEST_REFERENCE_PATTERN = re.compile(r"^See merge request .+/.+!\d+$")
_BOT_EMAIL_SUFFIX = "[bot]@users.noreply.github.com"


class CommitKind(StrEnum):
    NORMAL = "normal"
    MERGE = "merge"
    FIXUP = "fixup"
    SQUASH = "squash"
    REVERT = "revert"


_KIND_PREFIXES: tuple[tuple[str, CommitKind], ...] = (
    ("Merge ", CommitKind.MERGE),
    ("fixup!", CommitKind.FIXUP),
    ("amend!", CommitKind.FIXUP),
    ("squash!", CommitKind.SQUASH),
    ('Revert "', CommitKind.REVERT),
)


@dataclass(frozen=True, slots=True)
class ParsedLine:
    text: str
    line_number: int
    length: int
    has_leading_whitespace: bool
    has_trailing_whitespace: bool

    def __post_init__(self) -> None:
        if self.line_number < 1:
            raise ValueError("line_number must be >= 1")
        if self.length != codepoint_length(self.text):
            raise ValueError("length must equal the codepoint length of text")

    @property
    def is_blank(self) -> bool:
        return is_blank(self.text)


@dataclass(frozen=True, slots=True)
class Commit:
    record: CommitRecord
    subject: ParsedLine
    separator_blank_lines: int
    body_lines: tuple[ParsedLine, ...]
    message_lines: tuple[ParsedLine, ...]
    trailers: tuple[Trailer, ...]
    kind: CommitKind
    disabled_rules: frozenset[RuleId] = frozenset()
    ignore_reason: str | None = None

    def __post_init__(self) -> None:
        if self.separator_blank_lines < 0:
            raise ValueError("separator_blank_lines must be >= 0")

    @property
    def hash(self) -> str:
        return self.record.hash

    @property
    def ignored(self) -> bool:
        return self.ignore_reason is not None

    @property
    def has_body(self) -> bool:
        return any(not line.is_blank for line in self.message_lines)

    @property
    def is_remote_merge(self) -> bool:
        return self.kind is CommitKind.MERGE and bool(
            _REMOTE_MERGE_PATTERN.match(self.subject.text)
        )

    @property
    def body_text(self) -> str:
        return "\n".join(line.text for line in self.body_lines)


def parse_line(raw_line: str, line_number: int) -> ParsedLine:
    text = raw_line.rstrip()
    return ParsedLine(
        text=text,
        line_number=line_number,
        length=codepoint_length(text),
        has_leading_whitespace=has_leading_whitespace(text),
        has_trailing_whitespace=has_trailing_whitespace(raw_line),
    )


def parse_commit(record: CommitRecord) -> Commit:
    raw_lines = record.message.split("\n")
    subject = parse_line(raw_lines[0], 1)
    message_lines = tuple(
        parse_line(raw_line, line_number)
        for line_number, raw_line in enumerate(raw_lines[1:], start=2)
    )

    separator_blank_lines = _count_separator_blank_lines(message_lines)
    body_candidates = _strip_trailing_blank_lines(message_lines[separator_blank_lines:])
    trailer_start = _trailer_block_start(body_candidates)
    detected_trailers = tuple(
        _trailer_from_line(line) for line in body_candidates[trailer_start:]
    )
    body_lines = _strip_trailing_blank_lines(body_candidates[:trailer_start])

    kind = classify_commit_kind(subject.text)
    commit = Commit(
        record=record,
        subject=subject,
        separator_blank_lines=separator_blank_lines,
        body_lines=body_lines,
        message_lines=message_lines,
        trailers=record.trailers or detected_trailers,
        kind=kind,
        disabled_rules=_find_disabled_rules(message_lines),
        ignore_reason=_ignore_reason(record, subject.text, message_lines),
    )
    if commit.ignore_reason is not None:
        logger.debug("Ignoring commit %s: %s", record.hash or "<hook>", commit.ignore_reason)
    return commit


def classify_commit_kind(subject: str) -> CommitKind:
    for prefix, kind in _KIND_PREFIXES:
        if subject.startswith(prefix):
            return kind
    return CommitKind.NORMAL


def _count_separator_blank_lines(lines: tuple[ParsedLine, ...]) -> int:
    count = 0
    for line in lines:
        if not line.is_blank:
            return count
        count += 1
    # Only blank lines follow the subject: there is no body to separate.
    return 0


def _strip_trailing_blank_lines(lines: tuple[ParsedLine, ...]) -> tuple[ParsedLine, ...]:
    end = len(lines)
    while end > 0 and lines[end - 1].is_blank:
        end -= 1
    return lines[:end]


def _trailer_block_start(lines: tuple[ParsedLine, ...]) -> int:
    start = len(lines)
    while start > 0 and _TRAILER_PATTERN.match(lines[start - 1].text):
        start -= 1
    return start


def _trailer_from_line(line: ParsedLine) -> Trailer:
    match = _TRAILER_PATTERN.match(line.text)
    if match is None:
        raise ValueError(f"line {line.line_number} is not a trailer")
    return Trailer(key=match.group(1), value=match.group(2))


def _find_disabled_rules(lines: tuple[ParsedLine, ...]) -> frozenset[RuleId]:
    disabled: set[RuleId] = set()
    for line in lines:
        if not line.text.startswith(DISABLE_DIRECTIVE_PREFIX):
            continue
        name = line.text.removeprefix(DISABLE_DIRECTIVE_PREFIX)
        rule_id = rule_id_by_name(name)
        if rule_id is None:
            logger.warning("Attempted to disable unknown rule: %s", name.strip())
            continue
        disabled.add(rule_id)
    return frozenset(disabled)


def _ignore_reason(
    record: CommitRecord,
    subject: str,
    message_lines: tuple[ParsedLine, ...],
) -> str | None:
    if record.author_email.endswith(_BOT_EMAIL_SUFFIX):
        return "commit authored by a bot account"
    if subject.startswith("Merge tag "):
        return "merge commit of a tag"
    if subject.startswith("Merge pull request"):
        return "merge commit of a pull request"
    if subject.startswith("Merge branch ") and any(
        _MERGE_REQUEST_REFERENCE_PATTERN.match(line.text) for line in message_lines
    ):
        return "merge commit of a merge request"
    if _SQUASH_PR_PATTERN.match(subject):
        return "squash commit of a pull request"
    return None

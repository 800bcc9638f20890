from __future__ import annotations

import re
from enum import Enum

from histlint.config import LintPolicy
from histlint.diagnostics import RuleId, Violation, build_violation
from histlint.parser import Commit

from .base import FORMAT_KINDS, applies_to, line_violation
from .subject import FIX_TICKET_PATTERN

_URL_PATTERN = re.compile(r"https?://\w+")
_CODE_FENCE_OPEN_PATTERN = re.compile(r"^\s*```\s*(\w+)?$")
_CODE_FENCE_CLOSE_PATTERN = re.compile(r"^\s*```$")
_CODE_INDENT = "    "
_LINK_TO_TICKET_PATTERN = re.compile(r"(part of|related):? ([^\s]*[\w/-]+)?[#!]\d+", re.IGNORECASE)


class _CodeBlock(Enum):
    NONE = "none"
    FENCED = "fenced"
    INDENTED = "indented"


def check_blank_line_after_subject(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, FORMAT_KINDS) or not commit.has_body:
        return ()
    separator = commit.separator_blank_lines
    if separator == 1:
        return ()
    if separator == 0:
        first_line = commit.message_lines[0]
        return (
            line_violation(
                commit,
                RuleId.BLANK_LINE_AFTER_SUBJECT,
                "No empty line found below the subject",
                line=first_line.line_number,
                start_index=0,
                end_index=first_line.length,
                suggested_action="add an empty line below the subject line",
            ),
        )
    extra_line = commit.message_lines[1]
    return (
        line_violation(
            commit,
            RuleId.BLANK_LINE_AFTER_SUBJECT,
            f"Found {separator} empty lines below the subject instead of one",
            line=extra_line.line_number,
            start_index=0,
            end_index=1,
            suggested_action="keep exactly one empty line below the subject line",
        ),
    )


def check_message_presence(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    if not policy.require_body or not applies_to(commit, FORMAT_KINDS):
        return ()
    width = len(commit.body_text.strip())
    if width == 0:
        return (
            build_violation(
                rule_id=RuleId.MESSAGE_PRESENCE,
                message="No message body was found",
                line=commit.subject.line_number + 2,
                column_span=(1, 1),
                commit_hash=commit.hash,
            ),
        )
    if width < policy.body_min_length:
        last_line = commit.body_lines[-1]
        return (
            line_violation(
                commit,
                RuleId.MESSAGE_PRESENCE,
                "The message body is too short",
                line=last_line.line_number,
                start_index=0,
                end_index=last_line.length,
                suggested_action=(
                    "add a longer message with context about the change and why it was made"
                ),
            ),
        )
    return ()


def check_line_length(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    if not applies_to(commit, FORMAT_KINDS):
        return ()
    limit = policy.body_line_max_length
    violations: list[Violation] = []
    code_block = _CodeBlock.NONE
    previous_line_blank = commit.separator_blank_lines > 0
    for line in commit.body_lines:
        text = line.text
        if code_block is _CodeBlock.FENCED:
            if _CODE_FENCE_CLOSE_PATTERN.match(text):
                code_block = _CodeBlock.NONE
        elif code_block is _CodeBlock.INDENTED:
            if not text.startswith(_CODE_INDENT):
                code_block = _CodeBlock.NONE
        elif _CODE_FENCE_OPEN_PATTERN.match(text):
            code_block = _CodeBlock.FENCED
        elif text.startswith(_CODE_INDENT) and previous_line_blank:
            code_block = _CodeBlock.INDENTED
        previous_line_blank = line.is_blank

        if code_block is not _CodeBlock.NONE:
            continue
        if line.length <= limit or _URL_PATTERN.search(text):
            continue
        violations.append(
            line_violation(
                commit,
                RuleId.LINE_LENGTH,
                f"Line {line.line_number} in the message body is longer than {limit} characters",
                line=line.line_number,
                start_index=limit,
                end_index=line.length,
                suggested_action=f"shorten the line to a maximum of {limit} characters",
            )
        )
    return tuple(violations)


def check_message_ticket_number(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    if not policy.require_message_ticket or not applies_to(commit, FORMAT_KINDS):
        return ()
    message = "\n".join(line.text for line in commit.message_lines)
    if FIX_TICKET_PATTERN.search(message) or _LINK_TO_TICKET_PATTERN.search(message):
        return ()
    last_line_number = (
        commit.message_lines[-1].line_number if commit.message_lines else commit.subject.line_number
    )
    return (
        build_violation(
            rule_id=RuleId.MESSAGE_TICKET_NUMBER,
            message="The message body does not contain a ticket or issue number",
            line=last_line_number + 2,
            column_span=(1, 1),
            commit_hash=commit.hash,
        ),
    )

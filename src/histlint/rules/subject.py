"""Rules over the subject line of a commit.

Merge, fixup and squash subjects are generated by git and never checked here.
Revert subjects quote the reverted commit, so only the length, leading
whitespace and build tag rules look at them.
"""

from __future__ import annotations

import re
import string
from collections.abc import Callable

from histlint.config import LintPolicy
from histlint.diagnostics import RuleId, Violation
from histlint.parser import Commit
from histlint.parser.text import is_closing_punctuation, is_punctuation, leading_emoji_length

from .base import FORMAT_KINDS, SUBJECT_KINDS, applies_to, subject_violation

_WIP_PATTERN = re.compile(r"^\s*(wip)(?=$|[\s:])|\[wip\]", re.IGNORECASE)
_CLICHE_PATTERN = re.compile(
    r"^(fix(es|ed|ing)?|add(s|ed|ing)?|(updat|chang|remov|delet)(e|es|ed|ing)"
    r"|changes|improvements?|tweaks?|cleanup|refactor(s|ed|ing)?)"
    r"(\s+(it|this|that|stuff|things?|bugs?|code|issues?|typos?|more|everything))?$",
    re.IGNORECASE,
)
_PREFIX_PATTERN = re.compile(r"^([\w()/!]+:)\s")
_BUILD_TAG_PATTERN = re.compile(
    r"\[(skip [\w\s-]+|[\w\s-]+ skip|no ci)\]|\*\*\*NO_CI\*\*\*",
    re.IGNORECASE,
)
_TICKET_KEY_PATTERN = re.compile(r"[A-Z]{2,}-\d+")
FIX_TICKET_PATTERN = re.compile(
    r"([fF]ix(es|ed|ing)?|[cC]los(e|es|ed|ing)|[rR]esolv(e|es|ed|ing)"
    r"|[iI]mplement(s|ed|ing)?):? ([^\s]*[\w/-]+)?[#!]\d+"
)

# Closed list of non-imperative forms of verbs that commonly open a subject.
MOOD_WORDS: frozenset[str] = frozenset(
    {
        "fixed",
        "fixes",
        "fixing",
        "solved",
        "solves",
        "solving",
        "resolved",
        "resolves",
        "resolving",
        "closed",
        "closes",
        "closing",
        "added",
        "adds",
        "adding",
        "updated",
        "updates",
        "updating",
        "removed",
        "removes",
        "removing",
        "deleted",
        "deletes",
        "deleting",
        "changed",
        "changes",
        "changing",
        "moved",
        "moves",
        "moving",
        "refactored",
        "refactors",
        "refactoring",
        "checked",
        "checks",
        "checking",
        "adjusted",
        "adjusts",
        "adjusting",
        "tests",
        "tested",
        "testing",
        "renamed",
        "renames",
        "renaming",
        "improved",
        "improves",
        "improving",
        "implemented",
        "implements",
        "implementing",
        "supported",
        "supports",
        "supporting",
        "enabled",
        "enables",
        "enabling",
        "disabled",
        "disables",
        "disabling",
    }
)


def is_wip_subject(subject: str) -> bool:
    return _WIP_PATTERN.search(subject) is not None


def is_cliche_subject(subject: str) -> bool:
    return _CLICHE_PATTERN.match(subject.strip()) is not None


def is_prefixed_subject(subject: str) -> bool:
    return _PREFIX_PATTERN.match(subject) is not None


def _reported_by(commit: Commit, rule_id: RuleId, predicate: Callable[[str], bool]) -> bool:
    return (
        applies_to(commit, SUBJECT_KINDS)
        and rule_id not in commit.disabled_rules
        and predicate(commit.subject.text)
    )


def check_wip_commit(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    match = _WIP_PATTERN.search(commit.subject.text)
    if match is None:
        return ()
    start, end = match.span(1) if match.group(1) is not None else match.span(0)
    return (
        subject_violation(
            commit,
            RuleId.WIP_COMMIT,
            "The subject marks the commit as work in progress",
            start_index=start,
            end_index=end,
        ),
    )


def check_subject_cliche(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    if not is_cliche_subject(commit.subject.text):
        return ()
    return (
        subject_violation(
            commit,
            RuleId.SUBJECT_CLICHE,
            "The subject does not explain the change in much detail",
            start_index=0,
            end_index=commit.subject.length,
        ),
    )


def check_subject_length(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    if not applies_to(commit, FORMAT_KINDS):
        return ()
    subject = commit.subject
    if _reported_by(commit, RuleId.SUBJECT_CLICHE, is_cliche_subject) or _reported_by(
        commit, RuleId.WIP_COMMIT, is_wip_subject
    ):
        return ()

    width = subject.length
    if width == 0:
        return (
            subject_violation(
                commit,
                RuleId.SUBJECT_LENGTH,
                "The commit has no subject",
                start_index=0,
                end_index=1,
                suggested_action="add a subject to describe the change",
            ),
        )
    if width > policy.subject_max_length:
        return (
            subject_violation(
                commit,
                RuleId.SUBJECT_LENGTH,
                f"The subject of `{width}` characters wide is too long",
                start_index=policy.subject_max_length,
                end_index=width,
                suggested_action=(
                    "shorten the subject to a maximum width of "
                    f"{policy.subject_max_length} characters"
                ),
            ),
        )
    if width < policy.subject_min_length:
        return (
            subject_violation(
                commit,
                RuleId.SUBJECT_LENGTH,
                f"The subject of `{width}` characters wide is too short",
                start_index=0,
                end_index=width,
                suggested_action="describe the change in more detail",
            ),
        )
    return ()


def check_subject_mood(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    text = commit.subject.text
    stripped = text.lstrip()
    if not stripped:
        return ()
    raw_word = stripped.split(maxsplit=1)[0]
    word = raw_word.rstrip(string.punctuation).lower()
    if word not in MOOD_WORDS:
        return ()
    start = len(text) - len(stripped)
    return (
        subject_violation(
            commit,
            RuleId.SUBJECT_MOOD,
            "The subject does not use the imperative grammatical mood",
            start_index=start,
            end_index=start + len(raw_word),
        ),
    )


def check_subject_whitespace(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, FORMAT_KINDS):
        return ()
    if not commit.subject.has_leading_whitespace:
        return ()
    return (
        subject_violation(
            commit,
            RuleId.SUBJECT_WHITESPACE,
            "The subject starts with a whitespace character such as a space or a tab",
            start_index=0,
            end_index=1,
        ),
    )


def check_subject_prefix(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    match = _PREFIX_PATTERN.match(commit.subject.text)
    if match is None:
        return ()
    prefix = match.group(1)
    return (
        subject_violation(
            commit,
            RuleId.SUBJECT_PREFIX,
            f"Remove the `{prefix}` prefix from the subject",
            start_index=match.start(1),
            end_index=match.end(1),
        ),
    )


def check_subject_capitalization(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    text = commit.subject.text
    if _reported_by(commit, RuleId.SUBJECT_PREFIX, is_prefixed_subject):
        return ()
    stripped = text.lstrip()
    if not stripped or not stripped[0].islower():
        return ()
    start = len(text) - len(stripped)
    return (
        subject_violation(
            commit,
            RuleId.SUBJECT_CAPITALIZATION,
            "The subject does not start with a capital letter",
            start_index=start,
            end_index=start + 1,
        ),
    )


def check_subject_build_tag(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, FORMAT_KINDS):
        return ()
    return tuple(
        subject_violation(
            commit,
            RuleId.SUBJECT_BUILD_TAG,
            f"The `{match.group(0)}` build tag was found in the subject",
            start_index=match.start(),
            end_index=match.end(),
        )
        for match in _BUILD_TAG_PATTERN.finditer(commit.subject.text)
    )


def check_subject_punctuation(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    text = commit.subject.text
    stripped = text.lstrip()
    if not stripped:
        return ()

    violations: list[Violation] = []
    start = len(text) - len(stripped)
    emoji_length = leading_emoji_length(stripped)
    if emoji_length:
        violations.append(
            subject_violation(
                commit,
                RuleId.SUBJECT_PUNCTUATION,
                "The subject starts with an emoji",
                start_index=start,
                end_index=start + emoji_length,
                suggested_action="remove emoji from the start of the subject",
            )
        )
    elif is_punctuation(stripped[0]):
        violations.append(
            subject_violation(
                commit,
                RuleId.SUBJECT_PUNCTUATION,
                f"The subject starts with a punctuation character: `{stripped[0]}`",
                start_index=start,
                end_index=start + 1,
                suggested_action="remove punctuation from the start of the subject",
            )
        )

    last = text[-1]
    if is_punctuation(last) and not is_closing_punctuation(last) and len(stripped) > 1:
        violations.append(
            subject_violation(
                commit,
                RuleId.SUBJECT_PUNCTUATION,
                f"The subject ends with a punctuation character: `{last}`",
                start_index=len(text) - 1,
                end_index=len(text),
                suggested_action="remove punctuation from the end of the subject",
            )
        )
    return tuple(violations)


def check_subject_ticket_number(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, SUBJECT_KINDS):
        return ()
    text = commit.subject.text
    matches = [*_TICKET_KEY_PATTERN.finditer(text), *FIX_TICKET_PATTERN.finditer(text)]
    return tuple(
        subject_violation(
            commit,
            RuleId.SUBJECT_TICKET_NUMBER,
            "The subject contains a ticket number",
            start_index=match.start(),
            end_index=match.end(),
        )
        for match in sorted(matches, key=lambda match: match.span())
    )

from __future__ import annotations

import re

from histlint.config import LintPolicy
from histlint.diagnostics import RuleId, Violation
from histlint.parser import BranchName
from histlint.parser.text import is_closing_punctuation, is_punctuation

from .base import branch_violation

_CLICHE_WORDS = (
    r"wip|tmp|temp|test(s|ing)?|feature|bug(fix)?|hotfix|fix(es|ed|ing)?|add(s|ed|ing)?"
    r"|(updat|chang|remov|delet)(e|es|ed|ing)|changes|refactor(ing)?|cleanup|stuff|things?"
)
_BRANCH_CLICHE_PATTERN = re.compile(rf"^({_CLICHE_WORDS})(-({_CLICHE_WORDS}|it|this|bugs?))*$")


def check_branch_name_length(branch: BranchName, policy: LintPolicy) -> tuple[Violation, ...]:
    width = branch.length
    if width < policy.branch_min_length:
        return (
            branch_violation(
                RuleId.BRANCH_NAME_LENGTH,
                f"The branch name of `{width}` characters is too short",
                start_index=0,
                end_index=width,
                suggested_action="describe the change in the branch name in more detail",
            ),
        )
    if width > policy.branch_max_length:
        return (
            branch_violation(
                RuleId.BRANCH_NAME_LENGTH,
                f"The branch name of `{width}` characters is too long",
                start_index=policy.branch_max_length,
                end_index=width,
                suggested_action=(
                    f"shorten the branch name to a maximum of {policy.branch_max_length} "
                    "characters"
                ),
            ),
        )
    return ()


def check_branch_name_ticket(branch: BranchName, policy: LintPolicy) -> tuple[Violation, ...]:
    if not policy.require_branch_ticket or branch.has_ticket_reference:
        return ()
    return (
        branch_violation(
            RuleId.BRANCH_NAME_TICKET,
            "The branch name does not contain a ticket number",
            start_index=0,
            end_index=branch.length,
        ),
    )


def check_branch_name_punctuation(
    branch: BranchName, policy: LintPolicy
) -> tuple[Violation, ...]:
    del policy
    name = branch.raw
    if not name:
        return ()
    violations: list[Violation] = []
    if is_punctuation(name[0]):
        violations.append(
            branch_violation(
                RuleId.BRANCH_NAME_PUNCTUATION,
                f"The branch name starts with a punctuation character: `{name[0]}`",
                start_index=0,
                end_index=1,
            )
        )
    last = name[-1]
    if len(name) > 1 and is_punctuation(last) and not is_closing_punctuation(last):
        violations.append(
            branch_violation(
                RuleId.BRANCH_NAME_PUNCTUATION,
                f"The branch name ends with a punctuation character: `{last}`",
                start_index=len(name) - 1,
                end_index=len(name),
            )
        )
    return tuple(violations)


def check_branch_name_cliche(branch: BranchName, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not branch.segments:
        return ()
    normalized = "-".join(segment.lower() for segment in branch.segments)
    if _BRANCH_CLICHE_PATTERN.match(normalized) is None:
        return ()
    return (
        branch_violation(
            RuleId.BRANCH_NAME_CLICHE,
            "The branch name does not explain the change in much detail",
            start_index=0,
            end_index=branch.length,
        ),
    )

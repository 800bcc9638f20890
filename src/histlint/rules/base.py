from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, cast, runtime_checkable

from histlint.config import LintPolicy
from histlint.diagnostics import (
    RULE_CATALOG,
    RuleId,
    RuleTarget,
    Severity,
    Violation,
    build_violation,
    location_sort_key,
)
from histlint.parser import BranchName, Commit, CommitKind
from histlint.parser.text import column_span

FORMAT_KINDS: frozenset[CommitKind] = frozenset({CommitKind.NORMAL, CommitKind.REVERT})
SUBJECT_KINDS: frozenset[CommitKind] = frozenset({CommitKind.NORMAL})


@runtime_checkable
class CommitCheck(Protocol):
    def __call__(self, commit: Commit, policy: LintPolicy) -> Sequence[Violation]: ...


@runtime_checkable
class BranchCheck(Protocol):
    def __call__(self, branch: BranchName, policy: LintPolicy) -> Sequence[Violation]: ...


@dataclass(frozen=True, slots=True)
class Rule:
    rule_id: RuleId
    target: RuleTarget
    check: CommitCheck | BranchCheck
    policy: LintPolicy

    def __post_init__(self) -> None:
        entry = RULE_CATALOG.get(self.rule_id)
        if entry is None:
            raise ValueError(f"rule '{self.rule_id}' is missing from the rule catalog")
        if entry.target is not self.target:
            raise ValueError(
                f"rule '{self.rule_id}' target '{self.target}' does not match "
                f"catalog target '{entry.target}'"
            )

    def evaluate(self, entity: Commit | BranchName) -> tuple[Violation, ...]:
        if self.target is RuleTarget.COMMIT:
            if not isinstance(entity, Commit):
                raise TypeError(f"rule '{self.rule_id}' evaluates commits only")
            violations = cast(CommitCheck, self.check)(entity, self.policy)
        else:
            if not isinstance(entity, BranchName):
                raise TypeError(f"rule '{self.rule_id}' evaluates branch names only")
            violations = cast(BranchCheck, self.check)(entity, self.policy)
        for violation in violations:
            if violation.rule_id is not self.rule_id:
                raise ValueError(
                    f"rule '{self.rule_id}' emitted a violation tagged '{violation.rule_id}'"
                )
        return tuple(sorted(violations, key=location_sort_key))


def applies_to(commit: Commit, kinds: frozenset[CommitKind]) -> bool:
    return not commit.ignored and commit.kind in kinds


def line_violation(  # noqa: PLR0913
    commit: Commit,
    rule_id: RuleId,
    message: str,
    *,
    line: int,
    start_index: int,
    end_index: int,
    severity: Severity | None = None,
    suggested_action: str | None = None,
) -> Violation:
    return build_violation(
        rule_id=rule_id,
        message=message,
        line=line,
        column_span=column_span(start_index, end_index),
        commit_hash=commit.hash,
        severity=severity,
        suggested_action=suggested_action,
    )


def subject_violation(  # noqa: PLR0913
    commit: Commit,
    rule_id: RuleId,
    message: str,
    *,
    start_index: int,
    end_index: int,
    severity: Severity | None = None,
    suggested_action: str | None = None,
) -> Violation:
    return line_violation(
        commit,
        rule_id,
        message,
        line=commit.subject.line_number,
        start_index=start_index,
        end_index=end_index,
        severity=severity,
        suggested_action=suggested_action,
    )


def branch_violation(
    rule_id: RuleId,
    message: str,
    *,
    start_index: int,
    end_index: int,
    suggested_action: str | None = None,
) -> Violation:
    return build_violation(
        rule_id=rule_id,
        message=message,
        column_span=column_span(start_index, end_index),
        suggested_action=suggested_action,
    )

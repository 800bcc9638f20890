from __future__ import annotations

from histlint.config import LintPolicy
from histlint.diagnostics import RuleId, Severity, Violation, build_violation
from histlint.parser import Commit, CommitKind

from .base import applies_to, subject_violation

_REBASE_KINDS: frozenset[CommitKind] = frozenset({CommitKind.FIXUP, CommitKind.SQUASH})
_DIFF_KINDS: frozenset[CommitKind] = frozenset(CommitKind) - {CommitKind.MERGE}
_REBASE_MARKER_LABELS: dict[str, str] = {
    "fixup!": "A fixup commit was found",
    "amend!": "An amend commit was found",
    "squash!": "A squash commit was found",
}


def check_merge_commit(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    if policy.allow_merge_commits or not applies_to(commit, frozenset({CommitKind.MERGE})):
        return ()
    if commit.is_remote_merge:
        return (
            subject_violation(
                commit,
                RuleId.MERGE_COMMIT,
                "A remote merge commit was found",
                start_index=0,
                end_index=commit.subject.length,
                severity=Severity.ERROR,
                suggested_action=(
                    "rebase on the remote branch, rather than merging the remote branch "
                    "into the local branch"
                ),
            ),
        )
    return (
        subject_violation(
            commit,
            RuleId.MERGE_COMMIT,
            "A merge commit was found",
            start_index=0,
            end_index=commit.subject.length,
        ),
    )


def check_needs_rebase(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, _REBASE_KINDS):
        return ()
    for marker, message in _REBASE_MARKER_LABELS.items():
        if commit.subject.text.startswith(marker):
            return (
                subject_violation(
                    commit,
                    RuleId.NEEDS_REBASE,
                    message,
                    start_index=0,
                    end_index=len(marker),
                ),
            )
    raise ValueError(f"commit kind '{commit.kind}' has no rebase marker in its subject")


def check_diff_presence(commit: Commit, policy: LintPolicy) -> tuple[Violation, ...]:
    del policy
    if not applies_to(commit, _DIFF_KINDS):
        return ()
    if commit.record.changed_file_paths is None or commit.record.changed_file_paths:
        return ()
    return (
        build_violation(
            rule_id=RuleId.DIFF_PRESENCE,
            message="No file changes found",
            commit_hash=commit.hash,
        ),
    )

from __future__ import annotations

from dataclasses import dataclass

from histlint.diagnostics import Violation, sort_violations
from histlint.parser import BranchName, Commit, CommitRecord, parse_commit

from .catalogue import RuleCatalogue


@dataclass(frozen=True, slots=True)
class RuleSet:
    """Uniform dispatcher over a built catalogue.

    Every rule with a matching target is invoked; rules decide for themselves
    whether a commit kind applies. Output is sorted, so the order rules run in
    is not observable. Exceptions raised by a rule propagate to the caller.
    """

    catalogue: RuleCatalogue

    def evaluate_commit(self, commit: Commit) -> tuple[Violation, ...]:
        violations: list[Violation] = []
        for rule in self.catalogue.commit_rules:
            if rule.rule_id in commit.disabled_rules:
                continue
            violations.extend(
                violation.with_commit_hash(commit.hash) for violation in rule.evaluate(commit)
            )
        return tuple(sort_violations(violations))

    def evaluate_branch(self, branch: BranchName) -> tuple[Violation, ...]:
        violations: list[Violation] = []
        for rule in self.catalogue.branch_rules:
            violations.extend(rule.evaluate(branch))
        return tuple(sort_violations(violations))

    def evaluate_record(self, record: CommitRecord) -> tuple[Commit, tuple[Violation, ...]]:
        commit = parse_commit(record)
        return (commit, self.evaluate_commit(commit))

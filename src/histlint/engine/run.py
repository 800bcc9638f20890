from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from histlint.diagnostics import Violation
from histlint.parser import Commit, CommitRecord, parse_branch_name
from histlint.rules import RuleSet, build_rule_catalogue

from .aggregate import LintResult, aggregate

logger = logging.getLogger(__name__)


def default_rule_set() -> RuleSet:
    return RuleSet(build_rule_catalogue())


def lint(
    records: Iterable[CommitRecord],
    branch_name: str | None = None,
    *,
    rule_set: RuleSet | None = None,
    max_workers: int | None = None,
) -> LintResult:
    """Parse, evaluate and aggregate a commit range plus an optional branch name.

    With ``max_workers`` greater than one, commits are evaluated on a thread
    pool. ``Executor.map`` yields in input order and re-raises the first rule
    failure, so the result is identical to the sequential path.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be >= 1")
    resolved_rule_set = rule_set if rule_set is not None else default_rule_set()
    ordered = tuple(records)

    evaluated: tuple[tuple[Commit, tuple[Violation, ...]], ...]
    if max_workers is not None and max_workers > 1 and len(ordered) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(ordered))) as executor:
            evaluated = tuple(executor.map(resolved_rule_set.evaluate_record, ordered))
    else:
        evaluated = tuple(resolved_rule_set.evaluate_record(record) for record in ordered)

    branch_violations: tuple[Violation, ...] = ()
    if branch_name is not None:
        branch_violations = resolved_rule_set.evaluate_branch(parse_branch_name(branch_name))

    ignored = tuple(commit.hash for commit, _ in evaluated if commit.ignored)
    logger.debug(
        "Evaluated %d commits (%d ignored) and %s",
        len(evaluated),
        len(ignored),
        "no branch" if branch_name is None else f"branch '{branch_name}'",
    )
    return aggregate(
        [(commit.record, violations) for commit, violations in evaluated],
        branch_violations,
        ignored_commit_hashes=ignored,
    )

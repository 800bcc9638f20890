from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from histlint.diagnostics import Violation, sort_violations
from histlint.parser import CommitRecord


@dataclass(frozen=True, slots=True)
class LintResult:
    commit_violations: Mapping[str, tuple[Violation, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    branch_violations: tuple[Violation, ...] = ()
    ignored_commit_hashes: tuple[str, ...] = ()
    has_errors: bool = field(init=False)

    def __post_init__(self) -> None:
        frozen = {
            commit_hash: tuple(violations)
            for commit_hash, violations in self.commit_violations.items()
        }
        object.__setattr__(self, "commit_violations", MappingProxyType(frozen))
        object.__setattr__(self, "branch_violations", tuple(self.branch_violations))
        object.__setattr__(self, "ignored_commit_hashes", tuple(self.ignored_commit_hashes))
        object.__setattr__(
            self, "has_errors", any(violation.is_error for violation in self.violations())
        )

    @property
    def commit_hashes(self) -> tuple[str, ...]:
        return tuple(self.commit_violations)

    @property
    def violation_count(self) -> int:
        return sum(1 for _ in self.violations())

    @property
    def is_clean(self) -> bool:
        return self.violation_count == 0

    def violations(self) -> Iterator[Violation]:
        for violations in self.commit_violations.values():
            yield from violations
        yield from self.branch_violations


def aggregate(
    commits: Sequence[tuple[CommitRecord, Sequence[Violation]]],
    branch_violations: Sequence[Violation] = (),
    *,
    ignored_commit_hashes: Sequence[str] = (),
) -> LintResult:
    """Merge per-commit results in input order into one deterministic result."""
    merged: dict[str, list[Violation]] = {}
    for record, violations in commits:
        merged.setdefault(record.hash, []).extend(violations)
    return LintResult(
        commit_violations={
            commit_hash: tuple(sort_violations(violations))
            for commit_hash, violations in merged.items()
        },
        branch_violations=tuple(sort_violations(branch_violations)),
        ignored_commit_hashes=tuple(dict.fromkeys(ignored_commit_hashes)),
    )

from __future__ import annotations

from random import Random

import pytest

from histlint.diagnostics.models import RuleId, Severity, Violation, ViolationContext
from histlint.diagnostics.sort import location_sort_key, sort_violations

pytestmark = pytest.mark.unit


def _violation(**overrides: object) -> Violation:
    payload: dict[str, object] = {
        "rule_id": RuleId.SUBJECT_LENGTH,
        "severity": Severity.ERROR,
        "message": "m",
        "suggested_action": "a",
    }
    context: dict[str, object] = {"line": 1, "column_span": (1, 2)}
    for key in ("line", "column_span", "commit_hash"):
        if key in overrides:
            context[key] = overrides.pop(key)
    payload.update(overrides)
    return Violation(**payload, context=ViolationContext(**context))


def test_sort_violations_follows_rule_declaration_then_location() -> None:
    violations = [
        _violation(message="e", rule_id=RuleId.LINE_LENGTH, line=3),
        _violation(message="d", rule_id=RuleId.SUBJECT_PUNCTUATION),
        _violation(message="a", rule_id=RuleId.MERGE_COMMIT, severity=Severity.WARNING),
        _violation(message="c", rule_id=RuleId.SUBJECT_LENGTH, line=1, column_span=(9, 9)),
        _violation(message="b", rule_id=RuleId.SUBJECT_LENGTH, line=1, column_span=(3, 4)),
    ]

    ordered = sort_violations(violations)

    assert [violation.message for violation in ordered] == ["a", "b", "c", "d", "e"]


def test_sort_violations_places_missing_locations_last() -> None:
    violations = [
        _violation(message="no-location", line=None, column_span=None),
        _violation(message="span-only", line=None, column_span=(1, 1)),
        _violation(message="line-only", line=2, column_span=None),
        _violation(message="both", line=2, column_span=(4, 6)),
    ]

    ordered = sort_violations(violations)

    assert [violation.message for violation in ordered] == [
        "both",
        "line-only",
        "span-only",
        "no-location",
    ]


def test_location_sort_key_ignores_rule_id() -> None:
    first = _violation(rule_id=RuleId.BRANCH_NAME_CLICHE, line=1, column_span=(1, 1))
    second = _violation(rule_id=RuleId.MERGE_COMMIT, line=2, column_span=(1, 1))

    assert sorted([second, first], key=location_sort_key) == [first, second]


def test_sort_violations_is_deterministic_across_permutations() -> None:
    seed_violations = [
        _violation(message="m1", rule_id=RuleId.MERGE_COMMIT),
        _violation(message="m2", rule_id=RuleId.SUBJECT_MOOD, column_span=(1, 5)),
        _violation(message="m3", rule_id=RuleId.SUBJECT_PUNCTUATION, column_span=(1, 1)),
        _violation(message="m4", rule_id=RuleId.SUBJECT_PUNCTUATION, column_span=(20, 20)),
        _violation(message="m5", rule_id=RuleId.LINE_LENGTH, line=4, column_span=(73, 80)),
        _violation(message="m6", rule_id=RuleId.LINE_LENGTH, line=3, column_span=(73, 90)),
        _violation(message="m7", rule_id=RuleId.DIFF_PRESENCE, line=None, column_span=None),
        _violation(message="m8", severity=Severity.WARNING),
    ]
    baseline = sort_violations(seed_violations)
    rng = Random(0)

    for _ in range(200):
        permuted = list(seed_violations)
        rng.shuffle(permuted)
        assert sort_violations(permuted) == baseline

from __future__ import annotations

from collections.abc import Iterable

from .models import RuleId, Violation

_RULE_RANK: dict[RuleId, int] = {rule_id: index for index, rule_id in enumerate(RuleId)}


def _optional_int_sort_key(value: int | None) -> tuple[int, int]:
    if value is None:
        return (1, 0)
    return (0, value)


def _column_span_sort_key(span: tuple[int, int] | None) -> tuple[int, int, int]:
    if span is None:
        return (1, 0, 0)
    return (0, span[0], span[1])


def violation_sort_key(
    violation: Violation,
) -> tuple[int, tuple[int, int], tuple[int, int, int], str, str]:
    return (
        _RULE_RANK[violation.rule_id],
        _optional_int_sort_key(violation.context.line),
        _column_span_sort_key(violation.context.column_span),
        violation.message,
        violation.severity.value,
    )


def location_sort_key(violation: Violation) -> tuple[tuple[int, int], tuple[int, int, int]]:
    return (
        _optional_int_sort_key(violation.context.line),
        _column_span_sort_key(violation.context.column_span),
    )


def sort_violations(violations: Iterable[Violation]) -> list[Violation]:
    return sorted(violations, key=violation_sort_key)

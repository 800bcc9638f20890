from __future__ import annotations

from .catalog import RULE_CATALOG
from .models import RuleId, Severity, Violation, ViolationContext


def build_violation(  # noqa: PLR0913
    *,
    rule_id: RuleId,
    message: str,
    line: int | None = None,
    column_span: tuple[int, int] | None = None,
    commit_hash: str | None = None,
    severity: Severity | None = None,
    suggested_action: str | None = None,
) -> Violation:
    if not message:
        raise ValueError("violation message must be non-empty")

    catalog_entry = RULE_CATALOG.get(rule_id)
    if catalog_entry is None:
        raise ValueError(f"rule '{rule_id}' is missing from the rule catalog")

    resolved_action = (
        suggested_action if suggested_action is not None else catalog_entry.suggested_action
    )
    if not resolved_action:
        raise ValueError("violation suggested_action must be non-empty")

    return Violation(
        rule_id=rule_id,
        severity=severity if severity is not None else catalog_entry.severity,
        message=message,
        suggested_action=resolved_action,
        context=ViolationContext(
            commit_hash=commit_hash or None,
            line=line,
            column_span=column_span,
        ),
    )

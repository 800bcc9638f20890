from .build import build_violation
from .catalog import REQUIRED_CATALOG_FIELDS, RULE_CATALOG, RuleCatalogEntry
from .models import RuleId, RuleTarget, Severity, Violation, ViolationContext, rule_id_by_name
from .sort import location_sort_key, sort_violations, violation_sort_key

__all__ = [
    "REQUIRED_CATALOG_FIELDS",
    "RULE_CATALOG",
    "RuleCatalogEntry",
    "RuleId",
    "RuleTarget",
    "Severity",
    "Violation",
    "ViolationContext",
    "build_violation",
    "location_sort_key",
    "rule_id_by_name",
    "sort_violations",
    "violation_sort_key",
]

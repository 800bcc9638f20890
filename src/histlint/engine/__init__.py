from .aggregate import LintResult, aggregate
from .run import default_rule_set, lint

__all__ = [
    "LintResult",
    "aggregate",
    "default_rule_set",
    "lint",
]

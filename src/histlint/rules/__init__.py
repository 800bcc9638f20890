from .base import BranchCheck, CommitCheck, Rule
from .catalogue import BUILTIN_CHECKS, RuleCatalogue, build_rule_catalogue
from .rule_set import RuleSet
from .subject import MOOD_WORDS

__all__ = [
    "BUILTIN_CHECKS",
    "BranchCheck",
    "CommitCheck",
    "MOOD_WORDS",
    "Rule",
    "RuleCatalogue",
    "RuleSet",
    "build_rule_catalogue",
]

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from histlint.config import DEFAULT_POLICY, LintPolicy
from histlint.diagnostics import RULE_CATALOG, RuleId, RuleTarget

from .base import BranchCheck, CommitCheck, Rule
from .branch import (
    check_branch_name_cliche,
    check_branch_name_length,
    check_branch_name_punctuation,
    check_branch_name_ticket,
)
from .history import check_diff_presence, check_merge_commit, check_needs_rebase
from .message import (
    check_blank_line_after_subject,
    check_line_length,
    check_message_presence,
    check_message_ticket_number,
)
from .subject import (
    check_subject_build_tag,
    check_subject_capitalization,
    check_subject_cliche,
    check_subject_length,
    check_subject_mood,
    check_subject_prefix,
    check_subject_punctuation,
    check_subject_ticket_number,
    check_subject_whitespace,
    check_wip_commit,
)

BUILTIN_CHECKS: Mapping[RuleId, CommitCheck | BranchCheck] = MappingProxyType(
    {
        RuleId.MERGE_COMMIT: check_merge_commit,
        RuleId.NEEDS_REBASE: check_needs_rebase,
        RuleId.WIP_COMMIT: check_wip_commit,
        RuleId.SUBJECT_CLICHE: check_subject_cliche,
        RuleId.SUBJECT_LENGTH: check_subject_length,
        RuleId.SUBJECT_MOOD: check_subject_mood,
        RuleId.SUBJECT_WHITESPACE: check_subject_whitespace,
        RuleId.SUBJECT_PREFIX: check_subject_prefix,
        RuleId.SUBJECT_CAPITALIZATION: check_subject_capitalization,
        RuleId.SUBJECT_BUILD_TAG: check_subject_build_tag,
        RuleId.SUBJECT_PUNCTUATION: check_subject_punctuation,
        RuleId.SUBJECT_TICKET_NUMBER: check_subject_ticket_number,
        RuleId.BLANK_LINE_AFTER_SUBJECT: check_blank_line_after_subject,
        RuleId.MESSAGE_PRESENCE: check_message_presence,
        RuleId.LINE_LENGTH: check_line_length,
        RuleId.MESSAGE_TICKET_NUMBER: check_message_ticket_number,
        RuleId.DIFF_PRESENCE: check_diff_presence,
        RuleId.BRANCH_NAME_LENGTH: check_branch_name_length,
        RuleId.BRANCH_NAME_TICKET: check_branch_name_ticket,
        RuleId.BRANCH_NAME_PUNCTUATION: check_branch_name_punctuation,
        RuleId.BRANCH_NAME_CLICHE: check_branch_name_cliche,
    }
)


@dataclass(frozen=True, slots=True)
class RuleCatalogue:
    rules: tuple[Rule, ...]
    policy: LintPolicy = DEFAULT_POLICY
    _by_id: Mapping[RuleId, Rule] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_id: dict[RuleId, Rule] = {}
        for rule in self.rules:
            if rule.rule_id in by_id:
                raise ValueError(f"duplicate rule in catalogue: {rule.rule_id}")
            by_id[rule.rule_id] = rule
        object.__setattr__(self, "_by_id", MappingProxyType(by_id))

    def get(self, rule_id: RuleId) -> Rule | None:
        return self._by_id.get(rule_id)

    @property
    def rule_ids(self) -> tuple[RuleId, ...]:
        return tuple(rule.rule_id for rule in self.rules)

    @property
    def commit_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.target is RuleTarget.COMMIT)

    @property
    def branch_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self.rules if rule.target is RuleTarget.BRANCH)


def build_rule_catalogue(policy: LintPolicy = DEFAULT_POLICY) -> RuleCatalogue:
    """Bind every built-in check to ``policy``, commit rules first, in ``RuleId`` order."""
    rules = [
        Rule(
            rule_id=rule_id,
            target=RULE_CATALOG[rule_id].target,
            check=BUILTIN_CHECKS[rule_id],
            policy=policy,
        )
        for rule_id in RuleId
    ]
    rules.sort(key=lambda rule: 0 if rule.target is RuleTarget.COMMIT else 1)
    return RuleCatalogue(rules=tuple(rules), policy=policy)

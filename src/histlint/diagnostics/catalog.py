from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import RuleId, RuleTarget, Severity


@dataclass(frozen=True, slots=True)
class RuleCatalogEntry:
    rule_id: RuleId
    severity: Severity
    target: RuleTarget
    description: str
    suggested_action: str

    def __post_init__(self) -> None:
        if not self.description:
            raise ValueError(f"rule catalog entry '{self.rule_id}' description must be non-empty")
        if not self.suggested_action:
            raise ValueError(
                f"rule catalog entry '{self.rule_id}' suggested_action must be non-empty"
            )


def _entry(
    rule_id: RuleId,
    severity: Severity,
    target: RuleTarget,
    description: str,
    suggested_action: str,
) -> RuleCatalogEntry:
    return RuleCatalogEntry(
        rule_id=rule_id,
        severity=severity,
        target=target,
        description=description,
        suggested_action=suggested_action,
    )


def _build_catalog(
    entries: tuple[RuleCatalogEntry, ...],
) -> Mapping[RuleId, RuleCatalogEntry]:
    catalog: dict[RuleId, RuleCatalogEntry] = {}
    for entry in entries:
        if entry.rule_id in catalog:
            raise ValueError(f"duplicate rule catalog id: {entry.rule_id}")
        catalog[entry.rule_id] = entry
    missing = [rule_id for rule_id in RuleId if rule_id not in catalog]
    if missing:
        raise ValueError(f"rule catalog is missing entries for: {','.join(missing)}")
    return MappingProxyType(catalog)


_CATALOG_ENTRIES: tuple[RuleCatalogEntry, ...] = (
    _entry(
        RuleId.MERGE_COMMIT,
        Severity.WARNING,
        RuleTarget.COMMIT,
        "merge commits should not be part of a feature history",
        "rebase on the target branch instead of merging it in",
    ),
    _entry(
        RuleId.NEEDS_REBASE,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "fixup and squash commits must be rebased before merging",
        "rebase fixup and squash commits before pushing or merging",
    ),
    _entry(
        RuleId.WIP_COMMIT,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "work-in-progress commits must not be merged",
        "finish the change and reword the commit subject",
    ),
    _entry(
        RuleId.SUBJECT_CLICHE,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject is a generic phrase that does not describe the change",
        "describe the change in more detail",
    ),
    _entry(
        RuleId.SUBJECT_LENGTH,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must be within the configured length bounds",
        "keep the subject between the minimum and maximum width",
    ),
    _entry(
        RuleId.SUBJECT_MOOD,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must use the imperative grammatical mood",
        "use the imperative mood for the subject",
    ),
    _entry(
        RuleId.SUBJECT_WHITESPACE,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must not start with whitespace",
        "remove the leading whitespace from the subject",
    ),
    _entry(
        RuleId.SUBJECT_PREFIX,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must not start with a category prefix",
        "remove the prefix from the subject",
    ),
    _entry(
        RuleId.SUBJECT_CAPITALIZATION,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must start with a capital letter",
        "start the subject with a capital letter",
    ),
    _entry(
        RuleId.SUBJECT_BUILD_TAG,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must not contain CI build tags",
        "move the build tag to the message body",
    ),
    _entry(
        RuleId.SUBJECT_PUNCTUATION,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must not start or end with punctuation or emoji",
        "remove punctuation from the start and end of the subject",
    ),
    _entry(
        RuleId.SUBJECT_TICKET_NUMBER,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "subject must not contain ticket numbers",
        "move the ticket number to the message body",
    ),
    _entry(
        RuleId.BLANK_LINE_AFTER_SUBJECT,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "body must be separated from the subject by exactly one blank line",
        "separate the subject and body with one empty line",
    ),
    _entry(
        RuleId.MESSAGE_PRESENCE,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "commit must have a message body",
        "add a message body with context about the change and why it was made",
    ),
    _entry(
        RuleId.LINE_LENGTH,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "body lines must be within the configured width",
        "wrap the body at the maximum line width",
    ),
    _entry(
        RuleId.MESSAGE_TICKET_NUMBER,
        Severity.WARNING,
        RuleTarget.COMMIT,
        "message should reference a ticket or issue",
        "consider adding a reference to a ticket or issue, e.g. 'Fixes #123'",
    ),
    _entry(
        RuleId.DIFF_PRESENCE,
        Severity.ERROR,
        RuleTarget.COMMIT,
        "commit must contain file changes",
        "add changes to the commit or remove the commit",
    ),
    _entry(
        RuleId.BRANCH_NAME_LENGTH,
        Severity.ERROR,
        RuleTarget.BRANCH,
        "branch name must be within the configured length bounds",
        "rename the branch to describe the change concisely",
    ),
    _entry(
        RuleId.BRANCH_NAME_TICKET,
        Severity.ERROR,
        RuleTarget.BRANCH,
        "branch name must reference a ticket",
        "include a ticket key such as ABC-123 in the branch name",
    ),
    _entry(
        RuleId.BRANCH_NAME_PUNCTUATION,
        Severity.ERROR,
        RuleTarget.BRANCH,
        "branch name must not start or end with punctuation",
        "remove punctuation from the start and end of the branch name",
    ),
    _entry(
        RuleId.BRANCH_NAME_CLICHE,
        Severity.ERROR,
        RuleTarget.BRANCH,
        "branch name is a generic word that does not describe the change",
        "describe the change in the branch name in more detail",
    ),
)


RULE_CATALOG: Mapping[RuleId, RuleCatalogEntry] = _build_catalog(_CATALOG_ENTRIES)

REQUIRED_CATALOG_FIELDS: tuple[str, ...] = (
    "rule_id",
    "severity",
    "target",
    "description",
    "suggested_action",
)

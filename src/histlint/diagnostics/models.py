from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class RuleTarget(StrEnum):
    COMMIT = "commit"
    BRANCH = "branch"


class RuleId(StrEnum):
    """Stable rule tags. Values are referenced by suppression directives and reports."""

    MERGE_COMMIT = "MergeCommit"
    NEEDS_REBASE = "NeedsRebase"
    WIP_COMMIT = "WipCommit"
    SUBJECT_CLICHE = "SubjectCliche"
    SUBJECT_LENGTH = "SubjectLength"
    SUBJECT_MOOD = "SubjectMood"
    SUBJECT_WHITESPACE = "SubjectWhitespace"
    SUBJECT_PREFIX = "SubjectPrefix"
    SUBJECT_CAPITALIZATION = "SubjectCapitalization"
    SUBJECT_BUILD_TAG = "SubjectBuildTag"
    SUBJECT_PUNCTUATION = "SubjectPunctuation"
    SUBJECT_TICKET_NUMBER = "SubjectTicketNumber"
    BLANK_LINE_AFTER_SUBJECT = "BlankLineAfterSubject"
    MESSAGE_PRESENCE = "MessagePresence"
    LINE_LENGTH = "LineLength"
    MESSAGE_TICKET_NUMBER = "MessageTicketNumber"
    DIFF_PRESENCE = "DiffPresence"
    BRANCH_NAME_LENGTH = "BranchNameLength"
    BRANCH_NAME_TICKET = "BranchNameTicket"
    BRANCH_NAME_PUNCTUATION = "BranchNamePunctuation"
    BRANCH_NAME_CLICHE = "BranchNameCliche"


def rule_id_by_name(name: str) -> RuleId | None:
    try:
        return RuleId(name.strip())
    except ValueError:
        return None


class ViolationContext(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    commit_hash: str | None = None
    line: int | None = Field(default=None, ge=1)
    column_span: tuple[int, int] | None = None

    @field_validator("commit_hash")
    @classmethod
    def _validate_commit_hash(cls, commit_hash: str | None) -> str | None:
        if commit_hash is not None and not commit_hash:
            raise ValueError("commit_hash must be non-empty when provided")
        return commit_hash

    @field_validator("column_span")
    @classmethod
    def _validate_column_span(cls, span: tuple[int, int] | None) -> tuple[int, int] | None:
        if span is None:
            return None
        start, end = span
        if start < 1:
            raise ValueError("column_span start must be >= 1")
        if end < start:
            raise ValueError("column_span end must be >= start")
        return span


class Violation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    rule_id: RuleId
    severity: Severity
    message: str = Field(min_length=1)
    suggested_action: str = Field(min_length=1)
    context: ViolationContext = ViolationContext()

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def with_commit_hash(self, commit_hash: str | None) -> Violation:
        if not commit_hash or self.context.commit_hash == commit_hash:
            return self
        context = self.context.model_copy(update={"commit_hash": commit_hash})
        return self.model_copy(update={"context": context})

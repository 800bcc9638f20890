from __future__ import annotations

import logging

import pytest

from histlint.diagnostics import RuleId
from histlint.parser import (
    CommitKind,
    CommitRecord,
    Trailer,
    classify_commit_kind,
    parse_commit,
)

pytestmark = pytest.mark.unit


def _record(message: str, **overrides: object) -> CommitRecord:
    payload: dict[str, object] = {"hash": "0123456789abcdef", "author_email": "dev@example.com"}
    payload.update(overrides)
    return CommitRecord.from_message(message, **payload)  # type: ignore[arg-type]


def test_record_from_message_splits_subject_and_body() -> None:
    record = CommitRecord.from_message("Subject\n\nBody line", hash="abc")

    assert record.subject == "Subject"
    assert record.body == "\nBody line"
    assert record.message == "Subject\n\nBody line"
    assert record.short_hash is None
    assert _record("x").short_hash == "0123456"


def test_record_normalizes_collections() -> None:
    record = CommitRecord(
        subject="s",
        trailers=[Trailer("Signed-off-by", "Dev <dev@example.com>")],  # type: ignore[arg-type]
        changed_file_paths={"a.py"},  # type: ignore[arg-type]
    )

    assert isinstance(record.trailers, tuple)
    assert record.changed_file_paths == frozenset({"a.py"})
    with pytest.raises(ValueError, match="trailer key"):
        Trailer("", "value")


def test_parse_commit_subject_separator_and_body() -> None:
    commit = parse_commit(_record("Update readme\n\nAdds install instructions"))

    assert commit.subject.text == "Update readme"
    assert commit.subject.line_number == 1
    assert commit.subject.length == 13
    assert commit.separator_blank_lines == 1
    assert [line.text for line in commit.body_lines] == ["Adds install instructions"]
    assert commit.body_lines[0].line_number == 3
    assert commit.has_body
    assert commit.kind is CommitKind.NORMAL
    assert commit.hash == "0123456789abcdef"
    assert not commit.ignored


def test_parse_commit_subject_keeps_leading_and_flags_trailing_whitespace() -> None:
    commit = parse_commit(_record("  Fix parser  "))

    assert commit.subject.text == "  Fix parser"
    assert commit.subject.has_leading_whitespace
    assert commit.subject.has_trailing_whitespace
    assert commit.subject.length == 12


def test_parse_commit_subject_only_and_blank_only_messages() -> None:
    subject_only = parse_commit(_record("Add feature"))
    trailing_blanks = parse_commit(_record("Add feature\n\n\n"))

    for commit in (subject_only, trailing_blanks):
        assert commit.separator_blank_lines == 0
        assert commit.body_lines == ()
        assert not commit.has_body


def test_parse_commit_counts_missing_and_extra_separators() -> None:
    missing = parse_commit(_record("Subject\nBody directly below"))
    extra = parse_commit(_record("Subject\n\n\nBody after two blanks"))

    assert missing.separator_blank_lines == 0
    assert missing.body_lines[0].line_number == 2
    assert extra.separator_blank_lines == 2
    assert extra.body_lines[0].line_number == 4


def test_parse_commit_empty_message_is_represented() -> None:
    commit = parse_commit(CommitRecord())

    assert commit.subject.text == ""
    assert commit.subject.length == 0
    assert commit.message_lines == ()
    assert commit.kind is CommitKind.NORMAL


def test_parse_commit_detects_trailer_block() -> None:
    commit = parse_commit(
        _record(
            "Fix crash on start\n\nThe cache was not initialized.\n\n"
            "Co-authored-by: Jane <jane@example.com>\nSigned-off-by: Dev <dev@example.com>\n"
        )
    )

    assert commit.trailers == (
        Trailer("Co-authored-by", "Jane <jane@example.com>"),
        Trailer("Signed-off-by", "Dev <dev@example.com>"),
    )
    assert [line.text for line in commit.body_lines] == ["The cache was not initialized."]


def test_parse_commit_prefers_source_trailers() -> None:
    source_trailers = (Trailer("Reviewed-by", "Ann"),)
    commit = parse_commit(
        _record("Fix crash\n\nBody text\n\nSigned-off-by: Dev", trailers=source_trailers)
    )

    assert commit.trailers == source_trailers


def test_body_line_that_is_not_a_trailer_stops_the_block() -> None:
    commit = parse_commit(_record("Fix crash\n\nNote: this is prose\nmore prose"))

    assert commit.trailers == ()
    assert len(commit.body_lines) == 2


@pytest.mark.parametrize(
    ("subject", "kind"),
    [
        ("Merge branch 'feature' into main", CommitKind.MERGE),
        ("fixup! Add parser", CommitKind.FIXUP),
        ("amend! Add parser", CommitKind.FIXUP),
        ("squash! Add parser", CommitKind.SQUASH),
        ('Revert "Add parser"', CommitKind.REVERT),
        ("Add parser", CommitKind.NORMAL),
        ("Merged things", CommitKind.NORMAL),
        ("Reverting the parser", CommitKind.NORMAL),
    ],
)
def test_classify_commit_kind(subject: str, kind: CommitKind) -> None:
    assert classify_commit_kind(subject) is kind
    assert parse_commit(_record(subject)).kind is kind


def test_remote_merge_detection() -> None:
    remote = parse_commit(_record("Merge branch 'main' of github.com:org/repo into main"))
    local = parse_commit(_record("Merge branch 'feature' into main"))

    assert remote.is_remote_merge
    assert not local.is_remote_merge


def test_disable_directives_collect_known_rules(caplog: pytest.LogCaptureFixture) -> None:
    message = (
        "Fix thing\n\nBody text here\n"
        "histlint:disable LineLength\nhistlint:disable NoSuchRule\n"
    )
    with caplog.at_level(logging.WARNING, logger="histlint.parser.commit"):
        commit = parse_commit(_record(message))

    assert commit.disabled_rules == frozenset({RuleId.LINE_LENGTH})
    assert "Attempted to disable unknown rule: NoSuchRule" in caplog.text


@pytest.mark.parametrize(
    ("message", "overrides", "reason"),
    [
        (
            "Bump dependency",
            {"author_email": "dependabot[bot]@users.noreply.github.com"},
            "commit authored by a bot account",
        ),
        ("Merge tag 'v1.0'", {}, "merge commit of a tag"),
        ("Merge pull request #12 from org/branch", {}, "merge commit of a pull request"),
        (
            "Merge branch 'feature' into 'main'\n\nSee merge request org/repo!42",
            {},
            "merge commit of a merge request",
        ),
        ("Add parser (#123)", {}, "squash commit of a pull request"),
    ],
)
def test_ignored_commits(message: str, overrides: dict[str, object], reason: str) -> None:
    commit = parse_commit(_record(message, **overrides))

    assert commit.ignored
    assert commit.ignore_reason == reason


def test_parse_commit_is_idempotent() -> None:
    record = _record("Fix crash\n\nBody text\n\nSigned-off-by: Dev <dev@example.com>")

    assert parse_commit(record) == parse_commit(record)

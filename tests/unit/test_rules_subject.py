from __future__ import annotations

import pytest

from histlint.config import DEFAULT_POLICY, LintPolicy
from histlint.diagnostics import RuleId, Violation
from histlint.parser import Commit, CommitRecord, parse_commit
from histlint.rules.subject import (
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
    is_cliche_subject,
    is_wip_subject,
)

pytestmark = pytest.mark.unit


def _commit(message: str) -> Commit:
    return parse_commit(CommitRecord.from_message(message, hash="abc1234def"))


def _spans(violations: tuple[Violation, ...]) -> list[tuple[int, int] | None]:
    return [violation.context.column_span for violation in violations]


@pytest.mark.parametrize(
    ("subject", "expected"),
    [
        ("WIP", True),
        ("wip: parser", True),
        ("[WIP] Add parser", True),
        ("Add parser [wip]", True),
        ("Wipe cache on logout", False),
        ("Add parser", False),
    ],
)
def test_is_wip_subject(subject: str, expected: bool) -> None:
    assert is_wip_subject(subject) is expected


def test_wip_commit_violation_spans_marker() -> None:
    violations = check_wip_commit(_commit("WIP: Add parser"), DEFAULT_POLICY)

    assert [violation.rule_id for violation in violations] == [RuleId.WIP_COMMIT]
    assert _spans(violations) == [(1, 3)]
    assert violations[0].context.line == 1
    assert violations[0].context.commit_hash == "abc1234def"


@pytest.mark.parametrize(
    ("subject", "expected"),
    [
        ("Fix bug", True),
        ("fixed it", True),
        ("Update", True),
        ("Changes", True),
        ("Fix bug.", False),
        ("Update readme", False),
        ("Fix crash when config is missing", False),
    ],
)
def test_is_cliche_subject(subject: str, expected: bool) -> None:
    assert is_cliche_subject(subject) is expected


def test_subject_cliche_spans_whole_subject() -> None:
    violations = check_subject_cliche(_commit("Fix bug"), DEFAULT_POLICY)

    assert _spans(violations) == [(1, 7)]


def test_subject_length_too_long_spans_overflow() -> None:
    subject = "Document " + "a" * 51
    violations = check_subject_length(_commit(subject), DEFAULT_POLICY)

    assert [violation.message for violation in violations] == [
        "The subject of `60` characters wide is too long"
    ]
    assert _spans(violations) == [(51, 60)]


def test_subject_length_boundaries_follow_policy() -> None:
    policy = LintPolicy(subject_max_length=10, subject_min_length=4)

    assert check_subject_length(_commit("Add parser"), policy) == ()
    assert len(check_subject_length(_commit("Add parsers"), policy)) == 1
    assert check_subject_length(_commit("Doit"), policy) == ()
    too_short = check_subject_length(_commit("Doc"), policy)
    assert [violation.message for violation in too_short] == [
        "The subject of `3` characters wide is too short"
    ]


def test_subject_length_reports_missing_subject() -> None:
    violations = check_subject_length(_commit(""), DEFAULT_POLICY)

    assert [violation.message for violation in violations] == ["The commit has no subject"]
    assert _spans(violations) == [(1, 1)]


def test_subject_length_defers_to_cliche_and_wip_rules() -> None:
    assert check_subject_length(_commit("Fix"), DEFAULT_POLICY) == ()
    assert check_subject_length(_commit("WIP"), DEFAULT_POLICY) == ()


def test_subject_length_skips_non_normal_commits() -> None:
    long_merge = "Merge branch '" + "x" * 80 + "' into main"

    assert check_subject_length(_commit(long_merge), DEFAULT_POLICY) == ()


@pytest.mark.parametrize(
    ("message", "span"),
    [
        ("Fix\n\nCorrects the crash.\nhistlint:disable SubjectCliche", (1, 3)),
        ("WIP\n\nCorrects the crash.\nhistlint:disable WipCommit", (1, 3)),
    ],
)
def test_subject_length_reports_when_deferred_rule_is_disabled(
    message: str, span: tuple[int, int]
) -> None:
    violations = check_subject_length(_commit(message), DEFAULT_POLICY)

    assert [violation.message for violation in violations] == [
        "The subject of `3` characters wide is too short"
    ]
    assert _spans(violations) == [span]


def test_subject_format_rules_check_revert_subjects() -> None:
    long_revert = _commit('Revert "' + "x" * 60 + '"')
    tagged_revert = _commit('Revert "Update docs [skip ci]"')

    assert _spans(check_subject_length(long_revert, DEFAULT_POLICY)) == [(51, 69)]
    assert _spans(check_subject_build_tag(tagged_revert, DEFAULT_POLICY)) == [(21, 29)]
    assert check_subject_mood(_commit('Revert "Fixed the crash"'), DEFAULT_POLICY) == ()
    assert check_subject_punctuation(tagged_revert, DEFAULT_POLICY) == ()


@pytest.mark.parametrize(
    ("subject", "span"),
    [
        ("Fixed the crash", (1, 5)),
        ("Adding tests", (1, 6)),
        ("Updates: docs", (1, 8)),
        ("  Removed cache", (3, 9)),
    ],
)
def test_subject_mood_flags_non_imperative_first_word(
    subject: str, span: tuple[int, int]
) -> None:
    violations = check_subject_mood(_commit(subject), DEFAULT_POLICY)

    assert _spans(violations) == [span]


def test_subject_mood_accepts_imperative() -> None:
    assert check_subject_mood(_commit("Fix the crash"), DEFAULT_POLICY) == ()
    assert check_subject_mood(_commit(""), DEFAULT_POLICY) == ()


def test_subject_whitespace() -> None:
    assert _spans(check_subject_whitespace(_commit(" Add parser"), DEFAULT_POLICY)) == [(1, 1)]
    assert _spans(check_subject_whitespace(_commit("\tAdd parser"), DEFAULT_POLICY)) == [(1, 1)]
    assert check_subject_whitespace(_commit("Add parser"), DEFAULT_POLICY) == ()


def test_subject_prefix() -> None:
    violations = check_subject_prefix(_commit("feat(parser): add trailers"), DEFAULT_POLICY)

    assert [violation.message for violation in violations] == [
        "Remove the `feat(parser):` prefix from the subject"
    ]
    assert _spans(violations) == [(1, 13)]
    assert check_subject_prefix(_commit("Add parser: trailers"), DEFAULT_POLICY) == ()


def test_subject_capitalization() -> None:
    assert _spans(check_subject_capitalization(_commit("add parser"), DEFAULT_POLICY)) == [
        (1, 1)
    ]
    assert check_subject_capitalization(_commit("Add parser"), DEFAULT_POLICY) == ()
    assert check_subject_capitalization(_commit("fix: add parser"), DEFAULT_POLICY) == ()
    disabled_prefix = _commit("fix: add parser\n\nAdds a parser.\nhistlint:disable SubjectPrefix")
    assert _spans(check_subject_capitalization(disabled_prefix, DEFAULT_POLICY)) == [(1, 1)]
    assert check_subject_capitalization(_commit("123 things"), DEFAULT_POLICY) == ()


def test_subject_build_tag() -> None:
    violations = check_subject_build_tag(
        _commit("Update docs [skip ci] [ci skip]"), DEFAULT_POLICY
    )

    assert _spans(violations) == [(13, 21), (23, 31)]
    assert check_subject_build_tag(_commit("Update docs"), DEFAULT_POLICY) == ()


@pytest.mark.parametrize(
    ("subject", "spans"),
    [
        ("Fix bug.", [(8, 8)]),
        ("Add parser!", [(11, 11)]),
        ("Add parser (draft)", []),
        ('Revert to "safe" mode', []),
        ("...and more", [(1, 1)]),
        ("- Add parser.", [(1, 1), (13, 13)]),
        ("\U0001f41b Fix crash", [(1, 1)]),
        ("Add parser", []),
        ("?", [(1, 1)]),
    ],
)
def test_subject_punctuation(subject: str, spans: list[tuple[int, int]]) -> None:
    assert _spans(check_subject_punctuation(_commit(subject), DEFAULT_POLICY)) == spans


def test_subject_ticket_number() -> None:
    violations = check_subject_ticket_number(
        _commit("Fix #123 in parser for JIRA-42"), DEFAULT_POLICY
    )

    assert [violation.rule_id for violation in violations] == [
        RuleId.SUBJECT_TICKET_NUMBER,
        RuleId.SUBJECT_TICKET_NUMBER,
    ]
    assert _spans(violations) == [(1, 8), (24, 30)]
    assert check_subject_ticket_number(_commit("Add parser"), DEFAULT_POLICY) == ()


def test_subject_rules_skip_ignored_commits() -> None:
    commit = parse_commit(
        CommitRecord.from_message(
            "fixed it.",
            hash="abc",
            author_email="renovate[bot]@users.noreply.github.com",
        )
    )

    for check in (
        check_subject_cliche,
        check_subject_mood,
        check_subject_capitalization,
        check_subject_punctuation,
    ):
        assert check(commit, DEFAULT_POLICY) == ()

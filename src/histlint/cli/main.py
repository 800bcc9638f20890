from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Final, Literal

import typer

from histlint.config import DEFAULT_POLICY, LintConfigError, LintPolicy, load_lint_policy
from histlint.diagnostics import RULE_CATALOG, Violation
from histlint.engine import LintResult, lint
from histlint.git_source import (
    GitSourceError,
    fetch_branch_name,
    fetch_commit_records,
    git_config_value,
    staged_file_paths,
)
from histlint.logging_config import configure_logging
from histlint.parser import (
    CommitRecord,
    cleanup_mode_from_config,
    parse_hook_message,
)
from histlint.parser.hook import DEFAULT_COMMENT_CHAR
from histlint.rules import RuleSet, build_rule_catalogue

app = typer.Typer(help="Git history linter")

logger = logging.getLogger(__name__)

_CHECK_OUTPUT_SCHEMA_VERSION: Final[int] = 1
_EXIT_CLEAN: Final[int] = 0
_EXIT_ERRORS: Final[int] = 1
_EXIT_FAILURE: Final[int] = 2
_CLI_HOOK_READ_FAILED = "E_CLI_HOOK_READ_FAILED"
_AUTO_COMMENT_CHAR = "auto"
_NO_HASH_LABEL = "-"


@app.callback()
def _root() -> None:
    """Lint commit messages and branch names."""


class HookMessageError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@app.command()
def check(  # noqa: PLR0913
    selection: str | None = typer.Argument(
        None,
        help="Commit or range (a..b) to lint; defaults to HEAD",
    ),
    hook_message_file: Path | None = typer.Option(
        None,
        "--hook-message-file",
        help="Lint the message file passed to the commit-msg hook",
    ),
    no_branch: bool = typer.Option(False, "--no-branch", help="Skip the branch name check"),
    branch: str | None = typer.Option(
        None,
        "--branch",
        help="Branch name to lint instead of the checked out branch",
    ),
    config: Path | None = typer.Option(None, "--config", help="YAML lint policy file"),
    format: Literal["text", "json"] = typer.Option(
        "text",
        "--format",
        help="Check output format: text|json",
        show_default=True,
    ),
    jobs: int = typer.Option(1, "--jobs", min=1, help="Worker threads for commit evaluation"),
    debug: bool = typer.Option(False, "--debug", help="Log debug output to stderr"),
    repo: Path = typer.Option(Path("."), "--repo", help="Repository to read history from"),
) -> None:
    """Lint commits and the branch name of a repository."""
    configure_logging(level="DEBUG" if debug else "WARNING")
    try:
        policy = _load_policy(config)
        if hook_message_file is not None:
            records: tuple[CommitRecord, ...] = (_read_hook_record(hook_message_file, repo),)
        else:
            records = fetch_commit_records(selection, repo)
        branch_name = _resolve_branch_name(no_branch=no_branch, branch=branch, repo=repo)
        logger.debug("Linting %d commits with policy %s", len(records), policy)
    except (GitSourceError, HookMessageError, LintConfigError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=_EXIT_FAILURE) from exc

    result = lint(
        records,
        branch_name,
        rule_set=RuleSet(build_rule_catalogue(policy)),
        max_workers=jobs,
    )
    _emit_check_output(result=result, branch_name=branch_name, output_format=format)
    raise typer.Exit(code=_derive_check_exit_code(result))


@app.command()
def rules() -> None:
    """List the built-in rules."""
    for rule_id in build_rule_catalogue().rule_ids:
        entry = RULE_CATALOG[rule_id]
        typer.echo(
            "RULE"
            f" id={entry.rule_id}"
            f" target={entry.target}"
            f" severity={entry.severity}"
            f" description={entry.description}"
        )


def _load_policy(config: Path | None) -> LintPolicy:
    if config is None:
        return DEFAULT_POLICY
    return load_lint_policy(config)


def _read_hook_record(path: Path, repo: Path) -> CommitRecord:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise HookMessageError(
            _CLI_HOOK_READ_FAILED,
            f"unable to read commit message file '{path}': {exc}",
        ) from exc
    comment_char = git_config_value(repo, "core.commentChar")
    if not comment_char or comment_char == _AUTO_COMMENT_CHAR:
        comment_char = DEFAULT_COMMENT_CHAR
    return parse_hook_message(
        text,
        cleanup_mode=cleanup_mode_from_config(git_config_value(repo, "commit.cleanup")),
        comment_char=comment_char,
        changed_file_paths=_staged_file_paths_or_unknown(repo),
    )


def _staged_file_paths_or_unknown(repo: Path) -> frozenset[str] | None:
    try:
        return staged_file_paths(repo)
    except GitSourceError as exc:
        logger.warning("Unable to list staged changes, assuming the commit has changes: %s", exc)
        return None


def _resolve_branch_name(*, no_branch: bool, branch: str | None, repo: Path) -> str | None:
    if no_branch:
        return None
    if branch is not None:
        return branch
    return fetch_branch_name(repo)


def _derive_check_exit_code(result: LintResult) -> int:
    if result.has_errors:
        return _EXIT_ERRORS
    return _EXIT_CLEAN


def _emit_check_output(
    *,
    result: LintResult,
    branch_name: str | None,
    output_format: Literal["text", "json"],
) -> None:
    if output_format == "json":
        typer.echo(_build_check_json_output(result=result, branch_name=branch_name))
        return
    _print_violations(result=result, branch_name=branch_name)


def _build_check_json_output(*, result: LintResult, branch_name: str | None) -> str:
    payload: dict[str, object] = {
        "schema_version": _CHECK_OUTPUT_SCHEMA_VERSION,
        "status": "fail" if result.has_errors else "pass",
        "exit_code": _derive_check_exit_code(result),
        "commits": [
            {
                "hash": commit_hash,
                "violations": [_dump_violation(violation) for violation in violations],
            }
            for commit_hash, violations in result.commit_violations.items()
        ],
        "branch": (
            None
            if branch_name is None
            else {
                "name": branch_name,
                "violations": [
                    _dump_violation(violation) for violation in result.branch_violations
                ],
            }
        ),
        "ignored_commits": list(result.ignored_commit_hashes),
    }
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


def _dump_violation(violation: Violation) -> dict[str, object]:
    return violation.model_dump(mode="json", exclude_none=True)


def _print_violations(*, result: LintResult, branch_name: str | None) -> None:
    for commit_hash, violations in result.commit_violations.items():
        label = commit_hash[:7] if commit_hash else _NO_HASH_LABEL
        for violation in violations:
            typer.echo(_format_violation_line(f"commit={label}", violation))
    for violation in result.branch_violations:
        typer.echo(_format_violation_line(f"branch={branch_name}", violation))
    error_count = sum(1 for violation in result.violations() if violation.is_error)
    typer.echo(
        "SUMMARY"
        f" status={'fail' if result.has_errors else 'pass'}"
        f" commits={len(result.commit_hashes)}"
        f" ignored={len(result.ignored_commit_hashes)}"
        f" violations={result.violation_count}"
        f" errors={error_count}"
    )


def _format_violation_line(subject: str, violation: Violation) -> str:
    location = ""
    if violation.context.line is not None:
        location += f" line={violation.context.line}"
    if violation.context.column_span is not None:
        start, end = violation.context.column_span
        location += f" columns={start}-{end}"
    return (
        "VIOLATION"
        f" {subject}"
        f" severity={violation.severity}"
        f" rule={violation.rule_id}"
        f"{location}"
        f" message={violation.message}"
        f" action={violation.suggested_action}"
    )


def main() -> None:
    app()

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from histlint.parser import CommitRecord

logger = logging.getLogger(__name__)

_RECORD_SEPARATOR = "\x1e"
_FIELD_SEPARATOR = "\x1f"
_FIELD_COUNT = 5
LOG_FORMAT = "--pretty=format:%x1e%H%x1f%an%x1f%ae%x1f%B%x1f"
_DETACHED_HEAD = "HEAD"


class GitSourceError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


def _git_command(repo_root: Path, *args: str) -> str:
    logger.debug("Running git %s in %s", " ".join(args), repo_root)
    try:
        completed = subprocess.run(
            ["git", "-C", str(repo_root), *args],
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise GitSourceError("E_GIT_UNAVAILABLE", f"unable to run git: {exc}") from exc
    if completed.returncode != 0:
        raise GitSourceError(
            "E_GIT_COMMAND_FAILED",
            f"git command failed ({' '.join(args)}): "
            f"{completed.stderr.strip() or completed.stdout.strip()}",
        )
    return completed.stdout


def parse_git_log_output(text: str) -> tuple[CommitRecord, ...]:
    """Parse ``git log`` output produced with ``LOG_FORMAT`` and ``--name-only``.

    Records keep git's order (newest first). Every record carries the set of
    paths listed after it, which is empty for commits without changes.
    """
    records: list[CommitRecord] = []
    for chunk in text.split(_RECORD_SEPARATOR):
        if not chunk.strip():
            continue
        fields = chunk.split(_FIELD_SEPARATOR, _FIELD_COUNT - 1)
        if len(fields) != _FIELD_COUNT:
            raise GitSourceError(
                "E_GIT_OUTPUT_INVALID",
                f"expected {_FIELD_COUNT} fields in git log record, got {len(fields)}",
            )
        commit_hash, author_name, author_email, message, files_text = fields
        commit_hash = commit_hash.strip()
        if not commit_hash:
            logger.debug("Skipping git log record without a hash")
            continue
        records.append(
            CommitRecord.from_message(
                message.rstrip("\n"),
                hash=commit_hash,
                author_name=author_name,
                author_email=author_email,
                changed_file_paths=(
                    line.strip() for line in files_text.splitlines() if line.strip()
                ),
            )
        )
    return tuple(records)


def log_arguments(selection: str | None) -> tuple[str, ...]:
    if selection is None or not selection.strip():
        return ("-n", "1", "HEAD")
    selection = selection.strip()
    if ".." in selection:
        return (selection,)
    return ("-n", "1", selection)


def fetch_commit_records(selection: str | None, repo_root: Path) -> tuple[CommitRecord, ...]:
    """Return the commits of ``selection`` oldest first."""
    output = _git_command(
        repo_root,
        "log",
        LOG_FORMAT,
        "--name-only",
        "--no-color",
        *log_arguments(selection),
        "--",
    )
    records = tuple(reversed(parse_git_log_output(output)))
    logger.debug("Fetched %d commits for selection %r", len(records), selection)
    return records


def fetch_branch_name(repo_root: Path) -> str | None:
    """Return the checked out branch name, or ``None`` on a detached HEAD."""
    name = _git_command(repo_root, "rev-parse", "--abbrev-ref", "HEAD").strip()
    if not name or name == _DETACHED_HEAD:
        logger.debug("No branch checked out")
        return None
    return name


def staged_file_paths(repo_root: Path) -> frozenset[str]:
    output = _git_command(repo_root, "diff", "--cached", "--name-only")
    return frozenset(line.strip() for line in output.splitlines() if line.strip())


def git_config_value(repo_root: Path, key: str) -> str:
    """Return a git config value, or an empty string when it is not set."""
    try:
        completed = subprocess.run(
            ["git", "-C", str(repo_root), "config", "--get", key],
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        raise GitSourceError("E_GIT_UNAVAILABLE", f"unable to run git: {exc}") from exc
    if completed.returncode == 1:
        return ""
    if completed.returncode != 0:
        raise GitSourceError(
            "E_GIT_COMMAND_FAILED",
            f"git config --get {key} failed: {completed.stderr.strip()}",
        )
    return completed.stdout.strip()

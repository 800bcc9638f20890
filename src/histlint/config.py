from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

import yaml  # type: ignore[import-untyped]

_POLICY_KEY = "policy"


class LintConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class LintPolicy:
    subject_max_length: int = 50
    subject_min_length: int = 5
    body_line_max_length: int = 72
    body_min_length: int = 10
    require_body: bool = False
    require_message_ticket: bool = False
    allow_merge_commits: bool = False
    require_branch_ticket: bool = True
    branch_min_length: int = 4
    branch_max_length: int = 60

    def __post_init__(self) -> None:
        for name in (
            "subject_max_length",
            "subject_min_length",
            "body_line_max_length",
            "body_min_length",
            "branch_min_length",
            "branch_max_length",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be an integer >= 0")
        if self.subject_min_length > self.subject_max_length:
            raise ValueError("subject_min_length must be <= subject_max_length")
        if self.branch_min_length > self.branch_max_length:
            raise ValueError("branch_min_length must be <= branch_max_length")


DEFAULT_POLICY = LintPolicy()

_POLICY_FIELD_TYPES: dict[str, type] = {
    policy_field.name: bool if isinstance(policy_field.default, bool) else int
    for policy_field in fields(LintPolicy)
}


def load_lint_policy(path: Path) -> LintPolicy:
    payload = _read_yaml_file(path)
    return lint_policy_from_mapping(payload)


def lint_policy_from_mapping(payload: dict[str, object]) -> LintPolicy:
    _require_str_keys(payload, "lint config root")
    unknown_root_keys = sorted(key for key in payload if key != _POLICY_KEY)
    if unknown_root_keys:
        raise LintConfigError(
            "E_CONFIG_INVALID", f"unsupported top-level keys: {','.join(unknown_root_keys)}"
        )
    raw_policy = payload.get(_POLICY_KEY, {})
    if raw_policy is None:
        return DEFAULT_POLICY
    if not isinstance(raw_policy, dict):
        raise LintConfigError("E_CONFIG_INVALID", f"'{_POLICY_KEY}' must be a mapping")
    policy_data = cast(dict[str, object], raw_policy)
    _require_str_keys(policy_data, f"'{_POLICY_KEY}'")

    values: dict[str, object] = {}
    for key in sorted(policy_data):
        expected_type = _POLICY_FIELD_TYPES.get(key)
        if expected_type is None:
            raise LintConfigError("E_CONFIG_INVALID", f"unsupported policy key '{key}'")
        if expected_type is bool:
            values[key] = _require_bool(policy_data, key)
        else:
            values[key] = _require_int(policy_data, key)

    try:
        return LintPolicy(**values)  # type: ignore[arg-type]
    except ValueError as exc:
        raise LintConfigError("E_CONFIG_INVALID", str(exc)) from exc


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LintConfigError(
            "E_CONFIG_READ_FAILED",
            f"unable to read lint config '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise LintConfigError(
            "E_CONFIG_PARSE_FAILED",
            f"invalid lint config yaml in '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise LintConfigError("E_CONFIG_INVALID", "lint config root must be a mapping")
    return cast(dict[str, object], payload)


def _require_str_keys(data: dict[str, object], where: str) -> None:
    invalid = [repr(key) for key in data if not isinstance(key, str)]
    if invalid:
        raise LintConfigError(
            "E_CONFIG_INVALID", f"{where} keys must be strings: {','.join(invalid)}"
        )


def _require_bool(data: dict[str, object], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    raise LintConfigError("E_CONFIG_INVALID", f"missing or invalid bool for key '{key}'")


def _require_int(data: dict[str, object], key: str) -> int:
    value = data.get(key)
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise LintConfigError("E_CONFIG_INVALID", f"missing or invalid integer for key '{key}'")

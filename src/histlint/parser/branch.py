from __future__ import annotations

import re
from dataclasses import dataclass

from .text import codepoint_length

_SEGMENT_DELIMITERS = re.compile(r"[/_-]")
_TICKET_KEY_PATTERN = re.compile(r"(?:^|[/_-])([A-Z][A-Z0-9]+-\d+)(?=$|[/_-])")


@dataclass(frozen=True, slots=True)
class BranchName:
    raw: str
    segments: tuple[str, ...]
    has_ticket_reference: bool

    @property
    def length(self) -> int:
        return codepoint_length(self.raw)


def parse_branch_name(name: str) -> BranchName:
    segments = tuple(segment for segment in _SEGMENT_DELIMITERS.split(name) if segment)
    return BranchName(
        raw=name,
        segments=segments,
        has_ticket_reference=_has_ticket_reference(name, segments),
    )


def _has_ticket_reference(name: str, segments: tuple[str, ...]) -> bool:
    if _TICKET_KEY_PATTERN.search(name):
        return True
    return any(segment.isascii() and segment.isdigit() for segment in segments)

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

_SHORT_HASH_LENGTH = 7


@dataclass(frozen=True, slots=True)
class Trailer:
    key: str
    value: str

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("trailer key must be non-empty")


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """Raw commit data as supplied by a commit source.

    ``subject`` is the first line of the raw message and ``body`` everything
    after that line's newline, verbatim, so the blank separator line (when
    present) is the first line of ``body``. ``changed_file_paths`` is ``None``
    when the source does not know which files changed.
    """

    hash: str = ""
    subject: str = ""
    body: str = ""
    trailers: tuple[Trailer, ...] = ()
    author_name: str = ""
    author_email: str = ""
    changed_file_paths: frozenset[str] | None = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "trailers", tuple(self.trailers))
        if self.changed_file_paths is not None:
            object.__setattr__(self, "changed_file_paths", frozenset(self.changed_file_paths))

    @classmethod
    def from_message(  # noqa: PLR0913
        cls,
        message: str,
        *,
        hash: str = "",  # noqa: A002
        trailers: Iterable[Trailer] = (),
        author_name: str = "",
        author_email: str = "",
        changed_file_paths: Iterable[str] | None = None,
    ) -> CommitRecord:
        subject, _, body = message.partition("\n")
        return cls(
            hash=hash,
            subject=subject,
            body=body,
            trailers=tuple(trailers),
            author_name=author_name,
            author_email=author_email,
            changed_file_paths=(
                None if changed_file_paths is None else frozenset(changed_file_paths)
            ),
        )

    @property
    def message(self) -> str:
        if not self.body:
            return self.subject
        return f"{self.subject}\n{self.body}"

    @property
    def short_hash(self) -> str | None:
        if len(self.hash) < _SHORT_HASH_LENGTH:
            return None
        return self.hash[:_SHORT_HASH_LENGTH]

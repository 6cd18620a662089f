"""Immutable entry, report and event models."""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Optional

from dirkeeper._errors import BatchError

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from dirkeeper._errors import DirKeeperError, MutationError

ARCHIVE_SUFFIXES = frozenset({"zip", "tar", "gz", "tgz", "bz2", "xz", "7z", "rar"})
PACKAGE_DIRECTORY_SUFFIXES = frozenset({"app"})
CERTIFICATE_SUFFIXES = frozenset({"p12", "pfx"})


class SortKey(enum.Enum):
    """Keys the entry list can be ordered by."""

    NAME = "name"
    DATE = "date"
    TYPE = "type"


@dataclasses.dataclass(frozen=True, eq=False)
class Entry:
    """Immutable snapshot of one object inside the browsed directory.

    :param name: Display name (final path component).
    :param path: Absolute location; ``path.name`` must equal ``name``.
    :param size: Size in bytes, 0 for directories.
    :param created_at: Creation time, or ``None`` when unavailable.
    :param is_directory: Whether the object is a directory.
    """

    name: str
    path: Path
    size: int = 0
    created_at: Optional[datetime] = None
    is_directory: bool = False

    def __post_init__(self) -> None:
        if self.path.name != self.name:
            raise ValueError(f"Entry name {self.name!r} does not match path {str(self.path)!r}")

    @property
    def suffix(self) -> str:
        """Lower-cased extension without the dot, or empty string."""
        return self.path.suffix[1:].lower()

    @property
    def is_archive(self) -> bool:
        return not self.is_directory and self.suffix in ARCHIVE_SUFFIXES

    @property
    def is_package_directory(self) -> bool:
        return self.is_directory and self.suffix in PACKAGE_DIRECTORY_SUFFIXES

    @property
    def is_certificate_container(self) -> bool:
        return not self.is_directory and self.suffix in CERTIFICATE_SUFFIXES

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entry):
            return self.path == other.path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.path)


@dataclasses.dataclass(frozen=True)
class BatchReport:
    """Outcome of one bulk delete or import.

    :param operation: ``"delete"`` or ``"import"``.
    :param succeeded: Paths that were removed (delete) or written (import).
    :param failures: Per-item errors, in attempt order.
    """

    operation: str
    succeeded: tuple[Path, ...] = ()
    failures: tuple[MutationError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failures)

    def error(self) -> BatchError | None:
        """The aggregated error for this batch, or ``None`` if nothing failed."""
        if not self.failures:
            return None
        return BatchError(self.operation, self.failures)

    @property
    def message(self) -> str:
        """Single human-readable summary of the failures, or empty string."""
        err = self.error()
        return str(err) if err is not None else ""


class EventKind(enum.Enum):
    """Kinds of change notices delivered to state subscribers."""

    ENTRIES_CHANGED = "entries_changed"
    SELECTION_CHANGED = "selection_changed"
    DIRECTORY_CHANGED = "directory_changed"
    SORT_CHANGED = "sort_changed"
    OPERATION_FAILED = "operation_failed"
    OPERATION_SUCCEEDED = "operation_succeeded"


@dataclasses.dataclass(frozen=True)
class StateEvent:
    """One change notice.

    :param kind: What happened.
    :param error: The failure, for ``OPERATION_FAILED``.
    :param message: Human-readable text for operation notices.
    """

    kind: EventKind
    error: Optional[DirKeeperError] = None
    message: str = ""

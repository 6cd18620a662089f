"""Normalized error hierarchy for dirkeeper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from collections.abc import Sequence


class DirKeeperError(Exception):
    """Base class for all dirkeeper errors.

    :param message: Human-readable error description.
    :param path: The filesystem path involved in the error, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)

    @property
    def message(self) -> str:
        """The bare human-readable description, without context fields."""
        return super().__str__()

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} | path={self.path!r}"
        return self.message

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.message)]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        return f"{cls}({', '.join(args)})"


class NotFound(DirKeeperError):
    """Raised when a file or folder does not exist."""


class AlreadyExists(DirKeeperError):
    """Raised when a target already exists."""


class PermissionDenied(DirKeeperError):
    """Raised when the operating system denies access."""


class EnumerationError(DirKeeperError):
    """Raised when a directory cannot be listed at all."""


class NamingExhausted(DirKeeperError):
    """Raised by strict name resolution when every probe collides."""


class InvalidPassword(DirKeeperError):
    """Raised by a certificate importer when the password is rejected."""


class MutationError(DirKeeperError):
    """A single item failed during a create, rename, delete or import.

    :param item_name: Display name of the item that failed.
    :param operation: Operation name (``"delete"``, ``"import"``, ...).
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        item_name: str = "",
        operation: str = "",
    ) -> None:
        self.item_name = item_name
        self.operation = operation
        super().__init__(message, path=path)

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.message)]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.item_name:
            args.append(f"item_name={self.item_name!r}")
        if self.operation:
            args.append(f"operation={self.operation!r}")
        return f"{cls}({', '.join(args)})"


_NOUNS = {"delete": "item", "import": "file"}


class BatchError(DirKeeperError):
    """Aggregated outcome of the failed items of one bulk operation.

    ``str()`` is the single user-facing summary, e.g. ``"Failed to delete 2 items"``.

    :param operation: Bulk operation name.
    :param failures: The per-item errors, in the order they happened.
    """

    def __init__(self, operation: str, failures: Sequence[MutationError]) -> None:
        self.operation = operation
        self.failures = tuple(failures)
        count = len(self.failures)
        noun = _NOUNS.get(operation, "item")
        super().__init__(f"Failed to {operation} {count} {noun}{'' if count == 1 else 's'}")

    @property
    def count(self) -> int:
        return len(self.failures)

    @property
    def item_names(self) -> tuple[str, ...]:
        return tuple(f.item_name for f in self.failures)

    def __repr__(self) -> str:
        return f"BatchError(operation={self.operation!r}, failures={self.count})"

"""Backend abstract base class — the filesystem contract the engine relies on."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from dirkeeper._models import Entry


class Backend(abc.ABC):
    """Abstract base class for filesystem backends.

    Every backend must implement all abstract methods. Native exceptions
    must never leak — they must be mapped to ``dirkeeper`` errors.
    All paths are absolute.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Unique identifier for this backend type (e.g. ``'local'``)."""

    @abc.abstractmethod
    def exists(self, path: Path) -> bool:
        """Check if anything (including a dangling link) is at ``path``. Never raises."""

    @abc.abstractmethod
    def iter_children(self, directory: Path) -> Iterator[Path]:
        """Yield the direct children of ``directory``.

        :raises NotFound: If the directory does not exist.
        :raises PermissionDenied: If it cannot be read.
        """

    @abc.abstractmethod
    def stat_entry(self, path: Path) -> Entry:
        """Read the metadata of one object.

        :raises NotFound: If the object vanished.
        """

    @abc.abstractmethod
    def delete(self, path: Path) -> None:
        """Delete a file, or a directory together with its contents.

        :raises NotFound: If nothing is at ``path``.
        """

    @abc.abstractmethod
    def copy(self, src: Path, dst: Path) -> None:
        """Copy a file or directory tree.

        :raises NotFound: If ``src`` does not exist.
        :raises AlreadyExists: If ``dst`` exists.
        """

    @abc.abstractmethod
    def move(self, src: Path, dst: Path) -> None:
        """Move/rename a file or directory.

        :raises NotFound: If ``src`` does not exist.
        :raises AlreadyExists: If ``dst`` exists.
        """

    @abc.abstractmethod
    def make_folder(self, path: Path) -> None:
        """Create a directory and any missing parents. Existing directories are fine."""

    @abc.abstractmethod
    def create_file(self, path: Path, content: bytes = b"") -> None:
        """Create a new file.

        :raises AlreadyExists: If ``path`` exists.
        """

    def close(self) -> None:  # noqa: B027
        """Release resources. Default is a no-op."""

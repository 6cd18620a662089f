"""Filesystem mutations with per-item failure isolation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from dirkeeper._errors import DirKeeperError, MutationError, NotFound
from dirkeeper._models import BatchReport
from dirkeeper._naming import INVALID_NAME_CHARS, MAX_NAME_ATTEMPTS, resolve_unique_path, sanitize_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from dirkeeper._backend import Backend
    from dirkeeper._models import Entry
    from dirkeeper._types import PathLike

log = logging.getLogger(__name__)


class BulkMutator:
    """Performs the filesystem side of create, rename, delete and import.

    Nothing here touches directory state; callers decide how results are
    applied. Bulk methods never raise for a single item's failure, they
    collect it in the returned :class:`BatchReport`.

    :param backend: Backend used for every filesystem call.
    :param max_name_attempts: Probe ceiling for collision-free names.
    :param invalid_chars: Characters stripped from user-supplied names.
    """

    def __init__(
        self,
        backend: Backend,
        *,
        max_name_attempts: int = MAX_NAME_ATTEMPTS,
        invalid_chars: str = INVALID_NAME_CHARS,
    ) -> None:
        self._backend = backend
        self._max_name_attempts = max_name_attempts
        self._invalid_chars = invalid_chars

    def __repr__(self) -> str:
        return f"BulkMutator(backend={self._backend.name!r})"

    def sanitize(self, name: str) -> str:
        return sanitize_name(name, self._invalid_chars)

    def unique_path(self, desired: Path) -> Path:
        """Collision-free variant of ``desired``, checked against the backend."""
        return resolve_unique_path(desired, exists=self._backend.exists, max_attempts=self._max_name_attempts)

    # region: bulk operations
    def delete_many(self, entries: Iterable[Entry], on_removed: Callable[[Entry], None] | None = None) -> BatchReport:
        """Delete every entry, calling ``on_removed`` after each success.

        :param entries: Entries to delete.
        :param on_removed: Called with each entry as soon as it is gone.
        """
        succeeded: list[Path] = []
        failures: list[MutationError] = []
        for entry in entries:
            try:
                self._backend.delete(entry.path)
            except DirKeeperError as exc:
                log.debug("Delete failed for %s: %s", entry.path, exc)
                failures.append(_item_error(exc, entry.path, "delete"))
                continue
            succeeded.append(entry.path)
            if on_removed is not None:
                on_removed(entry)
        return BatchReport("delete", tuple(succeeded), tuple(failures))

    def import_many(self, sources: Iterable[PathLike], directory: Path) -> BatchReport:
        """Copy every source into ``directory`` under a collision-free name."""
        succeeded: list[Path] = []
        failures: list[MutationError] = []
        for raw in sources:
            source = Path(raw)
            try:
                if not self._backend.exists(source):
                    raise NotFound(f"Source file not accessible: {source.name}", path=str(source))
                destination = self.unique_path(directory / source.name)
                self._backend.copy(source, destination)
            except DirKeeperError as exc:
                log.debug("Import failed for %s: %s", source, exc)
                failures.append(_item_error(exc, source, "import"))
                continue
            succeeded.append(destination)
        return BatchReport("import", tuple(succeeded), tuple(failures))

    # endregion

    # region: single-item operations
    def create_folder(self, directory: Path, name: str) -> Path | None:
        """Create ``directory/name``; returns ``None`` for blank names.

        :raises MutationError: If the folder cannot be created.
        """
        clean = self.sanitize(name.strip())
        if not clean:
            return None
        target = directory / clean
        try:
            self._backend.make_folder(target)
        except DirKeeperError as exc:
            raise MutationError(
                f"Error creating folder: {exc.message}", path=str(target), item_name=clean, operation="create_folder"
            ) from exc
        return target

    def create_text_file(self, directory: Path, name: str) -> Path | None:
        """Create an empty file, suffixing the name if it is taken.

        :raises MutationError: If the file cannot be written.
        """
        clean = self.sanitize(name.strip())
        if not clean:
            return None
        target = self.unique_path(directory / clean)
        try:
            self._backend.create_file(target)
        except DirKeeperError as exc:
            raise MutationError(
                f"Error creating text file: {exc.message}",
                path=str(target),
                item_name=target.name,
                operation="create_text_file",
            ) from exc
        return target

    def rename(self, entry: Entry, new_name: str) -> Path | None:
        """Move ``entry`` to ``new_name`` in the same directory.

        An existing target is not renamed around; the move fails instead.

        :raises MutationError: If the move fails.
        """
        if not new_name:
            return None
        clean = self.sanitize(new_name)
        if not clean:
            return None
        target = entry.path.parent / clean
        try:
            self._backend.move(entry.path, target)
        except DirKeeperError as exc:
            raise MutationError(
                f"Error renaming file: {exc.message}", path=str(entry.path), item_name=entry.name, operation="rename"
            ) from exc
        return target

    # endregion


def _item_error(exc: DirKeeperError, path: Path, operation: str) -> MutationError:
    err = MutationError(exc.message, path=str(path), item_name=path.name, operation=operation)
    err.__cause__ = exc
    return err

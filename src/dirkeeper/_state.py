"""DirectoryState — the observable state container for one browsed directory."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TypeVar

from dirkeeper._dispatch import Dispatcher
from dirkeeper._errors import DirKeeperError, EnumerationError, InvalidPassword, MutationError
from dirkeeper._listing import list_directory
from dirkeeper._models import BatchReport, EventKind, SortKey, StateEvent
from dirkeeper._mutator import BulkMutator
from dirkeeper._naming import INVALID_NAME_CHARS, MAX_NAME_ATTEMPTS
from dirkeeper._sorting import sort_entries
from dirkeeper.backends._local import LocalBackend

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import TracebackType

    from dirkeeper._backend import Backend
    from dirkeeper._config import BrowserConfig
    from dirkeeper._models import Entry
    from dirkeeper._services import ArchiveService, CertificateImporter
    from dirkeeper._types import Listener, PasswordPrompt, PathLike

T = TypeVar("T")

log = logging.getLogger(__name__)


def _completed(value: T) -> Future[T]:
    future: Future[T] = Future()
    future.set_result(value)
    return future


class DirectoryState:
    """Current directory, its sorted entries, the selection and the sort preference.

    State is only ever written on the dispatcher's state thread, one mutation
    at a time. Reads return immutable snapshots and are safe from any thread.

    Single-item operations (:meth:`load`, :meth:`create_folder`, :meth:`rename`,
    ...) block the caller until applied. Bulk operations (:meth:`delete_many`,
    :meth:`import_files`) and collaborator calls return a
    :class:`~concurrent.futures.Future` right away; it resolves once the last
    state change of that operation has been applied.

    Failures are never raised from operations. They are delivered to
    subscribers as one ``OPERATION_FAILED`` event per operation.

    :param directory: Directory to browse.
    :param backend: Filesystem backend, :class:`LocalBackend` by default.
    :param sort_key: Initial sort key.
    :param sort_ascending: Initial sort direction.
    :param max_name_attempts: Probe ceiling for collision-free names.
    :param invalid_chars: Characters stripped from user-supplied names.
    :param bulk_workers: Size of the background pool.
    :param certificates: Optional certificate import collaborator.
    :param archives: Optional archive collaborator.
    """

    def __init__(
        self,
        directory: PathLike,
        *,
        backend: Optional[Backend] = None,
        sort_key: SortKey | str = SortKey.NAME,
        sort_ascending: bool = True,
        max_name_attempts: int = MAX_NAME_ATTEMPTS,
        invalid_chars: str = INVALID_NAME_CHARS,
        bulk_workers: int = 1,
        certificates: Optional[CertificateImporter] = None,
        archives: Optional[ArchiveService] = None,
    ) -> None:
        self._backend = backend if backend is not None else LocalBackend()
        self._mutator = BulkMutator(self._backend, max_name_attempts=max_name_attempts, invalid_chars=invalid_chars)
        self._dispatcher = Dispatcher(bulk_workers)
        self._certificates = certificates
        self._archives = archives

        self._directory = Path(directory).absolute()
        self._entries: tuple[Entry, ...] = ()
        self._selection: frozenset[Entry] = frozenset()
        self._selecting = False
        self._sort_key = SortKey(sort_key)
        self._sort_ascending = sort_ascending

        self._listeners: list[Listener] = []
        self._listeners_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: BrowserConfig,
        *,
        backend: Optional[Backend] = None,
        certificates: Optional[CertificateImporter] = None,
        archives: Optional[ArchiveService] = None,
    ) -> DirectoryState:
        """Build a state from a validated :class:`BrowserConfig`."""
        config.validate()
        return cls(
            config.root,
            backend=backend,
            sort_key=config.sort_key,
            sort_ascending=config.sort_ascending,
            max_name_attempts=config.max_name_attempts,
            invalid_chars=config.invalid_chars,
            bulk_workers=config.bulk_workers,
            certificates=certificates,
            archives=archives,
        )

    def __repr__(self) -> str:
        return f"DirectoryState(directory={str(self._directory)!r}, entries={len(self._entries)})"

    # region: read access
    @property
    def current_directory(self) -> Path:
        return self._directory

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Entries in the active sort order."""
        return self._entries

    @property
    def selection(self) -> frozenset[Entry]:
        return self._selection

    @property
    def selecting(self) -> bool:
        """Whether bulk-selection mode is active."""
        return self._selecting

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def sort_ascending(self) -> bool:
        return self._sort_ascending

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state events and return a function that removes it.

        Listeners run on the state thread.
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # endregion

    # region: listing and sorting
    def load(self) -> bool:
        """Re-list the current directory. Returns ``False`` if it could not be listed."""
        return self._dispatcher.call(self._load)

    def change_directory(self, directory: PathLike) -> bool:
        """Switch to ``directory``, dropping entries and selection, then load it."""
        return self._dispatcher.call(self._change_directory, Path(directory).absolute())

    def update_sort(self, key: SortKey | str, ascending: bool) -> None:
        """Change the sort preference and re-sort in memory."""
        self._dispatcher.call(self._update_sort, SortKey(key), ascending)

    # endregion

    # region: selection
    def select(self, entry: Entry) -> None:
        self._dispatcher.call(self._change_selection, lambda s: s | {entry})

    def deselect(self, entry: Entry) -> None:
        self._dispatcher.call(self._change_selection, lambda s: s - {entry})

    def toggle_selection(self, entry: Entry) -> None:
        self._dispatcher.call(self._change_selection, lambda s: s - {entry} if entry in s else s | {entry})

    def select_all(self) -> None:
        self._dispatcher.call(self._change_selection, lambda s: frozenset(self._entries))

    def clear_selection(self) -> None:
        self._dispatcher.call(self._change_selection, lambda s: frozenset())

    def set_selecting(self, selecting: bool) -> None:
        """Enter or leave bulk-selection mode."""
        self._dispatcher.call(self._set_selecting, selecting)

    # endregion

    # region: single-item operations
    def create_folder(self, name: str) -> Optional[Path]:
        """Create a folder in the current directory. Blank names are ignored."""
        return self._dispatcher.call(self._run_single, lambda: self._mutator.create_folder(self._directory, name))

    def create_text_file(self, name: str) -> Optional[Path]:
        """Create an empty file under a collision-free name. Blank names are ignored."""
        return self._dispatcher.call(
            self._run_single, lambda: self._mutator.create_text_file(self._directory, name)
        )

    def rename(self, entry: Entry, new_name: str) -> Optional[Path]:
        """Rename ``entry``. Fails, rather than renumbering, if the name is taken."""
        return self._dispatcher.call(self._run_single, lambda: self._mutator.rename(entry, new_name))

    # endregion

    # region: bulk operations
    def delete(self, entry: Entry) -> Future[BatchReport]:
        return self.delete_many([entry])

    def delete_selected(self) -> Future[BatchReport]:
        return self.delete_many(self._selection)

    def delete_many(self, entries: Iterable[Entry]) -> Future[BatchReport]:
        """Delete ``entries`` in the background.

        Entries disappear from :attr:`entries` one by one as they are removed.
        Afterwards the selection is cleared and selection mode is left, and a
        single ``OPERATION_FAILED`` event reports how many items failed.
        """
        items = list(entries)
        if not items:
            return _completed(BatchReport("delete"))
        log.debug("Scheduling delete of %d items", len(items))
        return self._dispatcher.run_in_background(self._delete_task, items)

    def import_files(self, sources: Iterable[PathLike]) -> Future[BatchReport]:
        """Copy ``sources`` into the current directory in the background.

        Each copy gets a collision-free name. The directory is reloaded once
        at the end, then failures are reported as a single event.
        """
        paths = [Path(s) for s in sources]
        if not paths:
            return _completed(BatchReport("import"))
        log.debug("Scheduling import of %d items into %s", len(paths), self._directory)
        return self._dispatcher.run_in_background(self._import_task, paths, self._directory)

    # endregion

    # region: collaborators
    def import_certificate(self, entry: Entry, ask_password: Optional[PasswordPrompt] = None) -> Future[Optional[str]]:
        """Import a certificate container through the certificate collaborator.

        The first attempt uses an empty password. If that is rejected,
        ``ask_password`` is called once (on a background thread); returning
        ``None`` cancels silently, and a prompt that raises is reported as
        a failed operation.
        """
        if self._certificates is None or not entry.is_certificate_container:
            return _completed(None)
        return self._dispatcher.run_in_background(
            self._import_certificate_task, self._certificates, entry, ask_password
        )

    def extract_archive(self, entry: Entry) -> Future[bool]:
        """Extract an archive entry into the current directory."""
        if self._archives is None or not entry.is_archive:
            return _completed(False)
        return self._dispatcher.run_in_background(self._extract_task, self._archives, entry, self._directory)

    def package_app(self, entry: Entry) -> Future[Optional[str]]:
        """Package a directory bundle as an archive in the current directory."""
        if self._archives is None or not entry.is_package_directory:
            return _completed(None)
        return self._dispatcher.run_in_background(self._package_task, self._archives, entry, self._directory)

    # endregion

    # region: lifecycle
    def close(self) -> None:
        """Wait for pending work, then stop the worker threads and the backend."""
        self._dispatcher.close()
        self._backend.close()

    def __enter__(self) -> DirectoryState:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # endregion

    # region: state thread only
    def _emit(self, kind: EventKind, *, error: Optional[DirKeeperError] = None, message: str = "") -> None:
        event = StateEvent(kind, error=error, message=message)
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                log.exception("State listener %r failed on %s", listener, kind.value)

    def _fail(self, error: DirKeeperError) -> None:
        self._emit(EventKind.OPERATION_FAILED, error=error, message=error.message)

    def _succeed(self, message: str) -> None:
        self._emit(EventKind.OPERATION_SUCCEEDED, message=message)

    def _apply_entries(self, entries: Iterable[Entry]) -> None:
        self._entries = tuple(sort_entries(entries, self._sort_key, self._sort_ascending))
        self._emit(EventKind.ENTRIES_CHANGED)
        kept = frozenset(e for e in self._entries if e in self._selection)
        if kept != self._selection:
            self._selection = kept
            self._emit(EventKind.SELECTION_CHANGED)

    def _load(self) -> bool:
        try:
            entries = list_directory(self._backend, self._directory)
        except EnumerationError as exc:
            log.warning("Could not list %s: %s", self._directory, exc)
            self._fail(exc)
            return False
        self._apply_entries(entries)
        log.debug("Loaded %d entries from %s", len(self._entries), self._directory)
        return True

    def _change_directory(self, directory: Path) -> bool:
        self._directory = directory
        self._entries = ()
        self._selection = frozenset()
        self._selecting = False
        self._emit(EventKind.DIRECTORY_CHANGED)
        return self._load()

    def _update_sort(self, key: SortKey, ascending: bool) -> None:
        self._sort_key = key
        self._sort_ascending = ascending
        log.debug("Sorting by %s (%s)", key.value, "ascending" if ascending else "descending")
        self._emit(EventKind.SORT_CHANGED)
        self._apply_entries(self._entries)

    def _change_selection(self, change: Callable[[frozenset[Entry]], frozenset[Entry]]) -> None:
        present = frozenset(self._entries)
        selection = frozenset(e for e in change(self._selection) if e in present)
        if selection != self._selection:
            self._selection = selection
            self._emit(EventKind.SELECTION_CHANGED)

    def _set_selecting(self, selecting: bool) -> None:
        if selecting != self._selecting:
            self._selecting = selecting
            self._emit(EventKind.SELECTION_CHANGED)

    def _run_single(self, operation: Callable[[], Optional[Path]]) -> Optional[Path]:
        try:
            result = operation()
        except MutationError as exc:
            log.warning("%s failed: %s", exc.operation, exc)
            self._fail(exc)
            return None
        if result is not None:
            self._load()
        return result

    def _remove_entry(self, entry: Entry) -> None:
        if entry in self._entries:
            self._apply_entries(e for e in self._entries if e != entry)

    def _finish_delete(self, report: BatchReport) -> None:
        changed = bool(self._selection) or self._selecting
        self._selection = frozenset()
        self._selecting = False
        if changed:
            self._emit(EventKind.SELECTION_CHANGED)
        self._report(report)

    def _finish_import(self, report: BatchReport) -> None:
        self._load()
        self._report(report)

    def _report(self, report: BatchReport) -> None:
        error = report.error()
        if error is None:
            log.info("%s finished: %d items", report.operation, len(report.succeeded))
            return
        log.warning("%s finished: %d succeeded, %d failed", report.operation, len(report.succeeded), error.count)
        self._fail(error)

    def _succeed_and_reload(self, message: str) -> None:
        self._load()
        self._succeed(message)

    # endregion

    # region: background tasks
    def _delete_task(self, items: list[Entry]) -> BatchReport:
        report = self._mutator.delete_many(items, on_removed=lambda e: self._dispatcher.post(self._remove_entry, e))
        self._dispatcher.call(self._finish_delete, report)
        return report

    def _import_task(self, sources: list[Path], directory: Path) -> BatchReport:
        report = self._mutator.import_many(sources, directory)
        self._dispatcher.call(self._finish_import, report)
        return report

    def _import_certificate_task(
        self, certificates: CertificateImporter, entry: Entry, ask_password: Optional[PasswordPrompt]
    ) -> Optional[str]:
        try:
            associated = certificates.find_associated_file(entry)
            try:
                message = certificates.import_bundle(entry, associated, "")
            except InvalidPassword:
                if ask_password is None:
                    raise
                try:
                    password = ask_password()
                except Exception as prompt_exc:
                    log.exception("Password prompt failed for %s", entry.path)
                    raise DirKeeperError(f"Password prompt failed: {prompt_exc}", path=str(entry.path)) from prompt_exc
                if password is None:
                    return None
                message = certificates.import_bundle(entry, associated, password)
        except DirKeeperError as exc:
            self._dispatcher.call(self._fail, exc)
            return None
        self._dispatcher.call(self._succeed, message)
        return message

    def _extract_task(self, archives: ArchiveService, entry: Entry, directory: Path) -> bool:
        try:
            archives.extract(entry, directory)
        except DirKeeperError as exc:
            error = MutationError(
                f"Error extracting archive: {exc.message}",
                path=str(entry.path),
                item_name=entry.name,
                operation="extract",
            )
            self._dispatcher.call(self._fail, error)
            return False
        self._dispatcher.call(self._succeed_and_reload, "File extracted successfully")
        return True

    def _package_task(self, archives: ArchiveService, entry: Entry, directory: Path) -> Optional[str]:
        try:
            output = archives.package_directory(entry, directory)
        except DirKeeperError as exc:
            error = MutationError(
                f"Failed to package {entry.name}: {exc.message}",
                path=str(entry.path),
                item_name=entry.name,
                operation="package",
            )
            self._dispatcher.call(self._fail, error)
            return None
        self._dispatcher.call(self._succeed_and_reload, f"Successfully packaged {entry.name} as {output}")
        return output

    # endregion

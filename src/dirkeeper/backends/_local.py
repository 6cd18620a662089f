"""Local filesystem backend — stdlib-only reference implementation."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from dirkeeper._backend import Backend
from dirkeeper._errors import AlreadyExists, DirKeeperError, NotFound, PermissionDenied
from dirkeeper._models import Entry

if TYPE_CHECKING:
    from collections.abc import Iterator


class LocalBackend(Backend):
    """Local filesystem backend using only the Python standard library."""

    @property
    def name(self) -> str:
        return "local"

    # region: error mapping
    @contextmanager
    def _errors(self, path: Path) -> Iterator[None]:
        """Map ``OSError`` subclasses to dirkeeper errors."""
        try:
            yield
        except DirKeeperError:
            raise
        except FileNotFoundError:
            raise NotFound(f"No such file or directory: {path.name}", path=str(path)) from None
        except FileExistsError:
            raise AlreadyExists(f"Already exists: {path.name}", path=str(path)) from None
        except PermissionError:
            raise PermissionDenied(f"Permission denied: {path.name}", path=str(path)) from None
        except OSError as exc:
            if exc.errno == errno.ENOTEMPTY:
                raise AlreadyExists(f"Directory not empty: {path.name}", path=str(path)) from None
            raise DirKeeperError(exc.strerror or str(exc), path=str(path)) from None
        except (OverflowError, ValueError) as exc:
            # Out-of-range timestamps from stat.
            raise DirKeeperError(f"Unreadable metadata: {exc}", path=str(path)) from None

    # endregion

    # region: existence checks
    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    # endregion

    # region: listing and metadata
    def iter_children(self, directory: Path) -> Iterator[Path]:
        with self._errors(directory):
            if not directory.is_dir():
                if directory.exists():
                    raise NotFound(f"Not a directory: {directory.name}", path=str(directory))
                raise NotFound(f"No such file or directory: {directory.name}", path=str(directory))
            # Materialize so enumeration errors surface here, not mid-iteration.
            children = [Path(e.path) for e in os.scandir(directory)]
        yield from children

    def stat_entry(self, path: Path) -> Entry:
        with self._errors(path):
            st = path.stat()
            is_directory = stat.S_ISDIR(st.st_mode)
            birth = getattr(st, "st_birthtime", None)
            created = birth if birth is not None else st.st_ctime
            created_at = datetime.fromtimestamp(created, tz=timezone.utc)
        return Entry(
            name=path.name,
            path=path,
            size=0 if is_directory else st.st_size,
            created_at=created_at,
            is_directory=is_directory,
        )

    # endregion

    # region: mutations
    def delete(self, path: Path) -> None:
        with self._errors(path):
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()

    def copy(self, src: Path, dst: Path) -> None:
        if not self.exists(src):
            raise NotFound(f"Source does not exist: {src.name}", path=str(src))
        if self.exists(dst):
            raise AlreadyExists(f"Destination already exists: {dst.name}", path=str(dst))
        with self._errors(src):
            if src.is_dir():
                shutil.copytree(src, dst, symlinks=True)
            else:
                shutil.copy2(src, dst)

    def move(self, src: Path, dst: Path) -> None:
        if not self.exists(src):
            raise NotFound(f"Source does not exist: {src.name}", path=str(src))
        if self.exists(dst):
            raise AlreadyExists(f"Destination already exists: {dst.name}", path=str(dst))
        with self._errors(src):
            shutil.move(str(src), str(dst))

    def make_folder(self, path: Path) -> None:
        with self._errors(path):
            path.mkdir(parents=True, exist_ok=True)

    def create_file(self, path: Path, content: bytes = b"") -> None:
        with self._errors(path):
            with path.open("xb") as fh:
                fh.write(content)

    # endregion

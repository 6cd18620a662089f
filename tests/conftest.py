"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from dirkeeper._errors import PermissionDenied
from dirkeeper._state import DirectoryState
from dirkeeper.backends._local import LocalBackend

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from dirkeeper._models import StateEvent


class LockedBackend(LocalBackend):
    """Local backend that refuses to delete or copy selected paths."""

    def __init__(self) -> None:
        super().__init__()
        self.locked: set[Path] = set()

    def delete(self, path: Path) -> None:
        if path in self.locked:
            raise PermissionDenied(f"Permission denied: {path.name}", path=str(path))
        super().delete(path)

    def copy(self, src: Path, dst: Path) -> None:
        if src in self.locked:
            raise PermissionDenied(f"Permission denied: {src.name}", path=str(src))
        super().copy(src, dst)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    d = tmp_path / "work"
    d.mkdir()
    return d


@pytest.fixture
def backend() -> LockedBackend:
    return LockedBackend()


@pytest.fixture
def events() -> list[StateEvent]:
    return []


@pytest.fixture
def state(workdir: Path, backend: LockedBackend, events: list[StateEvent]) -> Iterator[DirectoryState]:
    st = DirectoryState(workdir, backend=backend)
    st.subscribe(events.append)
    yield st
    st.close()

"""Local backend specific tests."""

from __future__ import annotations

import os
import stat
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from dirkeeper._errors import AlreadyExists, DirKeeperError, NotFound
from dirkeeper.backends._local import LocalBackend


@pytest.fixture
def local_backend() -> LocalBackend:
    return LocalBackend()


class TestLocalBackendIdentity:
    def test_name(self, local_backend: LocalBackend) -> None:
        assert local_backend.name == "local"


class TestLocalBackendExistence:
    def test_exists(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a").touch()
        assert local_backend.exists(tmp_path / "a") is True
        assert local_backend.exists(tmp_path / "b") is False


class TestLocalBackendErrorMapping:
    def test_delete_missing_maps_to_not_found(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        with pytest.raises(NotFound) as exc_info:
            local_backend.delete(tmp_path / "nope.txt")
        assert exc_info.value.path == str(tmp_path / "nope.txt")

    def test_iter_children_missing_directory(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        with pytest.raises(NotFound):
            list(local_backend.iter_children(tmp_path / "nope"))

    def test_create_file_existing(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"keep")
        with pytest.raises(AlreadyExists):
            local_backend.create_file(tmp_path / "a.txt")
        assert (tmp_path / "a.txt").read_bytes() == b"keep"

    def test_make_folder_over_file(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a").touch()
        with pytest.raises(AlreadyExists):
            local_backend.make_folder(tmp_path / "a")


class TestLocalBackendMutations:
    def test_delete_file(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").touch()
        local_backend.delete(tmp_path / "a.txt")
        assert not (tmp_path / "a.txt").exists()

    def test_delete_folder_recursively(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "d" / "e").mkdir(parents=True)
        (tmp_path / "d" / "e" / "f.txt").touch()
        local_backend.delete(tmp_path / "d")
        assert not (tmp_path / "d").exists()

    def test_copy_file_keeps_source(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"data")
        local_backend.copy(tmp_path / "a.txt", tmp_path / "b.txt")
        assert (tmp_path / "a.txt").read_bytes() == b"data"
        assert (tmp_path / "b.txt").read_bytes() == b"data"

    def test_copy_tree(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "src" / "inner").mkdir(parents=True)
        (tmp_path / "src" / "inner" / "x.txt").write_bytes(b"x")
        local_backend.copy(tmp_path / "src", tmp_path / "dst")
        assert (tmp_path / "dst" / "inner" / "x.txt").read_bytes() == b"x"

    def test_copy_refuses_existing_destination(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").touch()
        (tmp_path / "b.txt").write_bytes(b"keep")
        with pytest.raises(AlreadyExists):
            local_backend.copy(tmp_path / "a.txt", tmp_path / "b.txt")
        assert (tmp_path / "b.txt").read_bytes() == b"keep"

    def test_copy_missing_source(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        with pytest.raises(NotFound):
            local_backend.copy(tmp_path / "nope", tmp_path / "b")

    def test_move(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"data")
        local_backend.move(tmp_path / "a.txt", tmp_path / "b.txt")
        assert not (tmp_path / "a.txt").exists()
        assert (tmp_path / "b.txt").read_bytes() == b"data"

    def test_move_refuses_existing_destination(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.txt").touch()
        (tmp_path / "b.txt").touch()
        with pytest.raises(AlreadyExists):
            local_backend.move(tmp_path / "a.txt", tmp_path / "b.txt")
        assert (tmp_path / "a.txt").exists()

    def test_make_folder_creates_parents_and_tolerates_existing(
        self, local_backend: LocalBackend, tmp_path: Path
    ) -> None:
        local_backend.make_folder(tmp_path / "x" / "y")
        local_backend.make_folder(tmp_path / "x" / "y")
        assert (tmp_path / "x" / "y").is_dir()

    def test_stat_entry(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "a.bin").write_bytes(b"\x00" * 7)
        entry = local_backend.stat_entry(tmp_path / "a.bin")
        assert entry.name == "a.bin"
        assert entry.size == 7

    def test_stat_entry_epoch_ctime(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "old.txt").touch()
        result = os.stat_result((stat.S_IFREG | 0o644, 0, 0, 1, 0, 0, 3, 0, 0, 0))
        with patch.object(Path, "stat", return_value=result):
            entry = local_backend.stat_entry(tmp_path / "old.txt")
        assert entry.created_at == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert entry.size == 3

    def test_stat_entry_out_of_range_ctime(self, local_backend: LocalBackend, tmp_path: Path) -> None:
        (tmp_path / "future.txt").touch()
        result = os.stat_result((stat.S_IFREG | 0o644, 0, 0, 1, 0, 0, 1, 0, 0, 10**20))
        with patch.object(Path, "stat", return_value=result), pytest.raises(DirKeeperError) as exc_info:
            local_backend.stat_entry(tmp_path / "future.txt")
        assert exc_info.value.path == str(tmp_path / "future.txt")
        assert exc_info.value.message.startswith("Unreadable metadata:")

"""Tests for the error hierarchy."""

from __future__ import annotations

from dirkeeper._errors import (
    AlreadyExists,
    BatchError,
    DirKeeperError,
    EnumerationError,
    InvalidPassword,
    MutationError,
    NamingExhausted,
    NotFound,
    PermissionDenied,
)


class TestBaseError:
    def test_default_attributes(self) -> None:
        e = DirKeeperError("boom")
        assert e.path is None
        assert e.message == "boom"
        assert str(e) == "boom"

    def test_with_path(self) -> None:
        e = DirKeeperError("boom", path="/tmp/a.txt")
        assert e.path == "/tmp/a.txt"
        assert e.message == "boom"
        assert "/tmp/a.txt" in str(e)

    def test_repr_includes_class_name(self) -> None:
        r = repr(NotFound("File not found", path="/data/file.txt"))
        assert r.startswith("NotFound(")
        assert "/data/file.txt" in r


class TestFlatHierarchy:
    def test_all_errors_inherit_directly_from_base(self) -> None:
        concrete = [
            NotFound,
            AlreadyExists,
            PermissionDenied,
            EnumerationError,
            NamingExhausted,
            InvalidPassword,
            MutationError,
            BatchError,
        ]
        for cls in concrete:
            assert cls.__mro__[1] is DirKeeperError, f"{cls.__name__} does not directly inherit DirKeeperError"


class TestMutationError:
    def test_structured_fields(self) -> None:
        e = MutationError("Permission denied", path="/w/a.txt", item_name="a.txt", operation="delete")
        assert e.item_name == "a.txt"
        assert e.operation == "delete"
        assert "item_name='a.txt'" in repr(e)


class TestBatchError:
    def _failures(self, n: int, operation: str) -> list[MutationError]:
        return [MutationError("x", item_name=f"f{i}", operation=operation) for i in range(n)]

    def test_singular_delete_message(self) -> None:
        e = BatchError("delete", self._failures(1, "delete"))
        assert str(e) == "Failed to delete 1 item"
        assert e.count == 1

    def test_plural_delete_message(self) -> None:
        assert str(BatchError("delete", self._failures(3, "delete"))) == "Failed to delete 3 items"

    def test_import_message_counts_files(self) -> None:
        assert str(BatchError("import", self._failures(2, "import"))) == "Failed to import 2 files"
        assert str(BatchError("import", self._failures(1, "import"))) == "Failed to import 1 file"

    def test_item_names_keep_order(self) -> None:
        e = BatchError("delete", self._failures(3, "delete"))
        assert e.item_names == ("f0", "f1", "f2")
        assert "failures=3" in repr(e)

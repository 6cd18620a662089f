"""Tests for BrowserConfig."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from dirkeeper._config import BrowserConfig, default_root


class TestDefaults:
    def test_defaults(self) -> None:
        cfg = BrowserConfig(root="/data")
        assert cfg.sort_key == "name"
        assert cfg.sort_ascending is True
        assert cfg.max_name_attempts == 1000
        assert cfg.invalid_chars == '/:?*<>|"\\'
        assert cfg.bulk_workers == 1

    def test_default_root_is_under_home(self) -> None:
        root = Path(default_root())
        assert root == Path.home() or root.parent == Path.home()

    def test_frozen(self) -> None:
        cfg = BrowserConfig(root="/data")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.root = "/other"  # type: ignore[misc]


class TestValidate:
    def test_valid(self) -> None:
        BrowserConfig(root="/data", sort_key="type").validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"sort_key": "size"},
            {"max_name_attempts": 0},
            {"bulk_workers": 0},
            {"root": ""},
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object]) -> None:
        cfg = BrowserConfig(**{"root": "/data", **kwargs})  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            cfg.validate()


class TestFromDict:
    def test_round_trip_of_plain_values(self) -> None:
        cfg = BrowserConfig.from_dict({"root": "/data", "sort_key": "date", "sort_ascending": False, "bulk_workers": 4})
        assert cfg == BrowserConfig(root="/data", sort_key="date", sort_ascending=False, bulk_workers=4)

    def test_missing_keys_use_defaults(self) -> None:
        cfg = BrowserConfig.from_dict({"root": "/data"})
        assert cfg.max_name_attempts == 1000

    def test_unknown_key(self) -> None:
        with pytest.raises(TypeError, match="Unknown config keys"):
            BrowserConfig.from_dict({"root": "/data", "colour": "blue"})

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match="bulk_workers"):
            BrowserConfig.from_dict({"root": "/data", "bulk_workers": "2"})

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(TypeError):
            BrowserConfig.from_dict({"root": "/data", "max_name_attempts": True})

    def test_invalid_value(self) -> None:
        with pytest.raises(ValueError, match="Unknown sort key"):
            BrowserConfig.from_dict({"root": "/data", "sort_key": "size"})

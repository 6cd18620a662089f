"""Configuration model — immutable settings for a directory state."""

from __future__ import annotations

import dataclasses
from pathlib import Path

from dirkeeper._models import SortKey
from dirkeeper._naming import INVALID_NAME_CHARS, MAX_NAME_ATTEMPTS


def default_root() -> str:
    """The user's ``Documents`` folder if present, else the home directory."""
    home = Path.home()
    documents = home / "Documents"
    return str(documents if documents.is_dir() else home)


@dataclasses.dataclass(frozen=True)
class BrowserConfig:
    """Settings for one :class:`~dirkeeper.DirectoryState`.

    :param root: Directory browsed first.
    :param sort_key: Initial sort key (``"name"``, ``"date"`` or ``"type"``).
    :param sort_ascending: Initial sort direction.
    :param max_name_attempts: Probe ceiling for collision-free names.
    :param invalid_chars: Characters stripped from user-supplied names.
    :param bulk_workers: Size of the background pool.
    """

    root: str = dataclasses.field(default_factory=default_root)
    sort_key: str = SortKey.NAME.value
    sort_ascending: bool = True
    max_name_attempts: int = MAX_NAME_ATTEMPTS
    invalid_chars: str = INVALID_NAME_CHARS
    bulk_workers: int = 1

    def validate(self) -> None:
        """Check value ranges.

        :raises ValueError: If any value is out of range.
        """
        valid_keys = sorted(k.value for k in SortKey)
        if self.sort_key not in valid_keys:
            raise ValueError(f"Unknown sort key '{self.sort_key}'. Valid keys: {valid_keys}")
        if self.max_name_attempts < 1:
            raise ValueError(f"max_name_attempts must be at least 1, got {self.max_name_attempts}")
        if self.bulk_workers < 1:
            raise ValueError(f"bulk_workers must be at least 1, got {self.bulk_workers}")
        if not self.root:
            raise ValueError("root must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> BrowserConfig:
        """Construct from a plain dict (e.g. parsed TOML/JSON).

        Missing keys fall back to defaults; unknown keys are rejected.

        :raises TypeError: If a value has the wrong type or a key is unknown.
        :raises ValueError: If a value is out of range.
        """
        known = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            msg = f"Unknown config keys: {unknown}. Valid keys: {sorted(known)}"
            raise TypeError(msg)

        kwargs: dict[str, object] = {}
        for key, value in data.items():
            expected = _FIELD_TYPES[key]
            # bool is an int subclass; keep them apart.
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                msg = f"Config key '{key}' must be {expected.__name__}, got {type(value).__name__}"
                raise TypeError(msg)
            kwargs[key] = value

        config = cls(**kwargs)  # type: ignore[arg-type]
        config.validate()
        return config


_FIELD_TYPES: dict[str, type] = {
    "root": str,
    "sort_key": str,
    "sort_ascending": bool,
    "max_name_attempts": int,
    "invalid_chars": str,
    "bulk_workers": int,
}

"""Deterministic ordering of entry lists."""

from __future__ import annotations

import locale
from typing import TYPE_CHECKING, Any

from dirkeeper._models import SortKey

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from dirkeeper._models import Entry

FOLDER_LABEL = "Folder"
UNKNOWN_LABEL = "Unknown"

_OLDEST = float("-inf")


def type_label(entry: Entry) -> str:
    """``"Folder"`` for directories, else the lower-cased extension or ``"Unknown"``."""
    if entry.is_directory:
        return FOLDER_LABEL
    return entry.suffix or UNKNOWN_LABEL


def _collate(text: str) -> str:
    return locale.strxfrm(text.casefold())


def _name_key(entry: Entry) -> tuple[str, str, str]:
    # Raw name and path make case-only differences and duplicates deterministic.
    return (_collate(entry.name), entry.name, str(entry.path))


def _date_key(entry: Entry) -> tuple[Any, ...]:
    stamp = entry.created_at.timestamp() if entry.created_at is not None else _OLDEST
    return (stamp, *_name_key(entry))


def _type_key(entry: Entry) -> tuple[Any, ...]:
    return (_collate(type_label(entry)), *_name_key(entry))


_KEYS: dict[SortKey, Callable[[Entry], tuple[Any, ...]]] = {
    SortKey.NAME: _name_key,
    SortKey.DATE: _date_key,
    SortKey.TYPE: _type_key,
}


def sort_entries(entries: Iterable[Entry], key: SortKey | str, ascending: bool = True) -> list[Entry]:
    """Return ``entries`` ordered by ``key``, ties broken by name.

    Descending reverses the whole order, tie-breaks included.

    :param key: A :class:`SortKey` or its string value.
    :raises ValueError: If ``key`` is not a known sort key.
    """
    return sorted(entries, key=_KEYS[SortKey(key)], reverse=not ascending)

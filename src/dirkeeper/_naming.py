"""Name sanitization and collision-free path resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dirkeeper._errors import NamingExhausted

if TYPE_CHECKING:
    from collections.abc import Callable

    from dirkeeper._types import PathLike

log = logging.getLogger(__name__)

INVALID_NAME_CHARS = '/:?*<>|"\\'
MAX_NAME_ATTEMPTS = 1000


def sanitize_name(name: str, invalid_chars: str = INVALID_NAME_CHARS) -> str:
    """Remove characters that are not allowed in a single file name.

    >>> sanitize_name('a/b:c?.txt')
    'abc.txt'
    """
    return name.translate({ord(c): None for c in invalid_chars})


def sanitize_path(path: PathLike, invalid_chars: str = INVALID_NAME_CHARS) -> Path:
    """Sanitize the final component of ``path``, leaving its parent untouched."""
    p = Path(path)
    return p.with_name(sanitize_name(p.name, invalid_chars)) if p.name else p


def split_name(name: str) -> tuple[str, str]:
    """Split a file name into stem and extension (without the dot).

    A leading dot does not start an extension: ``".profile"`` has none.
    """
    dot = name.rfind(".")
    if dot <= 0:
        return name, ""
    return name[:dot], name[dot + 1 :]


def numbered_name(name: str, n: int) -> str:
    """Return ``name`` with a ``" (n)"`` suffix inserted before the extension."""
    stem, ext = split_name(name)
    return f"{stem} ({n}).{ext}" if ext else f"{stem} ({n})"


def resolve_unique_path(
    desired: PathLike,
    *,
    exists: Callable[[Path], bool] | None = None,
    max_attempts: int = MAX_NAME_ATTEMPTS,
    strict: bool = False,
) -> Path:
    """Derive a path that does not collide with anything on disk.

    Returns ``desired`` unchanged when it is free, otherwise probes
    ``"stem (1).ext"``, ``"stem (2).ext"``, ... When ``max_attempts`` probes all
    collide the last probe is returned anyway, unless ``strict`` is set.

    :param desired: The path the caller would like to write.
    :param exists: Existence predicate, ``os.path.lexists`` semantics by default.
    :param max_attempts: Upper bound on numbered probes.
    :param strict: Raise instead of returning a colliding path.
    :raises NamingExhausted: If ``strict`` and no free name was found.
    """
    check = exists if exists is not None else os.path.lexists
    path = Path(desired)
    if not check(path):
        return path

    candidate = path
    for n in range(1, max_attempts + 1):
        candidate = path.with_name(numbered_name(path.name, n))
        if not check(candidate):
            return candidate

    if strict:
        raise NamingExhausted(f"No free name after {max_attempts} attempts", path=str(path))
    log.warning("No free name for %s after %d attempts, using %s", path, max_attempts, candidate.name)
    return candidate

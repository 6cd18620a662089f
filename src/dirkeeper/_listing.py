"""Directory enumeration into Entry snapshots."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from dirkeeper._errors import DirKeeperError, EnumerationError

if TYPE_CHECKING:
    from pathlib import Path

    from dirkeeper._backend import Backend
    from dirkeeper._models import Entry

log = logging.getLogger(__name__)


def list_directory(backend: Backend, directory: Path) -> list[Entry]:
    """Return one Entry per direct child of ``directory``.

    Children whose metadata cannot be read are skipped and logged.

    :raises EnumerationError: If the directory itself cannot be listed.
    """
    try:
        children = list(backend.iter_children(directory))
    except DirKeeperError as exc:
        raise EnumerationError(f"Error loading files: {exc.message}", path=str(directory)) from exc

    entries: list[Entry] = []
    for child in children:
        try:
            entries.append(backend.stat_entry(child))
        except DirKeeperError as exc:
            log.warning("Skipping %s: %s", child, exc)
    log.debug("Listed %d of %d children in %s", len(entries), len(children), directory)
    return entries

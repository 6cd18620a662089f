"""Quickstart — browse a directory, create, import and bulk-delete with dirkeeper.

Demonstrates:
- Building a DirectoryState from a BrowserConfig
- Subscribing to state events
- Creating a folder and text files (collision-free naming)
- Importing files in the background
- Deleting the selection with a single aggregated failure report
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from dirkeeper import BrowserConfig, DirectoryState, EventKind, SortKey, StateEvent


def show(event: StateEvent) -> None:
    if event.kind in (EventKind.OPERATION_FAILED, EventKind.OPERATION_SUCCEEDED):
        print(f"[{event.kind.value}] {event.message}")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        work = Path(tmp) / "work"
        inbox = Path(tmp) / "inbox"
        work.mkdir()
        inbox.mkdir()
        for name in ("photo.jpg", "notes.txt"):
            (inbox / name).write_bytes(b"...")

        config = BrowserConfig.from_dict({"root": str(work), "sort_key": "type"})
        with DirectoryState.from_config(config) as state:
            state.subscribe(show)
            state.load()

            state.create_folder("Projects")
            state.create_text_file("notes.txt")
            state.create_text_file("notes.txt")  # becomes "notes (1).txt"

            # One source does not exist: the other two are still imported.
            report = state.import_files([inbox / "photo.jpg", inbox / "missing.pdf", inbox / "notes.txt"]).result()
            print(f"Imported {len(report.succeeded)}, failed {len(report.failures)}")

            state.update_sort(SortKey.NAME, ascending=True)
            print("Entries:", [e.name for e in state.entries])

            state.set_selecting(True)
            for entry in state.entries:
                if entry.name.startswith("notes"):
                    state.select(entry)
            state.delete_selected().result()
            print("After delete:", [e.name for e in state.entries])

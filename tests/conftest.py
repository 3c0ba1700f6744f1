"""Shared fixtures and test doubles."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

import fsentry.config
from fsentry.entry import Entry
from fsentry.filters import EntryFilter, matches
from fsentry.models import EntryKind


class FakeEntry(Entry):
    """Entry with an explicit kind and in-memory children.

    Nothing touches the disk. ``kind_queries`` counts calls to ``kind()``.
    """

    def __init__(
        self,
        path: str,
        kind: EntryKind = EntryKind.UNKNOWN,
        children: list[Entry] | None = None,
        existing: bool = True,
    ) -> None:
        super().__init__(path)
        self.entry_kind = kind
        self.children = list(children or [])
        self.existing = existing
        self.kind_queries = 0

    async def kind(self) -> EntryKind:
        self.kind_queries += 1
        return self.entry_kind

    async def list(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        return [child for child in self.children if await matches(child, entry_filter)]

    async def exists(self) -> bool:
        return self.existing

    async def stat(self):
        raise OSError("Cannot stat fake entry")

    async def remove(self) -> None:
        self.existing = False


def fake_file(path: str) -> FakeEntry:
    return FakeEntry(path, EntryKind.FILE)


def fake_directory(path: str, *children: Entry) -> FakeEntry:
    return FakeEntry(path, EntryKind.DIRECTORY, list(children))


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep user config files and FSENTRY_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("FSENTRY_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(fsentry.config, "DEFAULT_CONFIG_PATHS", [])
    monkeypatch.setattr(fsentry.config, "_settings", None)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_root(tmp_path) -> Entry:
    """Create a small tree on disk.

    Structure:
        fake/
        ├── file.txt            ("12345678")
        ├── directory/
        │   ├── file1.json
        │   ├── file1.txt
        │   ├── file2.txt
        │   └── subdirectory/
        │       ├── file3.json
        │       └── file3.txt
        ├── empty/
        └── tmp/
            ├── file
            ├── empty/
            └── full/
                ├── a/
                │   └── 1
                └── b/
    """
    root = tmp_path / "fake"
    subdirectory = root / "directory" / "subdirectory"
    subdirectory.mkdir(parents=True)

    (root / "file.txt").write_text("12345678")
    for name in ("file1.json", "file1.txt", "file2.txt"):
        (root / "directory" / name).write_text("")
    for name in ("file3.json", "file3.txt"):
        (subdirectory / name).write_text("")

    (root / "empty").mkdir()

    tmp = root / "tmp"
    (tmp / "empty").mkdir(parents=True)
    (tmp / "file").write_text("")
    (tmp / "full" / "a").mkdir(parents=True)
    (tmp / "full" / "a" / "1").write_text("")
    (tmp / "full" / "b").mkdir()

    return Entry(root)


def names(entries: list[Entry]) -> list[str]:
    """Sorted base names, for order-independent assertions."""
    return sorted(entry.name for entry in entries)


def relative_paths(entries: list[Entry], root: Entry) -> list[str]:
    """Sorted POSIX paths relative to root."""
    return sorted(Path(entry.path).relative_to(root.path).as_posix() for entry in entries)

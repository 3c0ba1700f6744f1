"""Capability views over entries.

``Entry`` implements every protocol below. ``Entry.as_file()`` and
``Entry.as_directory()`` only narrow the static type: nothing checks the
entry kind at runtime, so calling ``list()`` on an entry viewed as a
directory that is really a file fails with ``NotADirectoryError``. Call
``kind()`` first when the kind is not known.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Protocol

from fsentry.models import EntryInfo, EntryKind, ParsedPath

if TYPE_CHECKING:
    from fsentry.entry import Entry
    from fsentry.filters import EntryFilter


class EntryBase(Protocol):
    """Operations available on every entry."""

    @property
    def path(self) -> str:
        """Path of the entry, without trailing separators."""
        ...

    @property
    def absolute_path(self) -> str: ...

    @property
    def parsed_path(self) -> ParsedPath: ...

    @property
    def name(self) -> str:
        """Full name of the entry (with the extension if a file)."""
        ...

    def as_entry(self) -> Entry:
        """View the entry as a generic ``Entry``."""
        ...

    async def copy(self, dest: str | os.PathLike[str] | EntryBase) -> Entry:
        """Copy the entry to dest.

        A string destination may be absolute or relative to the parent.
        """
        ...

    def equals(self, other: str | os.PathLike[str] | EntryBase) -> bool: ...

    async def exists(self) -> bool: ...

    async def kind(self) -> EntryKind: ...

    async def is_file(self) -> bool: ...

    async def is_directory(self) -> bool: ...

    async def move(self, dest: str | os.PathLike[str] | EntryBase, overwrite: bool = False) -> Entry:
        """Move the entry to dest.

        A string destination may be absolute or relative to the parent.
        """
        ...

    def parent(self) -> Directory: ...

    async def remove(self) -> None: ...

    async def stat(self) -> os.stat_result: ...

    async def info(self) -> EntryInfo: ...


class File(EntryBase, Protocol):
    """A regular file."""

    @property
    def extension(self) -> str:
        """Extension of the file with the dot, such as ``.html``."""
        ...

    async def create_file(self) -> File:
        """Create this file and its missing parents."""
        ...

    def open_read_stream(
        self,
        chunk_size: int | None = None,
        start: int = 0,
        end: int | None = None,
    ) -> AsyncIterator[bytes]: ...

    async def read(self, encoding: str | None = None) -> bytes | str: ...

    async def size(self) -> int:
        """Size of the file in bytes."""
        ...

    async def write(self, data: str | bytes, encoding: str | None = None, append: bool = False) -> None: ...


class Directory(EntryBase, Protocol):
    """A directory."""

    def child(self, relative_path: str) -> Entry: ...

    async def create_directory(self) -> Directory:
        """Create this directory and its missing parents."""
        ...

    async def create_child_directory(self, subpath: str) -> Directory:
        """Create a directory below this one, with intermediate levels."""
        ...

    async def create_child_file(self, subpath: str) -> File:
        """Create a file below this directory, with intermediate levels."""
        ...

    async def list(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        """Immediate children matching the filter."""
        ...

    async def list_recursively(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        """All descendants matching the filter."""
        ...

    def iter_recursively(self, entry_filter: EntryFilter | None = None) -> AsyncIterator[Entry]: ...

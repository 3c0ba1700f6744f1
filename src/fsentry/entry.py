"""Filesystem entries."""

from __future__ import annotations

import os
import re
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, cast

from fsentry import ops, walker
from fsentry.models import EntryInfo, EntryKind, ParsedPath

if TYPE_CHECKING:
    from fsentry.filters import EntryFilter
    from fsentry.typings import Directory, EntryBase, File

_TRAILING_SEPARATORS = re.compile(r"[\\/]+$")

PathArg = str | os.PathLike[str]


def _normalize(path: str) -> str:
    stripped = _TRAILING_SEPARATORS.sub("", path)
    # Keep a filesystem root such as "/" or "C:\" intact
    if stripped != path and not os.path.splitdrive(stripped)[1]:
        stripped = path[: len(stripped) + 1]
    return stripped


class Entry:
    """A file, directory or other node of the filesystem, identified by path.

    An entry holds nothing but its path. Its kind and existence are looked
    up on the filesystem every time they are asked for. The ``as_file()``
    and ``as_directory()`` views (``f`` and ``d`` for short) narrow the
    static type to the ``File`` and ``Directory`` protocols without any
    runtime check.
    """

    __slots__ = ("_path",)

    def __init__(self, path: PathArg) -> None:
        self._path = _normalize(os.fspath(path))

    # Views

    def as_entry(self) -> Entry:
        return self

    def as_file(self) -> File:
        return cast("File", self)

    def as_directory(self) -> Directory:
        return cast("Directory", self)

    @property
    def e(self) -> Entry:
        return self

    @property
    def f(self) -> File:
        return self.as_file()

    @property
    def d(self) -> Directory:
        return self.as_directory()

    # Path properties

    @property
    def path(self) -> str:
        return self._path

    @property
    def absolute_path(self) -> str:
        return os.path.abspath(self._path)

    @property
    def parsed_path(self) -> ParsedPath:
        return ParsedPath.parse(self._path)

    @property
    def name(self) -> str:
        return self.parsed_path.base

    @property
    def extension(self) -> str:
        return self.parsed_path.ext

    def child(self, relative_path: str) -> Entry:
        """Get an entry below this one. No I/O is performed."""
        return Entry(os.path.normpath(os.path.join(self._path, relative_path)))

    def parent(self) -> Directory:
        """Get the containing directory.

        The parent of a filesystem root is the root itself.
        """
        return Entry(os.path.dirname(self._path) or ".").as_directory()

    def equals(self, other: PathArg | EntryBase) -> bool:
        """Check if both entries have the same absolute path.

        The filesystem is not consulted: two spellings of a path through a
        symlink are different entries.
        """
        return self.absolute_path == Entry.of(other).absolute_path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.absolute_path)

    def __fspath__(self) -> str:
        return self._path

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._path}')"

    def _destination(self, dest: PathArg | EntryBase) -> str:
        if isinstance(dest, Entry) or not isinstance(dest, (str, os.PathLike)):
            return dest.path
        return os.path.abspath(os.path.join(self.parent().path, os.fspath(dest)))

    # Filesystem queries

    async def exists(self) -> bool:
        return await ops.path_exists(self._path)

    async def kind(self) -> EntryKind:
        """Resolve the kind of this entry.

        Raises:
            FileNotFoundError: If nothing exists at this path
        """
        return await ops.entry_kind(self._path)

    async def is_file(self) -> bool:
        return await self.kind() == EntryKind.FILE

    async def is_directory(self) -> bool:
        return await self.kind() == EntryKind.DIRECTORY

    async def stat(self) -> os.stat_result:
        return await ops.stat_entry(self._path)

    async def size(self) -> int:
        return (await self.stat()).st_size

    async def info(self) -> EntryInfo:
        return EntryInfo.from_stat(self._path, await self.stat())

    # Mutations

    async def copy(self, dest: PathArg | EntryBase) -> Entry:
        """Copy this entry, recursively for a directory.

        Args:
            dest: Destination entry or path. A path may be absolute or
                relative to the parent of this entry

        Returns:
            The entry corresponding to the destination
        """
        dst_path = self._destination(dest)
        await ops.copy(self._path, dst_path)
        return Entry(dst_path)

    async def move(self, dest: PathArg | EntryBase, overwrite: bool = False) -> Entry:
        """Move this entry.

        Args:
            dest: Destination entry or path. A path may be absolute or
                relative to the parent of this entry
            overwrite: Replace an existing destination

        Returns:
            The entry corresponding to the destination

        Raises:
            FileExistsError: If the destination exists and overwrite is False
        """
        dst_path = self._destination(dest)
        await ops.move(self._path, dst_path, overwrite=overwrite)
        return Entry(dst_path)

    async def remove(self) -> None:
        await ops.remove(self._path)

    async def create_directory(self) -> Directory:
        await ops.make_directories(self._path)
        return self.as_directory()

    async def create_child_directory(self, subpath: str) -> Directory:
        return await self.child(subpath).create_directory()

    async def create_file(self) -> File:
        await ops.create_empty_file(self._path)
        return self.as_file()

    async def create_child_file(self, subpath: str) -> File:
        return await self.child(subpath).create_file()

    # Content

    async def read(self, encoding: str | None = None) -> bytes | str:
        """Read the content of the file, decoded when an encoding is given."""
        return await ops.read_file(self._path, encoding)

    async def write(self, data: str | bytes, encoding: str | None = None, append: bool = False) -> None:
        await ops.write_file(self._path, data, encoding=encoding, append=append)

    def open_read_stream(
        self,
        chunk_size: int | None = None,
        start: int = 0,
        end: int | None = None,
    ) -> AsyncIterator[bytes]:
        """Stream the file content in chunks.

        The file is opened when iteration starts and closed when it ends.
        ``end`` is the offset of the last byte to read, inclusive.
        """
        if chunk_size is None:
            from fsentry.config import get_settings

            chunk_size = get_settings().read_chunk_size
        return ops.open_read_stream(self._path, chunk_size=chunk_size, start=start, end=end)

    # Listing

    async def list(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        """List the children of this directory matching the filter."""
        return await walker.list_entries(self, entry_filter)

    async def list_recursively(self, entry_filter: EntryFilter | None = None) -> list[Entry]:
        """List every descendant of this directory matching the filter.

        Directories that do not match are still walked into.
        """
        return await walker.list_recursively(self, entry_filter)

    def iter_recursively(self, entry_filter: EntryFilter | None = None) -> AsyncIterator[Entry]:
        return walker.iter_recursively(self, entry_filter)

    @classmethod
    def of(cls, path: PathArg | EntryBase) -> Entry:
        """Get an entry for a path.

        Args:
            path: If already an entry, it is returned as is. Otherwise a
                new ``Entry`` is created from it
        """
        if isinstance(path, (str, os.PathLike)) and not isinstance(path, Entry):
            return cls(path)
        return cast("Entry", path)

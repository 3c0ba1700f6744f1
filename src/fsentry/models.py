"""Data models for filesystem entries."""

import os
import stat as stat_module
from datetime import datetime
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    """Kind of filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    UNKNOWN = "unknown"

    @classmethod
    def from_mode(cls, mode: int) -> "EntryKind":
        """Classify an ``st_mode`` value.

        Sockets, FIFOs and device nodes are ``UNKNOWN``.
        """
        if stat_module.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat_module.S_ISREG(mode):
            return cls.FILE
        return cls.UNKNOWN


class ParsedPath(NamedTuple):
    """Components of a path string.

    ``base`` is ``name`` + ``ext``; ``dir`` is everything before ``base``.
    """

    root: str
    dir: str
    base: str
    ext: str
    name: str

    @classmethod
    def parse(cls, path: str) -> "ParsedPath":
        drive, rest = os.path.splitdrive(path)
        root = drive
        if rest[:1] in ("/", "\\"):
            root += rest[:1]
        directory, base = os.path.split(path)
        name, ext = os.path.splitext(base)
        return cls(root=root, dir=directory, base=base, ext=ext, name=name)


class EntryInfo(BaseModel):
    """Information about a file or directory."""

    path: str = Field(description="Path of the entry as given")
    absolute_path: str = Field(description="Absolute path of the entry")
    name: str = Field(description="File or directory name")
    kind: EntryKind = Field(description="Kind of entry")
    size: int = Field(default=0, description="Size in bytes (0 for directories)")
    modified_at: datetime | None = Field(default=None, description="Last modified time")
    extension: str = Field(default="", description="File extension with the dot (empty for directories)")

    @classmethod
    def from_stat(cls, path: str, result: os.stat_result) -> "EntryInfo":
        """Create EntryInfo from a stat result.

        Args:
            path: Path the stat result belongs to
            result: Value returned by ``os.stat``

        Returns:
            EntryInfo instance
        """
        parsed = ParsedPath.parse(path)
        kind = EntryKind.from_mode(result.st_mode)

        return cls(
            path=path,
            absolute_path=os.path.abspath(path),
            name=parsed.base,
            kind=kind,
            size=result.st_size if kind == EntryKind.FILE else 0,
            modified_at=datetime.fromtimestamp(result.st_mtime),
            extension=parsed.ext if kind == EntryKind.FILE else "",
        )


class ListedEntry(BaseModel):
    """Entry in a directory listing."""

    path: str = Field(description="Entry path relative to the listed directory")
    kind: EntryKind = Field(description="Kind of entry")
    size: int = Field(default=0, description="Size in bytes")


class DirectoryListing(BaseModel):
    """Result of listing a directory."""

    path: str = Field(description="Directory path")
    recursive: bool = Field(default=False, description="Whether subdirectories were walked")
    entries: list[ListedEntry] = Field(default_factory=list, description="Matching entries")
    total_files: int = Field(default=0, description="Number of files")
    total_directories: int = Field(default=0, description="Number of directories")

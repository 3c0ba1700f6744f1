"""Asynchronous filesystem primitives.

Every function here is a direct passthrough to ``os``, ``shutil`` or
``pathlib``, run in a worker thread so the event loop is never blocked.
Errors are the builtin ``OSError`` subclasses raised by the OS layer and are
never translated, with ``path_exists`` as the only exception.
"""

import asyncio
import logging
import os
import shutil
from collections.abc import AsyncIterator
from pathlib import Path

from fsentry.models import EntryKind

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


async def read_directory(path: str) -> list[str]:
    """List child names of a directory.

    Raises:
        FileNotFoundError: If path does not exist
        NotADirectoryError: If path is not a directory
    """
    logger.debug(f"Reading directory {path}")
    return await asyncio.to_thread(os.listdir, path)


async def stat_entry(path: str) -> os.stat_result:
    """Stat a path, following symlinks."""
    return await asyncio.to_thread(os.stat, path)


def _kind_of(path: str) -> EntryKind:
    try:
        return EntryKind.from_mode(os.stat(path).st_mode)
    except FileNotFoundError:
        # A dangling symlink is an entry of unknown kind, a missing path is not
        if os.path.islink(path):
            return EntryKind.UNKNOWN
        raise


async def entry_kind(path: str) -> EntryKind:
    """Resolve the kind of a path.

    Raises:
        FileNotFoundError: If nothing exists at path
    """
    return await asyncio.to_thread(_kind_of, path)


async def path_exists(path: str) -> bool:
    """Check if a path exists. Never raises."""
    return await asyncio.to_thread(os.path.exists, path)


def _copy(src: str, dst: str) -> None:
    parent = os.path.dirname(dst)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if os.path.isdir(src):
        shutil.copytree(src, dst, symlinks=True, dirs_exist_ok=True)
        return
    # copy2 would copy into the directory instead of onto dst
    if os.path.isdir(dst):
        raise IsADirectoryError(f"Cannot overwrite directory with non-directory: '{dst}'")
    shutil.copy2(src, dst)


async def copy(src: str, dst: str) -> None:
    """Copy a file or a whole directory tree, creating missing parents.

    Raises:
        FileNotFoundError: If src does not exist
        IsADirectoryError: If src is not a directory and dst is one
    """
    logger.debug(f"Copying {src} -> {dst}")
    await asyncio.to_thread(_copy, src, dst)


def _move(src: str, dst: str, overwrite: bool) -> None:
    if not os.path.lexists(src):
        raise FileNotFoundError(f"No such file or directory: '{src}'")
    if os.path.lexists(dst):
        if not overwrite:
            raise FileExistsError(f"Destination already exists: '{dst}'")
        _remove(dst)
    parent = os.path.dirname(dst)
    if parent:
        os.makedirs(parent, exist_ok=True)
    shutil.move(src, dst)


async def move(src: str, dst: str, overwrite: bool = False) -> None:
    """Move a file or directory, creating missing parents.

    Raises:
        FileExistsError: If dst exists and overwrite is False
    """
    logger.debug(f"Moving {src} -> {dst} (overwrite={overwrite})")
    await asyncio.to_thread(_move, src, dst, overwrite)


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.unlink(path)


async def remove(path: str) -> None:
    """Remove a file, a symlink or a whole directory tree."""
    logger.debug(f"Removing {path}")
    await asyncio.to_thread(_remove, path)


async def make_directories(path: str) -> None:
    """Create a directory and all missing parents."""
    logger.debug(f"Creating directories {path}")
    await asyncio.to_thread(os.makedirs, path, exist_ok=True)


def _create_empty_file(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    # Append mode creates the file without touching existing content
    with open(path, "ab"):
        pass


async def create_empty_file(path: str) -> None:
    """Create a file if it does not exist, along with missing parents."""
    logger.debug(f"Creating file {path}")
    await asyncio.to_thread(_create_empty_file, path)


async def read_file(path: str, encoding: str | None = None) -> bytes | str:
    """Read a whole file, as text when an encoding is given."""
    if encoding is None:
        return await asyncio.to_thread(Path(path).read_bytes)
    return await asyncio.to_thread(Path(path).read_text, encoding=encoding)


def _write_file(path: str, data: str | bytes, encoding: str | None, append: bool) -> None:
    mode = "a" if append else "w"
    if isinstance(data, str):
        with open(path, mode, encoding=encoding or "utf-8") as f:
            f.write(data)
    else:
        with open(path, mode + "b") as f:
            f.write(data)


async def write_file(
    path: str,
    data: str | bytes,
    encoding: str | None = None,
    append: bool = False,
) -> None:
    """Write str or bytes to a file, replacing its content unless append."""
    logger.debug(f"Writing {len(data)} {'chars' if isinstance(data, str) else 'bytes'} to {path}")
    await asyncio.to_thread(_write_file, path, data, encoding, append)


async def open_read_stream(
    path: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    start: int = 0,
    end: int | None = None,
) -> AsyncIterator[bytes]:
    """Stream a file as chunks of bytes.

    Args:
        path: File to read
        chunk_size: Maximum size of each chunk
        start: Offset of the first byte to read
        end: Offset of the last byte to read (inclusive), None for end of file

    Yields:
        Chunks of at most chunk_size bytes
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    f = await asyncio.to_thread(open, path, "rb")
    try:
        if start:
            await asyncio.to_thread(f.seek, start)
        remaining = None if end is None else end - start + 1
        while remaining is None or remaining > 0:
            size = chunk_size if remaining is None else min(chunk_size, remaining)
            chunk = await asyncio.to_thread(f.read, size)
            if not chunk:
                break
            if remaining is not None:
                remaining -= len(chunk)
            yield chunk
    finally:
        f.close()

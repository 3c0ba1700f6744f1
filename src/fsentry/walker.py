"""Directory listing and depth-first traversal."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from fsentry import ops
from fsentry.filters import EntryFilter, matches

if TYPE_CHECKING:
    from fsentry.entry import Entry

logger = logging.getLogger(__name__)


async def list_entries(directory: Entry, entry_filter: EntryFilter | None = None) -> list[Entry]:
    """List immediate children of a directory.

    Order follows the underlying directory read and is not sorted.

    Args:
        directory: Directory to read
        entry_filter: Only keep children matching this filter

    Returns:
        Matching child entries

    Raises:
        FileNotFoundError: If directory does not exist
        NotADirectoryError: If directory is not a directory
    """
    children: list[Entry] = []
    for name in await ops.read_directory(directory.path):
        child = directory.child(name)
        if await matches(child, entry_filter):
            children.append(child)
    return children


async def iter_recursively(root: Entry, entry_filter: EntryFilter | None = None) -> AsyncIterator[Entry]:
    """Walk the tree below root depth-first, yielding matching entries.

    The root itself is never tested nor yielded. Every subdirectory is
    walked whether or not it matched the filter: the filter decides what is
    yielded, never what is visited. Directories are read one at a time.
    A root that is not a directory has no descendants.

    Args:
        root: Directory to walk
        entry_filter: Only yield entries matching this filter

    Yields:
        Matching descendants, each subtree contiguous

    Raises:
        FileNotFoundError: If root does not exist
    """
    if not await root.is_directory():
        logger.debug(f"Not walking {root.path}: not a directory")
        return
    async for entry in _walk(root, entry_filter):
        yield entry


async def _walk(directory: Entry, entry_filter: EntryFilter | None) -> AsyncIterator[Entry]:
    for child in await directory.list():
        if await matches(child, entry_filter):
            yield child

        if await child.is_directory():
            logger.debug(f"Descending into {child.path}")
            async for descendant in _walk(child, entry_filter):
                yield descendant


async def list_recursively(root: Entry, entry_filter: EntryFilter | None = None) -> list[Entry]:
    """List every descendant of root matching the filter.

    Any error while walking aborts the whole listing.

    Args:
        root: Directory to walk
        entry_filter: Only keep entries matching this filter

    Returns:
        Matching descendants in depth-first order
    """
    return [entry async for entry in iter_recursively(root, entry_filter)]

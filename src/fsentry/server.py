"""MCP server exposing filesystem entries under a root directory."""

import logging
import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from fsentry.config import get_settings
from fsentry.entry import Entry
from fsentry.filters import EntryFilter
from fsentry.models import DirectoryListing, EntryKind, ListedEntry

logger = logging.getLogger(__name__)

mcp = FastMCP("fsentry")
_root: Entry | None = None


def set_root(root: str | Path) -> Entry:
    """Confine every tool to a root directory.

    Raises:
        ValueError: If root is not an existing directory
    """
    global _root
    resolved = Path(root).resolve()
    if not resolved.is_dir():
        raise ValueError(f"Root is not a directory: {resolved}")
    _root = Entry(resolved)
    return _root


def _get_root() -> Entry:
    """Get the root entry, raising if not initialized."""
    if _root is None:
        raise RuntimeError("Server root not initialized")
    return _root


def _resolve(path: str) -> Entry:
    """Resolve a path relative to root, with security checks.

    Raises:
        ValueError: If path escapes root directory
    """
    root = _get_root()
    if not path or path == ".":
        return root

    resolved = Path(root.path, path).resolve()
    try:
        resolved.relative_to(root.path)
    except ValueError:
        raise ValueError(f"Path escapes root directory: {path}")

    return Entry(resolved)


@mcp.tool()
async def list_directory(
    path: str = "",
    recursive: bool = False,
    extensions: list[str] | None = None,
    kind: EntryKind | None = None,
) -> dict:
    """List entries of a directory.

    Args:
        path: Relative path to directory
        recursive: Walk subdirectories too
        extensions: Only list files with one of these extensions
        kind: Only list entries of this kind (file, directory, unknown)

    Returns:
        Dict with path, recursive, entries, total_files, total_directories
    """
    directory = _resolve(path)
    logger.info(f"[FS] list_directory: {directory} (recursive={recursive})")

    entry_filter = EntryFilter(kind=kind, extensions=extensions)
    if recursive:
        entries = await directory.list_recursively(entry_filter)
    else:
        entries = await directory.list(entry_filter)

    listing = DirectoryListing(path=path or ".", recursive=recursive)
    for entry in entries:
        entry_kind = await entry.kind()
        listing.entries.append(
            ListedEntry(
                path=str(Path(entry.path).relative_to(directory.path)),
                kind=entry_kind,
                size=await entry.size() if entry_kind == EntryKind.FILE else 0,
            )
        )
        if entry_kind == EntryKind.FILE:
            listing.total_files += 1
        elif entry_kind == EntryKind.DIRECTORY:
            listing.total_directories += 1

    return listing.model_dump(mode="json")


@mcp.tool()
async def get_entry_info(path: str = "") -> dict:
    """Get information about a file or directory.

    Args:
        path: Relative path

    Returns:
        Dict with path, absolute_path, name, kind, size, modified_at, extension
    """
    entry = _resolve(path)
    logger.info(f"[FS] get_entry_info: {entry}")
    return (await entry.info()).model_dump(mode="json")


@mcp.tool()
async def entry_exists(path: str = "") -> bool:
    """Check if a path exists.

    Args:
        path: Relative path to check

    Returns:
        True if path exists
    """
    entry = _resolve(path)
    logger.info(f"[FS] entry_exists: {entry}")
    return await entry.exists()


@mcp.tool()
async def read_file(path: str, max_bytes: int = 100_000) -> dict:
    """Read contents of a text file.

    Args:
        path: Relative path to file
        max_bytes: Maximum bytes to read (default 100KB)

    Returns:
        Dict with path, content, size and truncated flag
    """
    entry = _resolve(path)
    logger.info(f"[FS] read_file: {entry}")

    size = await entry.size()
    data = b""
    async for chunk in entry.open_read_stream(end=max_bytes - 1):
        data += chunk

    return {
        "path": path,
        "content": data.decode(get_settings().default_encoding, errors="replace"),
        "size": size,
        "truncated": size > max_bytes,
    }


def run_server(root: str | Path | None = None) -> None:
    """Run the MCP server over stdio."""
    # Suppress noisy MCP server "Processing request" logs
    logging.getLogger("mcp.server").setLevel(logging.WARNING)
    logging.getLogger("mcp.server.lowlevel").setLevel(logging.WARNING)

    set_root(root if root is not None else get_settings().server_root)
    mcp.run()


if __name__ == "__main__":
    run_server(sys.argv[1] if len(sys.argv) > 1 else None)

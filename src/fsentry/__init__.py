"""fsentry - typed filesystem entries with filterable recursive listing."""

__version__ = "0.1.0"

from fsentry.entry import Entry
from fsentry.filters import EntryFilter, matches
from fsentry.models import DirectoryListing, EntryInfo, EntryKind, ListedEntry, ParsedPath
from fsentry.typings import Directory, EntryBase, File

__all__ = [
    "Entry",
    "EntryBase",
    "File",
    "Directory",
    "EntryFilter",
    "matches",
    "EntryKind",
    "EntryInfo",
    "ParsedPath",
    "ListedEntry",
    "DirectoryListing",
]

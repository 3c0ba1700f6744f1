"""Entry filters and the matching predicate used by directory listings."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fsentry.models import EntryKind

if TYPE_CHECKING:
    from fsentry.entry import Entry

EntryPredicate = Callable[[Any], Union[bool, Awaitable[bool]]]


class EntryFilter(BaseModel):
    """Selects filesystem entries. All fields are optional.

    Conditions are AND-combined and checked in the order kind, extensions,
    predicate. A filter with no field set matches every entry.
    """

    model_config = ConfigDict(frozen=True)

    kind: EntryKind | None = Field(default=None, description="Restrict matches to one kind")
    extensions: list[str] | None = Field(
        default=None,
        description="Only match files ending with one of these extensions. The dot may be omitted",
    )
    predicate: EntryPredicate | None = Field(
        default=None,
        description="Custom test receiving the entry. May be a coroutine function",
        exclude=True,
    )

    @field_validator("extensions")
    @classmethod
    def add_leading_dot(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    def is_empty(self) -> bool:
        """Check if no condition is set."""
        return self.kind is None and self.extensions is None and self.predicate is None

    async def matches(self, entry: Entry) -> bool:
        """Check if an entry satisfies every condition of this filter.

        The entry kind is only resolved when ``kind`` or ``extensions`` is set.
        Exceptions raised by the predicate propagate to the caller.
        """
        if self.kind is not None or self.extensions is not None:
            kind = await entry.kind()

            if self.kind is not None and kind != self.kind:
                return False

            # Extensions only apply to files
            if self.extensions is not None:
                if kind != EntryKind.FILE:
                    return False
                if not any(entry.name.endswith(ext) for ext in self.extensions):
                    return False

        if self.predicate is not None:
            result = self.predicate(entry)
            if inspect.isawaitable(result):
                result = await result
            if not result:
                return False

        return True


async def matches(entry: Entry, entry_filter: EntryFilter | None = None) -> bool:
    """Check if a filesystem entry matches a given filter.

    Args:
        entry: Filesystem entry to test against the filter
        entry_filter: Filter, None to match everything

    Returns:
        True if the entry matches
    """
    if entry_filter is None or entry_filter.is_empty():
        return True
    return await entry_filter.matches(entry)

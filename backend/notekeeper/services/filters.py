"""
NoteKeeper Backend - List Filters
==================================

What:  Turns raw GET /notes query parameters into a typed NoteFilters value
       and decides whether a single note matches it.
Who:   Built by the notes route; consumed by NoteStore.list_notes.

Parsing is lenient on purpose: nothing here ever produces an error.
    limit / offset   anything but plain ASCII digits → default (10 / 0)
    isArchived/isDone  "true"/"1" or "false"/"0" (any case); anything else
                       leaves that filter off
    tags             repeated params and/or comma-separated values; each raw
                     value is also kept whole
    q                empty string means no text filter
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Union

from notekeeper.schemas.note import Note

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}

# Plain ASCII digits only: no sign, spaces, underscores or non-ASCII digits
_DIGITS = re.compile(r"[0-9]+")


def parse_non_negative_int(raw: str) -> Optional[int]:
    """Parse a string of ASCII digits; anything else gives None."""
    if not _DIGITS.fullmatch(raw):
        return None
    return int(raw)


def parse_count(raw: Any, default: int) -> int:
    """Parse a non-negative integer, falling back to `default` on anything else."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw if raw >= 0 else default
    value = parse_non_negative_int(str(raw))
    return default if value is None else value


def parse_flag(raw: Any) -> Optional[bool]:
    if raw is None or isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def parse_tags(raw: Union[None, str, Iterable[str]]) -> List[str]:
    if raw is None:
        return []
    values = [raw] if isinstance(raw, str) else list(raw)
    tags: List[str] = []
    for value in values:
        # The whole value first, so a stored tag containing a comma still matches
        for tag in [value, *str(value).split(",")]:
            tag = str(tag).strip()
            if tag and tag not in tags:
                tags.append(tag)
    return tags


@dataclass
class NoteFilters:
    """
    Optional predicates (ANDed together) plus the pagination window.

    A field left at None / [] does not filter at all.
    """

    q: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    is_archived: Optional[bool] = None
    is_done: Optional[bool] = None
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET

    @classmethod
    def from_query(
        cls,
        q: Optional[str] = None,
        tags: Union[None, str, Iterable[str]] = None,
        is_archived: Any = None,
        is_done: Any = None,
        limit: Any = None,
        offset: Any = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "NoteFilters":
        return cls(
            q=q or None,
            tags=parse_tags(tags),
            is_archived=parse_flag(is_archived),
            is_done=parse_flag(is_done),
            limit=parse_count(limit, default_limit),
            offset=parse_count(offset, DEFAULT_OFFSET),
        )

    def matches(self, note: Note) -> bool:
        if self.q:
            needle = self.q.lower()
            if needle not in note.title.lower() and needle not in note.content.lower():
                return False

        # At least one tag in common
        if self.tags and not any(tag in note.tags for tag in self.tags):
            return False

        if self.is_archived is not None and note.is_archived != self.is_archived:
            return False

        if self.is_done is not None and note.is_done != self.is_done:
            return False

        return True

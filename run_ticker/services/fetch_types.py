"""
Shared dataclasses used across the schedule refresh pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timedelta
from enum import Enum
from typing import Literal


RawRow = tuple[str, ...]
RowPair = tuple[RawRow, RawRow]

FIELD_SEPARATOR = "|"


@dataclass(slots=True, frozen=True)
class FieldRecord:
    """One primary row and one secondary row flattened into named fields."""
    start_time: str
    title: str
    runner: str
    setup_time: str
    length: str
    category: str
    host: str

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def header(cls) -> str:
        return FIELD_SEPARATOR.join(cls.field_names())

    def to_line(self) -> str:
        """Render the record back in its pipe-joined form."""
        return FIELD_SEPARATOR.join(getattr(self, name) for name in self.field_names())


@dataclass(slots=True, frozen=True)
class Entry:
    """A validated schedule entry."""
    start_time: datetime
    title: str
    runner: str
    category: str
    host: str
    length: timedelta | None = None
    setup_time: timedelta | None = None

    @property
    def end_time(self) -> datetime:
        """End of the entry's window; an entry without length ends where it starts."""
        return self.start_time + (self.length or timedelta(0))

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "title": self.title,
            "runner": self.runner,
            "category": self.category,
            "host": self.host,
            "length_seconds": self.length.total_seconds() if self.length is not None else None,
            "setup_seconds": self.setup_time.total_seconds() if self.setup_time is not None else None,
        }


class DiscardReason(str, Enum):
    MALFORMED_ROW = "malformed_row"
    INVALID_TIMESTAMP = "invalid_timestamp"


@dataclass(slots=True, frozen=True)
class Discard:
    """A row pair rejected during entry building."""
    reason: DiscardReason
    detail: str


@dataclass(slots=True, frozen=True)
class Selection:
    current: Entry
    next: Entry | None = None


@dataclass(slots=True, frozen=True)
class RefreshResult:
    """Outcome of one refresh pass, ready to be handed to the display."""
    label: str
    icon: str
    status: Literal["ok", "error", "pending"]
    interval: timedelta
    refreshed_at: datetime | None = None
    category: str | None = None
    error_code: str | None = None
    current: Entry | None = None
    next: Entry | None = None
    entries_parsed: int = 0
    rows_discarded: int = 0

    def to_dict(self) -> dict:
        payload = {
            "label": self.label,
            "icon": self.icon,
            "status": self.status,
            "category": self.category,
            "interval_seconds": self.interval.total_seconds(),
            "refreshed_at": self.refreshed_at.isoformat() if self.refreshed_at else None,
            "entries_parsed": self.entries_parsed,
            "rows_discarded": self.rows_discarded,
            "current": self.current.to_dict() if self.current else None,
            "next": self.next.to_dict() if self.next else None,
        }
        if self.error_code:
            payload["error_code"] = self.error_code
        return payload


__all__ = [
    "RawRow",
    "RowPair",
    "FieldRecord",
    "Entry",
    "DiscardReason",
    "Discard",
    "Selection",
    "RefreshResult",
]

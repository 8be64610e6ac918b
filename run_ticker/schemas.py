from pydantic import BaseModel, Field

from run_ticker.services.fetch_types import Entry, RefreshResult


class EntryResponse(BaseModel):
    """Single schedule entry"""
    start_time: str = Field(..., description="ISO8601 UTC start time")
    end_time: str = Field(..., description="ISO8601 UTC end of the entry's window")
    title: str
    runner: str
    category: str
    host: str
    length_seconds: float | None = Field(None, description="Run length, absent if unparsable")
    setup_seconds: float | None = Field(None, description="Setup time, absent if unparsable")

    @classmethod
    def from_entry(cls, entry: Entry) -> "EntryResponse":
        return cls(**entry.to_dict())


class StatusResponse(BaseModel):
    """Latest rendered schedule status"""
    label: str = Field(..., description="Rendered display label")
    icon: str = Field(..., description="Icon hint for the display")
    status: str = Field(..., description="'ok', 'error' or 'pending' before the first refresh")
    category: str | None = Field(None, description="Category of the current entry")
    error_code: str | None = Field(None, description="Error code (e.g., 'FETCH_FAILED', 'NO_CURRENT_EVENT')")
    refreshed_at: str | None = Field(None, description="ISO8601 timestamp of the refresh pass")
    interval_seconds: float = Field(..., description="Seconds until the next scheduled refresh pass")
    entries_parsed: int = 0
    rows_discarded: int = 0
    current: EntryResponse | None = None
    next: EntryResponse | None = None

    @classmethod
    def from_result(cls, result: RefreshResult) -> "StatusResponse":
        return cls(
            label=result.label,
            icon=result.icon,
            status=result.status,
            category=result.category,
            error_code=result.error_code,
            refreshed_at=result.refreshed_at.isoformat() if result.refreshed_at else None,
            interval_seconds=result.interval.total_seconds(),
            entries_parsed=result.entries_parsed,
            rows_discarded=result.rows_discarded,
            current=EntryResponse.from_entry(result.current) if result.current else None,
            next=EntryResponse.from_entry(result.next) if result.next else None,
        )

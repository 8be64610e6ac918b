"""Shared test fixtures for Run Ticker."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from run_ticker.services.fetch_types import Entry
from run_ticker.services.status_board import reset_status_board


T0 = datetime(2025, 1, 5, 16, 30, tzinfo=timezone.utc)


def _schedule_html(rows: list[list[str]], table_id: str = "runTable") -> str:
    """Render rows of cell texts as a schedule page."""
    body = "\n".join(
        "<tr>" + "".join(f"<td> {cell} </td>" for cell in row) + "</tr>"
        for row in rows
    )
    return (
        "<html><head><title>Schedule</title></head><body>"
        f"<table id='{table_id}'><thead><tr><th>Time</th><th>Game</th></tr></thead>"
        f"<tbody>\n{body}\n</tbody></table></body></html>"
    )


@pytest.fixture
def schedule_html() -> Callable[..., str]:
    return _schedule_html


@pytest.fixture
def t0() -> datetime:
    return T0


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    """Factory for entries with sensible defaults."""

    def _make(
        start_time: datetime = T0,
        title: str = "Super Metroid",
        length: timedelta | None = timedelta(minutes=30),
        **kwargs,
    ) -> Entry:
        fields = {
            "runner": "Runner",
            "category": "Any%",
            "host": "Host",
            "setup_time": timedelta(minutes=10),
        }
        fields.update(kwargs)
        return Entry(start_time=start_time, title=title, length=length, **fields)

    return _make


@pytest.fixture
def schedule_rows() -> list[list[str]]:
    """Three well-formed entries, back to back from T0, as table rows."""
    return [
        ["2025-01-05T16:30:00Z", "Pre-Show", "GDQ Staff", "0:00:00"],
        ["0:30:00", "Pre-Show", "Host A"],
        ["2025-01-05T17:00:00Z", "Super Mario 64", "Runner B", "0:10:00"],
        ["1:40:00", "120 Star", "Host B"],
        ["2025-01-05T18:40:00Z", "Celeste", "Runner C", "0:05:00"],
        ["0:45:00", "Any%", "Host C"],
    ]


@pytest.fixture(autouse=True)
def fresh_status_board():
    """Each test starts with a fresh status board singleton."""
    reset_status_board()
    yield
    reset_status_board()

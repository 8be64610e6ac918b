"""
Timeline Selector

Determines the current and next schedule entries relative to a given instant.
"""
from collections.abc import Iterable
from datetime import datetime
import logging

from run_ticker.errors import NoCurrentEvent
from run_ticker.services.fetch_types import Entry, Selection


logger = logging.getLogger(__name__)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Sort entries by start time; entries starting together keep their document order"""
    return sorted(entries, key=lambda entry: entry.start_time)


def select_current_and_next(entries: Iterable[Entry], now: datetime) -> Selection:
    """
    Select the current and next entries

    The current entry is the earliest-starting entry whose window
    [start_time, start_time + length) has not ended at `now`. An entry without
    a length ends at its start time, so it can only be current before it starts.
    The next entry is the earliest remaining entry starting strictly after `now`.

    Args:
        entries: Validated entries in any order
        now: Timezone-aware instant to select against

    Returns:
        Selection with the current entry and, if any, the next one

    Raises:
        NoCurrentEvent: If every entry has already ended (or there are none)
    """
    timeline = sort_entries(entries)

    current_index = next(
        (index for index, entry in enumerate(timeline) if entry.end_time > now),
        None,
    )
    if current_index is None:
        raise NoCurrentEvent(
            f"No current event: all {len(timeline)} entries ended before {now.isoformat()}"
        )

    current = timeline.pop(current_index)
    upcoming = next((entry for entry in timeline if entry.start_time > now), None)

    logger.debug(
        "Selected current=%r (%s) next=%r",
        current.title,
        current.start_time.isoformat(),
        upcoming.title if upcoming else None,
    )
    return Selection(current=current, next=upcoming)

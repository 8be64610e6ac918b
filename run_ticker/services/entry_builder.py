"""
Entry Builder

Turns paired schedule rows into validated Entry objects.

A start time is mandatory: without it the entry cannot be placed on the
timeline and the pair is discarded. Setup time and length are best-effort
and simply become None when they cannot be read.
"""
from collections.abc import Iterable
from datetime import datetime, timezone
import logging

from run_ticker.services.fetch_types import (
    Discard,
    DiscardReason,
    Entry,
    FieldRecord,
    RowPair,
)
from run_ticker.utils.timezone import (
    DateFormatError,
    parse_clock_duration,
    parse_rfc3339_to_utc,
)


logger = logging.getLogger(__name__)

FIELD_COUNT = len(FieldRecord.field_names())
LATEST_START = datetime.max.replace(tzinfo=timezone.utc)


def flatten_pair(pair: RowPair) -> FieldRecord | Discard:
    """
    Flatten a (primary, secondary) row pair into a FieldRecord

    Args:
        pair: Primary row cells followed by secondary row cells

    Returns:
        FieldRecord, or Discard(MALFORMED_ROW) if the cells don't map onto exactly 7 fields
    """
    primary, secondary = pair
    cells = [*primary, *secondary]

    if len(cells) != FIELD_COUNT:
        return Discard(
            reason=DiscardReason.MALFORMED_ROW,
            detail=f"expected {FIELD_COUNT} fields, got {len(cells)} "
                   f"({len(primary)} primary + {len(secondary)} secondary)",
        )

    return FieldRecord(*cells)


def record_to_entry(record: FieldRecord) -> Entry | Discard:
    """
    Validate a FieldRecord and convert it to an Entry

    Args:
        record: Flattened schedule fields

    Returns:
        Entry, or Discard(INVALID_TIMESTAMP) if start_time is not a valid RFC3339 timestamp
        or the entry's window would end past the representable datetime range
    """
    try:
        start_time = parse_rfc3339_to_utc(record.start_time)
    except DateFormatError as e:
        return Discard(reason=DiscardReason.INVALID_TIMESTAMP, detail=str(e))

    length = parse_clock_duration(record.length)
    if length is not None and start_time > LATEST_START - length:
        return Discard(
            reason=DiscardReason.INVALID_TIMESTAMP,
            detail=f"window end out of range: {record.start_time} + {record.length}",
        )

    return Entry(
        start_time=start_time,
        title=record.title,
        runner=record.runner,
        category=record.category,
        host=record.host,
        length=length,
        setup_time=parse_clock_duration(record.setup_time),
    )


def build_entry(pair: RowPair) -> Entry | Discard:
    """Build a single Entry from a row pair"""
    record = flatten_pair(pair)
    if isinstance(record, Discard):
        return record
    return record_to_entry(record)


def build_entries(pairs: Iterable[RowPair]) -> tuple[list[Entry], list[Discard]]:
    """
    Build entries from all row pairs, collecting discards instead of failing

    Args:
        pairs: Row pairs in document order

    Returns:
        Tuple of (entries, discards), both in input order
    """
    entries: list[Entry] = []
    discards: list[Discard] = []

    for index, pair in enumerate(pairs):
        result = build_entry(pair)
        if isinstance(result, Discard):
            logger.debug(f"Discarding row pair {index} ({result.reason.value}): {result.detail}")
            discards.append(result)
        else:
            entries.append(result)

    if discards:
        by_reason: dict[str, int] = {}
        for discard in discards:
            by_reason[discard.reason.value] = by_reason.get(discard.reason.value, 0) + 1
        summary = ", ".join(f"{reason}={count}" for reason, count in sorted(by_reason.items()))
        logger.warning(f"Discarded {len(discards)} of {len(entries) + len(discards)} row pairs: {summary}")

    logger.debug(f"Built {len(entries)} entries")
    return entries, discards

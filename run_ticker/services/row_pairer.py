"""
Row Pairer

Each schedule entry spans two consecutive table rows: a primary row
(start time, title, runner, setup time) and a secondary row (length,
category, host). This module groups the flat row list back into those units.
"""
import logging
from collections.abc import Sequence

from run_ticker.services.fetch_types import RawRow, RowPair


logger = logging.getLogger(__name__)


def pair_rows(rows: Sequence[RawRow]) -> list[RowPair]:
    """
    Group rows two at a time, preserving document order

    Args:
        rows: Table rows, each a tuple of trimmed cell texts

    Returns:
        List of (primary, secondary) row pairs. An unpaired trailing row is dropped.
    """
    pairs: list[RowPair] = [
        (rows[index], rows[index + 1])
        for index in range(0, len(rows) - 1, 2)
    ]

    if len(rows) % 2:
        logger.info(f"Dropping unpaired trailing row ({len(rows)} rows total): {rows[-1]}")

    logger.debug(f"Paired {len(rows)} rows into {len(pairs)} units")
    return pairs

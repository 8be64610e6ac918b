"""
Structured logging helpers for consistent log formatting.

Provides uniform start/end/summary lines for schedule refresh passes.
"""
import logging
from datetime import datetime, timezone


def log_refresh_start(logger: logging.Logger, url: str) -> None:
    """Log refresh pass start."""
    logger.info(f"Schedule refresh started at {datetime.now(timezone.utc).isoformat()} ({url})")


def log_refresh_end(logger: logging.Logger, label: str, status: str) -> None:
    """
    Log refresh pass end.

    Args:
        logger: Logger instance
        label: Rendered display label
        status: Outcome status ('ok' or 'error')
    """
    logger.info(f"Schedule refresh completed ({status}): {label}")


def log_parse_summary(
    logger: logging.Logger,
    rows: int,
    entries: int,
    discarded: int
) -> None:
    """
    Log row/entry parsing summary.

    Args:
        logger: Logger instance
        rows: Number of table rows selected
        entries: Number of valid entries built
        discarded: Number of row pairs discarded
    """
    logger.info(f"Parse summary - Rows: {rows}, Entries: {entries}, Discarded: {discarded}")

"""
Status Board

Holds the most recent refresh result for display.
Refresh passes return immutable RefreshResult values; the board only swaps
which one is current, so readers always see a complete result.
"""
from datetime import timedelta
import logging
import threading

from run_ticker.config import settings
from run_ticker.services.fetch_types import RefreshResult


logger = logging.getLogger(__name__)


class StatusBoard:
    """
    Display collaborator for the refresh pipeline.

    Written by the scheduler thread, read by HTTP handlers.
    """

    def __init__(self, initial: RefreshResult):
        """Initialize the board with a placeholder result."""
        self._lock = threading.Lock()
        self._latest = initial

    def publish(self, result: RefreshResult) -> None:
        """
        Replace the displayed result.

        Args:
            result: Result of the latest refresh pass
        """
        with self._lock:
            self._latest = result
        logger.debug(f"Published label: {result.label}")

    def latest(self) -> RefreshResult:
        """Return the most recently published result."""
        with self._lock:
            return self._latest


def placeholder_result(label: str, icon: str, interval: timedelta) -> RefreshResult:
    """Result shown before the first refresh pass completes."""
    return RefreshResult(label=label, icon=icon, status="pending", interval=interval)


# Global singleton instance
_board: StatusBoard | None = None


def get_status_board() -> StatusBoard:
    """
    Get or create the global status board singleton.

    Returns:
        The global StatusBoard instance
    """
    global _board
    if _board is None:
        _board = StatusBoard(
            placeholder_result(settings.initial_label, settings.icon, settings.refresh_interval)
        )
    return _board


def reset_status_board() -> None:
    """
    Reset the status board (mainly for testing).

    WARNING: Only use this in test environments!
    """
    global _board
    _board = None

"""
Services package for Run Ticker

This package contains the schedule refresh pipeline and its collaborators.
"""
from run_ticker.services.refresh_service import refresh_schedule
from run_ticker.services.scheduler_service import ticker_scheduler
from run_ticker.services.status_board import get_status_board

__all__ = [
    'refresh_schedule',
    'ticker_scheduler',
    'get_status_board',
]

from collections.abc import Callable
from typing import Annotated
import logging

from fastapi import APIRouter, Depends

from run_ticker.schemas import StatusResponse
from run_ticker.services import (
    get_status_board,
    refresh_schedule,
    ticker_scheduler,
)
from run_ticker.services.fetch_types import RefreshResult
from run_ticker.services.status_board import StatusBoard


logger = logging.getLogger(__name__)

main_router = APIRouter()


def get_refresh() -> Callable[[], RefreshResult]:
    """Refresh pass used by the manual refresh endpoint"""
    return refresh_schedule


@main_router.get("/")
async def root() -> dict:
    """Root endpoint with service information"""
    next_run = ticker_scheduler.get_next_run_time()

    return {
        "service": "Run Ticker",
        "version": "0.1.0",
        "next_scheduled_refresh": next_run.isoformat() if next_run else None,
        "endpoints": {
            "status": "/status - Current and next schedule entry",
            "refresh": "/refresh - Manually trigger a schedule refresh (POST)",
            "health": "/health - Health check"
        }
    }


@main_router.get("/health")
async def health_check() -> dict:
    """Health check endpoint"""
    next_run = ticker_scheduler.get_next_run_time()
    return {
        "status": "ok",
        "scheduler_running": ticker_scheduler.scheduler.running if ticker_scheduler.scheduler else False,
        "next_refresh": next_run.isoformat() if next_run else None
    }


@main_router.get("/status", response_model=StatusResponse)
async def get_status(
    board: Annotated[StatusBoard, Depends(get_status_board)]
) -> StatusResponse:
    """Latest published label with its current and next entries"""
    return StatusResponse.from_result(board.latest())


@main_router.post("/refresh", response_model=StatusResponse)
def trigger_refresh(
    board: Annotated[StatusBoard, Depends(get_status_board)],
    refresh: Annotated[Callable[[], RefreshResult], Depends(get_refresh)]
) -> StatusResponse:
    """
    Manually trigger a schedule refresh

    Failures are reported in the returned status, not as HTTP errors
    """
    logger.info("Manual schedule refresh triggered via API")
    result = refresh()
    board.publish(result)
    return StatusResponse.from_result(result)

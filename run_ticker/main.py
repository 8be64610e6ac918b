from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from run_ticker.config import setup_logging
from run_ticker.services.scheduler_service import ticker_scheduler

from run_ticker.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("Starting Run Ticker...")

    try:
        ticker_scheduler.start()
        logger.info("Run Ticker started successfully")
    except Exception as e:
        logger.error(f"Failed to start Run Ticker: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down Run Ticker...")

    try:
        ticker_scheduler.shutdown()
    except Exception as e:
        logger.error(f"Error during scheduler shutdown: {e}", exc_info=True)

    logger.info("Run Ticker stopped")


app = FastAPI(
    title="Run Ticker",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(main_router)

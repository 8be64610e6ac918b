"""
Schedule Refresh Service

Runs one refresh pass: download, row selection, pairing, entry building,
current/next selection and label rendering. Every failure ends in a
renderable RefreshResult; nothing raised here reaches the scheduler.
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
import logging

from run_ticker.config import settings
from run_ticker.errors import RefreshFailure, ScheduleError
from run_ticker.services.entry_builder import build_entries
from run_ticker.services.fetch_types import RefreshResult, Selection
from run_ticker.services.html_query_service import LxmlRowQuery, RowQuery
from run_ticker.services.row_pairer import pair_rows
from run_ticker.services.schedule_downloader_service import download_schedule_html
from run_ticker.services.timeline_selector import select_current_and_next
from run_ticker.utils.formatting import LabelTemplate
from run_ticker.utils.logging_helpers import (
    log_parse_summary,
    log_refresh_end,
    log_refresh_start,
)


logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], str]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ScheduleRefreshPipeline:
    """Coordinates the stages of a single refresh pass."""

    def __init__(
        self,
        url: str,
        *,
        row_query: RowQuery,
        template: LabelTemplate,
        interval: timedelta,
        fetcher: Fetcher = download_schedule_html,
        clock: Clock = _utc_now,
        fetch_timeout: float = 10.0,
        error_label: str = "ERR",
        icon: str = "joystick",
    ) -> None:
        self.url = url
        self.row_query = row_query
        self.template = template
        self.interval = interval
        self.fetcher = fetcher
        self.clock = clock
        self.fetch_timeout = fetch_timeout
        self.error_label = error_label
        self.icon = icon

    def run(self) -> RefreshResult:
        log_refresh_start(logger, self.url)
        counts = {"entries": 0, "discarded": 0}
        now = self.clock()

        try:
            result = self._ok_result(self._select(now, counts), now, counts)
        except ScheduleError as exc:
            logger.error(f"Schedule refresh failed [{exc.error_code}]: {exc}")
            result = self._error_result(exc, now, counts)
        except Exception as exc:
            logger.error(f"Unexpected error during schedule refresh: {exc}", exc_info=True)
            result = self._error_result(RefreshFailure(str(exc)), now, counts)

        log_refresh_end(logger, result.label, result.status)
        return result

    def _select(self, now: datetime, counts: dict[str, int]) -> Selection:
        document = self.fetcher(self.url, self.fetch_timeout)
        rows = self.row_query.select_rows(document)

        entries, discards = build_entries(pair_rows(rows))
        counts["entries"] = len(entries)
        counts["discarded"] = len(discards)
        log_parse_summary(logger, len(rows), len(entries), len(discards))

        return select_current_and_next(entries, now)

    def _ok_result(self, selection: Selection, now: datetime, counts: dict[str, int]) -> RefreshResult:
        return RefreshResult(
            label=self.template.render(selection),
            icon=self.icon,
            status="ok",
            interval=self.interval,
            refreshed_at=now,
            category=selection.current.category or None,
            current=selection.current,
            next=selection.next,
            entries_parsed=counts["entries"],
            rows_discarded=counts["discarded"],
        )

    def _error_result(self, exc: ScheduleError, now: datetime, counts: dict[str, int]) -> RefreshResult:
        return RefreshResult(
            label=self.error_label,
            icon=self.icon,
            status="error",
            interval=self.interval,
            refreshed_at=now,
            error_code=exc.error_code,
            entries_parsed=counts["entries"],
            rows_discarded=counts["discarded"],
        )


def build_pipeline(**overrides) -> ScheduleRefreshPipeline:
    """
    Build a refresh pipeline from application settings

    Keyword Args:
        Any ScheduleRefreshPipeline keyword argument, overriding the configured value

    Returns:
        Configured ScheduleRefreshPipeline
    """
    options = {
        "row_query": LxmlRowQuery(settings.schedule_rows_xpath),
        "template": LabelTemplate(settings.label_format, settings.none_placeholder),
        "interval": settings.refresh_interval,
        "fetch_timeout": settings.fetch_timeout_sec,
        "error_label": settings.error_label,
        "icon": settings.icon,
    }
    options.update(overrides)
    url = options.pop("url", settings.schedule_url)
    return ScheduleRefreshPipeline(url, **options)


def refresh_schedule() -> RefreshResult:
    """
    Run one refresh pass against the configured schedule

    Returns:
        RefreshResult with the label to display and the interval until the next pass
    """
    return build_pipeline().run()

"""Tests for a full refresh pass with fake collaborators."""

from __future__ import annotations

from datetime import timedelta
import logging

import pytest

from run_ticker.errors import DocumentParseFailure, FetchFailure
from run_ticker.services.html_query_service import LxmlRowQuery
from run_ticker.services.refresh_service import ScheduleRefreshPipeline, build_pipeline
from run_ticker.utils.formatting import LabelTemplate


INTERVAL = timedelta(seconds=20)


class _StaticRowQuery:
    def __init__(self, rows):
        self.rows = [tuple(row) for row in rows]
        self.documents: list[str] = []

    def select_rows(self, document: str):
        self.documents.append(document)
        return self.rows


def _pipeline(fetcher, row_query, now, template="{current} -> {next}"):
    return ScheduleRefreshPipeline(
        "https://schedule.example.com",
        row_query=row_query,
        template=LabelTemplate(template),
        interval=INTERVAL,
        fetcher=fetcher,
        clock=lambda: now,
    )


def _serve(document):
    return lambda url, timeout: document


class TestScheduleRefreshPipeline:
    def test_renders_current_and_next(self, schedule_rows, t0):
        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(schedule_rows), t0 + timedelta(minutes=45))
        result = pipeline.run()
        assert result.status == "ok"
        assert result.label == "Super Mario 64 -> Celeste"
        assert result.category == "120 Star"
        assert result.icon == "joystick"
        assert result.interval == INTERVAL
        assert result.entries_parsed == 3
        assert result.rows_discarded == 0
        assert result.refreshed_at == t0 + timedelta(minutes=45)

    def test_missing_next_uses_placeholder(self, schedule_rows, t0):
        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(schedule_rows), t0 + timedelta(hours=2, minutes=30))
        result = pipeline.run()
        assert result.label == "Celeste -> None"
        assert result.next is None

    def test_end_to_end_with_lxml(self, schedule_html, schedule_rows, t0):
        pipeline = _pipeline(
            _serve(schedule_html(schedule_rows)),
            LxmlRowQuery(),
            t0 + timedelta(minutes=5),
            template="{current} ({runner}, {length}) then {next} at {next_start}",
        )
        result = pipeline.run()
        assert result.label == "Pre-Show (GDQ Staff, 0:30:00) then Super Mario 64 at 17:00"

    def test_malformed_rows_are_discarded_not_fatal(self, schedule_rows, t0):
        rows = [["garbage"], ["more", "garbage"], *schedule_rows, ["trailing"]]
        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(rows), t0 + timedelta(minutes=45))
        result = pipeline.run()
        assert result.status == "ok"
        assert result.rows_discarded == 1
        assert result.entries_parsed == 3

    def test_fetch_failure_renders_error_label(self, t0):
        def failing(url, timeout):
            raise FetchFailure("boom")

        result = _pipeline(failing, _StaticRowQuery([]), t0).run()
        assert result.status == "error"
        assert result.label == "ERR"
        assert result.error_code == "FETCH_FAILED"
        assert result.interval == INTERVAL

    def test_document_parse_failure_renders_error_label(self, t0):
        result = _pipeline(_serve(""), LxmlRowQuery(), t0).run()
        assert result.status == "error"
        assert result.error_code == "DOCUMENT_PARSE_FAILED"

    def test_no_current_event_renders_error_label(self, schedule_rows, t0):
        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(schedule_rows), t0 + timedelta(days=1))
        result = pipeline.run()
        assert result.label == "ERR"
        assert result.error_code == "NO_CURRENT_EVENT"
        assert result.entries_parsed == 3
        assert result.current is None

    def test_empty_table_is_no_current_event(self, t0):
        result = _pipeline(_serve("<html/>"), _StaticRowQuery([]), t0).run()
        assert result.error_code == "NO_CURRENT_EVENT"

    def test_entry_ending_past_datetime_range_is_discarded(self, schedule_rows, t0):
        rows = [["9999-12-31T23:30:00Z", "Finale", "Runner Z", "0:00:00"], ["1:00:00", "Any%", "Host Z"], *schedule_rows]
        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(rows), t0 + timedelta(days=1))
        result = pipeline.run()
        assert result.error_code == "NO_CURRENT_EVENT"
        assert result.rows_discarded == 1
        assert result.entries_parsed == 3

    def test_unexpected_fetcher_error_renders_error_label(self, t0):
        def broken(url, timeout):
            raise RuntimeError("connection pool exhausted")

        result = _pipeline(broken, _StaticRowQuery([]), t0).run()
        assert result.status == "error"
        assert result.label == "ERR"
        assert result.error_code == "REFRESH_FAILED"
        assert result.interval == INTERVAL

    def test_unexpected_row_query_error_renders_error_label(self, t0):
        class _BrokenRowQuery:
            def select_rows(self, document):
                raise TypeError("unexpected document")

        result = _pipeline(_serve("<html/>"), _BrokenRowQuery(), t0).run()
        assert result.label == "ERR"
        assert result.error_code == "REFRESH_FAILED"

    def test_render_error_renders_error_label(self, schedule_rows, t0):
        class _BrokenTemplate:
            def render(self, selection):
                raise KeyError("current")

        pipeline = _pipeline(_serve("<html/>"), _StaticRowQuery(schedule_rows), t0)
        pipeline.template = _BrokenTemplate()
        result = pipeline.run()
        assert result.status == "error"
        assert result.error_code == "REFRESH_FAILED"
        assert result.entries_parsed == 3
        assert result.current is None

    def test_unexpected_error_is_logged_with_traceback(self, t0, caplog):
        def broken(url, timeout):
            raise RuntimeError("connection pool exhausted")

        with caplog.at_level(logging.ERROR, logger="run_ticker.services.refresh_service"):
            _pipeline(broken, _StaticRowQuery([]), t0).run()
        records = [r for r in caplog.records if "connection pool exhausted" in r.getMessage()]
        assert records
        assert records[0].exc_info is not None

    def test_fetched_document_is_passed_to_row_query(self, t0):
        query = _StaticRowQuery([])
        _pipeline(_serve("<html>doc</html>"), query, t0).run()
        assert query.documents == ["<html>doc</html>"]

    def test_to_dict(self, schedule_rows, t0):
        result = _pipeline(_serve("<html/>"), _StaticRowQuery(schedule_rows), t0).run()
        payload = result.to_dict()
        assert payload["status"] == "ok"
        assert payload["current"]["title"] == "Pre-Show"
        assert payload["next"]["title"] == "Super Mario 64"
        assert payload["interval_seconds"] == 20.0
        assert "error_code" not in payload


class TestBuildPipeline:
    def test_uses_settings_defaults(self):
        pipeline = build_pipeline()
        assert pipeline.url == "https://gamesdonequick.com/schedule"
        assert pipeline.error_label == "ERR"
        assert pipeline.interval == timedelta(seconds=20)

    def test_overrides(self):
        pipeline = build_pipeline(url="https://other.example.com", error_label="!!")
        assert pipeline.url == "https://other.example.com"
        assert pipeline.error_label == "!!"

    @pytest.mark.parametrize("name", ["row_query", "template"])
    def test_collaborators_are_built(self, name):
        assert getattr(build_pipeline(), name) is not None

"""
Error hierarchy for schedule refresh failures.

Every failure of a refresh pass is one of these. The refresh service turns each
one into an error label. Anything else raised during a pass is wrapped in
RefreshFailure, so nothing escapes into the scheduler.
"""


class ScheduleError(Exception):
    """Base exception for all schedule refresh errors."""

    error_code = "SCHEDULE_ERROR"


class FetchFailure(ScheduleError):
    """Schedule document could not be retrieved.

    Examples: network errors, timeouts, non-2xx status, undecodable body.
    """

    error_code = "FETCH_FAILED"


class DocumentParseFailure(ScheduleError):
    """Schedule document was retrieved but is not parseable HTML."""

    error_code = "DOCUMENT_PARSE_FAILED"


class NoCurrentEvent(ScheduleError):
    """No entry in the schedule is running now or starts later."""

    error_code = "NO_CURRENT_EVENT"


class RefreshFailure(ScheduleError):
    """Unexpected error inside a refresh pass, e.g. a failing label render."""

    error_code = "REFRESH_FAILED"

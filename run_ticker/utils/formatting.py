"""
Label formatting

Renders the current/next selection into the one-line display label.
"""
from datetime import timedelta
from string import Formatter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from run_ticker.services.fetch_types import Selection

PLACEHOLDERS = frozenset({
    "current",
    "next",
    "runner",
    "category",
    "host",
    "length",
    "next_start",
})


class LabelTemplate:
    """A str.format template restricted to the known label placeholders."""

    def __init__(self, template: str, none_placeholder: str = "None") -> None:
        self.template = validate_template(template)
        self.none_placeholder = none_placeholder

    def render(self, selection: "Selection") -> str:
        current = selection.current
        upcoming = selection.next
        values = {
            "current": current.title,
            "next": upcoming.title if upcoming else self.none_placeholder,
            "runner": current.runner,
            "category": current.category,
            "host": current.host,
            "length": format_duration(current.length),
            "next_start": upcoming.start_time.strftime("%H:%M") if upcoming else "",
        }
        return self.template.format_map(values)


def validate_template(template: str) -> str:
    """
    Check that a label template only uses known, plain placeholders

    Args:
        template: str.format style template, e.g. '{current} -> {next}'

    Returns:
        The template unchanged

    Raises:
        ValueError: On malformed templates, or on placeholders that are unknown
            or carry a format spec or conversion
    """
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise ValueError(f"Malformed label template '{template}': {e}") from e

    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in PLACEHOLDERS:
            raise ValueError(
                f"Unknown placeholder '{{{field_name}}}' in label template, "
                f"allowed: {sorted(PLACEHOLDERS)}"
            )
        # every value is rendered as a plain string
        if format_spec or conversion:
            raise ValueError(
                f"Placeholder '{{{field_name}}}' in label template must not carry "
                f"a format spec or conversion"
            )
    return template


def format_duration(value: timedelta | None) -> str:
    """Format a duration as H:MM:SS, or '' when absent"""
    if value is None:
        return ""
    total = int(value.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{seconds:02d}"

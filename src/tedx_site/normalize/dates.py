"""Date formatting for event headers."""

from datetime import datetime

EN_DASH_SEPARATOR = " – "
META_SEPARATOR = " • "


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp from the CMS, or None if absent or invalid."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_day(value: datetime) -> str:
    """``June 1`` style, without zero padding."""
    return f"{value:%B} {value.day}"


def format_date_range(start_iso: str | None, end_iso: str | None) -> str:
    """Format an event's date span.

    Same calendar day gives a single date, different days give
    ``"June 1 – June 3"``, a single side gives that side, and nothing
    gives an empty string. Days are compared in the timestamps' own offset.
    """
    start = parse_timestamp(start_iso)
    end = parse_timestamp(end_iso)
    if start and end:
        if start.date() == end.date():
            return format_day(start)
        return f"{format_day(start)}{EN_DASH_SEPARATOR}{format_day(end)}"
    if start:
        return format_day(start)
    if end:
        return format_day(end)
    return ""


def meta_line(start_iso: str | None, end_iso: str | None, location: str | None) -> str:
    """``"June 1 • Aula Medica"`` style line; empty parts are skipped."""
    parts = [format_date_range(start_iso, end_iso), (location or "").strip()]
    return META_SEPARATOR.join(part for part in parts if part)

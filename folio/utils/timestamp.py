"""Timestamp formatting utilities."""

from datetime import date, datetime, timezone


def now() -> str:
    """Compact local timestamp for directory names (e.g., "20251114_123456")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def today() -> date:
    """Current local date."""
    return date.today()


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_rfc3339(day: date) -> str:
    """
    Format a date as an RFC 3339 timestamp at midnight UTC, as Atom feeds expect.

    Example:
        >>> format_rfc3339(date(2020, 11, 5))
        "2020-11-05T00:00:00+00:00"
    """
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc).isoformat()


def format_long_date(day: date) -> str:
    """Format a date for display (e.g., "Nov 5, 2020")."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"

"""Date manipulation utilities"""

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_iso_datetime(text: str) -> datetime:
    """
    Parse an ISO 8601 timestamp or date into an aware UTC datetime.

    Accepts a trailing "Z" on every supported Python version.

    Raises:
        ValueError: If the text is not ISO 8601
    """
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))


def format_locale_date(value: datetime) -> str:
    """Format as an en-US short date (M/D/YYYY), evaluated in UTC"""
    value = as_utc(value)
    return f"{value.month}/{value.day}/{value.year}"

"""Helpers for parsing Supabase rows."""

from datetime import date, datetime

from fit_tracker.domain.numbers import to_float


def parse_float(value: object) -> float:
    """Parse a numeric column, treating missing or malformed values as zero."""
    return to_float(value)


def parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_date(value: object) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])

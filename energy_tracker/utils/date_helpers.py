from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def utc_today() -> date:
    return utcnow().date()


def parse_date(value: object) -> date:
    """Parse ``YYYY-MM-DD`` or a full ISO-8601 timestamp into a calendar date.

    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    text = value.strip()
    try:
        return date.fromisoformat(text[:10]) if len(text) == 10 else _parse_datetime(text).date()
    except ValueError:
        raise ValueError(f"Not a date: {value!r}") from None


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; None when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a timestamp: {value!r}")
    return _parse_datetime(value.strip())


def _parse_datetime(text: str) -> datetime:
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def days_ahead(start: date, count: int) -> list[date]:
    """The ``count`` calendar days following ``start`` (exclusive)."""
    return [start + timedelta(days=i) for i in range(1, count + 1)]

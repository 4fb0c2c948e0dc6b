"""
Calendar-date helpers.

All booking arithmetic works on ``datetime.date`` values and half-open
``[start, end)`` ranges: a rental ending on day D and another starting on
day D do not overlap.
"""
from datetime import date, datetime, time
from typing import Any, Optional, Tuple, Union

from rental.core.exceptions import ValidationError

DateLike = Union[date, str]


def parse_date(value: Any, field: str = "date") -> date:
    """
    Coerce a ``date`` or ISO-8601 ``YYYY-MM-DD`` string to a ``date``.

    Raises:
        ValidationError: If the value is empty or not a calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(f"{field} is required")
        try:
            return date.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field} must be a date in YYYY-MM-DD format, got '{text}'") from None
    if value is None:
        raise ValidationError(f"{field} is required")
    raise ValidationError(f"{field} must be a date, got {type(value).__name__}")


def parse_date_range(start: Any, end: Any) -> Tuple[date, date]:
    """Parse both ends of a rental period and require ``end`` strictly after ``start``."""
    start_date = parse_date(start, "start_date")
    end_date = parse_date(end, "end_date")
    if end_date <= start_date:
        raise ValidationError(
            f"end_date ({end_date.isoformat()}) must be after start_date ({start_date.isoformat()})"
        )
    return start_date, end_date


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    return start_a < end_b and start_b < end_a


def covers(start: date, end: date, day: date) -> bool:
    return start <= day < end


def nights_between(start: date, end: date) -> int:
    return max((end - start).days, 0)


def nights_within(start: date, end: date, period_start: date, period_end: date) -> int:
    """Number of nights of ``[start, end)`` falling inside ``[period_start, period_end)``."""
    return nights_between(max(start, period_start), min(end, period_end))


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Half-open bounds of a calendar month."""
    first = date(year, month, 1)
    if month == 12:
        return first, date(year + 1, 1, 1)
    return first, date(year, month + 1, 1)


def to_datetime(value: date) -> datetime:
    """Midnight ``datetime`` for a ``date`` (BSON has no pure date type)."""
    return datetime.combine(value, time.min)


def to_date(value: Optional[Union[date, datetime]]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value

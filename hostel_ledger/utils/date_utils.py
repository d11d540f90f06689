# hostel_ledger/utils/date_utils.py
"""
Date helpers for occupancy reports.

Notes:
- Backend documents store dates as loosely formatted strings
  (``2024-03-01``, ``2024-03-01T10:15:00.000Z``, ``March 1, 2024`` ...).
  `parse_date_safe` never raises; an unusable value is represented by an
  `Unparseable` result rather than an exception.
- Report bounds are naive, calendar-day datetimes: timezone suffixes on
  source strings are ignored once the calendar day has been read.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Tuple, Union

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class ParsedDate:
    """A successfully parsed calendar day."""

    value: date

    def date_or_none(self) -> Optional[date]:
        return self.value


@dataclass(frozen=True)
class Unparseable:
    """A value that could not be read as a calendar day."""

    raw: Any = None

    def date_or_none(self) -> Optional[date]:
        return None


DateParseResult = Union[ParsedDate, Unparseable]


def _parse_year_month_day(text: str) -> Optional[date]:
    """
    Strict ``YEAR-MONTH-DAY`` decomposition.

    Only the first two characters of the day field are read, which lets
    ISO timestamps through (``2024-02-01T10:00:00Z`` -> 2024-02-01).
    """
    parts = text.split("-")
    if len(parts) < 3:
        return None
    try:
        return date(int(parts[0]), int(parts[1]), int(parts[2][:2]))
    except ValueError:
        return None


def parse_date_safe(value: Any) -> DateParseResult:
    """Parse a loosely formatted date value into a calendar day."""
    if value is None:
        return Unparseable(value)
    if isinstance(value, datetime):
        return ParsedDate(value.date())
    if isinstance(value, date):
        return ParsedDate(value)
    if not isinstance(value, str):
        return Unparseable(value)

    text = value.strip()
    if not text:
        return Unparseable(value)

    strict = _parse_year_month_day(text)
    if strict is not None:
        return ParsedDate(strict)

    # Missing fields default to January 1st of the current year
    default = datetime.combine(date.today().replace(month=1, day=1), time.min)
    try:
        return ParsedDate(date_parser.parse(text, default=default).date())
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date value {value!r}: {e}")
        return Unparseable(value)


def parse_date_or_none(value: Any) -> Optional[date]:
    """Shortcut for ``parse_date_safe(value).date_or_none()``."""
    return parse_date_safe(value).date_or_none()


def start_of_day(d: Optional[date]) -> Optional[datetime]:
    """Return 00:00:00.000 of the given day, or None."""
    if d is None:
        return None
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, time.min)


def end_of_day(d: Optional[date]) -> Optional[datetime]:
    """Return 23:59:59.999 of the given day, or None."""
    if d is None:
        return None
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, END_OF_DAY)


def ranges_overlap(
    a_start: Optional[datetime],
    a_end: Optional[datetime],
    b_start: Optional[datetime],
    b_end: Optional[datetime],
) -> bool:
    """
    Closed-interval overlap test; touching endpoints overlap.

    Any missing bound yields False. Callers that want an open-ended
    interval must substitute a concrete bound first.
    """
    if a_start is None or a_end is None or b_start is None or b_end is None:
        return False
    return not (a_end < b_start or b_end < a_start)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Return (first_day, last_day) of a given month."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    return first, last


def default_report_range(today: Optional[date] = None) -> Tuple[date, date]:
    """First day of the previous month through the last day of this month."""
    today = today or date.today()
    first_of_current = today.replace(day=1)
    previous = first_of_current - timedelta(days=1)
    start, _ = month_range(previous.year, previous.month)
    _, end = month_range(today.year, today.month)
    return start, end


def format_input_date(d: Optional[date]) -> str:
    """Format a day as ``YYYY-MM-DD`` (empty string for None)."""
    if d is None:
        return ""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


__all__ = [
    "ParsedDate",
    "Unparseable",
    "DateParseResult",
    "parse_date_safe",
    "parse_date_or_none",
    "start_of_day",
    "end_of_day",
    "ranges_overlap",
    "month_range",
    "default_report_range",
    "format_input_date",
]

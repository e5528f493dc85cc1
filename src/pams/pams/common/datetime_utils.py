from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError

_PERIOD_RE = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp ("YYYY-MM-DDTHH:MM[:SS]" or a bare date)."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, TypeError, ValueError):
        raise ValidationError(f"Invalid ISO date {value!r}")
    # Stored timestamps are naive local time.
    return parsed.astimezone().replace(tzinfo=None) if parsed.tzinfo else parsed


def parse_hhmm(value: str) -> time:
    """Parse an "HH:MM" company setting into a time of day."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_period(period: str) -> tuple[int, int]:
    """Split a "YYYY-MM" period key into (year, month)."""
    if not period or not _PERIOD_RE.match(period):
        raise ValidationError("Valid period is required (YYYY-MM)")
    year, month = int(period[:4]), int(period[5:])
    if not 1 <= month <= 12:
        raise ValidationError("Valid period is required (YYYY-MM)")
    return year, month


def format_period(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_period(today: date | None = None) -> str:
    today = today or now_local().date()
    return format_period(today.year, today.month)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(period: str) -> tuple[date, date]:
    """First and last calendar day of the period, both inclusive."""
    year, month = parse_period(period)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def trailing_periods(period: str, count: int) -> list[str]:
    """The ``count`` periods ending at ``period``, newest first."""
    year, month = parse_period(period)
    out = []
    for i in range(count):
        y, m = shift_month(year, month, -i)
        out.append(format_period(y, m))
    return out


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def count_working_days(start: date, end: date) -> int:
    """Count Mon-Fri days in [start, end]; 0 when end is before start."""
    count = 0
    current = start
    while current <= end:
        if is_weekday(current):
            count += 1
        current += timedelta(days=1)
    return count


def working_days_in_month(year: int, month: int) -> int:
    last_day = calendar.monthrange(year, month)[1]
    return count_working_days(date(year, month, 1), date(year, month, last_day))

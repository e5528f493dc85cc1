from __future__ import annotations

from datetime import datetime

from .base import CheckInStrategy, LateDecision
from .late_strategy import minutes_late


class HalfDayStrategy(CheckInStrategy):
    """Late check-in that lands on the half-day step of the monthly late cycle."""

    def decide(self, *, now: datetime, deadline: datetime) -> LateDecision:
        return LateDecision(is_late=True, late_by_minutes=minutes_late(now, deadline), is_half_day=True)

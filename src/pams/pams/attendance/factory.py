from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..users.model import CompanySettings
from .strategies.base import CheckInStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from company rules."""

    @staticmethod
    def deadline_for(today: date, company: CompanySettings) -> datetime:
        return datetime.combine(today, company.in_time) + timedelta(minutes=company.grace_minutes)

    def for_checkin(
        self,
        *,
        now: datetime,
        today: date,
        company: Optional[CompanySettings],
        prior_late_count: int,
    ) -> CheckInStrategy:
        if not company or now <= self.deadline_for(today, company):
            return OnTimeStrategy()

        # Repeating cycle: with threshold=3, late arrivals #4, #8, #12... are half days.
        late_number = prior_late_count + 1
        cycle_length = company.late_threshold + 1
        if cycle_length > 0 and late_number % cycle_length == 0:
            return HalfDayStrategy()
        return LateStrategy()

"""Leave impact calculation, done once when a leave is filed.

A leave filed at least ``advance_notice_days`` before it starts is an advance
leave and costs nothing. Anything later is an emergency leave with a scoring
penalty: -1.0, or -2.0 when it spans more than ``long_emergency_threshold_days``
working days. Approving proof later zeroes the penalty but keeps the
emergency flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import count_working_days
from ..core.exceptions import ValidationError
from ..core.settings import EngineSettings

SHORT_EMERGENCY_IMPACT = -1.0
LONG_EMERGENCY_IMPACT = -2.0


@dataclass(frozen=True)
class LeaveImpact:
    duration_days: int
    days_in_advance: int
    is_advance: bool
    is_emergency: bool
    scoring_impact: float


def assess_leave(start_date: date, end_date: date, *, today: date, settings: EngineSettings | None = None) -> LeaveImpact:
    settings = settings or EngineSettings()

    if end_date < start_date:
        raise ValidationError("End date must be on or after start date")

    duration_days = count_working_days(start_date, end_date)
    if duration_days == 0:
        raise ValidationError("Leave must include at least one working day")

    days_in_advance = (start_date - today).days
    is_advance = days_in_advance >= settings.advance_notice_days

    scoring_impact = 0.0
    if not is_advance:
        long_leave = duration_days > settings.long_emergency_threshold_days
        scoring_impact = LONG_EMERGENCY_IMPACT if long_leave else SHORT_EMERGENCY_IMPACT

    return LeaveImpact(
        duration_days=duration_days,
        days_in_advance=days_in_advance,
        is_advance=is_advance,
        is_emergency=not is_advance,
        scoring_impact=scoring_impact,
    )

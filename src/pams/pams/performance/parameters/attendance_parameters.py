from __future__ import annotations

from ...common.datetime_utils import format_period, month_bounds, shift_month, working_days_in_month
from ...common.numbers import round2, round_half_up
from ...core.constants import SIMULTANEOUS_ABSENCE_LOOKBACK_MONTHS
from .registry import ParameterResult, ScoringContext, register


@register("Attendance Consistency")
def attendance_consistency(ctx: ScoringContext) -> ParameterResult:
    working_days = working_days_in_month(ctx.year, ctx.month)
    days_present = len(ctx.attendance_records)
    rate = days_present / working_days * 100 if working_days > 0 else 0.0
    return ParameterResult(round2(rate), float(min(100, round_half_up(rate))))


@register("Overtime & Extra Effort")
def overtime_extra_effort(ctx: ScoringContext) -> ParameterResult:
    hours = sum(r.overtime_hours or 0.0 for r in ctx.attendance_records)
    score = min(100.0, 30 + hours * 3.5)
    return ParameterResult(round2(hours), float(round_half_up(score)))


@register("Punctuality")
def punctuality(ctx: ScoringContext) -> ParameterResult:
    late = sum(1 for r in ctx.attendance_records if r.is_late)
    half_days = sum(1 for r in ctx.attendance_records if r.is_half_day)
    score = max(0, 100 - late * 10 - half_days * 20)
    return ParameterResult(float(late + half_days * 2), float(score))


@register("Simultaneous Absence")
def simultaneous_absence(ctx: ScoringContext) -> ParameterResult:
    """Company-wide: days with 2+ people missing, from three months before the period through its end."""
    year, month = shift_month(ctx.year, ctx.month, -SIMULTANEOUS_ABSENCE_LOOKBACK_MONTHS)
    window_start, _ = month_bounds(format_period(year, month))
    violations = ctx.simultaneous_absence_days(window_start, ctx.end)
    return ParameterResult(float(violations), float(max(0, 100 - violations * 15)))

from __future__ import annotations

from ...common.numbers import clamp, round_half_up
from ...core.enums import LeaveStatus, LeaveType
from .registry import ParameterResult, ScoringContext, register

NO_LEAVES_DISCIPLINE_SCORE = 80.0


@register("Health/Sickness Frequency")
def health_sickness_frequency(ctx: ScoringContext) -> ParameterResult:
    sick = sum(1 for l in ctx.leaves if l.leave_type == LeaveType.SICK and l.status == LeaveStatus.APPROVED)
    return ParameterResult(float(sick), float(max(0, 100 - sick * 20)))


@register("Leave Discipline")
def leave_discipline(ctx: ScoringContext) -> ParameterResult:
    leaves = [l for l in ctx.leaves if l.status in (LeaveStatus.APPROVED, LeaveStatus.PENDING)]
    if not leaves:
        return ParameterResult(0.0, NO_LEAVES_DISCIPLINE_SCORE)
    advance = sum(1 for l in leaves if l.is_advance)
    emergency = sum(1 for l in leaves if l.is_emergency)
    impact = sum(l.scoring_impact for l in leaves)
    score = clamp(80 + advance * 5 + impact * 10 - emergency * 15, 0.0, 100.0)
    return ParameterResult(float(emergency), float(round_half_up(score)))

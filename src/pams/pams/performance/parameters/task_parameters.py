from __future__ import annotations

from ...common.numbers import round2, round_half_up
from .registry import NEUTRAL_SCORE, ParameterResult, ScoringContext, register

NO_TASKS_BACKLOG_SCORE = 70.0


@register("Task Completion Speed")
def task_completion_speed(ctx: ScoringContext) -> ParameterResult:
    tasks = ctx.completed_tasks
    if not tasks:
        return ParameterResult(0.0, NEUTRAL_SCORE)
    avg = sum(t.speed_score or 0.0 for t in tasks) / len(tasks)
    return ParameterResult(round2(avg), float(round_half_up(avg)))


@register("Work Accuracy")
def work_accuracy(ctx: ScoringContext) -> ParameterResult:
    reviews = ctx.reviews
    if not reviews:
        return ParameterResult(0.0, NEUTRAL_SCORE)
    avg = sum(r.accuracy_score for r in reviews) / len(reviews)
    return ParameterResult(round2(avg), float(round_half_up(avg)))


@register("Backlog Management")
def backlog_management(ctx: ScoringContext) -> ParameterResult:
    tasks = ctx.created_tasks
    if not tasks:
        return ParameterResult(0.0, NO_TASKS_BACKLOG_SCORE)
    overdue = sum(1 for t in tasks if t.is_past_deadline(ctx.end_dt))
    rate = overdue / len(tasks) * 100
    return ParameterResult(float(overdue), float(round_half_up(max(0.0, 100 - rate * 1.5))))


@register("WFH Productivity")
def wfh_productivity(ctx: ScoringContext) -> ParameterResult:
    wfh_days = sum(1 for r in ctx.attendance_records if r.is_wfh)
    if wfh_days == 0:
        return ParameterResult(0.0, NEUTRAL_SCORE)
    wfh_tasks = sum(1 for t in ctx.completed_tasks if t.is_wfh_task)
    per_day = wfh_tasks / wfh_days
    return ParameterResult(round2(per_day), float(round_half_up(min(100.0, per_day * 50))))

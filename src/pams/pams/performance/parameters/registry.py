"""Parameter formulas keyed by parameter name.

Every formula has the same shape, ``(ScoringContext) -> ParameterResult``;
new ones are added with ``@register("Name")`` and need no dispatcher change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from functools import cached_property
from typing import Callable, Dict, Sequence

from ...attendance.model import AttendanceRecord
from ...attendance.repository import AttendanceRepository
from ...common.datetime_utils import month_bounds, parse_period
from ...leaves.model import LeaveRequest
from ...leaves.repository import LeaveRepository
from ...tasks.model import Task, TaskReview
from ...tasks.repository import TaskRepository

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0


@dataclass(frozen=True)
class ParameterResult:
    raw_value: float
    normalized_score: float


ParameterFormulaFn = Callable[["ScoringContext"], ParameterResult]

PARAMETER_REGISTRY: Dict[str, ParameterFormulaFn] = {}


def register(name: str):
    def decorator(fn: ParameterFormulaFn) -> ParameterFormulaFn:
        if name in PARAMETER_REGISTRY:
            raise ValueError(f"Parameter formula already registered: {name}")
        PARAMETER_REGISTRY[name] = fn
        return fn

    return decorator


class ScoringContext:
    """One user's data for one period; each source is loaded at most once."""

    def __init__(
        self,
        *,
        user_id: int,
        company_id: int,
        period: str,
        attendance: AttendanceRepository,
        tasks: TaskRepository,
        leaves: LeaveRepository,
    ):
        self.user_id = int(user_id)
        self.company_id = int(company_id)
        self.period = period
        self.year, self.month = parse_period(period)
        self.start, self.end = month_bounds(period)
        self._attendance = attendance
        self._tasks = tasks
        self._leaves = leaves

    @property
    def start_dt(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def end_dt(self) -> datetime:
        return datetime.combine(self.end, time(23, 59, 59))

    @cached_property
    def attendance_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_user_between(self.user_id, self.start, self.end)

    @cached_property
    def completed_tasks(self) -> Sequence[Task]:
        return self._tasks.list_completed_for_user_between(self.user_id, self.start_dt, self.end_dt)

    @cached_property
    def created_tasks(self) -> Sequence[Task]:
        return self._tasks.list_created_for_user_between(self.user_id, self.start_dt, self.end_dt)

    @cached_property
    def reviews(self) -> Sequence[TaskReview]:
        return self._tasks.list_reviews_for_user_completed_between(self.user_id, self.start_dt, self.end_dt)

    @cached_property
    def leaves(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_user_starting_between(self.user_id, self.start, self.end)

    def simultaneous_absence_days(self, start: date, end: date) -> int:
        return self._attendance.count_simultaneous_absence_days(self.company_id, start, end)


def score_parameter(name: str, ctx: ScoringContext) -> ParameterResult:
    """Score one named parameter; unknown names get the neutral default."""
    fn = PARAMETER_REGISTRY.get(name)
    if fn is None:
        logger.debug("no formula registered for parameter %r; using neutral score", name)
        return ParameterResult(0.0, NEUTRAL_SCORE)
    return fn(ctx)

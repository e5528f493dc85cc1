from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local, parse_period, trailing_periods
from ..core.constants import DEFAULT_HISTORY_PERIODS
from ..core.enums import ADMIN_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..core.settings import EngineSettings
from ..leaves.repository import LeaveRepository
from ..tasks.repository import TaskRepository
from ..users.model import User
from ..users.repository import UserRepository
from .aggregator import aggregate, weighted_score
from .model import CompositeResult, ParameterScore, PerformanceDetail, RankingEntry
from .parameters import ScoringContext, score_parameter
from .repository import PerformanceRepository
from .tiers import map_tier

logger = logging.getLogger(__name__)


class PerformanceService:
    def __init__(
        self,
        performance: PerformanceRepository,
        users: UserRepository,
        attendance: AttendanceRepository,
        tasks: TaskRepository,
        leaves: LeaveRepository,
        *,
        settings: EngineSettings | None = None,
    ):
        self._performance = performance
        self._users = users
        self._attendance = attendance
        self._tasks = tasks
        self._leaves = leaves
        self._settings = settings or EngineSettings()

    def _compose(self, user_id: int, period: str, scores: list[ParameterScore]) -> CompositeResult:
        total = aggregate(scores)
        tier = map_tier(total, self._settings.bonus_tiers)
        return CompositeResult(
            user_id=int(user_id),
            period=period,
            total_score=total,
            bonus_percentage=tier.bonus_percentage,
            tier=tier.tier,
            tier_color=tier.tier_color,
            scores=tuple(scores),
        )

    def calculate_user(self, user_id: int, company_id: int, period: str) -> CompositeResult:
        """Score every active parameter for one user and period; nothing is persisted."""
        parse_period(period)
        ctx = ScoringContext(
            user_id=user_id,
            company_id=company_id,
            period=period,
            attendance=self._attendance,
            tasks=self._tasks,
            leaves=self._leaves,
        )
        scores = []
        for param in self._performance.list_active_parameters(company_id):
            result = score_parameter(param.name, ctx)
            scores.append(
                ParameterScore(
                    parameter_id=param.parameter_id,
                    parameter_name=param.name,
                    weight=param.weight,
                    raw_value=result.raw_value,
                    normalized_score=result.normalized_score,
                    weighted_score=weighted_score(result.normalized_score, param.weight),
                )
            )
        return self._compose(user_id, period, scores)

    def calculate_company(
        self, *, current_role: Role, company_id: int, period: str, now: datetime | None = None
    ) -> dict:
        """Recalculate and store scores for every active user; safe to re-run."""
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("Only admins can trigger score calculation")
        parse_period(period)
        now = now or now_local()

        calculated = 0
        for user in self._users.list_active_for_company(company_id):
            result = self.calculate_user(user.user_id, company_id, period)
            for score in result.scores:
                self._performance.upsert_score(user_id=user.user_id, period=period, score=score, calculated_at=now)
            self._performance.upsert_composite(result, calculated_at=now)
            calculated += 1

        logger.info("scores calculated company=%s period=%s users=%s", company_id, period, calculated)
        return {"calculated": calculated, "period": period}

    def get_or_calculate(self, user_id: int, company_id: int, period: str) -> CompositeResult:
        """Stored scores when the period was already calculated, otherwise a fresh (unsaved) result."""
        stored = list(self._performance.list_stored_scores(user_id, period))
        if stored:
            return self._compose(user_id, period, stored)
        return self.calculate_user(user_id, company_id, period)

    def rankings(self, *, current_role: Role, company_id: int, period: str) -> list[RankingEntry]:
        if current_role == Role.STAFF:
            raise AuthorizationError("Only reviewers and admins can view rankings")
        parse_period(period)

        users = sorted(self._users.list_active_for_company(company_id), key=lambda u: u.first_name)
        results = [(u, self.get_or_calculate(u.user_id, company_id, period)) for u in users]
        # Stable sort keeps first-name order among equal scores.
        results.sort(key=lambda pair: pair[1].total_score, reverse=True)
        return [
            RankingEntry(rank=i, user_id=u.user_id, user_name=u.full_name, employee_code=u.employee_code, result=r)
            for i, (u, r) in enumerate(results, start=1)
        ]

    def _get_user_in_company(self, user_id: int, company_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user or user.company_id != int(company_id):
            raise NotFoundError("User not found")
        return user

    def user_detail(
        self,
        *,
        current_role: Role,
        actor_id: int,
        company_id: int,
        user_id: int,
        period: str,
        history_periods: Optional[int] = None,
    ) -> PerformanceDetail:
        if current_role == Role.STAFF and int(user_id) != int(actor_id):
            raise AuthorizationError("You can only view your own performance")
        parse_period(period)
        user = self._get_user_in_company(user_id, company_id)

        result = self.get_or_calculate(user.user_id, company_id, period)
        periods = trailing_periods(period, history_periods or DEFAULT_HISTORY_PERIODS)
        history = self._performance.list_composites(user.user_id, periods)
        return PerformanceDetail(
            user_id=user.user_id,
            user_name=user.full_name,
            employee_code=user.employee_code,
            result=result,
            history=tuple(history),
        )

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import CompositeResult, ParameterScore, ScoringParameter


class PerformanceRepository(Protocol):
    def list_active_parameters(self, company_id: int) -> Sequence[ScoringParameter]:
        """Active parameters of the company, in ``sort_order``."""

        raise NotImplementedError

    def upsert_score(
        self,
        *,
        user_id: int,
        period: str,
        score: ParameterScore,
        calculated_at: datetime,
    ) -> None:
        raise NotImplementedError

    def upsert_composite(self, result: CompositeResult, *, calculated_at: datetime) -> None:
        """Write the per-(user, period) composite; re-running overwrites it."""

        raise NotImplementedError

    def list_stored_scores(self, user_id: int, period: str) -> Sequence[ParameterScore]:
        """Stored scores of the active parameters, carrying each parameter's current name and weight."""

        raise NotImplementedError

    def get_composite(self, user_id: int, period: str) -> Optional[CompositeResult]:
        raise NotImplementedError

    def list_composites(self, user_id: int, periods: Sequence[str]) -> Sequence[CompositeResult]:
        """Stored composites of the given periods, oldest first."""

        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import ParameterFormula


@dataclass(frozen=True)
class ScoringParameter:
    parameter_id: int
    company_id: int
    name: str
    weight: float
    formula: ParameterFormula = ParameterFormula.HIGHER_IS_BETTER
    description: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


@dataclass(frozen=True)
class ParameterScore:
    parameter_id: int
    parameter_name: str
    weight: float
    raw_value: float
    normalized_score: float
    weighted_score: float


@dataclass(frozen=True)
class TierResult:
    bonus_percentage: int
    tier: str
    tier_color: str


@dataclass(frozen=True)
class CompositeResult:
    user_id: int
    period: str
    total_score: float
    bonus_percentage: int
    tier: str
    tier_color: str
    scores: tuple[ParameterScore, ...] = field(default_factory=tuple)
    is_finalized: bool = False

    def breakdown(self) -> list[dict]:
        return [
            {
                "parameter_id": s.parameter_id,
                "parameter_name": s.parameter_name,
                "weight": s.weight,
                "raw_value": s.raw_value,
                "normalized_score": s.normalized_score,
                "weighted_score": s.weighted_score,
            }
            for s in self.scores
        ]


@dataclass(frozen=True)
class RankingEntry:
    rank: int
    user_id: int
    user_name: str
    employee_code: str
    result: CompositeResult


@dataclass(frozen=True)
class PerformanceDetail:
    user_id: int
    user_name: str
    employee_code: str
    result: CompositeResult
    history: tuple[CompositeResult, ...] = field(default_factory=tuple)

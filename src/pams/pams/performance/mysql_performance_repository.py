from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import ParameterFormula
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, dumps_json, fetchall, fetchone, loads_json
from .model import CompositeResult, ParameterScore, ScoringParameter
from .repository import PerformanceRepository

_COMPOSITE_COLUMNS = """
    user_id, period, total_score, bonus_percentage, tier, tier_color, breakdown, is_finalized
"""


def _to_parameter(r: dict[str, Any]) -> ScoringParameter:
    return ScoringParameter(
        parameter_id=int(r["parameter_id"]),
        company_id=int(r["company_id"]),
        name=r["name"],
        weight=as_float(r["weight"]),
        formula=ParameterFormula(r["formula"]),
        description=r.get("description"),
        is_active=bool(r["is_active"]),
        sort_order=int(r.get("sort_order") or 0),
    )


def _to_score(r: dict[str, Any]) -> ParameterScore:
    return ParameterScore(
        parameter_id=int(r["parameter_id"]),
        parameter_name=r["parameter_name"],
        weight=as_float(r["weight"]),
        raw_value=as_float(r["raw_value"]),
        normalized_score=as_float(r["normalized_score"]),
        weighted_score=as_float(r["weighted_score"]),
    )


def _to_composite(r: dict[str, Any]) -> CompositeResult:
    breakdown = loads_json(r.get("breakdown"), default=[]) or []
    return CompositeResult(
        user_id=int(r["user_id"]),
        period=r["period"],
        total_score=as_float(r["total_score"]),
        bonus_percentage=int(r["bonus_percentage"]),
        tier=r["tier"],
        tier_color=r.get("tier_color") or "",
        scores=tuple(_to_score(item) for item in breakdown),
        is_finalized=bool(r.get("is_finalized")),
    )


class MySQLPerformanceRepository(PerformanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_parameters(self, company_id: int) -> Sequence[ScoringParameter]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT parameter_id, company_id, name, description, weight, formula, is_active, sort_order
                FROM perf_parameters
                WHERE company_id=%s AND is_active=1
                ORDER BY sort_order, parameter_id
                """,
                (int(company_id),),
            )
            return [_to_parameter(r) for r in fetchall(cur)]

    def upsert_score(
        self,
        *,
        user_id: int,
        period: str,
        score: ParameterScore,
        calculated_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO perf_scores(
                    user_id, parameter_id, period, raw_value, normalized_score, weighted_score, calculated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    raw_value=VALUES(raw_value),
                    normalized_score=VALUES(normalized_score),
                    weighted_score=VALUES(weighted_score),
                    calculated_at=VALUES(calculated_at)
                """,
                (
                    int(user_id),
                    int(score.parameter_id),
                    period,
                    score.raw_value,
                    score.normalized_score,
                    score.weighted_score,
                    calculated_at,
                ),
            )

    def upsert_composite(self, result: CompositeResult, *, calculated_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO bonus_calculations(
                    user_id, period, total_score, bonus_percentage, tier, tier_color, breakdown, calculated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    total_score=VALUES(total_score),
                    bonus_percentage=VALUES(bonus_percentage),
                    tier=VALUES(tier),
                    tier_color=VALUES(tier_color),
                    breakdown=VALUES(breakdown),
                    calculated_at=VALUES(calculated_at)
                """,
                (
                    int(result.user_id),
                    result.period,
                    result.total_score,
                    int(result.bonus_percentage),
                    result.tier,
                    result.tier_color,
                    dumps_json(result.breakdown()),
                    calculated_at,
                ),
            )

    def list_stored_scores(self, user_id: int, period: str) -> Sequence[ParameterScore]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.parameter_id, p.name AS parameter_name, p.weight,
                       s.raw_value, s.normalized_score, s.weighted_score
                FROM perf_scores s
                JOIN perf_parameters p ON p.parameter_id = s.parameter_id
                WHERE s.user_id=%s AND s.period=%s AND p.is_active=1
                ORDER BY p.sort_order, p.parameter_id
                """,
                (int(user_id), period),
            )
            return [_to_score(r) for r in fetchall(cur)]

    def get_composite(self, user_id: int, period: str) -> Optional[CompositeResult]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COMPOSITE_COLUMNS} FROM bonus_calculations WHERE user_id=%s AND period=%s",
                (int(user_id), period),
            )
            row = fetchone(cur)
            return _to_composite(row) if row else None

    def list_composites(self, user_id: int, periods: Sequence[str]) -> Sequence[CompositeResult]:
        if not periods:
            return []
        placeholders = ",".join(["%s"] * len(periods))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COMPOSITE_COLUMNS} FROM bonus_calculations
                WHERE user_id=%s AND period IN ({placeholders})
                ORDER BY period
                """,
                (int(user_id), *periods),
            )
            return [_to_composite(r) for r in fetchall(cur)]

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType, ProofStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.user_id, u.company_id, l.leave_type, l.start_date, l.end_date,
           l.duration_days, l.is_advance, l.is_emergency, l.scoring_impact, l.status, l.applied_on,
           l.proof_status, l.reason, l.proof_url, l.approved_by, l.approval_notes
    FROM leave_requests l
    JOIN users u ON u.user_id = l.user_id
"""


def _to_leave(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        company_id=int(r["company_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        duration_days=int(r["duration_days"]),
        is_advance=bool(r["is_advance"]),
        is_emergency=bool(r["is_emergency"]),
        scoring_impact=as_float(r["scoring_impact"]),
        status=LeaveStatus(r["status"]),
        applied_on=r["applied_on"],
        proof_status=ProofStatus(r["proof_status"]),
        reason=r.get("reason"),
        proof_url=r.get("proof_url"),
        approved_by=r.get("approved_by"),
        approval_notes=r.get("approval_notes"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
        duration_days: int,
        is_advance: bool,
        is_emergency: bool,
        scoring_impact: float,
        applied_on: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    user_id, leave_type, start_date, end_date, reason, duration_days,
                    is_advance, is_emergency, scoring_impact, status, proof_status, applied_on
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    int(duration_days),
                    int(is_advance),
                    int(is_emergency),
                    scoring_impact,
                    LeaveStatus.PENDING.value,
                    ProofStatus.NOT_REQUIRED.value,
                    applied_on,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def update_status(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: Optional[int],
        approval_notes: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s,
                    approved_by=COALESCE(%s, approved_by),
                    approval_notes=COALESCE(%s, approval_notes)
                WHERE leave_id=%s
                """,
                (status.value, approved_by, approval_notes, int(leave_id)),
            )
            return cur.rowcount > 0

    def set_proof(self, *, leave_id: int, proof_url: str, proof_status: ProofStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET proof_url=%s, proof_status=%s WHERE leave_id=%s",
                (proof_url, proof_status.value, int(leave_id)),
            )
            return cur.rowcount > 0

    def set_proof_status(self, *, leave_id: int, proof_status: ProofStatus, scoring_impact: Optional[float]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET proof_status=%s, scoring_impact=COALESCE(%s, scoring_impact)
                WHERE leave_id=%s
                """,
                (proof_status.value, scoring_impact, int(leave_id)),
            )
            return cur.rowcount > 0

    def list_for_user_starting_between(self, user_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE l.user_id=%s AND l.start_date BETWEEN %s AND %s ORDER BY l.start_date",
                (int(user_id), start, end),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_for_company_covering(self, company_id: int, day: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE u.company_id=%s AND l.start_date<=%s AND l.end_date>=%s ORDER BY l.leave_id",
                (int(company_id), day, day),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_for_company_applied_between(self, company_id: int, start: datetime, end: datetime) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE u.company_id=%s AND l.applied_on BETWEEN %s AND %s ORDER BY l.leave_id",
                (int(company_id), start, end),
            )
            return [_to_leave(r) for r in fetchall(cur)]

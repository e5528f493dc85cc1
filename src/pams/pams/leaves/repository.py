from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType, ProofStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: Optional[int],
        approval_notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def set_proof(self, *, leave_id: int, proof_url: str, proof_status: ProofStatus) -> bool:
        raise NotImplementedError

    def set_proof_status(self, *, leave_id: int, proof_status: ProofStatus, scoring_impact: Optional[float]) -> bool:
        """Update proof status; ``scoring_impact`` is left untouched when None."""

        raise NotImplementedError

    def list_for_user_starting_between(self, user_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_company_covering(self, company_id: int, day: date) -> Sequence[LeaveRequest]:
        """Leaves of any status whose [start, end] range contains ``day``."""

        raise NotImplementedError

    def list_for_company_applied_between(self, company_id: int, start: datetime, end: datetime) -> Sequence[LeaveRequest]:
        raise NotImplementedError

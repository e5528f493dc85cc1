from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType, ProofStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    user_id: int
    company_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    duration_days: int
    is_advance: bool
    is_emergency: bool
    scoring_impact: float
    status: LeaveStatus
    applied_on: datetime
    proof_status: ProofStatus = ProofStatus.NOT_REQUIRED
    reason: Optional[str] = None
    proof_url: Optional[str] = None
    approved_by: Optional[int] = None
    approval_notes: Optional[str] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

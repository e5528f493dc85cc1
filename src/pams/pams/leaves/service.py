from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_non_empty
from ..core.enums import REVIEWER_ROLES, LeaveStatus, LeaveType, ProofStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.settings import EngineSettings
from .impact import assess_leave
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, *, settings: EngineSettings | None = None):
        self._leaves = leaves
        self._settings = settings or EngineSettings()

    def _get_for_company(self, leave_id: int, company_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        # Leaves of other companies are reported as missing.
        if not leave or leave.company_id != int(company_id):
            raise NotFoundError("Leave request not found")
        return leave

    def file_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str] = None,
        now: datetime | None = None,
    ) -> LeaveRequest:
        now = now or now_local()
        impact = assess_leave(start_date, end_date, today=now.date(), settings=self._settings)

        leave_id = self._leaves.create_leave(
            user_id=int(user_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=optional_text(reason),
            duration_days=impact.duration_days,
            is_advance=impact.is_advance,
            is_emergency=impact.is_emergency,
            scoring_impact=impact.scoring_impact,
            applied_on=now,
        )
        logger.info(
            "leave filed id=%s user=%s advance=%s impact=%s", leave_id, user_id, impact.is_advance, impact.scoring_impact
        )
        created = self._leaves.get_by_id(leave_id)
        if not created:
            raise ValidationError("Failed to create leave request")
        return created

    def decide(
        self,
        *,
        current_role: Role,
        actor_id: int,
        company_id: int,
        leave_id: int,
        status: LeaveStatus,
        approval_notes: Optional[str] = None,
    ) -> LeaveRequest:
        leave = self._get_for_company(leave_id, company_id)

        if status in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            if current_role not in REVIEWER_ROLES:
                raise AuthorizationError("Only reviewers and admins can approve or reject leaves")
            if leave.status != LeaveStatus.PENDING:
                raise ValidationError("Only pending leave requests can be approved or rejected")
            approved_by: Optional[int] = int(actor_id)
        elif status == LeaveStatus.CANCELLED:
            if leave.user_id != int(actor_id):
                raise AuthorizationError("Only the leave owner can cancel")
            if leave.status != LeaveStatus.PENDING:
                raise ValidationError("Only pending leave requests can be cancelled")
            approved_by = None
        else:
            raise ValidationError(f"Invalid status transition to {status.value}")

        ok = self._leaves.update_status(
            leave_id=leave.leave_id,
            status=status,
            approved_by=approved_by,
            approval_notes=optional_text(approval_notes),
        )
        if not ok:
            raise ValidationError("Failed to update leave request")
        return self._get_for_company(leave.leave_id, company_id)

    def upload_proof(self, *, actor_id: int, company_id: int, leave_id: int, proof_url: str) -> LeaveRequest:
        url = require_non_empty(proof_url, "Proof URL")
        leave = self._get_for_company(leave_id, company_id)
        if leave.user_id != int(actor_id):
            raise AuthorizationError("You can only upload proof for your own leave")

        self._leaves.set_proof(leave_id=leave.leave_id, proof_url=url, proof_status=ProofStatus.PENDING_REVIEW)
        return self._get_for_company(leave.leave_id, company_id)

    def review_proof(
        self,
        *,
        current_role: Role,
        company_id: int,
        leave_id: int,
        proof_status: ProofStatus,
    ) -> LeaveRequest:
        """Approve or reject submitted proof.

        Approval neutralizes the scoring penalty (``scoring_impact`` -> 0) but
        leaves ``is_emergency``/``is_advance`` untouched.
        """

        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("Only reviewers and admins can review proof")
        if proof_status not in (ProofStatus.APPROVED, ProofStatus.REJECTED):
            raise ValidationError("Proof can only be approved or rejected")

        leave = self._get_for_company(leave_id, company_id)
        impact = 0.0 if proof_status == ProofStatus.APPROVED else None
        self._leaves.set_proof_status(leave_id=leave.leave_id, proof_status=proof_status, scoring_impact=impact)
        return self._get_for_company(leave.leave_id, company_id)

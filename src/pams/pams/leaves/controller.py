from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_choice
from ..common.web import api_errors, current_actor, json_body, json_ok, login_required
from ..container import Container
from ..core.enums import LeaveStatus, LeaveType, ProofStatus
from .model import LeaveRequest


def _leave_json(leave: LeaveRequest) -> dict:
    return {
        "leave_id": leave.leave_id,
        "user_id": leave.user_id,
        "leave_type": leave.leave_type.value,
        "start_date": leave.start_date.isoformat(),
        "end_date": leave.end_date.isoformat(),
        "duration_days": leave.duration_days,
        "is_advance": leave.is_advance,
        "is_emergency": leave.is_emergency,
        "scoring_impact": leave.scoring_impact,
        "status": leave.status.value,
        "proof_status": leave.proof_status.value,
        "proof_url": leave.proof_url,
        "reason": leave.reason,
        "approval_notes": leave.approval_notes,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="api_file_leave")
    @login_required
    @api_errors("create leave request")
    def file_leave():
        body = json_body()
        leave = container.leave_service.file_leave(
            user_id=current_actor().user_id,
            leave_type=require_choice(body.get("leave_type"), LeaveType, "leave type"),
            start_date=parse_iso_date(body.get("start_date")),
            end_date=parse_iso_date(body.get("end_date")),
            reason=body.get("reason"),
        )
        return json_ok(_leave_json(leave), "Leave request submitted successfully", 201)

    @app.route("/api/leaves/<int:leave_id>", methods=["PUT"], endpoint="api_update_leave")
    @login_required
    @api_errors("update leave request")
    def update_leave(leave_id: int):
        body = json_body()
        actor = current_actor()
        leave = None

        if body.get("status"):
            leave = container.leave_service.decide(
                current_role=actor.role,
                actor_id=actor.user_id,
                company_id=actor.company_id,
                leave_id=leave_id,
                status=require_choice(body["status"], LeaveStatus, "status"),
                approval_notes=body.get("approval_notes"),
            )
        if body.get("proof_status"):
            leave = container.leave_service.review_proof(
                current_role=actor.role,
                company_id=actor.company_id,
                leave_id=leave_id,
                proof_status=require_choice(body["proof_status"], ProofStatus, "proof status"),
            )
        if leave is None:
            return json_ok(None, "Nothing to update")
        return json_ok(_leave_json(leave), "Leave request updated successfully")

    @app.route("/api/leaves/<int:leave_id>/proof", methods=["POST"], endpoint="api_leave_proof")
    @login_required
    @api_errors("upload proof")
    def upload_proof(leave_id: int):
        actor = current_actor()
        leave = container.leave_service.upload_proof(
            actor_id=actor.user_id,
            company_id=actor.company_id,
            leave_id=leave_id,
            proof_url=json_body().get("proof_url") or "",
        )
        return json_ok(_leave_json(leave), "Proof uploaded successfully")

from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_choice
from ..common.web import api_errors, current_actor, json_body, json_ok, login_required
from ..container import Container
from ..core.enums import TaskStatus
from .model import Task, TaskReview


def _task_json(task: Task) -> dict:
    return {
        "task_id": task.task_id,
        "assigned_to": task.assigned_to,
        "title": task.title,
        "deadline": task.deadline.isoformat(),
        "status": task.status.value,
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
        "speed_score": task.speed_score,
        "backlog_weeks": task.backlog_weeks,
        "is_overdue": task.is_overdue,
        "special_permission": task.special_permission,
        "special_perm_note": task.special_perm_note,
        "is_wfh_task": task.is_wfh_task,
    }


def _review_json(review: TaskReview) -> dict:
    return {
        "review_id": review.review_id,
        "task_id": review.task_id,
        "reviewer_id": review.reviewer_id,
        "accuracy_score": review.accuracy_score,
        "reviewer_notes": review.reviewer_notes,
        "staff_agreed": review.staff_agreed,
        "staff_comments": review.staff_comments,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks/<int:task_id>", methods=["PUT"], endpoint="api_update_task")
    @login_required
    @api_errors("update task")
    def update_task(task_id: int):
        body = json_body()
        actor = current_actor()
        task = container.task_service.update_task(
            current_role=actor.role,
            company_id=actor.company_id,
            task_id=task_id,
            status=require_choice(body["status"], TaskStatus, "status") if body.get("status") else None,
            deadline=parse_iso_datetime(body["deadline"]) if body.get("deadline") else None,
            special_permission=body.get("special_permission"),
            special_perm_note=body.get("special_perm_note"),
            is_wfh_task=body.get("is_wfh_task"),
        )
        return json_ok(_task_json(task), "Task updated successfully")

    @app.route("/api/tasks/<int:task_id>/review", methods=["POST"], endpoint="api_review_task")
    @login_required
    @api_errors("submit review")
    def submit_review(task_id: int):
        body = json_body()
        actor = current_actor()
        review = container.task_service.submit_review(
            current_role=actor.role,
            actor_id=actor.user_id,
            company_id=actor.company_id,
            task_id=task_id,
            accuracy_score=body.get("accuracy_score"),
            reviewer_notes=body.get("reviewer_notes"),
        )
        return json_ok(_review_json(review), "Review submitted successfully")

    @app.route("/api/tasks/<int:task_id>/review", methods=["PUT"], endpoint="api_respond_review")
    @login_required
    @api_errors("update review response")
    def respond_to_review(task_id: int):
        body = json_body()
        actor = current_actor()
        review = container.task_service.respond_to_review(
            actor_id=actor.user_id,
            company_id=actor.company_id,
            task_id=task_id,
            staff_agreed=body.get("staff_agreed"),
            staff_comments=body.get("staff_comments"),
        )
        return json_ok(_review_json(review), "Review response submitted successfully")

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_score
from ..core.enums import REVIEWER_ROLES, Role, TaskStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Task, TaskReview
from .repository import TaskRepository
from .scoring import backlog_weeks, speed_score

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    def _get_for_company(self, task_id: int, company_id: int) -> Task:
        task = self._tasks.get_by_id(int(task_id))
        if not task or task.company_id != int(company_id):
            raise NotFoundError("Task not found")
        return task

    def _transition(self, task: Task, status: TaskStatus, *, current_role: Role, now: datetime) -> Task:
        is_reviewer = current_role in REVIEWER_ROLES

        if status == TaskStatus.IN_PROGRESS:
            if task.status != TaskStatus.ASSIGNED:
                raise ValidationError("Only ASSIGNED tasks can be moved to IN_PROGRESS")
            return replace(task, status=status)

        if status == TaskStatus.COMPLETED:
            if task.status != TaskStatus.IN_PROGRESS:
                raise ValidationError("Only IN_PROGRESS tasks can be marked as COMPLETED")
            return replace(
                task,
                status=status,
                completed_at=now,
                speed_score=speed_score(now, task.deadline),
                is_overdue=False,
                backlog_weeks=0,
            )

        if status == TaskStatus.CANCELLED:
            if not is_reviewer:
                raise AuthorizationError("Only reviewers and admins can cancel tasks")
            return replace(task, status=status, backlog_weeks=0)

        if status == TaskStatus.OVERDUE:
            if not is_reviewer:
                raise AuthorizationError("Only reviewers and admins can mark tasks as overdue")
            return replace(task, status=status, is_overdue=True)

        raise ValidationError(f"Invalid status transition to {status.value}")

    def update_task(
        self,
        *,
        current_role: Role,
        company_id: int,
        task_id: int,
        status: Optional[TaskStatus] = None,
        deadline: Optional[datetime] = None,
        special_permission: Optional[bool] = None,
        special_perm_note: Optional[str] = None,
        is_wfh_task: Optional[bool] = None,
        now: datetime | None = None,
    ) -> Task:
        now = now or now_local()
        task = self._get_for_company(task_id, company_id)
        had_permission = task.special_permission

        if deadline is not None:
            task = replace(task, deadline=deadline)
        if special_permission is not None:
            task = replace(task, special_permission=bool(special_permission))
        if special_perm_note is not None:
            task = replace(task, special_perm_note=optional_text(special_perm_note))
        if is_wfh_task is not None:
            task = replace(task, is_wfh_task=bool(is_wfh_task))

        if status is not None:
            task = self._transition(task, status, current_role=current_role, now=now)

        if not task.is_closed:
            weeks = backlog_weeks(task.deadline, now)
            task = replace(task, backlog_weeks=weeks)
            # A week or more past the deadline without permission flags the task.
            if weeks >= 1 and not had_permission and not special_permission:
                task = replace(task, is_overdue=True)

        self._tasks.update_task(task)
        logger.info("task updated id=%s status=%s backlog=%s", task.task_id, task.status.value, task.backlog_weeks)
        return task

    def submit_review(
        self,
        *,
        current_role: Role,
        actor_id: int,
        company_id: int,
        task_id: int,
        accuracy_score,
        reviewer_notes: Optional[str] = None,
    ) -> TaskReview:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("Only reviewers and admins can review tasks")
        score = require_score(accuracy_score, "Accuracy score")

        task = self._get_for_company(task_id, company_id)
        if task.status != TaskStatus.COMPLETED:
            raise ValidationError("Only completed tasks can be reviewed")

        self._tasks.upsert_review(
            task_id=task.task_id,
            reviewer_id=int(actor_id),
            accuracy_score=score,
            reviewer_notes=optional_text(reviewer_notes),
        )
        review = self._tasks.get_review(task.task_id)
        if not review:
            raise ValidationError("Failed to submit review")
        return review

    def respond_to_review(
        self,
        *,
        actor_id: int,
        company_id: int,
        task_id: int,
        staff_agreed,
        staff_comments: Optional[str] = None,
    ) -> TaskReview:
        if not isinstance(staff_agreed, bool):
            raise ValidationError("staff_agreed must be true or false")

        task = self._get_for_company(task_id, company_id)
        if task.assigned_to != int(actor_id):
            raise AuthorizationError("Only the task assignee can respond to reviews")
        if not self._tasks.get_review(task.task_id):
            raise NotFoundError("No review exists for this task")

        self._tasks.respond_to_review(
            task_id=task.task_id,
            staff_agreed=staff_agreed,
            staff_comments=optional_text(staff_comments),
        )
        return self._tasks.get_review(task.task_id)

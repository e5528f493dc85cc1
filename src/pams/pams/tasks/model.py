from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import CLOSED_TASK_STATUSES, TaskStatus


@dataclass(frozen=True)
class Task:
    task_id: int
    assigned_to: int
    company_id: int
    title: str
    deadline: datetime
    status: TaskStatus
    created_at: datetime
    completed_at: Optional[datetime] = None
    speed_score: Optional[float] = None
    backlog_weeks: int = 0
    is_overdue: bool = False
    special_permission: bool = False
    special_perm_note: Optional[str] = None
    is_wfh_task: bool = False

    @property
    def is_closed(self) -> bool:
        return self.status in CLOSED_TASK_STATUSES

    def is_past_deadline(self, at: datetime) -> bool:
        return not self.is_closed and self.deadline < at


@dataclass(frozen=True)
class TaskReview:
    review_id: int
    task_id: int
    reviewer_id: int
    accuracy_score: float
    staff_agreed: bool = False
    reviewer_notes: Optional[str] = None
    staff_comments: Optional[str] = None

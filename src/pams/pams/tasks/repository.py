from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Task, TaskReview


class TaskRepository(Protocol):
    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def update_task(self, task: Task) -> bool:
        """Persist the mutable fields (status, dates, scores, flags) of ``task``."""

        raise NotImplementedError

    def list_completed_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Task]:
        """COMPLETED tasks with ``start <= completed_at <= end``."""

        raise NotImplementedError

    def list_created_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Task]:
        raise NotImplementedError

    def list_open_for_company(self, company_id: int) -> Sequence[Task]:
        """Tasks of active and inactive users alike whose status is neither COMPLETED nor CANCELLED."""

        raise NotImplementedError

    # Reviews
    def get_review(self, task_id: int) -> Optional[TaskReview]:
        raise NotImplementedError

    def upsert_review(
        self,
        *,
        task_id: int,
        reviewer_id: int,
        accuracy_score: float,
        reviewer_notes: Optional[str],
    ) -> int:
        """Create or replace the task's review; a replaced review loses the staff response."""

        raise NotImplementedError

    def respond_to_review(self, *, task_id: int, staff_agreed: bool, staff_comments: Optional[str]) -> bool:
        raise NotImplementedError

    def list_reviews_for_user_completed_between(
        self, user_id: int, start: datetime, end: datetime
    ) -> Sequence[TaskReview]:
        """Reviews of tasks assigned to the user and completed inside the window."""

        raise NotImplementedError

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Task, TaskReview
from .repository import TaskRepository

_SELECT = """
    SELECT t.task_id, t.assigned_to, u.company_id, t.title, t.deadline, t.status, t.created_at,
           t.completed_at, t.speed_score, t.backlog_weeks, t.is_overdue, t.special_permission,
           t.special_perm_note, t.is_wfh_task
    FROM tasks t
    JOIN users u ON u.user_id = t.assigned_to
"""


def _to_task(r: dict[str, Any]) -> Task:
    return Task(
        task_id=int(r["task_id"]),
        assigned_to=int(r["assigned_to"]),
        company_id=int(r["company_id"]),
        title=r["title"],
        deadline=r["deadline"],
        status=TaskStatus(r["status"]),
        created_at=r["created_at"],
        completed_at=r.get("completed_at"),
        speed_score=None if r.get("speed_score") is None else as_float(r["speed_score"]),
        backlog_weeks=int(r.get("backlog_weeks") or 0),
        is_overdue=bool(r.get("is_overdue")),
        special_permission=bool(r.get("special_permission")),
        special_perm_note=r.get("special_perm_note"),
        is_wfh_task=bool(r.get("is_wfh_task")),
    )


def _to_review(r: dict[str, Any]) -> TaskReview:
    return TaskReview(
        review_id=int(r["review_id"]),
        task_id=int(r["task_id"]),
        reviewer_id=int(r["reviewer_id"]),
        accuracy_score=as_float(r["accuracy_score"]),
        staff_agreed=bool(r.get("staff_agreed")),
        reviewer_notes=r.get("reviewer_notes"),
        staff_comments=r.get("staff_comments"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.task_id=%s", (int(task_id),))
            row = fetchone(cur)
            return _to_task(row) if row else None

    def update_task(self, task: Task) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET status=%s, deadline=%s, completed_at=%s, speed_score=%s, backlog_weeks=%s,
                    is_overdue=%s, special_permission=%s, special_perm_note=%s, is_wfh_task=%s
                WHERE task_id=%s
                """,
                (
                    task.status.value,
                    task.deadline,
                    task.completed_at,
                    task.speed_score,
                    int(task.backlog_weeks),
                    int(task.is_overdue),
                    int(task.special_permission),
                    task.special_perm_note,
                    int(task.is_wfh_task),
                    int(task.task_id),
                ),
            )
            return cur.rowcount > 0

    def list_completed_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE t.assigned_to=%s AND t.status=%s
                  AND t.completed_at BETWEEN %s AND %s
                ORDER BY t.completed_at
                """,
                (int(user_id), TaskStatus.COMPLETED.value, start, end),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def list_created_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE t.assigned_to=%s AND t.created_at BETWEEN %s AND %s ORDER BY t.created_at",
                (int(user_id), start, end),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def list_open_for_company(self, company_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE u.company_id=%s AND t.status NOT IN (%s, %s)
                ORDER BY t.deadline, t.task_id
                """,
                (int(company_id), TaskStatus.COMPLETED.value, TaskStatus.CANCELLED.value),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def get_review(self, task_id: int) -> Optional[TaskReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT review_id, task_id, reviewer_id, accuracy_score, staff_agreed,
                       reviewer_notes, staff_comments
                FROM task_reviews WHERE task_id=%s
                """,
                (int(task_id),),
            )
            row = fetchone(cur)
            return _to_review(row) if row else None

    def upsert_review(
        self,
        *,
        task_id: int,
        reviewer_id: int,
        accuracy_score: float,
        reviewer_notes: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_reviews(task_id, reviewer_id, accuracy_score, reviewer_notes, staff_agreed)
                VALUES(%s,%s,%s,%s,0)
                ON DUPLICATE KEY UPDATE
                    review_id=LAST_INSERT_ID(review_id),
                    reviewer_id=VALUES(reviewer_id),
                    accuracy_score=VALUES(accuracy_score),
                    reviewer_notes=VALUES(reviewer_notes),
                    staff_agreed=0,
                    staff_comments=NULL
                """,
                (int(task_id), int(reviewer_id), accuracy_score, reviewer_notes),
            )
            return int(cur.lastrowid)

    def respond_to_review(self, *, task_id: int, staff_agreed: bool, staff_comments: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE task_reviews SET staff_agreed=%s, staff_comments=%s WHERE task_id=%s",
                (int(staff_agreed), staff_comments, int(task_id)),
            )
            return cur.rowcount > 0

    def list_reviews_for_user_completed_between(
        self, user_id: int, start: datetime, end: datetime
    ) -> Sequence[TaskReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.review_id, r.task_id, r.reviewer_id, r.accuracy_score, r.staff_agreed,
                       r.reviewer_notes, r.staff_comments
                FROM task_reviews r
                JOIN tasks t ON t.task_id = r.task_id
                WHERE t.assigned_to=%s AND t.completed_at BETWEEN %s AND %s
                ORDER BY r.review_id
                """,
                (int(user_id), start, end),
            )
            return [_to_review(r) for r in fetchall(cur)]

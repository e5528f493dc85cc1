from __future__ import annotations

import math
from collections import Counter
from datetime import timedelta

from ...core.enums import Severity
from ..model import AnomalyItem
from .base import AnomalyCheck, DetectionContext


class OverdueTaskNoPermissionCheck(AnomalyCheck):
    name = "overdue_task_no_permission"

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        cutoff = ctx.now - timedelta(days=ctx.settings.overdue_permission_days)
        users = {u.user_id: u for u in ctx.active_users}

        items = []
        for task in ctx.open_tasks:
            if task.special_permission or task.deadline >= cutoff:
                continue
            days = math.ceil((ctx.now - task.deadline) / timedelta(days=1))
            user = users.get(task.assigned_to)
            who = user.full_name if user else f"user {task.assigned_to}"
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.MEDIUM,
                    title="Overdue Task Without Permission",
                    description=f'Task "{task.title}" assigned to {who} is {days} days overdue without special permission.',
                    affected_users=(task.assigned_to,),
                    data={"task_id": task.task_id, "title": task.title, "deadline": task.deadline.isoformat()},
                )
            )
        return items


class HighBacklogCheck(AnomalyCheck):
    name = "high_backlog"
    min_tasks = 3
    critical_tasks = 5

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        backlog = Counter(t.assigned_to for t in ctx.open_tasks if t.deadline < ctx.now)

        items = []
        for user in ctx.active_users:
            count = backlog.get(user.user_id, 0)
            if count < self.min_tasks:
                continue
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.CRITICAL if count >= self.critical_tasks else Severity.HIGH,
                    title="High Task Backlog",
                    description=f"{user.display_name} has {count} overdue tasks in their backlog.",
                    affected_users=(user.user_id,),
                    data={"backlog_tasks": count},
                )
            )
        return items

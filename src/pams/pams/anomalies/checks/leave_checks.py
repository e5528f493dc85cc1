from __future__ import annotations

from collections import Counter

from ...core.enums import LeaveStatus, Severity
from ..model import AnomalyItem
from .base import AnomalyCheck, DetectionContext


class FrequentEmergencyLeavesCheck(AnomalyCheck):
    name = "frequent_emergency_leaves"
    max_per_month = 2

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        counts = Counter(
            l.user_id
            for l in ctx.leaves_applied_this_month
            if l.is_emergency and l.status in (LeaveStatus.APPROVED, LeaveStatus.PENDING)
        )

        items = []
        for user in ctx.active_users:
            count = counts.get(user.user_id, 0)
            if count <= self.max_per_month:
                continue
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.HIGH,
                    title="Frequent Emergency Leaves",
                    description=(
                        f"{user.display_name} has {count} emergency leaves this month "
                        f"(threshold: {self.max_per_month})."
                    ),
                    affected_users=(user.user_id,),
                    data={"emergency_count": count},
                )
            )
        return items

from __future__ import annotations

from collections import Counter

from ...common.datetime_utils import count_working_days
from ...common.numbers import round_half_up
from ...core.constants import MIN_SIMULTANEOUS_ABSENT
from ...core.enums import LeaveStatus, Severity
from ..model import AnomalyItem
from .base import AnomalyCheck, DetectionContext


class SimultaneousAbsenceCheck(AnomalyCheck):
    name = "simultaneous_absence"
    critical_absent = 3

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        staff_ids = {u.user_id for u in ctx.staff_users}
        present = len({r.user_id for r in ctx.today_attendance if r.user_id in staff_ids})
        absent = len(staff_ids) - present
        if absent < MIN_SIMULTANEOUS_ABSENT:
            return []

        users = {u.user_id: u for u in ctx.active_users}
        on_leave = [l for l in ctx.leaves_covering_today if l.status == LeaveStatus.APPROVED]
        names = [users[l.user_id].display_name for l in on_leave if l.user_id in users]
        if names:
            context = f"On approved leave: {', '.join(names)}"
        else:
            context = "No approved leaves found, may be unplanned."

        return [
            AnomalyItem(
                type=self.name,
                severity=Severity.CRITICAL if absent >= self.critical_absent else Severity.HIGH,
                title="Simultaneous Staff Absence",
                description=f"{absent} staff members absent today. {context}",
                affected_users=tuple(l.user_id for l in on_leave),
                data={"absent_count": absent, "present_count": present, "total_active": len(staff_ids)},
            )
        ]


class ExcessiveGeoExitsCheck(AnomalyCheck):
    name = "excessive_geo_exits"
    min_exits = 3
    high_exits = 5

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        users = {u.user_id: u for u in ctx.active_users}
        items = []
        for record in ctx.today_attendance:
            if record.geo_exit_count < self.min_exits:
                continue
            user = users.get(record.user_id)
            who = user.display_name if user else f"User {record.user_id}"
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.HIGH if record.geo_exit_count >= self.high_exits else Severity.MEDIUM,
                    title="Excessive Geo-fence Exits",
                    description=f"{who} left the geo-fence {record.geo_exit_count} times today.",
                    affected_users=(record.user_id,),
                    data={"geo_exit_count": record.geo_exit_count, "user_id": record.user_id},
                )
            )
        return items


class LowAttendanceCheck(AnomalyCheck):
    name = "low_attendance"
    min_working_days = 5
    threshold_rate = 80.0
    critical_rate = 60.0

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        working_days = count_working_days(ctx.month_start, ctx.today)
        if working_days < self.min_working_days:
            return []

        present = Counter(r.user_id for r in ctx.month_attendance)
        items = []
        for user in ctx.staff_users:
            days = present.get(user.user_id, 0)
            rate = days / working_days * 100
            if rate >= self.threshold_rate:
                continue
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.CRITICAL if rate < self.critical_rate else Severity.HIGH,
                    title="Low Attendance",
                    description=(
                        f"{user.display_name} has {round_half_up(rate)}% attendance this month "
                        f"({days}/{working_days} days). Threshold: {self.threshold_rate:g}%."
                    ),
                    affected_users=(user.user_id,),
                    data={"attendance_rate": round_half_up(rate), "present_days": days, "working_days": working_days},
                )
            )
        return items


class FrequentLateArrivalsCheck(AnomalyCheck):
    name = "frequent_late_arrivals"

    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        threshold = ctx.late_threshold
        late = Counter(r.user_id for r in ctx.month_attendance if r.is_late)
        half_days = Counter(r.user_id for r in ctx.month_attendance if r.is_half_day)

        items = []
        for user in ctx.staff_users:
            late_count = late.get(user.user_id, 0)
            if late_count < threshold:
                continue
            half_day_count = half_days.get(user.user_id, 0)
            items.append(
                AnomalyItem(
                    type=self.name,
                    severity=Severity.CRITICAL if half_day_count > 0 else Severity.HIGH,
                    title="Frequent Late Arrivals",
                    description=(
                        f"{user.display_name} has been late {late_count} times this month "
                        f"(threshold: {threshold}). {half_day_count} marked as half-day."
                    ),
                    affected_users=(user.user_id,),
                    data={"late_count": late_count, "half_day_count": half_day_count, "threshold": threshold},
                )
            )
        return items

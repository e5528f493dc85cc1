"""In-memory repositories shared by the service tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

from src.pams.pams.anomalies.model import AnomalyReport, AnomalyRule
from src.pams.pams.attendance.model import AttendanceRecord
from src.pams.pams.core.enums import LeaveStatus, LeaveType, Role, TaskStatus
from src.pams.pams.leaves.model import LeaveRequest
from src.pams.pams.performance.model import CompositeResult, ParameterScore, ScoringParameter
from src.pams.pams.tasks.model import Task, TaskReview
from src.pams.pams.users.model import CompanySettings, User


def make_user(user_id: int, *, company_id: int = 1, role: Role = Role.STAFF, first_name: Optional[str] = None, is_active: bool = True) -> User:
    return User(
        user_id=user_id,
        company_id=company_id,
        employee_code=f"E{user_id:03d}",
        first_name=first_name or f"User{user_id}",
        last_name="Test",
        email=f"user{user_id}@example.com",
        role=role,
        is_active=is_active,
    )


def make_company(company_id: int = 1, *, in_time: time = time(9, 30), grace_minutes: int = 15, late_threshold: int = 3) -> CompanySettings:
    return CompanySettings(
        company_id=company_id,
        name="Acme",
        in_time=in_time,
        grace_minutes=grace_minutes,
        late_threshold=late_threshold,
    )


def make_record(user_id: int, work_date: date, *, attendance_id: int = 0, **fields) -> AttendanceRecord:
    fields.setdefault("check_in_time", datetime.combine(work_date, time(9, 0)))
    return AttendanceRecord(attendance_id=attendance_id, user_id=user_id, work_date=work_date, **fields)


def make_leave(leave_id: int, user_id: int, start_date: date, end_date: Optional[date] = None, **fields) -> LeaveRequest:
    values = dict(
        leave_id=leave_id,
        user_id=user_id,
        company_id=1,
        leave_type=LeaveType.PERSONAL,
        start_date=start_date,
        end_date=end_date or start_date,
        duration_days=1,
        is_advance=False,
        is_emergency=True,
        scoring_impact=-1.0,
        status=LeaveStatus.APPROVED,
        applied_on=datetime.combine(start_date, time(8, 0)),
    )
    values.update(fields)
    return LeaveRequest(**values)


def make_task(task_id: int, user_id: int, deadline: datetime, **fields) -> Task:
    values = dict(
        task_id=task_id,
        assigned_to=user_id,
        company_id=1,
        title=f"Task {task_id}",
        deadline=deadline,
        status=TaskStatus.ASSIGNED,
        created_at=deadline.replace(day=1, hour=0, minute=0),
    )
    values.update(fields)
    return Task(**values)


class FakeUsers:
    def __init__(self, users: list[User]):
        self.users = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(int(user_id))

    def list_active_for_company(self, company_id: int, *, include_super_admin: bool = True):
        return [
            u
            for u in sorted(self.users.values(), key=lambda u: u.user_id)
            if u.company_id == company_id and u.is_active and (include_super_admin or u.role != Role.SUPER_ADMIN)
        ]


class FakeCompanies:
    def __init__(self, *companies: CompanySettings):
        self.companies = {c.company_id: c for c in companies}

    def get_settings(self, company_id: int) -> Optional[CompanySettings]:
        return self.companies.get(int(company_id))


class FakeFences:
    def __init__(self, fences):
        self.fences = list(fences)

    def list_active_for_company(self, company_id: int):
        return [f for f in self.fences if f.company_id == company_id and f.is_active]

    def get_by_id(self, fence_id: int):
        return next((f for f in self.fences if f.fence_id == fence_id), None)


class FakeAttendance:
    def __init__(self, records: Optional[list[AttendanceRecord]] = None, *, user_company: Optional[dict[int, int]] = None, absence_days: int = 0):
        self.records: dict[int, AttendanceRecord] = {}
        self.exit_logs: list[dict] = []
        self.user_company = user_company or {}
        self.absence_days = absence_days
        self.absence_calls: list[tuple] = []
        for i, r in enumerate(records or [], start=1):
            self.records[r.attendance_id or i] = replace(r, attendance_id=r.attendance_id or i)

    def get_for_user_and_date(self, user_id: int, work_date: date):
        return next((r for r in self.records.values() if r.user_id == user_id and r.work_date == work_date), None)

    def create_checkin(self, *, user_id, work_date, check_in_time, latitude, longitude, location_type, geo_fence_id, is_wfh, status, is_late, late_by_minutes, is_half_day) -> int:
        attendance_id = max(self.records, default=0) + 1
        self.records[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_in_lat=latitude,
            check_in_lng=longitude,
            location_type=location_type,
            geo_fence_id=geo_fence_id,
            is_wfh=is_wfh,
            status=status,
            is_late=is_late,
            late_by_minutes=late_by_minutes,
            is_half_day=is_half_day,
        )
        return attendance_id

    def update_checkout(self, *, attendance_id, check_out_time, latitude, longitude, total_hours, overtime_hours) -> bool:
        rec = self.records[attendance_id]
        self.records[attendance_id] = replace(
            rec, check_out_time=check_out_time, total_hours=total_hours, overtime_hours=overtime_hours
        )
        return True

    def record_geo_exit(self, *, attendance_id, user_id, exit_time, latitude, longitude, distance_from_fence) -> int:
        self.exit_logs.append({"attendance_id": attendance_id, "distance": distance_from_fence})
        rec = self.records[attendance_id]
        self.records[attendance_id] = replace(rec, geo_exit_count=rec.geo_exit_count + 1)
        return rec.geo_exit_count + 1

    def count_late_between(self, user_id: int, start: date, end: date) -> int:
        return sum(1 for r in self.list_for_user_between(user_id, start, end) if r.is_late)

    def list_for_user_between(self, user_id: int, start: date, end: date):
        return sorted(
            (r for r in self.records.values() if r.user_id == user_id and start <= r.work_date <= end),
            key=lambda r: r.work_date,
        )

    def list_for_company_between(self, company_id: int, start: date, end: date):
        return [
            r
            for r in self.records.values()
            if self.user_company.get(r.user_id, 1) == company_id and start <= r.work_date <= end
        ]

    def count_simultaneous_absence_days(self, company_id: int, start: date, end: date) -> int:
        self.absence_calls.append((company_id, start, end))
        return self.absence_days


class FakeLeaves:
    def __init__(self, leaves: Optional[list[LeaveRequest]] = None):
        self.leaves: dict[int, LeaveRequest] = {l.leave_id: l for l in leaves or []}

    def create_leave(self, *, user_id, leave_type, start_date, end_date, reason, duration_days, is_advance, is_emergency, scoring_impact, applied_on) -> int:
        leave_id = max(self.leaves, default=0) + 1
        self.leaves[leave_id] = LeaveRequest(
            leave_id=leave_id,
            user_id=user_id,
            company_id=1,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days,
            is_advance=is_advance,
            is_emergency=is_emergency,
            scoring_impact=scoring_impact,
            status=LeaveStatus.PENDING,
            applied_on=applied_on,
            reason=reason,
        )
        return leave_id

    def get_by_id(self, leave_id: int):
        return self.leaves.get(int(leave_id))

    def update_status(self, *, leave_id, status, approved_by, approval_notes) -> bool:
        self.leaves[leave_id] = replace(self.leaves[leave_id], status=status, approved_by=approved_by, approval_notes=approval_notes)
        return True

    def set_proof(self, *, leave_id, proof_url, proof_status) -> bool:
        self.leaves[leave_id] = replace(self.leaves[leave_id], proof_url=proof_url, proof_status=proof_status)
        return True

    def set_proof_status(self, *, leave_id, proof_status, scoring_impact) -> bool:
        leave = replace(self.leaves[leave_id], proof_status=proof_status)
        if scoring_impact is not None:
            leave = replace(leave, scoring_impact=scoring_impact)
        self.leaves[leave_id] = leave
        return True

    def list_for_user_starting_between(self, user_id: int, start: date, end: date):
        return [l for l in self.leaves.values() if l.user_id == user_id and start <= l.start_date <= end]

    def list_for_company_covering(self, company_id: int, day: date):
        return [l for l in self.leaves.values() if l.company_id == company_id and l.covers(day)]

    def list_for_company_applied_between(self, company_id: int, start: datetime, end: datetime):
        return [l for l in self.leaves.values() if l.company_id == company_id and start <= l.applied_on <= end]


class FakeTasks:
    def __init__(self, tasks: Optional[list[Task]] = None, reviews: Optional[list[TaskReview]] = None):
        self.tasks: dict[int, Task] = {t.task_id: t for t in tasks or []}
        self.reviews: dict[int, TaskReview] = {r.task_id: r for r in reviews or []}

    def get_by_id(self, task_id: int):
        return self.tasks.get(int(task_id))

    def update_task(self, task: Task) -> bool:
        self.tasks[task.task_id] = task
        return True

    def list_completed_for_user_between(self, user_id, start, end):
        return [
            t
            for t in self.tasks.values()
            if t.assigned_to == user_id and t.status == TaskStatus.COMPLETED and t.completed_at and start <= t.completed_at <= end
        ]

    def list_created_for_user_between(self, user_id, start, end):
        return [t for t in self.tasks.values() if t.assigned_to == user_id and start <= t.created_at <= end]

    def list_open_for_company(self, company_id):
        return [t for t in self.tasks.values() if t.company_id == company_id and not t.is_closed]

    def get_review(self, task_id):
        return self.reviews.get(int(task_id))

    def upsert_review(self, *, task_id, reviewer_id, accuracy_score, reviewer_notes) -> int:
        existing = self.reviews.get(task_id)
        review_id = existing.review_id if existing else len(self.reviews) + 1
        self.reviews[task_id] = TaskReview(
            review_id=review_id,
            task_id=task_id,
            reviewer_id=reviewer_id,
            accuracy_score=accuracy_score,
            reviewer_notes=reviewer_notes,
        )
        return review_id

    def respond_to_review(self, *, task_id, staff_agreed, staff_comments) -> bool:
        self.reviews[task_id] = replace(self.reviews[task_id], staff_agreed=staff_agreed, staff_comments=staff_comments)
        return True

    def list_reviews_for_user_completed_between(self, user_id, start, end):
        completed = {t.task_id for t in self.tasks.values() if t.assigned_to == user_id and t.completed_at and start <= t.completed_at <= end}
        return [r for r in self.reviews.values() if r.task_id in completed]


class FakePerformance:
    def __init__(self, parameters: Optional[list[ScoringParameter]] = None):
        self.parameters = list(parameters or [])
        self.scores: dict[tuple[int, int, str], ParameterScore] = {}
        self.composites: dict[tuple[int, str], CompositeResult] = {}

    def list_active_parameters(self, company_id: int):
        return sorted(
            (p for p in self.parameters if p.company_id == company_id and p.is_active),
            key=lambda p: (p.sort_order, p.parameter_id),
        )

    def upsert_score(self, *, user_id, period, score, calculated_at) -> None:
        self.scores[(user_id, score.parameter_id, period)] = score

    def upsert_composite(self, result, *, calculated_at) -> None:
        self.composites[(result.user_id, result.period)] = result

    def list_stored_scores(self, user_id, period):
        active = {p.parameter_id for p in self.parameters if p.is_active}
        return [
            s
            for (uid, pid, p), s in self.scores.items()
            if uid == user_id and p == period and pid in active
        ]

    def get_composite(self, user_id, period):
        return self.composites.get((user_id, period))

    def list_composites(self, user_id, periods):
        return sorted((c for (uid, p), c in self.composites.items() if uid == user_id and p in periods), key=lambda c: c.period)


class FakeAnomalies:
    def __init__(self, rules: Optional[list[AnomalyRule]] = None):
        self.rules = list(rules or [])
        self.reports: dict[tuple[int, date], AnomalyReport] = {}

    def list_active_rules(self, company_id: int):
        return [r for r in self.rules if r.company_id == company_id and r.is_active]

    def upsert_report(self, *, company_id, report_date, summary, items, failed_checks, sent_to, sent_at) -> int:
        existing = self.reports.get((company_id, report_date))
        report_id = existing.report_id if existing else len(self.reports) + 1
        self.reports[(company_id, report_date)] = AnomalyReport(
            report_id=report_id,
            company_id=company_id,
            report_date=report_date,
            summary=summary,
            items=tuple(items),
            failed_checks=tuple(failed_checks),
            sent_to=tuple(sent_to),
            sent_at=sent_at,
        )
        return report_id

    def _matching(self, company_id, date_from, date_to):
        return sorted(
            (
                r
                for (cid, day), r in self.reports.items()
                if cid == company_id and (not date_from or day >= date_from) and (not date_to or day <= date_to)
            ),
            key=lambda r: r.report_date,
            reverse=True,
        )

    def list_reports(self, company_id, *, date_from=None, date_to=None, offset=0, limit=20):
        return self._matching(company_id, date_from, date_to)[offset : offset + limit]

    def count_reports(self, company_id, *, date_from=None, date_to=None) -> int:
        return len(self._matching(company_id, date_from, date_to))

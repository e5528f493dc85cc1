from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, time
from functools import cached_property
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ...attendance.repository import AttendanceRepository
from ...core.enums import Role
from ...core.settings import EngineSettings
from ...leaves.model import LeaveRequest
from ...leaves.repository import LeaveRepository
from ...tasks.model import Task
from ...tasks.repository import TaskRepository
from ...users.model import User
from ...users.repository import CompanyRepository, UserRepository
from ..model import AnomalyItem


class DetectionContext:
    """Company data for one detection run.

    Each source is queried lazily and at most once, so a failing query only
    affects the checks that need it.
    """

    def __init__(
        self,
        *,
        company_id: int,
        now: datetime,
        users: UserRepository,
        companies: CompanyRepository,
        attendance: AttendanceRepository,
        tasks: TaskRepository,
        leaves: LeaveRepository,
        settings: EngineSettings | None = None,
    ):
        self.company_id = int(company_id)
        self.now = now
        self.settings = settings or EngineSettings()
        self._users = users
        self._companies = companies
        self._attendance = attendance
        self._tasks = tasks
        self._leaves = leaves

    @property
    def today(self) -> date:
        return self.now.date()

    @property
    def month_start(self) -> date:
        return self.today.replace(day=1)

    @cached_property
    def active_users(self) -> Sequence[User]:
        return self._users.list_active_for_company(self.company_id)

    @property
    def staff_users(self) -> Sequence[User]:
        """Active users other than super-admins."""
        return [u for u in self.active_users if u.role != Role.SUPER_ADMIN]

    @cached_property
    def late_threshold(self) -> int:
        company = self._companies.get_settings(self.company_id)
        return company.late_threshold if company else self.settings.default_late_threshold

    @cached_property
    def month_attendance(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_company_between(self.company_id, self.month_start, self.today)

    @property
    def today_attendance(self) -> Sequence[AttendanceRecord]:
        return [r for r in self.month_attendance if r.work_date == self.today]

    @cached_property
    def leaves_covering_today(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_company_covering(self.company_id, self.today)

    @cached_property
    def leaves_applied_this_month(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_for_company_applied_between(
            self.company_id, datetime.combine(self.month_start, time.min), self.now
        )

    @cached_property
    def open_tasks(self) -> Sequence[Task]:
        return self._tasks.list_open_for_company(self.company_id)


class AnomalyCheck(ABC):
    """One detection rule. ``name`` identifies the check in logs and failure lists."""

    name: str = ""

    @abstractmethod
    def run(self, ctx: DetectionContext) -> list[AnomalyItem]:
        raise NotImplementedError

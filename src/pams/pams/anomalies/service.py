from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import ADMIN_ROLES, Role, Severity
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.settings import EngineSettings
from ..leaves.repository import LeaveRepository
from ..tasks.repository import TaskRepository
from ..users.repository import CompanyRepository, UserRepository
from .checks import DetectionContext
from .detector import AnomalyDetector
from .model import AnomalyItem, AnomalyReport, AnomalyRule
from .repository import AnomalyRepository

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def build_summary(items: Sequence[AnomalyItem], failed_checks: Sequence[str] = ()) -> str:
    if not items:
        summary = "No anomalies detected today. All systems normal."
    else:
        counts = {s: sum(1 for i in items if i.severity == s) for s in Severity}
        noun = "anomaly" if len(items) == 1 else "anomalies"
        summary = (
            f"{len(items)} {noun} detected: {counts[Severity.CRITICAL]} critical, "
            f"{counts[Severity.HIGH]} high, {counts[Severity.MEDIUM]} medium severity."
        )
    if failed_checks:
        summary += f" Partial run, {len(failed_checks)} check(s) failed: {', '.join(failed_checks)}."
    return summary


def collect_recipients(rules: Sequence[AnomalyRule]) -> list[str]:
    """Union of the rules' recipient emails, first occurrence order."""
    seen: dict[str, None] = {}
    for rule in rules:
        for email in rule.recipient_emails:
            seen.setdefault(email, None)
    return list(seen)


class AnomalyService:
    def __init__(
        self,
        reports: AnomalyRepository,
        users: UserRepository,
        companies: CompanyRepository,
        attendance: AttendanceRepository,
        tasks: TaskRepository,
        leaves: LeaveRepository,
        *,
        settings: EngineSettings | None = None,
        detector: AnomalyDetector | None = None,
    ):
        self._reports = reports
        self._users = users
        self._companies = companies
        self._attendance = attendance
        self._tasks = tasks
        self._leaves = leaves
        self._settings = settings or EngineSettings()
        self._detector = detector or AnomalyDetector()

    def _context(self, company_id: int, now: datetime) -> DetectionContext:
        return DetectionContext(
            company_id=company_id,
            now=now,
            users=self._users,
            companies=self._companies,
            attendance=self._attendance,
            tasks=self._tasks,
            leaves=self._leaves,
            settings=self._settings,
        )

    def generate_daily_report(
        self, *, current_role: Role, company_id: int, now: datetime | None = None
    ) -> AnomalyReport:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("Only admins can run anomaly detection")
        now = now or now_local()

        result = self._detector.detect(self._context(company_id, now))
        summary = build_summary(result.items, result.failed_checks)
        recipients = collect_recipients(self._reports.list_active_rules(company_id))

        report_id = self._reports.upsert_report(
            company_id=company_id,
            report_date=now.date(),
            summary=summary,
            items=result.items,
            failed_checks=result.failed_checks,
            sent_to=recipients,
            sent_at=now,
        )
        if result.is_partial:
            logger.warning("anomaly sweep company=%s partial, failed=%s", company_id, ",".join(result.failed_checks))
        logger.info("anomaly sweep company=%s items=%s report=%s", company_id, len(result.items), report_id)

        return AnomalyReport(
            report_id=report_id,
            company_id=int(company_id),
            report_date=now.date(),
            summary=summary,
            items=result.items,
            failed_checks=result.failed_checks,
            sent_to=tuple(recipients),
            sent_at=now,
        )

    def list_reports(
        self,
        *,
        current_role: Role,
        company_id: int,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        if current_role not in ADMIN_ROLES:
            raise AuthorizationError("Only admins can view anomaly reports")
        if date_from and date_to and date_to < date_from:
            raise ValidationError("'to' date must not be before 'from' date")

        page = max(1, int(page))
        limit = min(MAX_PAGE_SIZE, max(1, int(limit)))
        records = self._reports.list_reports(
            company_id, date_from=date_from, date_to=date_to, offset=(page - 1) * limit, limit=limit
        )
        total = self._reports.count_reports(company_id, date_from=date_from, date_to=date_to)
        return {
            "records": list(records),
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        }

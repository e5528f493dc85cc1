from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AnomalyItem, AnomalyReport, AnomalyRule


class AnomalyRepository(Protocol):
    def list_active_rules(self, company_id: int) -> Sequence[AnomalyRule]:
        """Active rules with their recipients' emails, ordered by rule id."""

        raise NotImplementedError

    def upsert_report(
        self,
        *,
        company_id: int,
        report_date: date,
        summary: str,
        items: Sequence[AnomalyItem],
        failed_checks: Sequence[str],
        sent_to: Sequence[str],
        sent_at: datetime,
    ) -> int:
        """One report per company and day; a re-run overwrites it. Returns the report id."""

        raise NotImplementedError

    def list_reports(
        self,
        company_id: int,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Sequence[AnomalyReport]:
        """Newest first."""

        raise NotImplementedError

    def count_reports(self, company_id: int, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> int:
        raise NotImplementedError

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import Severity
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_date, db_cursor, dumps_json, fetch_scalar, fetchall, loads_json
from .model import AnomalyItem, AnomalyReport, AnomalyRule
from .repository import AnomalyRepository


def _to_report(r: dict[str, Any]) -> AnomalyReport:
    return AnomalyReport(
        report_id=int(r["report_id"]),
        company_id=int(r["company_id"]),
        report_date=as_date(r["report_date"]),
        summary=r["summary"],
        items=tuple(AnomalyItem.from_dict(i) for i in loads_json(r.get("details"), default=[]) or []),
        failed_checks=tuple(loads_json(r.get("failed_checks"), default=[]) or []),
        sent_to=tuple(loads_json(r.get("sent_to"), default=[]) or []),
        sent_at=r.get("sent_at"),
    )


def _date_filter(date_from: Optional[date], date_to: Optional[date]) -> tuple[str, list]:
    sql = ""
    params: list = []
    if date_from:
        sql += " AND report_date >= %s"
        params.append(date_from)
    if date_to:
        sql += " AND report_date <= %s"
        params.append(date_to)
    return sql, params


class MySQLAnomalyRepository(AnomalyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_rules(self, company_id: int) -> Sequence[AnomalyRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.rule_id, r.company_id, r.name, r.condition_text, r.severity, r.is_active, u.email
                FROM anomaly_rules r
                LEFT JOIN anomaly_rule_recipients rr ON rr.rule_id = r.rule_id
                LEFT JOIN users u ON u.user_id = rr.user_id
                WHERE r.company_id=%s AND r.is_active=1
                ORDER BY r.rule_id, u.user_id
                """,
                (int(company_id),),
            )
            rows = fetchall(cur)

        rules: dict[int, dict[str, Any]] = {}
        for r in rows:
            rule = rules.setdefault(int(r["rule_id"]), {"row": r, "emails": []})
            if r.get("email"):
                rule["emails"].append(r["email"])

        return [
            AnomalyRule(
                rule_id=rule_id,
                company_id=int(v["row"]["company_id"]),
                name=v["row"]["name"],
                severity=Severity(v["row"]["severity"]),
                condition_text=v["row"].get("condition_text"),
                is_active=bool(v["row"]["is_active"]),
                recipient_emails=tuple(v["emails"]),
            )
            for rule_id, v in rules.items()
        ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO anomaly_reports(company_id, report_date, summary, details, failed_checks, sent_to, sent_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    report_id=LAST_INSERT_ID(report_id),
                    summary=VALUES(summary),
                    details=VALUES(details),
                    failed_checks=VALUES(failed_checks),
                    sent_to=VALUES(sent_to),
                    sent_at=VALUES(sent_at)
                """,
                (
                    int(company_id),
                    report_date,
                    summary,
                    dumps_json([i.to_dict() for i in items]),
                    dumps_json(list(failed_checks)),
                    dumps_json(list(sent_to)),
                    sent_at,
                ),
            )
            return int(cur.lastrowid)

    def list_reports(
        self,
        company_id: int,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Sequence[AnomalyReport]:
        where, params = _date_filter(date_from, date_to)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT report_id, company_id, report_date, summary, details, failed_checks, sent_to, sent_at
                FROM anomaly_reports
                WHERE company_id=%s{where}
                ORDER BY report_date DESC
                LIMIT %s OFFSET %s
                """,
                (int(company_id), *params, int(limit), int(offset)),
            )
            return [_to_report(r) for r in fetchall(cur)]

    def count_reports(self, company_id: int, *, date_from: Optional[date] = None, date_to: Optional[date] = None) -> int:
        where, params = _date_filter(date_from, date_to)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS cnt FROM anomaly_reports WHERE company_id=%s{where}",
                (int(company_id), *params),
            )
            return fetch_scalar(cur)

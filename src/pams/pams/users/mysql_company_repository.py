from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import parse_hhmm
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CompanySettings
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_settings(self, company_id: int) -> Optional[CompanySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, name, in_time, grace_minutes, late_threshold
                FROM companies
                WHERE company_id=%s
                """,
                (int(company_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return CompanySettings(
                company_id=int(row["company_id"]),
                name=row["name"],
                in_time=parse_hhmm(row["in_time"]),
                grace_minutes=int(row["grace_minutes"]),
                late_threshold=int(row["late_threshold"]),
            )

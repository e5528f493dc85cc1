from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = "user_id, company_id, employee_code, first_name, last_name, email, role, is_active"


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        company_id=int(row["company_id"]),
        employee_code=row["employee_code"],
        first_name=row["first_name"],
        last_name=row.get("last_name") or "",
        email=row["email"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active_for_company(self, company_id: int, *, include_super_admin: bool = True) -> Sequence[User]:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE company_id=%s AND is_active=1"
        params: list[Any] = [int(company_id)]
        if not include_super_admin:
            sql += " AND role<>%s"
            params.append(Role.SUPER_ADMIN.value)
        sql += " ORDER BY first_name, user_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_user(r) for r in fetchall(cur)]

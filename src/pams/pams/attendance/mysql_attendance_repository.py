from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus, LocationType, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetch_scalar, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_out_time,
    a.check_in_lat, a.check_in_lng, a.location_type, a.geo_fence_id, a.is_wfh, a.status,
    a.is_late, a.late_by_minutes, a.is_half_day, a.total_hours, a.overtime_hours, a.geo_exit_count
"""


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        check_in_lat=r.get("check_in_lat"),
        check_in_lng=r.get("check_in_lng"),
        location_type=LocationType(r["location_type"]),
        geo_fence_id=r.get("geo_fence_id"),
        is_wfh=bool(r["is_wfh"]),
        status=AttendanceStatus(r["status"]),
        is_late=bool(r["is_late"]),
        late_by_minutes=int(r["late_by_minutes"] or 0),
        is_half_day=bool(r["is_half_day"]),
        total_hours=None if r.get("total_hours") is None else as_float(r["total_hours"]),
        overtime_hours=as_float(r.get("overtime_hours")),
        geo_exit_count=int(r["geo_exit_count"] or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.user_id=%s AND a.work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        latitude: float,
        longitude: float,
        location_type: LocationType,
        geo_fence_id: Optional[int],
        is_wfh: bool,
        status: AttendanceStatus,
        is_late: bool,
        late_by_minutes: int,
        is_half_day: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    user_id, work_date, check_in_time, check_in_lat, check_in_lng,
                    location_type, geo_fence_id, is_wfh, status, is_late, late_by_minutes, is_half_day
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    work_date,
                    check_in_time,
                    latitude,
                    longitude,
                    location_type.value,
                    geo_fence_id,
                    int(is_wfh),
                    status.value,
                    int(is_late),
                    int(late_by_minutes),
                    int(is_half_day),
                ),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        latitude: float,
        longitude: float,
        total_hours: float,
        overtime_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_lat=%s, check_out_lng=%s, total_hours=%s, overtime_hours=%s
                WHERE attendance_id=%s
                """,
                (check_out_time, latitude, longitude, total_hours, overtime_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def record_geo_exit(
        self,
        *,
        attendance_id: int,
        user_id: int,
        exit_time: datetime,
        latitude: float,
        longitude: float,
        distance_from_fence: float,
    ) -> int:
        # One connection, one commit: the log row and the counter move together.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO geo_exit_logs(attendance_id, user_id, exit_time, exit_lat, exit_lng, distance_from_fence)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(attendance_id), int(user_id), exit_time, latitude, longitude, distance_from_fence),
            )
            cur.execute(
                "UPDATE attendance_records SET geo_exit_count = geo_exit_count + 1 WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            cur.execute(
                "SELECT geo_exit_count AS cnt FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            return fetch_scalar(cur)

    def count_late_between(self, user_id: int, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt
                FROM attendance_records
                WHERE user_id=%s AND is_late=1 AND work_date BETWEEN %s AND %s
                """,
                (int(user_id), start, end),
            )
            return fetch_scalar(cur)

    def list_for_user_between(self, user_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                WHERE a.user_id=%s AND a.work_date BETWEEN %s AND %s
                ORDER BY a.work_date
                """,
                (int(user_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_company_between(self, company_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                JOIN users u ON u.user_id = a.user_id
                WHERE u.company_id=%s AND a.work_date BETWEEN %s AND %s
                ORDER BY a.work_date, a.user_id
                """,
                (int(company_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_simultaneous_absence_days(self, company_id: int, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt FROM (
                    SELECT a.work_date
                    FROM attendance_records a
                    JOIN users u ON u.user_id = a.user_id
                    WHERE u.company_id=%s AND a.work_date BETWEEN %s AND %s
                    GROUP BY a.work_date
                    HAVING COUNT(DISTINCT a.user_id) < (
                        SELECT COUNT(*) FROM users
                        WHERE company_id=%s AND is_active=1 AND role<>%s
                    ) - 1
                ) violations
                """,
                (int(company_id), start, end, int(company_id), Role.SUPER_ADMIN.value),
            )
            return fetch_scalar(cur)

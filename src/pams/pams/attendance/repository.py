from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, LocationType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

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
        """Write an exit log row and bump the record's exit counter atomically; returns the new count."""

        raise NotImplementedError

    def count_late_between(self, user_id: int, start: date, end: date) -> int:
        """Late arrivals with ``start <= work_date <= end``."""

        raise NotImplementedError

    def list_for_user_between(self, user_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_company_between(self, company_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_simultaneous_absence_days(self, company_id: int, start: date, end: date) -> int:
        """Days in the window where at least two active users had no attendance record.

        Only days on which someone in the company checked in are considered.
        """

        raise NotImplementedError

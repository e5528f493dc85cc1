from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, LocationType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per user per calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    check_in_lat: Optional[float] = None
    check_in_lng: Optional[float] = None
    location_type: LocationType = LocationType.UNKNOWN
    geo_fence_id: Optional[int] = None
    is_wfh: bool = False
    status: AttendanceStatus = AttendanceStatus.PENDING_REVIEW
    is_late: bool = False
    late_by_minutes: int = 0
    is_half_day: bool = False
    total_hours: Optional[float] = None
    overtime_hours: float = 0.0
    geo_exit_count: int = 0

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class LocationPingResult:
    inside_fence: bool
    distance_from_fence: Optional[float]
    geo_exit_count: int

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..common.datetime_utils import now_local
from ..common.numbers import round2
from ..common.validators import require_latitude, require_longitude
from ..core.enums import AttendanceStatus, LocationType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.settings import EngineSettings
from ..geo.classifier import classify_location
from ..geo.distance import haversine_distance
from ..geo.repository import GeoFenceRepository
from ..users.repository import CompanyRepository, UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, LocationPingResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        companies: CompanyRepository,
        fences: GeoFenceRepository,
        *,
        settings: EngineSettings | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._companies = companies
        self._fences = fences
        self._settings = settings or EngineSettings()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, user_id: int, *, latitude, longitude, now: datetime | None = None) -> AttendanceRecord:
        lat = require_latitude(latitude)
        lng = require_longitude(longitude)
        now = now or now_local()
        today = now.date()

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        if self._attendance.get_for_user_and_date(user.user_id, today):
            raise ValidationError("Already checked in today")

        company = self._companies.get_settings(user.company_id)
        fences = self._fences.list_active_for_company(user.company_id)
        location = classify_location(lat, lng, fences, self._settings.wfh_threshold_m)
        status = AttendanceStatus.AUTO_APPROVED if location.is_on_site else AttendanceStatus.PENDING_REVIEW

        prior_late = 0
        if company:
            # Lates earlier this month; the window is empty on the 1st.
            prior_late = self._attendance.count_late_between(
                user.user_id, today.replace(day=1), today - timedelta(days=1)
            )
        strategy = self._factory.for_checkin(now=now, today=today, company=company, prior_late_count=prior_late)
        deadline = self._factory.deadline_for(today, company) if company else now
        decision = strategy.decide(now=now, deadline=deadline)

        attendance_id = self._attendance.create_checkin(
            user_id=user.user_id,
            work_date=today,
            check_in_time=now,
            latitude=lat,
            longitude=lng,
            location_type=location.location_type,
            geo_fence_id=location.nearest_fence_id,
            is_wfh=location.location_type == LocationType.WORK_FROM_HOME,
            status=status,
            is_late=decision.is_late,
            late_by_minutes=decision.late_by_minutes,
            is_half_day=decision.is_half_day,
        )
        logger.info(
            "check-in user=%s location=%s late=%s half_day=%s",
            user.user_id, location.location_type.value, decision.is_late, decision.is_half_day,
        )
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user.user_id,
            work_date=today,
            check_in_time=now,
            check_in_lat=lat,
            check_in_lng=lng,
            location_type=location.location_type,
            geo_fence_id=location.nearest_fence_id,
            is_wfh=location.location_type == LocationType.WORK_FROM_HOME,
            status=status,
            is_late=decision.is_late,
            late_by_minutes=decision.late_by_minutes,
            is_half_day=decision.is_half_day,
        )

    def check_out(self, user_id: int, *, latitude, longitude, now: datetime | None = None) -> dict:
        lat = require_latitude(latitude)
        lng = require_longitude(longitude)
        now = now or now_local()

        record = self._attendance.get_for_user_and_date(int(user_id), now.date())
        if not record or not record.is_open:
            raise ValidationError("No active check-in found")

        total_hours = (now - record.check_in_time).total_seconds() / 3600
        overtime_hours = max(0.0, total_hours - self._settings.standard_work_hours)

        self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            latitude=lat,
            longitude=lng,
            total_hours=round2(total_hours),
            overtime_hours=round2(overtime_hours),
        )
        return {
            "attendance_id": record.attendance_id,
            "check_out_time": now,
            "total_hours": round2(total_hours),
            "overtime_hours": round2(overtime_hours),
        }

    def location_ping(self, user_id: int, *, latitude, longitude, now: datetime | None = None) -> LocationPingResult:
        lat = require_latitude(latitude)
        lng = require_longitude(longitude)
        now = now or now_local()

        record = self._attendance.get_for_user_and_date(int(user_id), now.date())
        if not record or not record.is_open:
            raise ValidationError("No active check-in found for today")

        # Without a check-in fence there is nothing to exit from.
        fence = self._fences.get_by_id(record.geo_fence_id) if record.geo_fence_id else None
        if not fence:
            return LocationPingResult(False, None, record.geo_exit_count)

        distance = haversine_distance(lat, lng, fence.latitude, fence.longitude)
        if distance <= fence.radius_m:
            return LocationPingResult(True, round2(distance), record.geo_exit_count)

        exit_count = self._attendance.record_geo_exit(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            exit_time=now,
            latitude=lat,
            longitude=lng,
            distance_from_fence=distance,
        )
        logger.info("geo exit user=%s attendance=%s count=%s", record.user_id, record.attendance_id, exit_count)
        return LocationPingResult(False, round2(distance), exit_count)

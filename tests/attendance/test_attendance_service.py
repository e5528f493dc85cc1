from __future__ import annotations

from datetime import date, datetime

import pytest

from src.pams.pams.attendance.service import AttendanceService
from src.pams.pams.core.enums import AttendanceStatus, FenceType, LocationType
from src.pams.pams.core.exceptions import NotFoundError, ValidationError
from src.pams.pams.core.settings import EngineSettings
from src.pams.pams.geo.model import GeoFence

from tests.fakes import FakeAttendance, FakeCompanies, FakeFences, FakeUsers, make_company, make_record, make_user

OFFICE = GeoFence(fence_id=7, company_id=1, latitude=21.0285, longitude=105.8542, radius_m=200, fence_type=FenceType.OFFICE)
IN_OFFICE = dict(latitude=21.0286, longitude=105.8542)
AT_HOME = dict(latitude=21.0385, longitude=105.8542)


def _service(attendance=None, *, settings=None):
    attendance = attendance if attendance is not None else FakeAttendance()
    svc = AttendanceService(
        attendance,
        FakeUsers([make_user(1)]),
        FakeCompanies(make_company()),
        FakeFences([OFFICE]),
        settings=settings,
    )
    return svc, attendance


def test_checkin_in_office_on_time_is_auto_approved():
    svc, repo = _service()

    rec = svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 20))

    assert rec.location_type == LocationType.OFFICE
    assert rec.status == AttendanceStatus.AUTO_APPROVED
    assert rec.geo_fence_id == 7
    assert not rec.is_late
    assert repo.get_for_user_and_date(1, date(2026, 2, 10)) is not None


def test_checkin_from_home_needs_review_and_is_flagged_wfh():
    svc, _ = _service()

    rec = svc.check_in(1, **AT_HOME, now=datetime(2026, 2, 10, 9, 0))

    assert rec.location_type == LocationType.WORK_FROM_HOME
    assert rec.is_wfh
    assert rec.status == AttendanceStatus.PENDING_REVIEW


def test_checkin_late_counts_minutes_after_grace():
    svc, _ = _service()

    rec = svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 10, 0))

    assert rec.is_late
    assert rec.late_by_minutes == 15
    assert not rec.is_half_day


def test_fourth_late_this_month_is_half_day():
    prior = [make_record(1, date(2026, 2, d), is_late=True) for d in (3, 4, 5)]
    svc, _ = _service(FakeAttendance(prior))

    rec = svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 10, 0))

    assert rec.is_late
    assert rec.is_half_day


def test_lates_of_previous_month_do_not_count():
    prior = [make_record(1, date(2026, 1, d), is_late=True) for d in (26, 27, 28)]
    svc, _ = _service(FakeAttendance(prior))

    rec = svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 10, 0))

    assert not rec.is_half_day


def test_second_checkin_same_day_is_rejected():
    svc, _ = _service()
    svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))

    with pytest.raises(ValidationError, match="Already checked in"):
        svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 5))


def test_checkin_unknown_user():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.check_in(99, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))


def test_checkin_rejects_bad_coordinates():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.check_in(1, latitude=123.0, longitude=105.0, now=datetime(2026, 2, 10, 9, 0))


def test_checkout_computes_total_and_overtime():
    svc, repo = _service()
    svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))

    out = svc.check_out(1, **IN_OFFICE, now=datetime(2026, 2, 10, 18, 30))

    assert out["total_hours"] == 9.5
    assert out["overtime_hours"] == 1.5
    assert not repo.get_for_user_and_date(1, date(2026, 2, 10)).is_open


def test_checkout_uses_configured_standard_hours():
    svc, _ = _service(settings=EngineSettings(standard_work_hours=9.0))
    svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))

    out = svc.check_out(1, **IN_OFFICE, now=datetime(2026, 2, 10, 17, 0))

    assert out["overtime_hours"] == 0.0


def test_checkout_without_checkin_fails():
    svc, _ = _service()

    with pytest.raises(ValidationError, match="No active check-in"):
        svc.check_out(1, **IN_OFFICE, now=datetime(2026, 2, 10, 18, 0))


def test_location_ping_counts_exits_only_outside_fence():
    svc, repo = _service()
    svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))

    inside = svc.location_ping(1, **IN_OFFICE, now=datetime(2026, 2, 10, 11, 0))
    outside = svc.location_ping(1, **AT_HOME, now=datetime(2026, 2, 10, 12, 0))

    assert inside.inside_fence
    assert inside.geo_exit_count == 0
    assert not outside.inside_fence
    assert outside.geo_exit_count == 1
    assert len(repo.exit_logs) == 1


def test_location_ping_without_fence_does_not_count_exit():
    attendance = FakeAttendance()
    svc = AttendanceService(attendance, FakeUsers([make_user(1)]), FakeCompanies(make_company()), FakeFences([]))
    svc.check_in(1, **IN_OFFICE, now=datetime(2026, 2, 10, 9, 0))

    result = svc.location_ping(1, **AT_HOME, now=datetime(2026, 2, 10, 11, 0))

    assert not result.inside_fence
    assert result.distance_from_fence is None
    assert result.geo_exit_count == 0
    assert attendance.exit_logs == []

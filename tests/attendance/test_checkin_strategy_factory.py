from datetime import date, datetime, time

from src.pams.pams.attendance.factory import AttendanceStrategyFactory
from src.pams.pams.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.pams.pams.attendance.strategies.late_strategy import LateStrategy, minutes_late
from src.pams.pams.attendance.strategies.normal_strategy import OnTimeStrategy
from src.pams.pams.users.model import CompanySettings

COMPANY = CompanySettings(company_id=1, name="Acme", in_time=time(9, 30), grace_minutes=15, late_threshold=3)
TODAY = date(2026, 2, 10)


def test_factory_on_time_within_grace():
    now = datetime(2026, 2, 10, 9, 45, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=TODAY, company=COMPANY, prior_late_count=0)

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_late_after_grace():
    now = datetime(2026, 2, 10, 9, 45, 1)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=TODAY, company=COMPANY, prior_late_count=0)

    assert isinstance(strategy, LateStrategy)


def test_factory_half_day_on_every_fourth_late_with_threshold_three():
    now = datetime(2026, 2, 10, 10, 0, 0)
    factory = AttendanceStrategyFactory()

    picks = [factory.for_checkin(now=now, today=TODAY, company=COMPANY, prior_late_count=n) for n in range(8)]

    half_days = [i + 1 for i, s in enumerate(picks) if isinstance(s, HalfDayStrategy)]
    assert half_days == [4, 8]


def test_factory_without_company_is_on_time():
    now = datetime(2026, 2, 10, 13, 0, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=TODAY, company=None, prior_late_count=5)

    assert isinstance(strategy, OnTimeStrategy)


def test_minutes_late_rounds_up_started_minutes():
    deadline = datetime(2026, 2, 10, 9, 45, 0)

    assert minutes_late(datetime(2026, 2, 10, 9, 45, 1), deadline) == 1
    assert minutes_late(datetime(2026, 2, 10, 10, 15, 0), deadline) == 30

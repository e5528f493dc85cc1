from __future__ import annotations

from datetime import date, datetime

import pytest

from src.pams.pams.anomalies.checks import (
    DetectionContext,
    ExcessiveGeoExitsCheck,
    FrequentEmergencyLeavesCheck,
    FrequentLateArrivalsCheck,
    HighBacklogCheck,
    LowAttendanceCheck,
    OverdueTaskNoPermissionCheck,
    SimultaneousAbsenceCheck,
)
from src.pams.pams.core.enums import LeaveStatus, Role, Severity, TaskStatus

from tests.fakes import (
    FakeAttendance,
    FakeCompanies,
    FakeLeaves,
    FakeTasks,
    FakeUsers,
    make_company,
    make_leave,
    make_record,
    make_task,
    make_user,
)

NOW = datetime(2026, 2, 18, 11, 0)  # Wednesday, 13 working days into the month
TODAY = NOW.date()
MONTH_WEEKDAYS = [date(2026, 2, d) for d in range(1, 19) if date(2026, 2, d).weekday() < 5]


def _ctx(*, users, records=(), tasks=(), leaves=(), companies=None, now=NOW) -> DetectionContext:
    return DetectionContext(
        company_id=1,
        now=now,
        users=FakeUsers(users),
        companies=companies if companies is not None else FakeCompanies(make_company()),
        attendance=FakeAttendance(list(records)),
        tasks=FakeTasks(list(tasks)),
        leaves=FakeLeaves(list(leaves)),
    )


def _staff(count: int):
    return [make_user(i) for i in range(1, count + 1)]


@pytest.mark.parametrize("present, severity", [(8, Severity.HIGH), (7, Severity.CRITICAL), (6, Severity.CRITICAL)])
def test_simultaneous_absence_severity(present, severity):
    users = _staff(10) + [make_user(99, role=Role.SUPER_ADMIN)]
    records = [make_record(i, TODAY) for i in range(1, present + 1)]

    [item] = SimultaneousAbsenceCheck().run(_ctx(users=users, records=records))

    assert item.severity == severity
    assert item.data == {"absent_count": 10 - present, "present_count": present, "total_active": 10}
    assert "No approved leaves found" in item.description


def test_simultaneous_absence_single_absence_is_fine():
    records = [make_record(i, TODAY) for i in range(1, 10)]

    assert SimultaneousAbsenceCheck().run(_ctx(users=_staff(10), records=records)) == []


def test_simultaneous_absence_lists_approved_leaves():
    records = [make_record(i, TODAY) for i in range(1, 9)]
    leaves = [
        make_leave(1, 9, date(2026, 2, 17), date(2026, 2, 19)),
        make_leave(2, 10, TODAY, status=LeaveStatus.PENDING),
    ]

    [item] = SimultaneousAbsenceCheck().run(_ctx(users=_staff(10), records=records, leaves=leaves))

    assert item.affected_users == (9,)
    assert "On approved leave: User9 Test (E009)" in item.description


@pytest.mark.parametrize("exits, severity", [(2, None), (3, Severity.MEDIUM), (5, Severity.HIGH), (6, Severity.HIGH)])
def test_excessive_geo_exits(exits, severity):
    records = [make_record(1, TODAY, geo_exit_count=exits)]

    items = ExcessiveGeoExitsCheck().run(_ctx(users=_staff(1), records=records))

    if severity is None:
        assert items == []
    else:
        [item] = items
        assert item.severity == severity
        assert item.affected_users == (1,)
        assert f"{exits} times today" in item.description


def test_geo_exits_only_counts_today():
    records = [make_record(1, date(2026, 2, 17), geo_exit_count=7)]

    assert ExcessiveGeoExitsCheck().run(_ctx(users=_staff(1), records=records)) == []


def test_overdue_task_without_permission():
    tasks = [
        make_task(1, 1, datetime(2026, 2, 5, 17), title="Quarterly audit"),
        make_task(2, 1, datetime(2026, 2, 5, 17), special_permission=True),
        make_task(3, 1, datetime(2026, 2, 15, 17)),
        make_task(4, 1, datetime(2026, 2, 1, 17), status=TaskStatus.COMPLETED, completed_at=datetime(2026, 2, 3)),
    ]

    [item] = OverdueTaskNoPermissionCheck().run(_ctx(users=_staff(1), tasks=tasks))

    assert item.severity == Severity.MEDIUM
    assert item.data["task_id"] == 1
    assert item.description == (
        'Task "Quarterly audit" assigned to User1 Test is 13 days overdue without special permission.'
    )


def test_frequent_emergency_leaves():
    leaves = [make_leave(i, 1, date(2026, 2, 1 + i)) for i in range(1, 4)]
    leaves += [make_leave(10 + i, 2, date(2026, 2, 1 + i)) for i in range(1, 3)]
    leaves += [
        make_leave(21, 3, date(2026, 2, 2)),
        make_leave(22, 3, date(2026, 2, 3)),
        make_leave(23, 3, date(2026, 2, 4), status=LeaveStatus.REJECTED),
    ]

    [item] = FrequentEmergencyLeavesCheck().run(_ctx(users=_staff(3), leaves=leaves))

    assert item.affected_users == (1,)
    assert item.severity == Severity.HIGH
    assert item.data == {"emergency_count": 3}


def test_low_attendance():
    records = [make_record(1, d) for d in MONTH_WEEKDAYS]
    records += [make_record(2, d) for d in MONTH_WEEKDAYS[:10]]
    records += [make_record(3, d) for d in MONTH_WEEKDAYS[:7]]

    items = LowAttendanceCheck().run(_ctx(users=_staff(3), records=records))

    assert [(i.affected_users, i.severity) for i in items] == [((2,), Severity.HIGH), ((3,), Severity.CRITICAL)]
    assert items[0].data == {"attendance_rate": 77, "present_days": 10, "working_days": 13}


def test_low_attendance_waits_for_five_working_days():
    now = datetime(2026, 2, 5, 11, 0)

    assert LowAttendanceCheck().run(_ctx(users=_staff(2), now=now)) == []


def test_high_backlog():
    tasks = [make_task(i, 1, datetime(2026, 2, 10, 17)) for i in range(1, 4)]
    tasks += [make_task(10 + i, 2, datetime(2026, 2, 10, 17)) for i in range(1, 6)]
    tasks += [make_task(20 + i, 3, datetime(2026, 2, 10, 17)) for i in range(1, 3)]
    tasks += [make_task(30, 3, datetime(2026, 2, 25, 17))]

    items = HighBacklogCheck().run(_ctx(users=_staff(3), tasks=tasks))

    assert [(i.affected_users, i.severity, i.data["backlog_tasks"]) for i in items] == [
        ((1,), Severity.HIGH, 3),
        ((2,), Severity.CRITICAL, 5),
    ]


def test_frequent_late_arrivals_uses_company_threshold():
    records = [make_record(1, d, is_late=True) for d in MONTH_WEEKDAYS[:3]]
    records += [make_record(2, d, is_late=True, is_half_day=(d == MONTH_WEEKDAYS[3])) for d in MONTH_WEEKDAYS[:4]]
    records += [make_record(3, d, is_late=True) for d in MONTH_WEEKDAYS[:2]]

    items = FrequentLateArrivalsCheck().run(_ctx(users=_staff(3), records=records))

    assert [(i.affected_users, i.severity) for i in items] == [((1,), Severity.HIGH), ((2,), Severity.CRITICAL)]
    assert items[1].data == {"late_count": 4, "half_day_count": 1, "threshold": 3}


def test_frequent_late_arrivals_falls_back_to_default_threshold():
    records = [make_record(1, d, is_late=True) for d in MONTH_WEEKDAYS[:2]]

    lenient = _ctx(users=_staff(1), records=records, companies=FakeCompanies(make_company(late_threshold=5)))
    default = _ctx(users=_staff(1), records=records, companies=FakeCompanies())

    assert FrequentLateArrivalsCheck().run(lenient) == []
    assert FrequentLateArrivalsCheck().run(default) == []
    records.append(make_record(1, MONTH_WEEKDAYS[2], is_late=True))
    assert len(FrequentLateArrivalsCheck().run(_ctx(users=_staff(1), records=records, companies=FakeCompanies()))) == 1

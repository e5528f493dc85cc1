from datetime import datetime, timedelta

import pytest

from src.pams.pams.tasks.scoring import backlog_weeks, speed_score

DEADLINE = datetime(2026, 2, 10, 17, 0)


@pytest.mark.parametrize(
    "completed_at, expected",
    [
        (DEADLINE - timedelta(days=2), 100.0),
        (DEADLINE, 100.0),
        (DEADLINE + timedelta(minutes=1), 90.0),
        (DEADLINE + timedelta(days=1), 90.0),
        (DEADLINE + timedelta(days=1, hours=1), 80.0),
        (DEADLINE + timedelta(days=10), 0.0),
        (DEADLINE + timedelta(days=30), 0.0),
    ],
)
def test_speed_score(completed_at, expected):
    assert speed_score(completed_at, DEADLINE) == expected


def test_backlog_weeks_counts_whole_weeks_only():
    assert backlog_weeks(DEADLINE, DEADLINE - timedelta(days=3)) == 0
    assert backlog_weeks(DEADLINE, DEADLINE + timedelta(days=6, hours=23)) == 0
    assert backlog_weeks(DEADLINE, DEADLINE + timedelta(days=7)) == 1
    assert backlog_weeks(DEADLINE, DEADLINE + timedelta(days=20)) == 2

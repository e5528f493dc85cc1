from __future__ import annotations

import math
from datetime import datetime, timedelta

_DAY = timedelta(days=1)
_WEEK = timedelta(weeks=1)


def speed_score(completed_at: datetime, deadline: datetime) -> float:
    """100 on or before the deadline, minus 10 per started day late, floored at 0."""
    late_by = completed_at - deadline
    if late_by <= timedelta(0):
        return 100.0
    days_late = math.ceil(late_by / _DAY)
    return float(max(0, 100 - days_late * 10))


def backlog_weeks(deadline: datetime, now: datetime) -> int:
    """Whole weeks an open task has been past its deadline."""
    overdue_by = now - deadline
    if overdue_by <= timedelta(0):
        return 0
    return int(overdue_by // _WEEK)

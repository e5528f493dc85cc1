from __future__ import annotations

import math
from datetime import datetime

from .base import CheckInStrategy, LateDecision


def minutes_late(now: datetime, deadline: datetime) -> int:
    return max(0, math.ceil((now - deadline).total_seconds() / 60))


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide(self, *, now: datetime, deadline: datetime) -> LateDecision:
        return LateDecision(is_late=True, late_by_minutes=minutes_late(now, deadline))

from __future__ import annotations

from datetime import datetime

from .base import CheckInStrategy, LateDecision


class OnTimeStrategy(CheckInStrategy):
    """Check-in on or before in-time + grace (or no company schedule at all)."""

    def decide(self, *, now: datetime, deadline: datetime) -> LateDecision:
        return LateDecision()

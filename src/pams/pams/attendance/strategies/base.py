from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LateDecision:
    is_late: bool = False
    late_by_minutes: int = 0
    is_half_day: bool = False


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in's lateness is decided."""

    @abstractmethod
    def decide(self, *, now: datetime, deadline: datetime) -> LateDecision:
        raise NotImplementedError

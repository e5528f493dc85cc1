from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

from . import constants


@dataclass(frozen=True)
class BonusTier:
    min_score: int
    max_score: int
    min_bonus: int
    max_bonus: int
    label: str
    color: str


# Exponentially harder to climb: each band is narrower than the one below it.
DEFAULT_BONUS_TIERS: tuple[BonusTier, ...] = (
    BonusTier(0, 30, 25, 25, "Minimum", "#ef4444"),
    BonusTier(31, 50, 26, 75, "Below Average", "#f97316"),
    BonusTier(51, 65, 76, 100, "Average", "#eab308"),
    BonusTier(66, 78, 101, 125, "Good", "#84cc16"),
    BonusTier(79, 87, 126, 150, "Very Good", "#22c55e"),
    BonusTier(88, 93, 151, 175, "Excellent", "#06b6d4"),
    BonusTier(94, 97, 176, 200, "Outstanding", "#8b5cf6"),
    BonusTier(98, 100, 201, 225, "Exceptional", "#ec4899"),
)


@dataclass(frozen=True)
class EngineSettings:
    """Immutable tuning passed into every engine service."""

    bonus_tiers: tuple[BonusTier, ...] = field(default=DEFAULT_BONUS_TIERS)
    wfh_threshold_m: float = constants.DEFAULT_WFH_DISTANCE_THRESHOLD_M
    standard_work_hours: float = constants.DEFAULT_STANDARD_WORK_HOURS
    advance_notice_days: int = constants.DEFAULT_ADVANCE_NOTICE_DAYS
    long_emergency_threshold_days: int = constants.LONG_EMERGENCY_THRESHOLD_DAYS
    overdue_permission_days: int = constants.BACKLOG_SPECIAL_PERMISSION_DAYS
    default_late_threshold: int = constants.DEFAULT_LATE_THRESHOLD

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]] = None) -> "EngineSettings":
        """Build settings from a config dict (e.g. ``settings.ENGINE``); unknown keys are ignored."""
        base = cls()
        if not values:
            return base

        overrides: dict[str, Any] = {}
        if values.get("WFH_DISTANCE_THRESHOLD_M") is not None:
            overrides["wfh_threshold_m"] = float(values["WFH_DISTANCE_THRESHOLD_M"])
        if values.get("STANDARD_WORK_HOURS") is not None:
            overrides["standard_work_hours"] = float(values["STANDARD_WORK_HOURS"])
        if values.get("ADVANCE_NOTICE_DAYS") is not None:
            overrides["advance_notice_days"] = int(values["ADVANCE_NOTICE_DAYS"])
        if values.get("LONG_EMERGENCY_THRESHOLD_DAYS") is not None:
            overrides["long_emergency_threshold_days"] = int(values["LONG_EMERGENCY_THRESHOLD_DAYS"])
        if values.get("OVERDUE_PERMISSION_DAYS") is not None:
            overrides["overdue_permission_days"] = int(values["OVERDUE_PERMISSION_DAYS"])
        if values.get("DEFAULT_LATE_THRESHOLD") is not None:
            overrides["default_late_threshold"] = int(values["DEFAULT_LATE_THRESHOLD"])
        return replace(base, **overrides)

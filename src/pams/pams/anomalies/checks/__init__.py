from .attendance_checks import (
    ExcessiveGeoExitsCheck,
    FrequentLateArrivalsCheck,
    LowAttendanceCheck,
    SimultaneousAbsenceCheck,
)
from .base import AnomalyCheck, DetectionContext
from .leave_checks import FrequentEmergencyLeavesCheck
from .task_checks import HighBacklogCheck, OverdueTaskNoPermissionCheck


def default_checks() -> list[AnomalyCheck]:
    """The daily battery, in report order."""
    return [
        SimultaneousAbsenceCheck(),
        ExcessiveGeoExitsCheck(),
        OverdueTaskNoPermissionCheck(),
        FrequentEmergencyLeavesCheck(),
        LowAttendanceCheck(),
        HighBacklogCheck(),
        FrequentLateArrivalsCheck(),
    ]


__all__ = [
    "AnomalyCheck",
    "DetectionContext",
    "ExcessiveGeoExitsCheck",
    "FrequentEmergencyLeavesCheck",
    "FrequentLateArrivalsCheck",
    "HighBacklogCheck",
    "LowAttendanceCheck",
    "OverdueTaskNoPermissionCheck",
    "SimultaneousAbsenceCheck",
    "default_checks",
]

"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Engine code reads these through ``EngineSettings`` so deployments can override them.
"""

DEFAULT_WFH_DISTANCE_THRESHOLD_M = 5000.0
DEFAULT_STANDARD_WORK_HOURS = 8.0
DEFAULT_ADVANCE_NOTICE_DAYS = 7
LONG_EMERGENCY_THRESHOLD_DAYS = 2
BACKLOG_SPECIAL_PERMISSION_DAYS = 7
DEFAULT_LATE_THRESHOLD = 3

SIMULTANEOUS_ABSENCE_LOOKBACK_MONTHS = 3
MIN_SIMULTANEOUS_ABSENT = 2

DEFAULT_HISTORY_PERIODS = 6

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission checks inside services."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    REVIEWER = "REVIEWER"
    STAFF = "STAFF"


REVIEWER_ROLES = frozenset({Role.REVIEWER, Role.ADMIN, Role.SUPER_ADMIN})
ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


class LocationType(str, Enum):
    OFFICE = "OFFICE"
    CLIENT_SITE = "CLIENT_SITE"
    WORK_FROM_HOME = "WORK_FROM_HOME"
    UNKNOWN = "UNKNOWN"


class FenceType(str, Enum):
    OFFICE = "office"
    CLIENT_SITE = "client_site"


class AttendanceStatus(str, Enum):
    """Review state of an attendance record (derived from the check-in location)."""

    AUTO_APPROVED = "AUTO_APPROVED"
    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    SICK = "SICK"
    PERSONAL = "PERSONAL"
    EMERGENCY = "EMERGENCY"


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class ProofStatus(str, Enum):
    NOT_REQUIRED = "NOT_REQUIRED"
    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TaskStatus(str, Enum):
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


CLOSED_TASK_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


class ParameterFormula(str, Enum):
    HIGHER_IS_BETTER = "HIGHER_IS_BETTER"
    LOWER_IS_BETTER = "LOWER_IS_BETTER"
    CUSTOM = "CUSTOM"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

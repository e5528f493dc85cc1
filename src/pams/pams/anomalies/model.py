from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import Severity


@dataclass(frozen=True)
class AnomalyItem:
    """One finding of a detection check."""

    type: str
    severity: Severity
    title: str
    description: str
    affected_users: tuple[int, ...] = ()
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "affected_users": list(self.affected_users),
            "data": dict(self.data),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AnomalyItem":
        return cls(
            type=raw["type"],
            severity=Severity(raw["severity"]),
            title=raw["title"],
            description=raw["description"],
            affected_users=tuple(raw.get("affected_users") or ()),
            data=dict(raw.get("data") or {}),
        )


@dataclass(frozen=True)
class AnomalyRule:
    """Admin-configured rule; only its recipients are used, the condition text is descriptive."""

    rule_id: int
    company_id: int
    name: str
    severity: Severity
    condition_text: Optional[str] = None
    is_active: bool = True
    recipient_emails: tuple[str, ...] = ()


@dataclass(frozen=True)
class DetectionResult:
    items: tuple[AnomalyItem, ...]
    failed_checks: tuple[str, ...] = ()

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_checks)


@dataclass(frozen=True)
class AnomalyReport:
    report_id: int
    company_id: int
    report_date: date
    summary: str
    items: tuple[AnomalyItem, ...] = ()
    failed_checks: tuple[str, ...] = ()
    sent_to: tuple[str, ...] = ()
    sent_at: Optional[datetime] = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee of one company.

    Plain data object; it carries no database access code.
    """

    user_id: int
    company_id: int
    employee_code: str
    first_name: str
    last_name: str
    email: str
    role: Role
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        return f"{self.full_name} ({self.employee_code})"


@dataclass(frozen=True)
class CompanySettings:
    """Per-company working-hours configuration consulted by the engine."""

    company_id: int
    name: str
    in_time: time
    grace_minutes: int
    late_threshold: int

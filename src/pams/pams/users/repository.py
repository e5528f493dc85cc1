from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CompanySettings, User


class UserRepository(Protocol):
    """Read-side user queries the engine needs.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_active_for_company(self, company_id: int, *, include_super_admin: bool = True) -> Sequence[User]:
        """Active users ordered by first name."""

        raise NotImplementedError


class CompanyRepository(Protocol):
    def get_settings(self, company_id: int) -> Optional[CompanySettings]:
        raise NotImplementedError

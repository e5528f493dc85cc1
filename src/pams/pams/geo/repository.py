from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import GeoFence


class GeoFenceRepository(Protocol):
    def list_active_for_company(self, company_id: int) -> Sequence[GeoFence]:
        """Active fences ordered by id (the order used for first-match classification)."""

        raise NotImplementedError

    def get_by_id(self, fence_id: int) -> Optional[GeoFence]:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import FenceType


@dataclass(frozen=True)
class GeoFence:
    """A labeled circular region (centre + radius in metres)."""

    fence_id: int
    company_id: int
    latitude: float
    longitude: float
    radius_m: float
    fence_type: FenceType
    label: Optional[str] = None
    is_active: bool = True

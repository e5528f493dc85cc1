from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import FenceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GeoFence
from .repository import GeoFenceRepository


def _to_fence(row: dict[str, Any]) -> GeoFence:
    return GeoFence(
        fence_id=int(row["fence_id"]),
        company_id=int(row["company_id"]),
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        radius_m=float(row["radius_m"]),
        fence_type=FenceType(row["fence_type"]),
        label=row.get("label"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLGeoFenceRepository(GeoFenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_for_company(self, company_id: int) -> Sequence[GeoFence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT fence_id, company_id, label, latitude, longitude, radius_m, fence_type, is_active
                FROM geo_fences
                WHERE company_id=%s AND is_active=1
                ORDER BY fence_id
                """,
                (int(company_id),),
            )
            return [_to_fence(r) for r in fetchall(cur)]

    def get_by_id(self, fence_id: int) -> Optional[GeoFence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT fence_id, company_id, label, latitude, longitude, radius_m, fence_type, is_active
                FROM geo_fences
                WHERE fence_id=%s
                """,
                (int(fence_id),),
            )
            row = fetchone(cur)
            return _to_fence(row) if row else None

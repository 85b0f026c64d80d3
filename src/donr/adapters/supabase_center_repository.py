"""Supabase-backed center repository."""

from dataclasses import dataclass

from supabase import AsyncClient

from donr.adapters.supabase_rows import (
    format_timestamp,
    location_columns,
    parse_location,
    parse_timestamp,
)
from donr.domain.errors import StoreError
from donr.domain.models import Center
from donr.services.centers import CenterRepository


@dataclass
class SupabaseCenterRepository(CenterRepository):
    """Supabase implementation for centers."""

    client: AsyncClient

    async def list_centers(self) -> list[Center]:
        """Return all centers with coordinates."""
        response = await self.client.table("centers").select("*").execute()
        centers = []
        for row in response.data or []:
            center = _parse_center(row)
            if center is not None:
                centers.append(center)
        return centers

    async def create_center(self, center: Center) -> Center:
        """Insert a center row."""
        response = (
            await self.client.table("centers")
            .insert(
                {
                    "name": center.name,
                    "address": center.address,
                    "hours": center.hours,
                    "phone": center.phone,
                    "capacity": center.capacity,
                    "center_type": center.center_type,
                    "created_at": format_timestamp(center.created_at),
                    **location_columns(center.location),
                }
            )
            .execute()
        )
        created = _parse_center(response.data[0]) if response.data else None
        if created is None:
            raise StoreError("Failed to create center")
        return created


def _parse_center(row: dict[str, object]) -> Center | None:
    location = parse_location(row)
    if location is None:
        return None
    return Center(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        address=str(row.get("address") or ""),
        location=location,
        hours=row.get("hours"),
        phone=row.get("phone"),
        capacity=str(row["capacity"]) if row.get("capacity") is not None else None,
        center_type=str(row.get("center_type") or "food bank"),
        created_at=parse_timestamp(row.get("created_at")),
    )

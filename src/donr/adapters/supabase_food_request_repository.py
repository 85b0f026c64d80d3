"""Supabase-backed food request repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import AsyncClient

from donr.adapters.supabase_rows import (
    format_timestamp,
    location_columns,
    parse_location,
    parse_timestamp,
)
from donr.domain.errors import StoreError
from donr.domain.food_requests import PENDING, FoodRequest
from donr.domain.geo import GeoPoint
from donr.services.food_requests import FoodRequestRepository


@dataclass
class SupabaseFoodRequestRepository(FoodRequestRepository):
    """Supabase implementation for food requests."""

    client: AsyncClient

    async def list_requests(self) -> list[FoodRequest]:
        """Return all food requests, newest first."""
        response = (
            await self.client.table("requests")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_request(row) for row in response.data or []]

    async def get_request(self, request_id: str) -> FoodRequest | None:
        """Return a request by id, if present."""
        response = (
            await self.client.table("requests")
            .select("*")
            .eq("id", request_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_request(response.data[0])

    async def create_request(  # noqa: PLR0913
        self,
        user_id: str,
        food_type: str,
        urgency: str,
        location: GeoPoint,
        address: str | None,
        created_at: datetime,
    ) -> FoodRequest:
        """Insert a pending request row."""
        response = (
            await self.client.table("requests")
            .insert(
                {
                    "user_id": user_id,
                    "food_type": food_type,
                    "urgency": urgency,
                    "address": address,
                    "status": PENDING,
                    "created_at": format_timestamp(created_at),
                    **location_columns(location),
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to create request")
        return _parse_request(response.data[0])

    async def update_status(
        self, request_id: str, status: str, updated_at: datetime
    ) -> FoodRequest:
        """Set a request's status."""
        response = (
            await self.client.table("requests")
            .update({"status": status, "updated_at": format_timestamp(updated_at)})
            .eq("id", request_id)
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to update request")
        return _parse_request(response.data[0])


def _parse_request(row: dict[str, object]) -> FoodRequest:
    location = parse_location(row)
    if location is None:
        raise StoreError(f"Request {row.get('id')} is missing coordinates")
    return FoodRequest(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        food_type=str(row.get("food_type") or ""),
        urgency=str(row.get("urgency") or "normal"),
        location=location,
        status=str(row.get("status") or PENDING),
        created_at=parse_timestamp(row.get("created_at")) or datetime.now(tz=UTC),
        address=row.get("address") or None,
        updated_at=parse_timestamp(row.get("updated_at")),
    )

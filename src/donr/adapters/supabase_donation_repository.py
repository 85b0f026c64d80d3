"""Supabase-backed donation repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import AsyncClient

from donr.adapters.supabase_rows import (
    format_timestamp,
    location_columns,
    parse_location,
    parse_timestamp,
)
from donr.domain.donations import AVAILABLE, CLAIMED, DISTRIBUTED, Donation, NewDonation
from donr.domain.errors import StoreError
from donr.services.donations import DonationRepository


@dataclass
class SupabaseDonationRepository(DonationRepository):
    """Supabase implementation for donations."""

    client: AsyncClient

    async def get_donation(self, donation_id: str) -> Donation | None:
        """Return a donation by id, if present."""
        response = (
            await self.client.table("donations")
            .select("*")
            .eq("id", donation_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_donation(response.data[0])

    async def list_donations_by_status(self, status: str) -> list[Donation]:
        """Return every donation in the given status."""
        response = (
            await self.client.table("donations")
            .select("*")
            .eq("status", status)
            .execute()
        )
        return [_parse_donation(row) for row in response.data or []]

    async def create_donation(self, donation: NewDonation) -> Donation:
        """Insert a donation row and return it."""
        response = (
            await self.client.table("donations")
            .insert(
                {
                    "donator_id": donation.donator_id,
                    "donor_name": donation.donor_name,
                    "food_type": donation.food_type,
                    "quantity": donation.quantity,
                    "expiration_date": format_timestamp(donation.expiration_date),
                    "status": donation.status,
                    "address": donation.address,
                    "created_at": format_timestamp(donation.created_at),
                    **location_columns(donation.location),
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to create donation")
        return _parse_donation(response.data[0])

    async def claim_donation(
        self, donation_id: str, distributor_id: str, claimed_at: datetime
    ) -> Donation | None:
        """Claim in one conditional update so concurrent claims cannot both win."""
        response = (
            await self.client.table("donations")
            .update(
                {
                    "status": CLAIMED,
                    "distributor_id": distributor_id,
                    "claimed_at": format_timestamp(claimed_at),
                }
            )
            .eq("id", donation_id)
            .eq("status", AVAILABLE)
            .gt("expiration_date", format_timestamp(claimed_at))
            .execute()
        )
        if not response.data:
            return None
        return _parse_donation(response.data[0])

    async def mark_distributed(
        self, donation_id: str, distributor_id: str, distributed_at: datetime
    ) -> Donation | None:
        """Finish a claim held by ``distributor_id`` in one conditional update."""
        response = (
            await self.client.table("donations")
            .update(
                {
                    "status": DISTRIBUTED,
                    "distributed_at": format_timestamp(distributed_at),
                }
            )
            .eq("id", donation_id)
            .eq("status", CLAIMED)
            .eq("distributor_id", distributor_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_donation(response.data[0])


def _parse_donation(row: dict[str, object]) -> Donation:
    expiration = parse_timestamp(row.get("expiration_date"))
    created_at = parse_timestamp(row.get("created_at"))
    if expiration is None or created_at is None:
        raise StoreError(f"Donation {row.get('id')} is missing timestamps")
    return Donation(
        id=str(row["id"]),
        donator_id=str(row["donator_id"]),
        food_type=str(row.get("food_type") or ""),
        quantity=str(row.get("quantity") or ""),
        expiration_date=expiration,
        status=str(row.get("status") or AVAILABLE),
        location=parse_location(row),
        created_at=created_at,
        donor_name=str(row.get("donor_name") or "Anonymous"),
        address=row.get("address") or None,
        distributor_id=row.get("distributor_id") or None,
        claimed_at=parse_timestamp(row.get("claimed_at")),
        distributed_at=parse_timestamp(row.get("distributed_at")),
    )

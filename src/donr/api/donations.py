"""Donation endpoints."""

from fastapi import APIRouter, Depends, Request, status

from donr.api.auth import current_identity, get_container
from donr.api.schemas import (
    DonationCreate,
    serialize_donation,
    serialize_nearby,
)
from donr.domain.errors import ValidationError
from donr.domain.geo import parse_point
from donr.domain.models import Identity

router = APIRouter(prefix="/donations", tags=["donations"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_donation(
    payload: DonationCreate,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Post a new donation (donators only)."""
    donation = await get_container(request).donation_service.create_donation(
        identity, payload.to_draft()
    )
    return {"success": True, "data": serialize_donation(donation)}


@router.get("")
async def list_donations(
    request: Request,
    lat: str | None = None,
    lng: str | None = None,
    radius: str | None = None,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Return available, unexpired donations near a point, closest first."""
    location = parse_point(lat, lng) if lat and lng else None
    if (lat or lng) and location is None:
        raise ValidationError("lat and lng must both be numbers")
    search_radius = _parse_radius(radius)
    matches = await get_container(request).donation_service.list_nearby_donations(
        identity, location, search_radius
    )
    return {
        "success": True,
        "data": [serialize_nearby(match) for match in matches],
        "count": len(matches),
    }


@router.put("/{donation_id}/claim")
async def claim_donation(
    donation_id: str,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Claim an available donation (distributors only)."""
    donation = await get_container(request).donation_service.claim_donation(
        identity, donation_id
    )
    return {"success": True, "data": serialize_donation(donation)}


@router.put("/{donation_id}/distribute")
async def distribute_donation(
    donation_id: str,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Mark a claimed donation as distributed (claimant only)."""
    donation = await get_container(request).donation_service.mark_distributed(
        identity, donation_id
    )
    return {"success": True, "data": serialize_donation(donation)}


def _parse_radius(raw: str | None) -> float | None:
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValidationError("radius must be a number") from exc

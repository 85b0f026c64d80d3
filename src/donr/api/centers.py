"""Center endpoints."""

from fastapi import APIRouter, Depends, Request, status

from donr.api.auth import current_identity, get_container
from donr.api.schemas import CenterCreate, serialize_center
from donr.domain.models import Identity

router = APIRouter(prefix="/centers", tags=["centers"])


@router.get("")
async def list_centers(
    request: Request, _identity: Identity = Depends(current_identity)
) -> dict[str, object]:
    """Return all food banks and pantries."""
    centers = await get_container(request).center_service.list_centers()
    return {"success": True, "data": [serialize_center(center) for center in centers]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_center(
    payload: CenterCreate,
    request: Request,
    _identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Register a center."""
    center = await get_container(request).center_service.create_center(
        name=payload.name,
        address=payload.address,
        location=payload.point(),
        hours=payload.hours,
        phone=payload.phone,
        capacity=payload.capacity,
        center_type=payload.center_type,
    )
    return {"success": True, "data": serialize_center(center)}

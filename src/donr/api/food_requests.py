"""Food request endpoints."""

from fastapi import APIRouter, Depends, Request, status

from donr.api.auth import current_identity, get_container
from donr.api.schemas import (
    FoodRequestCreate,
    FoodRequestStatusUpdate,
    serialize_request,
)
from donr.domain.models import Identity

router = APIRouter(prefix="/requests", tags=["requests"])


@router.get("")
async def list_requests(
    request: Request, _identity: Identity = Depends(current_identity)
) -> dict[str, object]:
    """Return all food requests."""
    requests = await get_container(request).food_request_service.list_requests()
    return {"success": True, "data": [serialize_request(item) for item in requests]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_request(
    payload: FoodRequestCreate,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Post a food request (acceptors only)."""
    created = await get_container(request).food_request_service.create_request(
        identity,
        food_type=payload.food_type,
        location=payload.point(),
        urgency=payload.urgency,
        address=payload.address,
    )
    return {"success": True, "data": serialize_request(created)}


@router.put("/{request_id}/status")
async def update_request_status(
    request_id: str,
    payload: FoodRequestStatusUpdate,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Change a request's status (distributors only)."""
    updated = await get_container(request).food_request_service.update_status(
        identity, request_id, payload.status
    )
    return {"success": True, "data": serialize_request(updated)}

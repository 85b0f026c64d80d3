"""User profile endpoints."""

from fastapi import APIRouter, Depends, Request, status

from donr.api.auth import current_identity, get_container
from donr.api.schemas import UserCreate, UserUpdate, serialize_user
from donr.domain.models import Identity
from donr.services.users import ProfileUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Create the caller's profile after registration."""
    profile = await get_container(request).user_service.create_profile(
        identity,
        name=payload.name,
        role=payload.role,
        location=payload.point(),
        push_token=payload.push_token,
    )
    return {"success": True, "data": serialize_user(profile)}


@router.get("/me")
async def get_me(
    request: Request, identity: Identity = Depends(current_identity)
) -> dict[str, object]:
    """Return the caller's profile."""
    profile = await get_container(request).user_service.get_profile(identity.user_id)
    return {"success": True, "data": serialize_user(profile)}


@router.put("/me")
async def update_me(
    payload: UserUpdate,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Update the caller's name, location or push token."""
    profile = await get_container(request).user_service.update_profile(
        identity.user_id,
        ProfileUpdate(
            name=payload.name,
            location=payload.point(),
            push_token=payload.push_token,
        ),
    )
    return {"success": True, "data": serialize_user(profile)}

"""Direct notification endpoint."""

from fastapi import APIRouter, Depends, Request

from donr.api.auth import current_identity, get_container
from donr.api.schemas import NotificationSend
from donr.domain.errors import ValidationError
from donr.domain.models import Identity

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/send")
async def send_notification(
    payload: NotificationSend,
    request: Request,
    _identity: Identity = Depends(current_identity),
) -> dict[str, object]:
    """Send a push notification to a single user."""
    if not payload.user_id or not payload.title or not payload.body:
        raise ValidationError("Missing required fields: userId, title, body")
    message_id = await get_container(request).notification_service.send(
        payload.user_id, payload.title, payload.body, payload.data or {}
    )
    return {"success": True, "data": {"messageId": message_id}}

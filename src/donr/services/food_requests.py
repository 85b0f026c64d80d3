"""Food requests posted by acceptors and progressed by distributors."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donr.domain.errors import NotFoundError, ValidationError
from donr.domain.food_requests import REQUEST_STATUSES, URGENCY_LEVELS, FoodRequest
from donr.domain.geo import GeoPoint
from donr.domain.models import ACCEPTOR, DISTRIBUTOR, Identity
from donr.services.users import UserService

_logger = logging.getLogger(__name__)


class FoodRequestRepository(Protocol):
    """Persistence interface for food requests."""

    async def list_requests(self) -> list[FoodRequest]:
        """Return all food requests."""

    async def get_request(self, request_id: str) -> FoodRequest | None:
        """Return a request by id, if present."""

    async def create_request(  # noqa: PLR0913
        self,
        user_id: str,
        food_type: str,
        urgency: str,
        location: GeoPoint,
        address: str | None,
        created_at: datetime,
    ) -> FoodRequest:
        """Persist a pending request and return it."""

    async def update_status(
        self, request_id: str, status: str, updated_at: datetime
    ) -> FoodRequest:
        """Set the status of a request and return it."""


@dataclass
class FoodRequestService:
    """Application service for food requests."""

    repository: FoodRequestRepository
    user_service: UserService

    async def list_requests(self) -> list[FoodRequest]:
        """Return every request."""
        return await self.repository.list_requests()

    async def create_request(  # noqa: PLR0913
        self,
        identity: Identity,
        food_type: str | None,
        location: GeoPoint | None,
        urgency: str | None = None,
        address: str | None = None,
    ) -> FoodRequest:
        """Create a pending request for the calling acceptor."""
        await self.user_service.require_role(identity, ACCEPTOR)
        if not food_type or not food_type.strip() or location is None:
            raise ValidationError("Missing required fields: foodType, lat, lng")
        resolved_urgency = urgency or "normal"
        if resolved_urgency not in URGENCY_LEVELS:
            raise ValidationError("Invalid urgency")
        created = await self.repository.create_request(
            user_id=identity.user_id,
            food_type=food_type.strip(),
            urgency=resolved_urgency,
            location=location,
            address=address or None,
            created_at=datetime.now(tz=UTC),
        )
        _logger.info("Food request created: id=%s user=%s", created.id, created.user_id)
        return created

    async def update_status(
        self, identity: Identity, request_id: str, status: str | None
    ) -> FoodRequest:
        """Change a request's status; the value must be a known status."""
        await self.user_service.require_role(identity, DISTRIBUTOR)
        if status not in REQUEST_STATUSES:
            raise ValidationError("Invalid status")
        existing = await self.repository.get_request(request_id)
        if existing is None:
            raise NotFoundError("Request not found")
        return await self.repository.update_status(
            request_id, status, datetime.now(tz=UTC)
        )

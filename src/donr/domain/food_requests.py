"""Domain models for food requests posted by acceptors."""

from dataclasses import dataclass
from datetime import datetime

from donr.domain.geo import GeoPoint

PENDING = "pending"
REQUEST_STATUSES = (PENDING, "accepted", "fulfilled", "cancelled")
URGENCY_LEVELS = ("normal", "urgent")


@dataclass(frozen=True)
class FoodRequest:
    """Represents a persisted food request."""

    id: str
    user_id: str
    food_type: str
    urgency: str
    location: GeoPoint
    status: str
    created_at: datetime
    address: str | None = None
    updated_at: datetime | None = None

"""Domain models for users, identities and centers."""

from dataclasses import dataclass
from datetime import datetime

from donr.domain.geo import GeoPoint

DONATOR = "donator"
DISTRIBUTOR = "distributor"
ACCEPTOR = "acceptor"
ROLES = (DONATOR, DISTRIBUTOR, ACCEPTOR)


@dataclass(frozen=True)
class Identity:
    """A verified caller identity from the auth provider."""

    user_id: str
    email: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Represents a user profile stored in the database."""

    id: str
    name: str
    role: str
    email: str | None = None
    location: GeoPoint | None = None
    push_token: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Center:
    """Static food bank or pantry record."""

    id: str
    name: str
    address: str
    location: GeoPoint
    hours: str | None = None
    phone: str | None = None
    capacity: str | None = None
    center_type: str = "food bank"
    created_at: datetime | None = None

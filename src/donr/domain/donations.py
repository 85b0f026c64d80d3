"""Domain models for donations and their lifecycle."""

from dataclasses import dataclass
from datetime import datetime

from donr.domain.geo import GeoPoint
from donr.domain.models import DISTRIBUTOR

AVAILABLE = "available"
CLAIMED = "claimed"
DISTRIBUTED = "distributed"
DONATION_STATUSES = (AVAILABLE, CLAIMED, DISTRIBUTED)

# (from, to) -> role allowed to perform the transition.
TRANSITIONS: dict[tuple[str, str], str] = {
    (AVAILABLE, CLAIMED): DISTRIBUTOR,
    (CLAIMED, DISTRIBUTED): DISTRIBUTOR,
}


@dataclass(frozen=True)
class Donation:
    """Represents a persisted donation."""

    id: str
    donator_id: str
    food_type: str
    quantity: str
    expiration_date: datetime
    status: str
    location: GeoPoint | None
    created_at: datetime
    donor_name: str = "Anonymous"
    address: str | None = None
    distributor_id: str | None = None
    claimed_at: datetime | None = None
    distributed_at: datetime | None = None


@dataclass(frozen=True)
class DonationDraft:
    """Fields supplied by a donator when posting food."""

    food_type: str | None
    quantity: str | None
    expiration_date: datetime | None
    location: GeoPoint | None = None
    address: str | None = None


@dataclass(frozen=True)
class NewDonation:
    """A validated donation ready to be persisted."""

    donator_id: str
    donor_name: str
    food_type: str
    quantity: str
    expiration_date: datetime
    location: GeoPoint
    address: str | None
    created_at: datetime
    status: str = AVAILABLE


def can_transition(current: str, target: str, role: str) -> bool:
    """Return true when ``role`` may move a donation from current to target."""
    return TRANSITIONS.get((current, target)) == role


def is_expired(donation: Donation, now: datetime) -> bool:
    """Return true once the donation's expiration has been reached."""
    return donation.expiration_date <= now

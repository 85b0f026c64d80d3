"""Result types produced by the proximity matcher."""

from dataclasses import dataclass

from donr.domain.donations import Donation
from donr.domain.models import UserProfile


@dataclass(frozen=True)
class NearbyDistributor:
    """A distributor within the matching radius."""

    user: UserProfile
    distance: float


@dataclass(frozen=True)
class NearbyDonation:
    """An available donation within the search radius."""

    donation: Donation
    distance: float

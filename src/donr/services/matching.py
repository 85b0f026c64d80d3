"""Proximity matching between donations and distributors."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from donr.domain.donations import AVAILABLE
from donr.domain.geo import EARTH_RADIUS_MILES, GeoPoint, haversine_distance
from donr.domain.matching import NearbyDistributor, NearbyDonation
from donr.domain.models import DISTRIBUTOR

if TYPE_CHECKING:
    from donr.services.donations import DonationRepository
    from donr.services.users import UserRepository

DEFAULT_RADIUS_MILES = 10.0

_logger = logging.getLogger(__name__)


@dataclass
class ProximityMatcher:
    """Find and rank candidates within a radius of a reference point."""

    user_repository: "UserRepository"
    donation_repository: "DonationRepository"
    radius_miles: float = DEFAULT_RADIUS_MILES

    async def find_nearby_distributors(
        self, lat: float, lng: float, food_type: str | None = None
    ) -> list[NearbyDistributor]:
        """Return distributors within the matching radius, closest first.

        ``food_type`` is accepted but not applied: user profiles carry no food
        preference to filter on.
        """
        origin = GeoPoint(lat=lat, lng=lng)
        try:
            distributors = await self.user_repository.list_users_by_role(DISTRIBUTOR)
        except Exception:
            _logger.exception("Failed to load distributors for matching")
            raise

        matches: list[NearbyDistributor] = []
        for user in distributors:
            if user.location is None:
                continue
            distance = haversine_distance(origin, user.location, EARTH_RADIUS_MILES)
            if distance <= self.radius_miles:
                matches.append(NearbyDistributor(user=user, distance=round(distance, 2)))

        matches.sort(key=lambda match: match.distance)
        _logger.info(
            "Matched distributors: origin=%s,%s food_type=%s matches=%s",
            lat,
            lng,
            food_type,
            len(matches),
        )
        return matches

    async def find_nearby_donations(
        self, lat: float, lng: float, radius: float | None = None
    ) -> list[NearbyDonation]:
        """Return available donations within ``radius`` miles.

        Ordered by distance, then soonest expiration. Expired donations are not
        excluded here; callers apply the expiry predicate at read time.
        """
        search_radius = self.radius_miles if radius is None else radius
        origin = GeoPoint(lat=lat, lng=lng)
        try:
            donations = await self.donation_repository.list_donations_by_status(
                AVAILABLE
            )
        except Exception:
            _logger.exception("Failed to load donations for matching")
            raise

        matches: list[NearbyDonation] = []
        for donation in donations:
            if donation.location is None:
                continue
            distance = haversine_distance(origin, donation.location, EARTH_RADIUS_MILES)
            if distance <= search_radius:
                matches.append(
                    NearbyDonation(donation=donation, distance=round(distance, 2))
                )

        matches.sort(key=lambda match: (match.distance, match.donation.expiration_date))
        return matches

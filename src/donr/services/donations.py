"""Donation lifecycle: create, browse nearby, claim, distribute."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donr.domain.donations import (
    AVAILABLE,
    DISTRIBUTED,
    Donation,
    DonationDraft,
    NewDonation,
    can_transition,
    is_expired,
)
from donr.domain.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from donr.domain.geo import GeoPoint
from donr.domain.matching import NearbyDonation
from donr.domain.models import DISTRIBUTOR, DONATOR, Identity, UserProfile
from donr.services.background import BackgroundTasks
from donr.services.geocoding import GeocodingService
from donr.services.matching import ProximityMatcher
from donr.services.notifications import NotificationService
from donr.services.users import UserService

_logger = logging.getLogger(__name__)


class DonationRepository(Protocol):
    """Persistence interface for donations."""

    async def get_donation(self, donation_id: str) -> Donation | None:
        """Return a donation by id, if present."""

    async def list_donations_by_status(self, status: str) -> list[Donation]:
        """Return every donation currently in ``status``."""

    async def create_donation(self, donation: NewDonation) -> Donation:
        """Persist a new donation and return it with its generated id."""

    async def claim_donation(
        self, donation_id: str, distributor_id: str, claimed_at: datetime
    ) -> Donation | None:
        """Claim atomically if still available and unexpired at ``claimed_at``.

        Returns None when no row matched the condition.
        """

    async def mark_distributed(
        self, donation_id: str, distributor_id: str, distributed_at: datetime
    ) -> Donation | None:
        """Mark distributed atomically if claimed by ``distributor_id``.

        Returns None when no row matched the condition.
        """


@dataclass
class DonationService:
    """State machine for donations plus its best-effort side effects."""

    repository: DonationRepository
    user_service: UserService
    geocoding_service: GeocodingService
    matcher: ProximityMatcher
    notification_service: NotificationService
    background: BackgroundTasks

    async def create_donation(
        self, identity: Identity, draft: DonationDraft
    ) -> Donation:
        """Validate and persist a donation, then notify nearby distributors."""
        donator = await self.user_service.require_role(identity, DONATOR)
        _validate_draft(draft)
        now = datetime.now(tz=UTC)
        if draft.expiration_date <= now:
            raise ValidationError("Expiration date cannot be in the past")

        location = await self._resolve_location(draft, donator)
        donation = await self.repository.create_donation(
            NewDonation(
                donator_id=donator.id,
                donor_name=donator.name or "Anonymous",
                food_type=draft.food_type,
                quantity=draft.quantity,
                expiration_date=draft.expiration_date,
                location=location,
                address=draft.address or None,
                created_at=now,
            )
        )
        _logger.info(
            "Donation created: id=%s donator=%s food_type=%s",
            donation.id,
            donator.id,
            donation.food_type,
        )
        self.background.spawn(
            self._notify_nearby_distributors(donation),
            name=f"match-donation-{donation.id}",
        )
        return donation

    async def list_nearby_donations(
        self,
        identity: Identity,
        location: GeoPoint | None = None,
        radius: float | None = None,
    ) -> list[NearbyDonation]:
        """Return unexpired available donations near the caller, closest first."""
        if location is None:
            profile = await self.user_service.repository.get_user(identity.user_id)
            if profile is None or profile.location is None:
                raise ValidationError(
                    "Location required. Provide lat/lng or set user location."
                )
            location = profile.location
        if radius is not None and radius <= 0:
            raise ValidationError("Radius must be positive")

        matches = await self.matcher.find_nearby_donations(
            location.lat, location.lng, radius
        )
        now = datetime.now(tz=UTC)
        return [match for match in matches if not is_expired(match.donation, now)]

    async def claim_donation(self, identity: Identity, donation_id: str) -> Donation:
        """Move an available donation to claimed for the calling distributor."""
        distributor = await self.user_service.require_role(identity, DISTRIBUTOR)
        donation = await self._get_donation(donation_id)
        now = datetime.now(tz=UTC)
        _ensure_claimable(donation, now)

        claimed = await self.repository.claim_donation(donation_id, distributor.id, now)
        if claimed is None:
            # Lost a race with another claim; report what the winner left behind.
            current = await self._get_donation(donation_id)
            _ensure_claimable(current, now)
            raise ConflictError("Donation could not be claimed")
        _logger.info("Donation claimed: id=%s distributor=%s", donation_id, distributor.id)
        return claimed

    async def mark_distributed(self, identity: Identity, donation_id: str) -> Donation:
        """Move a claimed donation to distributed; only the claimant may do so."""
        distributor = await self.user_service.require_role(identity, DISTRIBUTOR)
        donation = await self._get_donation(donation_id)
        _ensure_distributable(donation, distributor)

        distributed = await self.repository.mark_distributed(
            donation_id, distributor.id, datetime.now(tz=UTC)
        )
        if distributed is None:
            current = await self._get_donation(donation_id)
            _ensure_distributable(current, distributor)
            raise ConflictError("Donation must be claimed before distribution")
        _logger.info(
            "Donation distributed: id=%s distributor=%s", donation_id, distributor.id
        )
        self.background.spawn(
            self.notification_service.notify_donator_about_distribution(
                donation.donator_id, donation_id
            ),
            name=f"notify-donator-{donation_id}",
        )
        return distributed

    async def _get_donation(self, donation_id: str) -> Donation:
        donation = await self.repository.get_donation(donation_id)
        if donation is None:
            raise NotFoundError("Donation not found")
        return donation

    async def _resolve_location(
        self, draft: DonationDraft, donator: UserProfile
    ) -> GeoPoint:
        if draft.location is not None:
            return draft.location
        if draft.address and draft.address.strip():
            return await self.geocoding_service.address_to_coordinates(draft.address)
        if donator.location is not None:
            return donator.location
        raise ValidationError("Location or address required")

    async def _notify_nearby_distributors(self, donation: Donation) -> None:
        if donation.location is None:
            return
        nearby = await self.matcher.find_nearby_distributors(
            donation.location.lat, donation.location.lng, donation.food_type
        )
        if not nearby:
            return
        await self.notification_service.notify_distributors_about_donation(
            [match.user.id for match in nearby], donation.id, donation.food_type
        )


def _validate_draft(draft: DonationDraft) -> None:
    missing = [
        name
        for name, value in (
            ("foodType", draft.food_type),
            ("quantity", draft.quantity),
            ("expirationDate", draft.expiration_date),
        )
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _ensure_claimable(donation: Donation, now: datetime) -> None:
    if donation.status != AVAILABLE:
        raise ConflictError(f"Donation is already {donation.status}")
    if is_expired(donation, now):
        raise ConflictError("Donation has expired")


def _ensure_distributable(donation: Donation, distributor: UserProfile) -> None:
    if donation.distributor_id != distributor.id:
        raise ForbiddenError("Only the claiming distributor can mark as distributed")
    if not can_transition(donation.status, DISTRIBUTED, distributor.role):
        raise ConflictError("Donation must be claimed before distribution")

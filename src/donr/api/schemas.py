"""Pydantic payloads and response serializers for the HTTP API."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from donr.domain.donations import Donation, DonationDraft
from donr.domain.food_requests import FoodRequest
from donr.domain.geo import GeoPoint, parse_point
from donr.domain.matching import NearbyDonation
from donr.domain.models import Center, UserProfile


class LocationPayload(BaseModel):
    """A lat/lng pair as sent by clients."""

    lat: float | None = None
    lng: float | None = None

    def to_point(self) -> GeoPoint | None:
        """Return the canonical point, or None when a coordinate is missing."""
        return parse_point(self.lat, self.lng)


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class _LocatedModel(_CamelModel):
    """Accepts either ``location: {lat, lng}`` or top-level ``lat``/``lng``."""

    location: LocationPayload | None = None
    lat: float | None = None
    lng: float | None = None

    @model_validator(mode="after")
    def _merge_location(self) -> "_LocatedModel":
        if (self.location is None or self.location.to_point() is None) and (
            self.lat is not None and self.lng is not None
        ):
            self.location = LocationPayload(lat=self.lat, lng=self.lng)
        return self

    def point(self) -> GeoPoint | None:
        """Return the resolved location, if any."""
        return self.location.to_point() if self.location else None


class DonationCreate(_LocatedModel):
    """Body for posting a donation."""

    food_type: str | None = Field(default=None, alias="foodType")
    quantity: str | None = None
    expiration_date: datetime | None = Field(default=None, alias="expirationDate")
    address: str | None = None

    def to_draft(self) -> DonationDraft:
        """Convert the payload into a domain draft."""
        return DonationDraft(
            food_type=self.food_type,
            quantity=self.quantity,
            expiration_date=_as_utc(self.expiration_date),
            location=self.point(),
            address=self.address,
        )


class UserCreate(_LocatedModel):
    """Body for creating a profile after registration."""

    name: str | None = None
    role: str | None = None
    push_token: str | None = Field(default=None, alias="fcmToken")


class UserUpdate(_LocatedModel):
    """Body for updating the caller's profile."""

    name: str | None = None
    push_token: str | None = Field(default=None, alias="fcmToken")


class FoodRequestCreate(_LocatedModel):
    """Body for posting a food request."""

    food_type: str | None = Field(default=None, alias="foodType")
    urgency: str | None = None
    address: str | None = None


class FoodRequestStatusUpdate(BaseModel):
    """Body for changing a request's status."""

    status: str | None = None


class CenterCreate(_LocatedModel):
    """Body for registering a center."""

    name: str | None = None
    address: str | None = None
    hours: str | None = None
    phone: str | None = None
    capacity: str | None = None
    center_type: str | None = Field(default=None, alias="centerType")


class NotificationSend(_CamelModel):
    """Body for sending a direct notification."""

    user_id: str | None = Field(default=None, alias="userId")
    title: str | None = None
    body: str | None = None
    data: dict[str, object] | None = None


def serialize_donation(donation: Donation, distance: float | None = None) -> dict:
    """Render a donation as the API's camelCase JSON object."""
    payload: dict[str, object] = {
        "id": donation.id,
        "donatorId": donation.donator_id,
        "donorName": donation.donor_name,
        "foodType": donation.food_type,
        "quantity": donation.quantity,
        "expirationDate": donation.expiration_date.isoformat(),
        "status": donation.status,
        "location": _serialize_point(donation.location),
        "address": donation.address,
        "createdAt": donation.created_at.isoformat(),
    }
    if donation.distributor_id:
        payload["distributorId"] = donation.distributor_id
    if donation.claimed_at:
        payload["claimedAt"] = donation.claimed_at.isoformat()
    if donation.distributed_at:
        payload["distributedAt"] = donation.distributed_at.isoformat()
    if distance is not None:
        payload["distance"] = distance
    return payload


def serialize_nearby(match: NearbyDonation) -> dict:
    """Render a matcher result with its distance."""
    return serialize_donation(match.donation, distance=match.distance)


def serialize_user(user: UserProfile) -> dict:
    """Render a user profile."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "location": _serialize_point(user.location),
        "fcmToken": user.push_token,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_request(request: FoodRequest) -> dict:
    """Render a food request."""
    return {
        "id": request.id,
        "userId": request.user_id,
        "foodType": request.food_type,
        "urgency": request.urgency,
        "lat": request.location.lat,
        "lng": request.location.lng,
        "address": request.address,
        "status": request.status,
        "createdAt": request.created_at.isoformat(),
        "updatedAt": request.updated_at.isoformat() if request.updated_at else None,
    }


def serialize_center(center: Center) -> dict:
    """Render a center."""
    return {
        "id": center.id,
        "name": center.name,
        "address": center.address,
        "lat": center.location.lat,
        "lng": center.location.lng,
        "hours": center.hours,
        "phone": center.phone,
        "capacity": center.capacity,
        "centerType": center.center_type,
        "createdAt": center.created_at.isoformat() if center.created_at else None,
    }


def _serialize_point(point: GeoPoint | None) -> dict[str, float] | None:
    if point is None:
        return None
    return {"lat": point.lat, "lng": point.lng}


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)

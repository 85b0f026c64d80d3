"""Reference data for food banks and pantries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donr.domain.errors import ValidationError
from donr.domain.geo import GeoPoint
from donr.domain.models import Center


class CenterRepository(Protocol):
    """Persistence interface for centers."""

    async def list_centers(self) -> list[Center]:
        """Return all centers."""

    async def create_center(self, center: Center) -> Center:
        """Persist a center and return it with its generated id."""


@dataclass
class CenterService:
    """Application service for center records."""

    repository: CenterRepository

    async def list_centers(self) -> list[Center]:
        """Return all centers."""
        return await self.repository.list_centers()

    async def create_center(  # noqa: PLR0913
        self,
        name: str | None,
        address: str | None,
        location: GeoPoint | None,
        hours: str | None = None,
        phone: str | None = None,
        capacity: str | None = None,
        center_type: str | None = None,
    ) -> Center:
        """Validate and persist a new center."""
        if not name or not address or location is None:
            raise ValidationError("Missing required fields: name, address, lat, lng")
        return await self.repository.create_center(
            Center(
                id="",
                name=name,
                address=address,
                location=location,
                hours=hours,
                phone=phone,
                capacity=capacity,
                center_type=center_type or "food bank",
                created_at=datetime.now(tz=UTC),
            )
        )

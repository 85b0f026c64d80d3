"""Address resolution with provider priority."""

import logging
from dataclasses import dataclass

import httpx

from donr.adapters.geocoding_clients import GeocodingClient
from donr.domain.errors import GeocodingError
from donr.domain.geo import GeoPoint

_logger = logging.getLogger(__name__)


@dataclass
class GeocodingService:
    """Resolve addresses via the keyed provider when configured, else keyless."""

    fallback: GeocodingClient
    primary: GeocodingClient | None = None

    @property
    def provider(self) -> GeocodingClient:
        """Return the client that serves lookups under the current config."""
        return self.primary if self.primary is not None else self.fallback

    async def address_to_coordinates(self, address: str) -> GeoPoint:
        """Convert a free-text address to coordinates."""
        cleaned = (address or "").strip()
        if not cleaned:
            raise GeocodingError("Address is required for geocoding")
        try:
            return await self.provider.geocode(cleaned)
        except GeocodingError:
            _logger.warning("Geocoding returned no result: address=%s", cleaned)
            raise
        except httpx.HTTPError as exc:
            _logger.exception("Geocoding request failed: address=%s", cleaned)
            raise GeocodingError(f"Geocoding request failed: {exc}") from exc

    async def coordinates_to_address(self, lat: float, lng: float) -> str:
        """Convert coordinates to a formatted address."""
        try:
            return await self.provider.reverse(lat, lng)
        except GeocodingError:
            _logger.warning("Reverse geocoding returned no result: %s,%s", lat, lng)
            raise
        except httpx.HTTPError as exc:
            _logger.exception("Reverse geocoding request failed: %s,%s", lat, lng)
            raise GeocodingError(f"Reverse geocoding request failed: {exc}") from exc

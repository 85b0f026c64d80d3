"""Geocoding API clients (Google Maps and OpenStreetMap Nominatim)."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from donr.domain.errors import GeocodingError
from donr.domain.geo import GeoPoint


class GeocodingClient(Protocol):
    """Interface for forward and reverse geocoding providers."""

    async def geocode(self, address: str) -> GeoPoint:
        """Resolve an address to coordinates."""

    async def reverse(self, lat: float, lng: float) -> str:
        """Resolve coordinates to a formatted address."""


@dataclass
class HttpxGoogleGeocodingClient(GeocodingClient):
    """Google Maps Geocoding API client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxGoogleGeocodingClient":
        """Create a Google geocoding client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def geocode(self, address: str) -> GeoPoint:
        """Resolve an address using the first Google result."""
        payload = await self._get({"address": address})
        location = payload["results"][0]["geometry"]["location"]
        return GeoPoint(lat=float(location["lat"]), lng=float(location["lng"]))

    async def reverse(self, lat: float, lng: float) -> str:
        """Resolve coordinates to Google's formatted address."""
        payload = await self._get({"latlng": f"{lat},{lng}"})
        return str(payload["results"][0]["formatted_address"])

    async def _get(self, params: dict[str, str]) -> dict[str, object]:
        response = await self.http_client.get(
            self.base_url,
            params={**params, "key": self.api_key},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        status = payload.get("status")
        if status != "OK" or not payload.get("results"):
            raise GeocodingError(f"Geocoding failed: {status}")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


@dataclass
class HttpxNominatimClient(GeocodingClient):
    """OpenStreetMap Nominatim client; keyless but requires a User-Agent."""

    user_agent: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, user_agent: str, base_url: str) -> "HttpxNominatimClient":
        """Create a Nominatim client with a managed httpx session."""
        return cls(
            user_agent=user_agent, base_url=base_url, http_client=httpx.AsyncClient()
        )

    async def geocode(self, address: str) -> GeoPoint:
        """Resolve an address using the first Nominatim match."""
        response = await self.http_client.get(
            f"{self.base_url}/search",
            params={"q": address, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
            timeout=10,
        )
        response.raise_for_status()
        results = response.json()
        if not isinstance(results, list) or not results:
            raise GeocodingError("Address not found")
        return GeoPoint(lat=float(results[0]["lat"]), lng=float(results[0]["lon"]))

    async def reverse(self, lat: float, lng: float) -> str:
        """Resolve coordinates to Nominatim's display name."""
        response = await self.http_client.get(
            f"{self.base_url}/reverse",
            params={"lat": lat, "lon": lng, "format": "json"},
            headers={"User-Agent": self.user_agent},
            timeout=10,
        )
        response.raise_for_status()
        payload = response.json()
        display_name = payload.get("display_name") if payload else None
        if not display_name:
            raise GeocodingError("Address not found for coordinates")
        return str(display_name)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

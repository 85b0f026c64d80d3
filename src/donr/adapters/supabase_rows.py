"""Row conversion helpers shared by the Supabase repositories."""

from datetime import UTC, datetime

from donr.domain.geo import GeoPoint, parse_point


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 column into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value)
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime | None) -> str | None:
    """Format a datetime for a timestamptz column."""
    return value.isoformat() if value is not None else None


def parse_location(row: dict[str, object]) -> GeoPoint | None:
    """Read the lat/lng columns of a row."""
    return parse_point(row.get("lat"), row.get("lng"))


def location_columns(location: GeoPoint | None) -> dict[str, float | None]:
    """Return lat/lng columns for a location."""
    if location is None:
        return {"lat": None, "lng": None}
    return {"lat": location.lat, "lng": location.lng}

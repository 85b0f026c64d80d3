"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import AsyncClient

from donr.adapters.supabase_rows import (
    format_timestamp,
    location_columns,
    parse_location,
    parse_timestamp,
)
from donr.domain.errors import StoreError
from donr.domain.models import UserProfile
from donr.services.users import ProfileUpdate, UserRepository

_COLUMNS = "id, name, email, role, lat, lng, push_token, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: AsyncClient

    async def get_user(self, user_id: str) -> UserProfile | None:
        """Return the profile for an identity, if present."""
        response = (
            await self.client.table("users")
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    async def list_users_by_role(self, role: str) -> list[UserProfile]:
        """Return all profiles holding the given role."""
        response = (
            await self.client.table("users").select(_COLUMNS).eq("role", role).execute()
        )
        return [_parse_user(row) for row in response.data or []]

    async def create_user(self, profile: UserProfile) -> UserProfile:
        """Insert a profile row keyed by the auth identity."""
        response = (
            await self.client.table("users")
            .insert(
                {
                    "id": profile.id,
                    "name": profile.name,
                    "email": profile.email,
                    "role": profile.role,
                    "push_token": profile.push_token,
                    "created_at": format_timestamp(profile.created_at),
                    **location_columns(profile.location),
                }
            )
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to create user profile")
        return _parse_user(response.data[0])

    async def update_user(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """Merge the provided profile fields."""
        payload: dict[str, object] = {
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if update.name:
            payload["name"] = update.name
        if update.location is not None:
            payload.update(location_columns(update.location))
        if update.push_token:
            payload["push_token"] = update.push_token
        response = (
            await self.client.table("users").update(payload).eq("id", user_id).execute()
        )
        if not response.data:
            raise StoreError("Failed to update user profile")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        role=str(row.get("role") or ""),
        email=row.get("email"),
        location=parse_location(row),
        push_token=row.get("push_token") or None,
        created_at=parse_timestamp(row.get("created_at")),
    )

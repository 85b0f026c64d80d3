"""User profile business logic."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from donr.domain.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from donr.domain.geo import GeoPoint
from donr.domain.models import ROLES, Identity, UserProfile

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileUpdate:
    """Profile fields a user may change; None leaves a field untouched."""

    name: str | None = None
    location: GeoPoint | None = None
    push_token: str | None = None


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    async def get_user(self, user_id: str) -> UserProfile | None:
        """Return the profile for an identity, if present."""

    async def list_users_by_role(self, role: str) -> list[UserProfile]:
        """Return all profiles holding the given role."""

    async def create_user(self, profile: UserProfile) -> UserProfile:
        """Persist a new profile keyed by its identity."""

    async def update_user(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """Merge the given fields into a profile and return it."""


@dataclass
class UserService:
    """Application service for user profiles and role checks."""

    repository: UserRepository

    async def create_profile(  # noqa: PLR0913
        self,
        identity: Identity,
        name: str | None,
        role: str | None,
        location: GeoPoint | None = None,
        push_token: str | None = None,
    ) -> UserProfile:
        """Create the profile for a freshly registered identity."""
        cleaned_name = (name or "").strip()
        if not cleaned_name or not role:
            raise ValidationError("Missing required fields: name, role")
        if role not in ROLES:
            raise ValidationError(
                "Invalid role. Must be: donator, distributor, or acceptor"
            )
        existing = await self.repository.get_user(identity.user_id)
        if existing is not None:
            raise ConflictError("User profile already exists")
        created = await self.repository.create_user(
            UserProfile(
                id=identity.user_id,
                name=cleaned_name,
                role=role,
                email=identity.email,
                location=location,
                push_token=push_token,
                created_at=datetime.now(tz=UTC),
            )
        )
        _logger.info("User profile created: id=%s role=%s", created.id, created.role)
        return created

    async def get_profile(self, user_id: str) -> UserProfile:
        """Return a profile or raise when it does not exist."""
        profile = await self.repository.get_user(user_id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> UserProfile:
        """Update name, location or push token. The role never changes."""
        await self.get_profile(user_id)
        return await self.repository.update_user(user_id, update)

    async def require_role(self, identity: Identity, *roles: str) -> UserProfile:
        """Return the caller's profile when it holds one of ``roles``."""
        profile = await self.get_profile(identity.user_id)
        if profile.role not in roles:
            raise ForbiddenError(
                f"Access denied. Required role: {' or '.join(roles)}"
            )
        return profile

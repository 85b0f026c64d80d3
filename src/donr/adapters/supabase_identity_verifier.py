"""Supabase Auth token verification."""

import logging
from dataclasses import dataclass
from typing import Protocol

from supabase import AsyncClient

from donr.domain.models import Identity

_logger = logging.getLogger(__name__)


class IdentityVerifier(Protocol):
    """Interface for turning a bearer token into a verified identity."""

    async def verify(self, token: str) -> Identity | None:
        """Return the identity for a valid token, else None."""


@dataclass
class SupabaseIdentityVerifier(IdentityVerifier):
    """Verify access tokens against Supabase Auth."""

    client: AsyncClient

    async def verify(self, token: str) -> Identity | None:
        """Return the identity behind an access token, or None if rejected."""
        try:
            response = await self.client.auth.get_user(token)
        except Exception as exc:
            _logger.warning("Token verification failed: %s", exc)
            return None
        user = response.user if response else None
        if user is None:
            return None
        return Identity(user_id=str(user.id), email=user.email)

"""Bearer-token authentication dependencies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from donr.domain.models import Identity

if TYPE_CHECKING:
    from donr.containers import AppContainer

_logger = logging.getLogger(__name__)


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


async def current_identity(
    request: Request, authorization: str | None = Header(default=None)
) -> Identity:
    """Verify the bearer token and return the caller's identity."""
    if not authorization or not authorization.startswith("Bearer "):
        _logger.warning("No authorization token provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authorization token provided",
        )
    token = authorization.removeprefix("Bearer ").strip()
    identity = await get_container(request).identity_verifier.verify(token)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return identity

"""Authentication dependencies for FastAPI endpoints.

The resolved identity is handed to each endpoint as a parameter; nothing in
the service looks it up from global state.
"""

import logging

from fastapi import Depends, Request

from portfolio.auth.session import decode_session
from portfolio.config import settings
from portfolio.errors import AuthorizationError
from portfolio.schemas.auth import Identity

logger = logging.getLogger(__name__)


async def get_identity(request: Request) -> Identity | None:
    """Resolve the caller's identity from the session cookie, or None."""
    return decode_session(request.cookies.get(settings.session_cookie_name))


async def require_authenticated(
    identity: Identity | None = Depends(get_identity),
) -> Identity:
    """
    Require a signed-in owner.

    Raises:
        AuthorizationError: redirecting to the login page if nobody is signed in
    """
    if identity is None:
        raise AuthorizationError("Sign in required", redirect_to=settings.login_path)
    return identity


async def require_guest(
    identity: Identity | None = Depends(get_identity),
) -> None:
    """
    Require that nobody is signed in.

    Raises:
        AuthorizationError: redirecting to the dashboard if an owner is already signed in
    """
    if identity is not None:
        logger.info("Signed-in user sent away from guest page", extra={"user_id": identity.id})
        raise AuthorizationError("Already signed in", redirect_to=settings.dashboard_path)

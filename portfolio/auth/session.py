"""Session token encoding and decoding for the signed-in owner."""

from datetime import datetime, timedelta, timezone

from jose import jwt
from pydantic import ValidationError as PydanticValidationError

from portfolio.config import settings
from portfolio.schemas.auth import Identity

ALGORITHM = "HS256"
TOKEN_TYPE = "session"


def encode_session(identity: Identity, expires_in: timedelta | None = None) -> str:
    """Create a signed session token carrying the identity."""
    expire = datetime.now(timezone.utc) + (expires_in or timedelta(days=settings.session_expire_days))
    payload = {
        "sub": str(identity.id),
        "email": identity.email,
        "name": identity.name,
        "avatar": identity.avatar,
        "exp": expire,
        "type": TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.session_secret, algorithm=ALGORITHM)


def decode_session(token: str | None) -> Identity | None:
    """
    Decode and validate a session token.

    Returns the identity if valid, None if missing, tampered, expired, or malformed.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[ALGORITHM])
    except jwt.JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    try:
        return Identity(
            id=int(payload["sub"]),
            email=payload["email"],
            name=payload.get("name") or "",
            avatar=payload.get("avatar"),
        )
    except (KeyError, TypeError, ValueError, PydanticValidationError):
        return None

"""Authentication utilities for the portfolio service."""

from portfolio.auth.dependencies import get_identity, require_authenticated, require_guest
from portfolio.auth.session import decode_session, encode_session

__all__ = [
    "encode_session",
    "decode_session",
    "get_identity",
    "require_authenticated",
    "require_guest",
]

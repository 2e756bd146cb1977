"""Typed errors for every failure mode of the content service.

Each error carries a stable ``code``, an HTTP status and a field-keyed
``errors`` map. Operation-level messages live under the ``root`` key so
callers can render one message per field plus one for the whole action.
"""

from typing import Any

from fastapi import status

ROOT_ERROR_KEY = "root"


class PortfolioError(Exception):
    """Base exception for all portfolio errors."""

    code = "INTERNAL_ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors if errors is not None else {ROOT_ERROR_KEY: message}

    def to_response(self, request_id: str | None = None) -> dict[str, Any]:
        """Convert to the tagged action-result envelope."""
        return {
            "ok": False,
            "errors": self.errors,
            "error": {
                "code": self.code,
                "message": self.message,
                "request_id": request_id,
            },
        }


class ValidationError(PortfolioError):
    """Submitted fields violate the action's input contract."""

    code = "VALIDATION_ERROR"
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, errors: dict[str, str]):
        fields = ", ".join(sorted(errors))
        super().__init__(f"Invalid fields: {fields}", errors=errors)


class NotFoundError(PortfolioError):
    """A single-row lookup found nothing, or its identifier was malformed."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class AuthorizationError(PortfolioError):
    """Missing or disallowed identity. Recovered by redirecting, never rendered."""

    code = "UNAUTHORIZED"
    http_status = status.HTTP_303_SEE_OTHER

    def __init__(self, message: str, redirect_to: str):
        super().__init__(message)
        self.redirect_to = redirect_to


class ForbiddenError(PortfolioError):
    """The identity is known but may not mutate the targeted row."""

    code = "FORBIDDEN"
    http_status = status.HTTP_403_FORBIDDEN


class PersistenceError(PortfolioError):
    """The store call failed (constraint violation, connectivity)."""

    code = "PERSISTENCE_ERROR"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class IdentityProviderError(PortfolioError):
    """OAuth exchange/profile fetch failed, or no verified email matched an owner."""

    code = "UNAUTHORIZED"
    http_status = status.HTTP_401_UNAUTHORIZED

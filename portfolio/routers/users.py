"""Users router for the signed-in owner."""

from fastapi import APIRouter, Depends, status

from portfolio.auth.dependencies import require_authenticated
from portfolio.schemas.auth import Identity

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.get(
    "/me",
    response_model=Identity,
    status_code=status.HTTP_200_OK,
)
async def get_current_owner(
    identity: Identity = Depends(require_authenticated),
) -> Identity:
    """Return the identity carried by the session cookie."""
    return identity

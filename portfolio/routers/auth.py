"""Authentication router for the GitHub login flow."""

import hmac
import secrets

from fastapi import APIRouter, Cookie, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import require_guest
from portfolio.auth.github import GitHubProvider, get_identity_provider
from portfolio.auth.session import encode_session
from portfolio.config import settings
from portfolio.database import get_db
from portfolio.errors import IdentityProviderError
from portfolio.middleware.rate_limit import limiter
from portfolio.schemas.auth import LoginPageResponse, ProviderInfo
from portfolio.services.users import login_with_provider

router = APIRouter(prefix="/auth", tags=["Auth"])

OAUTH_STATE_MAX_AGE_SECONDS = 600


@router.get(
    "",
    response_model=LoginPageResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_guest)],
)
async def login_page() -> LoginPageResponse:
    """Login page. Signed-in owners are sent to the dashboard instead."""
    return LoginPageResponse(
        providers=[ProviderInfo(name="github", login_url="/auth/github")],
    )


@router.get(
    "/github",
    status_code=status.HTTP_303_SEE_OTHER,
    dependencies=[Depends(require_guest)],
)
async def start_github_login(
    provider: GitHubProvider = Depends(get_identity_provider),
) -> RedirectResponse:
    """Send the browser to GitHub with a fresh anti-forgery state."""
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(
        provider.authorization_url(state),
        status_code=status.HTTP_303_SEE_OTHER,
    )
    # Lax: the callback arrives as a cross-site top-level navigation from GitHub
    response.set_cookie(
        key=settings.oauth_state_cookie_name,
        value=state,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/auth/github",
        max_age=OAUTH_STATE_MAX_AGE_SECONDS,
    )
    return response


@router.get(
    "/github/callback",
    status_code=status.HTTP_303_SEE_OTHER,
    dependencies=[Depends(require_guest)],
)
@limiter.limit(settings.login_rate_limit)
async def github_callback(
    request: Request,
    code: str = Query(min_length=1),
    state: str = Query(min_length=1),
    oauth_state: str | None = Cookie(default=None, alias=settings.oauth_state_cookie_name),
    db: AsyncSession = Depends(get_db),
    provider: GitHubProvider = Depends(get_identity_provider),
) -> RedirectResponse:
    """
    Finish the GitHub login.

    Exchanges the code, matches a verified email against the owner account,
    sets the session cookie and redirects to the dashboard.
    """
    if not oauth_state or not hmac.compare_digest(oauth_state, state):
        raise IdentityProviderError("Unauthorized")

    profile, emails = await provider.fetch_identity(code)
    identity = await login_with_provider(db, profile, emails)

    response = RedirectResponse(settings.dashboard_path, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=encode_session(identity),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_expire_days * 24 * 60 * 60,
    )
    response.delete_cookie(settings.oauth_state_cookie_name, path="/auth/github")
    return response


@router.post(
    "/logout",
    status_code=status.HTTP_303_SEE_OTHER,
)
async def logout() -> RedirectResponse:
    """Clear the session cookie and return to the login page."""
    response = RedirectResponse(settings.login_path, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response

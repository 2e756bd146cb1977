"""
Tests for the GitHub login flow.

GET /auth/github issues a state cookie and redirects to GitHub; the callback
checks the state, matches a verified email to the owner and sets the session.
"""

import httpx
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.session import decode_session
from portfolio.config import settings
from portfolio.models import User
from portfolio.schemas.auth import GitHubEmail


def _set_cookie(response: httpx.Response, name: str) -> str | None:
    """Return the raw Set-Cookie header for ``name``, if any."""
    for header in response.headers.get_list("set-cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def _cookie_value(header: str) -> str:
    return header.split(";", 1)[0].split("=", 1)[1].strip('"')


async def _callback(client: AsyncClient, state: str = "state-123", cookie_state: str | None = "state-123"):
    headers = {}
    if cookie_state is not None:
        headers["Cookie"] = f"{settings.oauth_state_cookie_name}={cookie_state}"
    return await client.get(
        "/auth/github/callback",
        params={"code": "gh-code", "state": state},
        headers=headers,
    )


class TestStartLogin:
    """GET /auth/github."""

    async def test_redirects_to_provider_with_state(self, async_client: AsyncClient, fake_provider):
        response = await async_client.get("/auth/github")
        assert response.status_code == 303

        location = httpx.URL(response.headers["location"])
        state = location.params["state"]
        assert state

        cookie = _set_cookie(response, settings.oauth_state_cookie_name)
        assert cookie is not None
        assert _cookie_value(cookie) == state
        assert "httponly" in cookie.lower()
        assert "samesite=lax" in cookie.lower()

    async def test_each_start_uses_a_fresh_state(self, async_client: AsyncClient, fake_provider):
        first = await async_client.get("/auth/github")
        second = await async_client.get("/auth/github")
        first_state = httpx.URL(first.headers["location"]).params["state"]
        second_state = httpx.URL(second.headers["location"]).params["state"]
        assert first_state != second_state


class TestCallbackSuccess:
    """Happy path callback scenarios."""

    async def test_callback_redirects_to_dashboard(self, async_client: AsyncClient, owner, fake_provider):
        response = await _callback(async_client)
        assert response.status_code == 303
        assert response.headers["location"] == settings.dashboard_path
        assert fake_provider.codes == ["gh-code"]

    async def test_callback_sets_session_cookie_for_owner(
        self, async_client: AsyncClient, owner, fake_provider
    ):
        response = await _callback(async_client)
        cookie = _set_cookie(response, settings.session_cookie_name)
        assert cookie is not None
        assert "httponly" in cookie.lower()

        identity = decode_session(_cookie_value(cookie))
        assert identity is not None
        assert identity.id == owner.id
        assert identity.email == owner.email

    async def test_callback_clears_state_cookie(self, async_client: AsyncClient, owner, fake_provider):
        response = await _callback(async_client)
        cookie = _set_cookie(response, settings.oauth_state_cookie_name)
        assert cookie is not None
        assert "max-age=0" in cookie.lower()

    async def test_callback_refreshes_name_and_avatar(
        self, async_client: AsyncClient, db_session: AsyncSession, owner, fake_provider
    ):
        await _callback(async_client)

        user = await db_session.scalar(
            select(User).where(User.id == owner.id).execution_options(populate_existing=True)
        )
        assert user.name == "Octo Owner"
        assert user.avatar == "https://avatars.example.com/octo.png"

    async def test_any_verified_email_matches(self, async_client: AsyncClient, owner, fake_provider):
        """The owner's email does not have to be the primary one."""
        fake_provider.emails = [
            GitHubEmail(email="personal@example.org", primary=True, verified=True),
            GitHubEmail(email="OWNER@example.com", primary=False, verified=True),
        ]
        response = await _callback(async_client)
        assert response.status_code == 303
        assert _set_cookie(response, settings.session_cookie_name) is not None


class TestCallbackRejected:
    """Callbacks that must not sign anyone in."""

    async def test_unverified_email_is_rejected(self, async_client: AsyncClient, owner, fake_provider):
        fake_provider.emails = [GitHubEmail(email="owner@example.com", primary=True, verified=False)]
        response = await _callback(async_client)

        assert response.status_code == 401
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "UNAUTHORIZED"
        assert data["errors"] == {"root": "Unauthorized"}
        assert _set_cookie(response, settings.session_cookie_name) is None

    async def test_unknown_email_is_rejected(self, async_client: AsyncClient, owner, fake_provider):
        fake_provider.emails = [GitHubEmail(email="stranger@example.com", primary=True, verified=True)]
        response = await _callback(async_client)
        assert response.status_code == 401
        assert _set_cookie(response, settings.session_cookie_name) is None

    async def test_state_mismatch_is_rejected_before_code_exchange(
        self, async_client: AsyncClient, owner, fake_provider
    ):
        response = await _callback(async_client, state="forged", cookie_state="state-123")
        assert response.status_code == 401
        assert fake_provider.codes == []

    async def test_missing_state_cookie_is_rejected(self, async_client: AsyncClient, owner, fake_provider):
        response = await _callback(async_client, cookie_state=None)
        assert response.status_code == 401
        assert fake_provider.codes == []

    async def test_provider_failure_is_rejected(self, async_client: AsyncClient, owner, fake_provider):
        fake_provider.fail = True
        response = await _callback(async_client)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_missing_code_is_a_validation_error(self, async_client: AsyncClient, fake_provider):
        response = await async_client.get("/auth/github/callback", params={"state": "s"})
        assert response.status_code == 422
        assert "code" in response.json()["errors"]


class TestCallbackRateLimit:
    """The callback is rate limited per client address."""

    async def test_callback_rate_limited_after_limit(self, async_client: AsyncClient, owner, fake_provider):
        limit = int(settings.login_rate_limit.split("/", 1)[0])
        for _ in range(limit):
            response = await _callback(async_client, state="forged")
            assert response.status_code == 401

        response = await _callback(async_client, state="forged")
        assert response.status_code == 429


class TestLogout:
    """POST /auth/logout."""

    async def test_logout_clears_session_and_redirects_to_login(
        self, async_client: AsyncClient, owner_headers: dict
    ):
        response = await async_client.post("/auth/logout", headers=owner_headers)
        assert response.status_code == 303
        assert response.headers["location"] == settings.login_path

        cookie = _set_cookie(response, settings.session_cookie_name)
        assert cookie is not None
        assert "max-age=0" in cookie.lower()

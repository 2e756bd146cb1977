"""GitHub OAuth client.

Exchanges an authorization code for an access token, then fetches the
user's profile and email addresses. Any transport or payload failure is
reported as ``IdentityProviderError``.
"""

import logging

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from portfolio.config import Settings, settings
from portfolio.errors import IdentityProviderError
from portfolio.schemas.auth import GitHubEmail, GitHubProfile

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
TOKEN_URL = "https://github.com/login/oauth/access_token"
API_BASE_URL = "https://api.github.com"

_emails_adapter = TypeAdapter(list[GitHubEmail])


class GitHubProvider:
    """OAuth identity provider backed by GitHub."""

    name = "github"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: str = "read:user user:email",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, config: Settings) -> "GitHubProvider":
        return cls(
            client_id=config.github_client_id,
            client_secret=config.github_client_secret,
            redirect_uri=config.github_redirect_uri,
            scopes=config.github_scopes,
            timeout=config.github_timeout_seconds,
        )

    def authorization_url(self, state: str) -> str:
        """URL the browser is sent to in order to approve the login."""
        url = httpx.URL(
            AUTHORIZE_URL,
            params={
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "scope": self.scopes,
                "state": state,
                "allow_signup": "false",
            },
        )
        return str(url)

    async def fetch_identity(self, code: str) -> tuple[GitHubProfile, list[GitHubEmail]]:
        """
        Resolve an authorization code into the GitHub profile and its emails.

        Raises:
            IdentityProviderError: if GitHub rejects the code or a call fails
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                access_token = await self._exchange_code(client, code)
                headers = {
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                }
                profile_response = await client.get(f"{API_BASE_URL}/user", headers=headers)
                profile_response.raise_for_status()
                emails_response = await client.get(f"{API_BASE_URL}/user/emails", headers=headers)
                emails_response.raise_for_status()

                profile = GitHubProfile.model_validate(profile_response.json())
                emails = _emails_adapter.validate_python(emails_response.json())
        except httpx.HTTPError as exc:
            logger.warning("GitHub request failed: %s", exc)
            raise IdentityProviderError("Unauthorized") from exc
        except (ValueError, PydanticValidationError) as exc:
            logger.warning("Unexpected GitHub payload: %s", exc)
            raise IdentityProviderError("Unauthorized") from exc

        return profile, emails

    async def _exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        response = await client.post(
            TOKEN_URL,
            headers={"Accept": "application/json"},
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "redirect_uri": self.redirect_uri,
            },
        )
        response.raise_for_status()
        payload = response.json()
        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            error = payload.get("error") if isinstance(payload, dict) else None
            logger.warning("GitHub refused the authorization code: %s", error or "no access token")
            raise IdentityProviderError("Unauthorized")
        return access_token


def get_identity_provider() -> GitHubProvider:
    """Dependency that provides the configured identity provider."""
    return GitHubProvider.from_settings(settings)

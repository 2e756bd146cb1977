"""Identity and OAuth schemas."""

from pydantic import BaseModel, EmailStr


class Identity(BaseModel):
    """The signed-in owner, as carried by the session cookie."""

    id: int
    email: str
    name: str
    avatar: str | None = None


class GitHubProfile(BaseModel):
    """The subset of GitHub's ``/user`` payload used at login."""

    login: str
    name: str | None = None
    avatar_url: str | None = None


class GitHubEmail(BaseModel):
    """One entry of GitHub's ``/user/emails`` payload."""

    email: str
    primary: bool = False
    verified: bool = False


class ProviderInfo(BaseModel):
    """A login option on the login page."""

    name: str
    login_url: str


class LoginPageResponse(BaseModel):
    """Loader payload for the login page."""

    providers: list[ProviderInfo]


class OwnerCreate(BaseModel):
    """Input for provisioning the owning user."""

    email: EmailStr
    name: str
    avatar: str | None = None

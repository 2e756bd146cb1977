"""Bio and social media schemas."""

from typing import Literal

from pydantic import BaseModel

from portfolio.schemas.common import ContentForm, ContentResponse, OptionalText, RequiredText, SubmittedUrl

SocialPlatform = Literal["x", "bluesky", "github", "instagram"]


class BioForm(ContentForm):
    """Dashboard form for the owner bio."""

    name: RequiredText
    description: RequiredText
    avatar: OptionalText = None


class SocialMediaForm(ContentForm):
    """Dashboard form adding or editing a social media link."""

    platform: SocialPlatform
    url: SubmittedUrl


class BioResponse(ContentResponse):
    """Bio row."""

    name: str
    description: str
    avatar: str | None


class SocialMediaResponse(ContentResponse):
    """Social media row."""

    platform: str
    url: str


class DashboardHomeResponse(BaseModel):
    """Loader payload for the dashboard landing page."""

    bio: BioResponse | None
    social_media: list[SocialMediaResponse]

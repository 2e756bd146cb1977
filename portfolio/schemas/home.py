"""Public homepage schemas."""

from pydantic import BaseModel

from portfolio.schemas.experiences import ExperienceResponse
from portfolio.schemas.posts import PostResponse
from portfolio.schemas.profile import BioResponse, SocialMediaResponse
from portfolio.schemas.projects import ProjectResponse


class HomepageResponse(BaseModel):
    """Everything the public homepage renders."""

    bio: BioResponse | None
    social_media: list[SocialMediaResponse]
    experiences: list[ExperienceResponse]
    projects: list[ProjectResponse]
    posts: list[PostResponse]

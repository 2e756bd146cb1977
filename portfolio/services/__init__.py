"""Services for the portfolio service."""

from portfolio.services.content import (
    BioService,
    ContentService,
    ExperienceService,
    PostService,
    ProjectService,
    SocialMediaService,
)
from portfolio.services.public import load_homepage, load_post
from portfolio.services.users import login_with_provider, provision_owner

__all__ = [
    "ContentService",
    "BioService",
    "SocialMediaService",
    "PostService",
    "ProjectService",
    "ExperienceService",
    "load_homepage",
    "load_post",
    "login_with_provider",
    "provision_owner",
]

"""Pydantic schemas for request/response validation."""

from portfolio.schemas.auth import GitHubEmail, GitHubProfile, Identity, LoginPageResponse, OwnerCreate
from portfolio.schemas.common import ActionResponse, DeleteForm
from portfolio.schemas.experiences import ExperienceForm, ExperienceResponse
from portfolio.schemas.home import HomepageResponse
from portfolio.schemas.posts import PostForm, PostResponse
from portfolio.schemas.profile import BioForm, BioResponse, SocialMediaForm, SocialMediaResponse
from portfolio.schemas.projects import ProjectForm, ProjectResponse

__all__ = [
    "Identity",
    "GitHubProfile",
    "GitHubEmail",
    "LoginPageResponse",
    "OwnerCreate",
    "ActionResponse",
    "DeleteForm",
    "BioForm",
    "BioResponse",
    "SocialMediaForm",
    "SocialMediaResponse",
    "PostForm",
    "PostResponse",
    "ProjectForm",
    "ProjectResponse",
    "ExperienceForm",
    "ExperienceResponse",
    "HomepageResponse",
]

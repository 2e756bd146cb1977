"""Database models for the portfolio service."""

from portfolio.models.experience import Experience
from portfolio.models.post import Post
from portfolio.models.profile import Bio, SocialMedia
from portfolio.models.project import Project
from portfolio.models.user import User

__all__ = [
    "User",
    "Bio",
    "SocialMedia",
    "Post",
    "Project",
    "Experience",
]

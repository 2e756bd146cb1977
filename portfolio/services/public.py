"""Loaders for the public homepage and post pages."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config import settings
from portfolio.errors import NotFoundError
from portfolio.models import Bio, Experience, Post, Project, SocialMedia
from portfolio.schemas.experiences import ExperienceResponse
from portfolio.schemas.home import HomepageResponse
from portfolio.schemas.posts import PostResponse
from portfolio.schemas.profile import BioResponse, SocialMediaResponse
from portfolio.schemas.projects import ProjectResponse

logger = logging.getLogger(__name__)

# Rows may already sit in the session from an earlier write; always reload them.
FRESH = {"populate_existing": True}


def parse_post_id(raw_id: str) -> int:
    """
    Turn a path segment into a post id.

    Raises:
        NotFoundError: for anything but a positive base-10 integer
    """
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise NotFoundError("Post not found")
    post_id = int(raw_id)
    if post_id <= 0:
        raise NotFoundError("Post not found")
    return post_id


async def load_homepage(db: AsyncSession, hide_drafts: bool | None = None) -> HomepageResponse:
    """
    Collect everything the homepage shows.

    Drafts are listed too unless ``hide_drafts`` (default: the
    ``hide_draft_posts`` setting) is on.
    """
    if hide_drafts is None:
        hide_drafts = settings.hide_draft_posts

    bio_result = await db.execute(
        select(Bio).order_by(Bio.updated_at.desc(), Bio.id.desc()).limit(1),
        execution_options=FRESH,
    )
    bio = bio_result.scalar_one_or_none()

    social_result = await db.execute(
        select(SocialMedia).order_by(SocialMedia.id.desc()),
        execution_options=FRESH,
    )
    experience_result = await db.execute(
        select(Experience).order_by(Experience.start_date.desc(), Experience.id.desc()),
        execution_options=FRESH,
    )
    project_result = await db.execute(
        select(Project).order_by(Project.date.desc(), Project.id.desc()),
        execution_options=FRESH,
    )
    post_stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
    if hide_drafts:
        post_stmt = post_stmt.where(Post.status == "published")
    post_result = await db.execute(post_stmt, execution_options=FRESH)

    return HomepageResponse(
        bio=BioResponse.model_validate(bio) if bio else None,
        social_media=[SocialMediaResponse.model_validate(s) for s in social_result.scalars()],
        experiences=[ExperienceResponse.model_validate(e) for e in experience_result.scalars()],
        projects=[ProjectResponse.model_validate(p) for p in project_result.scalars()],
        posts=[PostResponse.model_validate(p) for p in post_result.scalars()],
    )


async def load_post(db: AsyncSession, raw_id: str, hide_drafts: bool | None = None) -> PostResponse:
    """
    Load one post for the public post page.

    Malformed ids are rejected before any query runs.

    Raises:
        NotFoundError: malformed id, missing row, or a draft while drafts are hidden
    """
    if hide_drafts is None:
        hide_drafts = settings.hide_draft_posts
    post_id = parse_post_id(raw_id)

    stmt = select(Post).where(Post.id == post_id)
    if hide_drafts:
        stmt = stmt.where(Post.status == "published")
    result = await db.execute(stmt, execution_options=FRESH)
    post = result.scalar_one_or_none()
    if post is None:
        logger.info("Post lookup missed", extra={"resource": "post", "resource_id": post_id})
        raise NotFoundError("Post not found")

    return PostResponse.model_validate(post)

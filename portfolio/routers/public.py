"""Public router for the homepage and post pages."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.schemas.home import HomepageResponse
from portfolio.schemas.posts import PostResponse
from portfolio.services.public import load_homepage, load_post

router = APIRouter(tags=["Public"])


@router.get(
    "/",
    response_model=HomepageResponse,
    status_code=status.HTTP_200_OK,
)
async def homepage(db: AsyncSession = Depends(get_db)) -> HomepageResponse:
    """Bio, social links, experiences, projects and posts."""
    return await load_homepage(db)


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    status_code=status.HTTP_200_OK,
)
async def post_detail(post_id: str, db: AsyncSession = Depends(get_db)) -> PostResponse:
    """
    A single published post.

    ``post_id`` is taken as a raw string so malformed ids become a 404
    rather than a request validation error.
    """
    return await load_post(db, post_id)

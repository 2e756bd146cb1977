"""Dashboard router for blog posts."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import require_authenticated
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.common import ActionResponse, DeleteForm
from portfolio.schemas.posts import ListPostsResponse, PostForm, PostResponse
from portfolio.services.content import PostService
from portfolio.validation import read_submission, validate_submission

router = APIRouter(prefix="/dashboard/posts", tags=["Posts"])


@router.get(
    "",
    response_model=ListPostsResponse,
    status_code=status.HTTP_200_OK,
)
async def list_posts(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ListPostsResponse:
    """
    List every post, drafts included.

    The dashboard is single-owner, so rows are not filtered by author.
    """
    posts = await PostService(db).list_all()
    return ListPostsResponse(items=[PostResponse.model_validate(p) for p in posts])


@router.post(
    "",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def upsert_post(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    """
    Create or update a post.

    The ``publish`` checkbox decides the status: checked publishes, absent
    leaves (or puts) the post back in draft.
    """
    data = validate_submission(PostForm, await read_submission(request))
    row_id = await PostService(db).upsert(identity, data)
    return ActionResponse(id=row_id)


@router.post(
    "/delete",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_post(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    data = validate_submission(DeleteForm, await read_submission(request))
    await PostService(db).delete(identity, data.id)
    return ActionResponse()

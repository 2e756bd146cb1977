"""Dashboard router for the owner's bio and social links."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import require_authenticated
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.common import ActionResponse, DeleteForm
from portfolio.schemas.profile import (
    BioForm,
    BioResponse,
    DashboardHomeResponse,
    SocialMediaForm,
    SocialMediaResponse,
)
from portfolio.services.content import BioService, SocialMediaService
from portfolio.validation import read_submission, validate_submission

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardHomeResponse,
    status_code=status.HTTP_200_OK,
)
async def dashboard_home(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> DashboardHomeResponse:
    """
    Dashboard landing data.

    Returns the owner's current bio (if any) and all of their social links.
    """
    bio = await BioService(db).get_for_owner(identity)
    links = await SocialMediaService(db).list_for_owner(identity)

    return DashboardHomeResponse(
        bio=BioResponse.model_validate(bio) if bio else None,
        social_media=[SocialMediaResponse.model_validate(link) for link in links],
    )


# --- Bio ---


@router.post(
    "/bio",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def upsert_bio(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    """Create the bio, or update it when the form carries an id."""
    data = validate_submission(BioForm, await read_submission(request))
    row_id = await BioService(db).upsert(identity, data)
    return ActionResponse(id=row_id)


# --- Social media ---


@router.post(
    "/social-media",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def upsert_social_media(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    data = validate_submission(SocialMediaForm, await read_submission(request))
    row_id = await SocialMediaService(db).upsert(identity, data)
    return ActionResponse(id=row_id)


@router.post(
    "/social-media/delete",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_social_media(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    data = validate_submission(DeleteForm, await read_submission(request))
    await SocialMediaService(db).delete(identity, data.id)
    return ActionResponse()

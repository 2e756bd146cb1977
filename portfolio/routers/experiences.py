"""Dashboard router for work experiences."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import require_authenticated
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.common import ActionResponse, DeleteForm
from portfolio.schemas.experiences import (
    ExperienceForm,
    ExperienceResponse,
    ListExperiencesResponse,
)
from portfolio.services.content import ExperienceService
from portfolio.validation import read_submission, validate_submission

router = APIRouter(prefix="/dashboard/experiences", tags=["Experiences"])


@router.get(
    "",
    response_model=ListExperiencesResponse,
    status_code=status.HTTP_200_OK,
)
async def list_experiences(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ListExperiencesResponse:
    experiences = await ExperienceService(db).list_all()
    return ListExperiencesResponse(
        items=[ExperienceResponse.model_validate(e) for e in experiences],
    )


@router.post(
    "",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def upsert_experience(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    """
    Create or update an experience.

    A blank ``end_date`` stores no end date, which marks the role as ongoing.
    """
    data = validate_submission(ExperienceForm, await read_submission(request))
    row_id = await ExperienceService(db).upsert(identity, data)
    return ActionResponse(id=row_id)


@router.post(
    "/delete",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_experience(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    data = validate_submission(DeleteForm, await read_submission(request))
    await ExperienceService(db).delete(identity, data.id)
    return ActionResponse()

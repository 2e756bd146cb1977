"""Dashboard router for portfolio projects."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.auth.dependencies import require_authenticated
from portfolio.database import get_db
from portfolio.schemas.auth import Identity
from portfolio.schemas.common import ActionResponse, DeleteForm
from portfolio.schemas.projects import ListProjectsResponse, ProjectForm, ProjectResponse
from portfolio.services.content import ProjectService
from portfolio.validation import read_submission, validate_submission

router = APIRouter(prefix="/dashboard/projects", tags=["Projects"])


@router.get(
    "",
    response_model=ListProjectsResponse,
    status_code=status.HTTP_200_OK,
)
async def list_projects(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ListProjectsResponse:
    projects = await ProjectService(db).list_all()
    return ListProjectsResponse(items=[ProjectResponse.model_validate(p) for p in projects])


@router.post(
    "",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def upsert_project(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    """Create or update a project."""
    data = validate_submission(ProjectForm, await read_submission(request))
    row_id = await ProjectService(db).upsert(identity, data)
    return ActionResponse(id=row_id)


@router.post(
    "/delete",
    response_model=ActionResponse,
    status_code=status.HTTP_200_OK,
)
async def delete_project(
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require_authenticated),
) -> ActionResponse:
    data = validate_submission(DeleteForm, await read_submission(request))
    await ProjectService(db).delete(identity, data.id)
    return ActionResponse()

"""Project schemas."""

from datetime import datetime

from pydantic import BaseModel

from portfolio.schemas.common import ContentForm, ContentResponse, FormDate, RequiredText


class ProjectForm(ContentForm):
    """Dashboard form for a project."""

    title: RequiredText
    description: RequiredText
    date: FormDate
    url: RequiredText


class ProjectResponse(ContentResponse):
    """Project row."""

    title: str
    description: str
    date: datetime
    url: str


class ListProjectsResponse(BaseModel):
    """Response for listing projects."""

    items: list[ProjectResponse]

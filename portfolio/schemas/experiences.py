"""Experience schemas."""

from datetime import datetime

from pydantic import BaseModel, computed_field

from portfolio.schemas.common import (
    ContentForm,
    ContentResponse,
    FormDate,
    OptionalFormDate,
    OptionalText,
    RequiredText,
)


class ExperienceForm(ContentForm):
    """
    Dashboard form for a work experience.

    Leaving ``end_date`` empty records an ongoing position. Date ordering is
    not checked.
    """

    title: RequiredText
    company: RequiredText
    company_url: OptionalText = None
    start_date: FormDate
    end_date: OptionalFormDate = None
    description: RequiredText


class ExperienceResponse(ContentResponse):
    """Experience row."""

    title: str
    company: str
    company_url: str | None
    start_date: datetime
    end_date: datetime | None
    description: str

    @computed_field
    @property
    def ongoing(self) -> bool:
        return self.end_date is None


class ListExperiencesResponse(BaseModel):
    """Response for listing experiences."""

    items: list[ExperienceResponse]

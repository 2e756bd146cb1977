"""Field types and base schemas shared by every content form.

Dashboard forms submit everything as strings: hidden ``id`` inputs, date
pickers, unchecked checkboxes that are simply absent. The annotated types
below coerce those raw values before the field constraints run.
"""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only submissions as missing."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def blank_to_false(value: Any) -> Any:
    """An absent or empty checkbox means ``False``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return False
    return value


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes parsed from date-only inputs."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_http_url_adapter = TypeAdapter(HttpUrl)


def validate_http_url(value: str) -> str:
    """Reject anything that is not an http(s) URL, but keep the text as submitted."""
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError as exc:
        raise ValueError(exc.errors()[0]["msg"]) from exc
    return value


PositiveId = Annotated[int, Field(gt=0)]
OptionalId = Annotated[PositiveId | None, BeforeValidator(blank_to_none)]
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str | None, BeforeValidator(blank_to_none)]
FormDate = Annotated[datetime, AfterValidator(ensure_utc)]
OptionalFormDate = Annotated[datetime | None, BeforeValidator(blank_to_none), AfterValidator(ensure_utc)]
CheckboxFlag = Annotated[bool, BeforeValidator(blank_to_false)]
SubmittedUrl = Annotated[str, StringConstraints(strip_whitespace=True), AfterValidator(validate_http_url)]


class ContentForm(BaseModel):
    """Base for upsert forms: ``id`` is present when editing an existing row."""

    id: OptionalId = None


class DeleteForm(BaseModel):
    """Form submitted by a row's delete button."""

    id: PositiveId


class ActionResponse(BaseModel):
    """Successful action result."""

    ok: bool = True
    id: int | None = None


class ContentResponse(BaseModel):
    """Columns every content row exposes."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None
    created_at: datetime
    updated_at: datetime

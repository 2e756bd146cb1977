"""Reading and validating dashboard form submissions."""

from collections.abc import Mapping
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portfolio.errors import ROOT_ERROR_KEY, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_submission(request: Request) -> dict[str, Any]:
    """Return submitted fields from a JSON body or a form-encoded body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError({ROOT_ERROR_KEY: "Request body is not valid JSON"})
        if not isinstance(body, dict):
            raise ValidationError({ROOT_ERROR_KEY: "Request body must be an object"})
        return body

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def field_errors(exc: PydanticValidationError) -> dict[str, str]:
    """
    Collapse pydantic errors into one message per field.

    Errors without a location (model-level checks) land under ``root``.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else ROOT_ERROR_KEY
        errors.setdefault(key, error.get("msg", "Invalid value"))
    return errors


def validate_submission(schema: type[SchemaT], data: Mapping[str, Any]) -> SchemaT:
    """
    Validate every field of a submission against ``schema``.

    Raises:
        ValidationError: with every offending field, never just the first one.
    """
    try:
        return schema.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc)) from exc

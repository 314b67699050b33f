"""Validate raw checklist payloads against the submission schemas."""
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from app.core.errors import ChecklistValidationError
from app.models import INSPECTION_FIELDS, INSPECTION_LABELS
from app.schemas import ChecklistCreate, ChecklistUpdate

# camelCase wire name -> column name, for labelling error messages
_INSPECTION_ALIASES = {to_camel(field): field for field in INSPECTION_FIELDS}


def validate_submission(payload: Any) -> ChecklistCreate:
    """
    Validate a full checklist submission.

    Raises ChecklistValidationError listing every offending field.
    """
    return _validate(ChecklistCreate, payload)


def validate_update(payload: Any) -> ChecklistUpdate:
    """Validate a partial update. Every field is optional, but none may be null."""
    return _validate(ChecklistUpdate, payload)


def _validate(model: type[BaseModel], payload: Any):
    if not isinstance(payload, dict):
        raise ChecklistValidationError(
            [{"field": "body", "message": "Expected a JSON object"}]
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ChecklistValidationError(format_errors(exc)) from exc


def format_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to one entry per field."""
    errors = []
    seen = set()
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": _describe(field, error)})
    return errors


def _describe(field: str, error: dict) -> str:
    kind = error["type"]
    if field == "vehicleNumber" and kind in ("missing", "string_too_short"):
        return "Vehicle number is required"
    if field in _INSPECTION_ALIASES:
        label = INSPECTION_LABELS[_INSPECTION_ALIASES[field]]
        if kind == "missing":
            return f"{label} inspection is required"
        if kind == "bool_type":
            return f"{label} inspection must be true or false"
    if kind == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]

"""Derive the overall pass/fail status of a checklist."""
from collections.abc import Mapping
from typing import Any

from app.models import INSPECTION_FIELDS, INSPECTION_LABELS, OverallStatus


def derive_status(values: Mapping[str, Any]) -> OverallStatus:
    """
    Compute the overall status from the seven inspection results.

    Returns all_passed only if every inspection field is True. A missing
    field counts as not passed.
    """
    if all(values.get(field) is True for field in INSPECTION_FIELDS):
        return OverallStatus.all_passed
    return OverallStatus.needs_attention


def touches_inspection(changes: Mapping[str, Any]) -> bool:
    """Check if a partial update sets any inspection field."""
    return any(field in changes for field in INSPECTION_FIELDS)


def inspection_values(record: Any) -> dict[str, bool]:
    """Read the seven inspection results from a model or schema instance."""
    return {field: getattr(record, field) for field in INSPECTION_FIELDS}


def count_completed(values: Mapping[str, Any]) -> int:
    """Number of inspection items that have been answered (pass or fail)."""
    return sum(1 for field in INSPECTION_FIELDS if isinstance(values.get(field), bool))


def failed_items(record: Any) -> list[str]:
    """Labels of the inspection items that failed, in form order."""
    return [
        INSPECTION_LABELS[field]
        for field in INSPECTION_FIELDS
        if getattr(record, field) is False
    ]

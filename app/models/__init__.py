from app.models.checklist import (
    INSPECTION_FIELDS,
    INSPECTION_LABELS,
    Checklist,
    ChecklistStatus,
    OverallStatus,
)

__all__ = [
    "Checklist",
    "ChecklistStatus",
    "OverallStatus",
    "INSPECTION_FIELDS",
    "INSPECTION_LABELS",
]

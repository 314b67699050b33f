from app.schemas.checklist import (
    ChecklistCreate,
    ChecklistRead,
    ChecklistUpdate,
    DashboardSummary,
    TodayStatus,
)

__all__ = [
    "ChecklistCreate",
    "ChecklistUpdate",
    "ChecklistRead",
    "TodayStatus",
    "DashboardSummary",
]

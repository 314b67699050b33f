"""Dashboard summary route."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.checklist import service
from app.core.database import get_session
from app.schemas import DashboardSummary

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(session: Session = Depends(get_session)):
    """
    Current month statistics.

    Returns the number of checklists this month, the number of days in the
    month, the compliance rate (count / days * 100, rounded) and the latest
    submissions.
    """
    return service.dashboard_summary(session)

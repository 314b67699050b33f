"""Vehicle routes."""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.checklist import service
from app.core.database import get_session
from app.schemas import TodayStatus

router = APIRouter(prefix="/api/vehicle", tags=["vehicles"])


@router.get("/{vehicle_number}/today", response_model=TodayStatus)
async def today_checklist(vehicle_number: str, session: Session = Depends(get_session)):
    """
    Check whether a vehicle already has a checklist today.

    Returns hasChecklist plus the newest checklist of the day (draft or
    completed), or null when there is none.
    """
    return service.today_for_vehicle(session, vehicle_number.strip())

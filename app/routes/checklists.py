"""Checklist API routes for submitting, reading and updating checklists."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlmodel import Session

from app.checklist import service
from app.core.config import settings
from app.core.database import get_session
from app.schemas import ChecklistRead

router = APIRouter(prefix="/api/checklists", tags=["checklists"])


@router.post("", response_model=ChecklistRead)
async def create_checklist(
    payload: Any = Body(None),
    session: Session = Depends(get_session),
):
    """
    Submit a checklist.

    Validates the payload, rejects a second completed checklist for the same
    vehicle on the same day with 409, derives the overall status and stores
    the record. A payload with status "draft" is saved as a draft instead.
    """
    return service.submit_checklist(session, payload)


@router.post("/drafts", response_model=ChecklistRead)
async def create_draft(
    payload: Any = Body(None),
    session: Session = Depends(get_session),
):
    """
    Save a checklist as a draft.

    Same field rules as a submission, but the one-per-day check is skipped
    and the record is stored with status "draft".
    """
    return service.save_draft(session, payload)


@router.get("", response_model=list[ChecklistRead])
async def list_checklists(
    limit: int = Query(settings.checklist_default_list_limit, ge=1),
    session: Session = Depends(get_session),
):
    """List the most recent checklists, newest first."""
    return service.list_recent(session, limit)


@router.get("/{checklist_id}", response_model=ChecklistRead)
async def get_checklist(checklist_id: str, session: Session = Depends(get_session)):
    """Fetch a single checklist, 404 if it does not exist."""
    return service.get_checklist_or_404(session, checklist_id)


@router.patch("/{checklist_id}", response_model=ChecklistRead)
async def update_checklist(
    checklist_id: str,
    payload: Any = Body(None),
    session: Session = Depends(get_session),
):
    """
    Partially update a checklist.

    Only keys present in the body are changed. The overall status is
    recomputed when any inspection result changes.
    """
    return service.update_checklist(session, checklist_id, payload)

"""Checklist submission workflow.

These functions sit between the HTTP routes and the repository: they run
payload validation, enforce the one-completed-checklist-per-vehicle-per-day
rule, derive the overall status and build the dashboard summary. Both the
JSON API and the browser pages call them.
"""
import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlmodel import Session

from app.checklist import repository
from app.checklist.dates import days_in_month, local_date, month_window
from app.checklist.status import derive_status
from app.checklist.validation import validate_submission, validate_update
from app.core.config import settings
from app.core.errors import ChecklistNotFound, DuplicateSubmission
from app.models import Checklist, ChecklistStatus
from app.schemas import ChecklistCreate, ChecklistRead, DashboardSummary, TodayStatus

logger = logging.getLogger(__name__)


def submit_checklist(
    session: Session, payload: Any, *, submitted_at: datetime | None = None
) -> Checklist:
    """
    Validate and store a checklist.

    A payload with status "draft" is stored like save_draft. Otherwise the
    vehicle must not already have a completed checklist today, else
    DuplicateSubmission is raised.
    """
    submission = validate_submission(payload)
    if submission.status == ChecklistStatus.draft:
        return _store(session, submission, submitted_at)

    existing = repository.get_today_for_vehicle(
        session,
        submission.vehicle_number,
        now=submitted_at,
        status=ChecklistStatus.completed,
    )
    if existing is not None:
        logger.warning(
            f"Rejected duplicate checklist for {submission.vehicle_number}, "
            f"already submitted as {existing.id}"
        )
        raise DuplicateSubmission(submission.vehicle_number)

    checklist = _store(session, submission, submitted_at)
    logger.info(
        f"Checklist {checklist.id} submitted for {checklist.vehicle_number}: "
        f"{checklist.overall_status.value}"
    )
    return checklist


def save_draft(
    session: Session, payload: Any, *, submitted_at: datetime | None = None
) -> Checklist:
    """Validate and store a checklist as a draft, skipping the daily check."""
    submission = validate_submission(payload)
    submission.status = ChecklistStatus.draft
    return _store(session, submission, submitted_at)


def _store(
    session: Session, submission: ChecklistCreate, submitted_at: datetime | None
) -> Checklist:
    data = submission.model_dump()
    checklist = repository.create_checklist(
        session, data, derive_status(data), submitted_at=submitted_at
    )
    if checklist.status == ChecklistStatus.draft:
        logger.info(f"Draft {checklist.id} saved for {checklist.vehicle_number}")
    return checklist


def complete_draft(
    session: Session, checklist_id: UUID | str, payload: Any
) -> Checklist:
    """
    Submit a previously saved draft in place.

    The payload must be a full submission. The draft keeps its id and
    timestamp, takes the submitted values and becomes completed, subject to
    the one-per-day rule for the day the draft was saved on.
    """
    draft = get_checklist_or_404(session, checklist_id)
    submission = validate_submission(payload)
    existing = repository.get_for_day(
        session,
        submission.vehicle_number,
        draft.submission_day,
        status=ChecklistStatus.completed,
    )
    if existing is not None and existing.id != draft.id:
        logger.warning(
            f"Rejected draft {draft.id} for {submission.vehicle_number}, "
            f"already submitted as {existing.id}"
        )
        raise DuplicateSubmission(submission.vehicle_number)

    changes = submission.model_dump()
    changes["status"] = ChecklistStatus.completed
    checklist = repository.update_checklist(session, draft.id, changes)
    logger.info(
        f"Draft {checklist.id} submitted for {checklist.vehicle_number}: "
        f"{checklist.overall_status.value}"
    )
    return checklist


def _parse_id(checklist_id: UUID | str) -> UUID:
    if isinstance(checklist_id, UUID):
        return checklist_id
    try:
        return UUID(checklist_id)
    except ValueError:
        raise ChecklistNotFound() from None


def get_checklist_or_404(session: Session, checklist_id: UUID | str) -> Checklist:
    checklist = repository.get_checklist(session, _parse_id(checklist_id))
    if checklist is None:
        raise ChecklistNotFound()
    return checklist


def list_recent(session: Session, limit: int | None = None) -> list[Checklist]:
    return repository.list_recent(
        session, limit or settings.checklist_default_list_limit
    )


def update_checklist(
    session: Session, checklist_id: UUID | str, payload: Any
) -> Checklist:
    """
    Apply a partial update to a stored checklist.

    Raises ChecklistNotFound for an unknown id and ChecklistValidationError
    for a malformed payload. Promoting a draft to completed when the vehicle
    already has a completed checklist that day raises DuplicateSubmission.
    """
    checklist = get_checklist_or_404(session, checklist_id)
    update = validate_update(payload)
    checklist = repository.update_checklist(session, checklist.id, update.changes())
    logger.info(
        f"Checklist {checklist.id} updated: {sorted(update.changes())}"
    )
    return checklist


def today_for_vehicle(session: Session, vehicle_number: str) -> TodayStatus:
    """Report whether the vehicle has a checklist (of any status) today."""
    checklist = repository.get_today_for_vehicle(session, vehicle_number)
    return TodayStatus(
        has_checklist=checklist is not None,
        checklist=ChecklistRead.model_validate(checklist) if checklist else None,
    )


def compliance_rate(monthly_count: int, month_days: int) -> int:
    """
    Submitted checklists per day of the month, as a rounded percentage.

    Not capped: several vehicles submitting on the same day push it past 100.
    """
    return round(monthly_count / month_days * 100)


def dashboard_summary(
    session: Session, *, now: datetime | None = None
) -> DashboardSummary:
    """Summarize the current calendar month and list the latest submissions."""
    today = local_date(now or datetime.now(UTC))
    start, end = month_window(today.year, today.month)
    monthly_count = repository.count_in_range(session, start, end)
    month_days = days_in_month(today.year, today.month)
    recent = repository.list_recent(session, settings.checklist_dashboard_recent_limit)
    return DashboardSummary(
        monthly_count=monthly_count,
        days_in_month=month_days,
        compliance_rate=compliance_rate(monthly_count, month_days),
        recent_submissions=[ChecklistRead.model_validate(c) for c in recent],
    )

"""Checklist repository: create, get, list, filter and update rows.

All timestamps passed in and out are UTC. Functions commit their own
writes and return refreshed model instances.
"""
import logging
from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.checklist.dates import as_utc, day_window, local_date
from app.checklist.status import derive_status, inspection_values, touches_inspection
from app.core.errors import ChecklistNotFound, DuplicateSubmission
from app.models import Checklist, ChecklistStatus, OverallStatus

logger = logging.getLogger(__name__)


def create_checklist(
    session: Session,
    data: dict[str, Any],
    overall_status: OverallStatus,
    *,
    submitted_at: datetime | None = None,
) -> Checklist:
    """
    Insert a checklist and return it.

    The submission timestamp is the current time unless ``submitted_at`` is
    given. Raises DuplicateSubmission if the one-completed-per-day index
    rejects the row.
    """
    submitted_at = as_utc(submitted_at or datetime.now(UTC))
    checklist = Checklist(
        **data,
        overall_status=overall_status,
        submission_date=submitted_at,
        submission_day=local_date(submitted_at),
    )
    session.add(checklist)
    _commit(session, checklist.vehicle_number)
    session.refresh(checklist)
    return checklist


def get_checklist(session: Session, checklist_id: UUID) -> Checklist | None:
    """Return checklist by id or None."""
    return session.get(Checklist, checklist_id)


def list_recent(session: Session, limit: int = 50) -> list[Checklist]:
    """Return the newest checklists first, at most ``limit`` rows."""
    statement = (
        select(Checklist)
        .order_by(Checklist.submission_date.desc())
        .limit(limit)
    )
    return list(session.exec(statement).all())


def get_today_for_vehicle(
    session: Session,
    vehicle_number: str,
    *,
    now: datetime | None = None,
    status: ChecklistStatus | None = None,
) -> Checklist | None:
    """
    Return the newest checklist for a vehicle submitted today.

    "Today" is [local midnight, next local midnight). Pass ``status`` to only
    consider completed checklists or only drafts.
    """
    start, end = day_window(now)
    statement = (
        select(Checklist)
        .where(Checklist.vehicle_number == vehicle_number)
        .where(Checklist.submission_date >= start)
        .where(Checklist.submission_date < end)
    )
    if status is not None:
        statement = statement.where(Checklist.status == status)
    statement = statement.order_by(Checklist.submission_date.desc())
    return session.exec(statement).first()


def get_for_day(
    session: Session,
    vehicle_number: str,
    day: date,
    *,
    status: ChecklistStatus | None = None,
) -> Checklist | None:
    """Return the newest checklist for a vehicle on a local calendar day."""
    statement = (
        select(Checklist)
        .where(Checklist.vehicle_number == vehicle_number)
        .where(Checklist.submission_day == day)
    )
    if status is not None:
        statement = statement.where(Checklist.status == status)
    statement = statement.order_by(Checklist.submission_date.desc())
    return session.exec(statement).first()


def list_in_range(
    session: Session,
    start: datetime,
    end: datetime,
    vehicle_number: str | None = None,
) -> list[Checklist]:
    """Return checklists with start <= submission_date <= end, newest first."""
    statement = (
        select(Checklist)
        .where(Checklist.submission_date >= as_utc(start))
        .where(Checklist.submission_date <= as_utc(end))
    )
    if vehicle_number is not None:
        statement = statement.where(Checklist.vehicle_number == vehicle_number)
    statement = statement.order_by(Checklist.submission_date.desc())
    return list(session.exec(statement).all())


def count_in_range(session: Session, start: datetime, end: datetime) -> int:
    """Number of checklists with start <= submission_date <= end."""
    statement = (
        select(func.count())
        .select_from(Checklist)
        .where(Checklist.submission_date >= as_utc(start))
        .where(Checklist.submission_date <= as_utc(end))
    )
    return session.exec(statement).one()


def update_checklist(
    session: Session, checklist_id: UUID, changes: dict[str, Any]
) -> Checklist:
    """
    Apply a partial update and return the updated checklist.

    If any inspection field changes, the overall status is recomputed from
    the stored values overlaid with the update. The id and submission
    timestamp are never modified. Raises ChecklistNotFound for an unknown id.
    """
    checklist = get_checklist(session, checklist_id)
    if checklist is None:
        raise ChecklistNotFound()

    changes = {
        key: value
        for key, value in changes.items()
        if key not in ("id", "submission_date", "submission_day", "overall_status")
    }
    for key, value in changes.items():
        setattr(checklist, key, value)

    if touches_inspection(changes):
        checklist.overall_status = derive_status(inspection_values(checklist))

    session.add(checklist)
    _commit(session, checklist.vehicle_number)
    session.refresh(checklist)
    return checklist


def _commit(session: Session, vehicle_number: str) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if "uq_checklist_vehicle_day_completed" in str(e) or "unique" in str(e).lower():
            logger.warning(
                f"Storage rejected second completed checklist for {vehicle_number}"
            )
            raise DuplicateSubmission(vehicle_number) from e
        raise

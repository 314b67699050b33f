"""Checklist model for daily vehicle safety inspections.

This module defines the Checklist model, the single persisted entity of the
portal. One row records the seven pass/fail inspection results an operator
entered for a vehicle, either as a submitted checklist or as a draft.
"""

from datetime import UTC, date, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel


class ChecklistStatus(str, Enum):
    """Whether a checklist was submitted or only saved for later."""
    completed = "completed"
    draft = "draft"


class OverallStatus(str, Enum):
    """Aggregate of the seven inspection results."""
    all_passed = "all_passed"
    needs_attention = "needs_attention"


# Inspection columns in form order, with the label used in messages and exports
INSPECTION_LABELS: dict[str, str] = {
    "parking_brake": "Parking brake",
    "fluid_levels": "Fluid levels",
    "tires": "Tire",
    "engine_fluids": "Engine fluids",
    "lights": "Lights",
    "doors_and_seatbelts": "Doors and seatbelts",
    "emergency_equipment": "Emergency equipment",
}
INSPECTION_FIELDS: tuple[str, ...] = tuple(INSPECTION_LABELS)


class Checklist(SQLModel, table=True):
    """A vehicle safety checklist.

    Attributes:
        id: Unique identifier (UUID), assigned at creation.
        vehicle_number: Identifier of the inspected vehicle. Not unique on
            its own; one completed checklist per vehicle per day is allowed.
        submission_date: When the checklist was stored (UTC). Set by the
            repository at creation and never changed.
        submission_day: Calendar date of submission_date in the configured
            checklist timezone. Backs the one-per-day unique index.
        parking_brake, fluid_levels, tires, engine_fluids, lights,
        doors_and_seatbelts, emergency_equipment: Inspection results,
            True means the item passed.
        notes: Optional free text from the operator.
        status: "completed" for a submitted checklist, "draft" otherwise.
            Drafts are exempt from the one-per-day rule.
        overall_status: "all_passed" when every inspection passed, else
            "needs_attention". Always derived, never taken from the client.
    """
    __table_args__ = (
        # A completed checklist is unique per vehicle and day. Drafts are not
        # covered, so any number of them may coexist.
        Index(
            "uq_checklist_vehicle_day_completed",
            "vehicle_number",
            "submission_day",
            unique=True,
            sqlite_where=text("status = 'completed'"),
            postgresql_where=text("status = 'completed'"),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    vehicle_number: str = Field(index=True)
    submission_date: datetime = Field(
        default_factory=lambda: datetime.now(UTC), index=True
    )
    submission_day: date

    parking_brake: bool
    fluid_levels: bool
    tires: bool
    engine_fluids: bool
    lights: bool
    doors_and_seatbelts: bool
    emergency_equipment: bool

    notes: str | None = None
    status: ChecklistStatus = Field(default=ChecklistStatus.completed)
    overall_status: OverallStatus

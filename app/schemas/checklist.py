"""Request and response shapes for the checklist API.

Payloads use camelCase keys on the wire (``vehicleNumber``, ``parkingBrake``)
while the models and table columns use snake_case. Incoming models accept
either spelling; outgoing models always serialize camelCase.
"""
from datetime import UTC, datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictBool,
    StringConstraints,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.models import INSPECTION_FIELDS, ChecklistStatus, OverallStatus

VehicleNumber = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ChecklistCreate(BaseModel):
    """A full submission: vehicle number plus all seven inspection results.

    Unknown keys (including ``id``, ``submissionDate`` and ``overallStatus``)
    are dropped rather than rejected.
    """
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    vehicle_number: VehicleNumber
    parking_brake: StrictBool
    fluid_levels: StrictBool
    tires: StrictBool
    engine_fluids: StrictBool
    lights: StrictBool
    doors_and_seatbelts: StrictBool
    emergency_equipment: StrictBool
    notes: str | None = None
    status: ChecklistStatus = ChecklistStatus.completed


class ChecklistUpdate(BaseModel):
    """A partial submission. Only keys present in the payload are applied."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    vehicle_number: VehicleNumber | None = None
    parking_brake: StrictBool | None = None
    fluid_levels: StrictBool | None = None
    tires: StrictBool | None = None
    engine_fluids: StrictBool | None = None
    lights: StrictBool | None = None
    doors_and_seatbelts: StrictBool | None = None
    emergency_equipment: StrictBool | None = None
    notes: str | None = None
    status: ChecklistStatus | None = None

    @field_validator("vehicle_number", "status", *INSPECTION_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, value):
        # Defaults are not validated, so this only fires for an explicit null
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict:
        """Fields present in the payload, keyed by column name."""
        return self.model_dump(exclude_unset=True)


_read_config = ConfigDict(
    from_attributes=True, alias_generator=to_camel, populate_by_name=True
)


class ChecklistRead(BaseModel):
    """A stored checklist as returned by the API."""
    model_config = _read_config

    id: UUID
    vehicle_number: str
    submission_date: datetime
    parking_brake: bool
    fluid_levels: bool
    tires: bool
    engine_fluids: bool
    lights: bool
    doors_and_seatbelts: bool
    emergency_equipment: bool
    notes: str | None = None
    status: ChecklistStatus
    overall_status: OverallStatus

    @field_validator("submission_date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; they are stored as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class TodayStatus(BaseModel):
    model_config = _read_config

    has_checklist: bool
    checklist: ChecklistRead | None = None


class DashboardSummary(BaseModel):
    model_config = _read_config

    monthly_count: int
    days_in_month: int
    compliance_rate: int
    recent_submissions: list[ChecklistRead]

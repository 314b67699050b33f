"""Tests for database models."""

from datetime import UTC, date, datetime

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models import Checklist, ChecklistStatus, OverallStatus


def _row(**overrides) -> Checklist:
    values = {
        "vehicle_number": "BUS-12",
        "submission_day": date(2025, 6, 15),
        "submission_date": datetime(2025, 6, 15, 8, 30, tzinfo=UTC),
        "parking_brake": True,
        "fluid_levels": True,
        "tires": True,
        "engine_fluids": True,
        "lights": True,
        "doors_and_seatbelts": True,
        "emergency_equipment": True,
        "overall_status": OverallStatus.all_passed,
    }
    values.update(overrides)
    return Checklist(**values)


class TestChecklistModel:
    """Tests for the Checklist model."""

    def test_create_checklist(self, session: Session):
        """Test creating a checklist with defaults."""
        session.add(_row())
        session.commit()

        retrieved = session.exec(
            select(Checklist).where(Checklist.vehicle_number == "BUS-12")
        ).first()

        assert retrieved is not None
        assert retrieved.id is not None
        assert retrieved.status == ChecklistStatus.completed
        assert retrieved.notes is None
        assert retrieved.overall_status == OverallStatus.all_passed

    def test_status_round_trips_as_enum(self, session: Session):
        """Test that status values are read back as enum members."""
        checklist = _row(status=ChecklistStatus.draft)
        session.add(checklist)
        session.commit()

        retrieved = session.get(Checklist, checklist.id)
        assert retrieved.status is ChecklistStatus.draft

    def test_second_completed_checklist_same_day_rejected(self, session: Session):
        """Test the unique index on vehicle and day for completed checklists."""
        session.add(_row())
        session.commit()

        session.add(_row())
        with pytest.raises(IntegrityError):
            session.commit()

    def test_drafts_not_covered_by_unique_index(self, session: Session):
        """Test that drafts can share a vehicle and day with a completed checklist."""
        session.add(_row())
        session.add(_row(status=ChecklistStatus.draft))
        session.add(_row(status=ChecklistStatus.draft))
        session.commit()

        rows = session.exec(select(Checklist)).all()
        assert len(rows) == 3

    def test_same_vehicle_different_days_allowed(self, session: Session):
        """Test that the unique index is scoped to a single day."""
        session.add(_row())
        session.add(
            _row(
                submission_day=date(2025, 6, 16),
                submission_date=datetime(2025, 6, 16, 8, 30, tzinfo=UTC),
            )
        )
        session.commit()

        rows = session.exec(select(Checklist)).all()
        assert len(rows) == 2

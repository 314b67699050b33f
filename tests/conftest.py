"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.checklist import repository
from app.checklist.status import derive_status
from app.core.database import get_session
from app.main import app
from app.models import Checklist, ChecklistStatus


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="payload")
def payload_fixture() -> dict:
    """A complete, all-passing submission as the client sends it."""
    return {
        "vehicleNumber": "PZ333M",
        "parkingBrake": True,
        "fluidLevels": True,
        "tires": True,
        "engineFluids": True,
        "lights": True,
        "doorsAndSeatbelts": True,
        "emergencyEquipment": True,
        "notes": "Pre-trip check",
    }


@pytest.fixture(name="make_checklist")
def make_checklist_fixture(session: Session):
    """Factory storing a checklist through the repository at a chosen time."""

    def make(
        vehicle_number: str = "PZ333M",
        submitted_at: datetime | None = None,
        status: ChecklistStatus = ChecklistStatus.completed,
        notes: str | None = None,
        **results: bool,
    ) -> Checklist:
        data = {
            "vehicle_number": vehicle_number,
            "parking_brake": True,
            "fluid_levels": True,
            "tires": True,
            "engine_fluids": True,
            "lights": True,
            "doors_and_seatbelts": True,
            "emergency_equipment": True,
            "notes": notes,
            "status": status,
        }
        data.update(results)
        return repository.create_checklist(
            session,
            data,
            derive_status(data),
            submitted_at=submitted_at or datetime.now(UTC),
        )

    return make


@pytest.fixture(name="sample_checklist")
def sample_checklist_fixture(make_checklist) -> Checklist:
    """A completed, all-passing checklist submitted now."""
    return make_checklist()


@pytest.fixture(name="sample_draft")
def sample_draft_fixture(make_checklist) -> Checklist:
    """A draft with one failed item, saved now."""
    return make_checklist(status=ChecklistStatus.draft, lights=False)

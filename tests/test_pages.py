"""Tests for the browser checklist workflow."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.models import Checklist, ChecklistStatus, OverallStatus
from app.routes.pages import VEHICLE_COOKIE


def _answers(**overrides) -> dict:
    form = {
        "parking_brake": "pass",
        "fluid_levels": "pass",
        "tires": "pass",
        "engine_fluids": "pass",
        "lights": "pass",
        "doors_and_seatbelts": "pass",
        "emergency_equipment": "pass",
        "notes": "",
        "action": "submit",
    }
    form.update(overrides)
    return form


class TestStartPage:
    def test_start_page_loads(self, client: TestClient):
        response = client.get("/start")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Vehicle Number" in response.text

    def test_start_sets_cookie_and_redirects(self, client: TestClient):
        response = client.post(
            "/start", data={"vehicle_number": " BUS-9 "}, follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/checklist"
        assert response.cookies.get(VEHICLE_COOKIE) == "BUS-9"

    def test_start_requires_vehicle(self, client: TestClient):
        response = client.post("/start", data={"vehicle_number": ""})
        assert response.status_code == 400
        assert "Vehicle number is required" in response.text

    def test_start_already_submitted(self, client: TestClient, sample_checklist: Checklist):
        response = client.post(
            "/start", data={"vehicle_number": "PZ333M"}, follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard?notice=already_submitted"


class TestChecklistPage:
    def test_requires_vehicle(self, client: TestClient):
        response = client.get("/checklist", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/start"

    def test_form_renders_items(self, client: TestClient):
        client.cookies.set(VEHICLE_COOKIE, "BUS-9")
        response = client.get("/checklist")
        assert response.status_code == 200
        assert "Parking Brake Functioning" in response.text
        assert "Extinguisher/First-Aid Box" in response.text
        assert "0 of 7 completed" in response.text

    def test_form_prefills_draft(self, client: TestClient, sample_draft: Checklist):
        client.cookies.set(VEHICLE_COOKIE, "PZ333M")
        response = client.get("/checklist")
        assert "7 of 7 completed" in response.text
        assert str(sample_draft.id) in response.text

    def test_submit(self, client: TestClient, session: Session):
        client.cookies.set(VEHICLE_COOKIE, "BUS-9")
        response = client.post(
            "/checklist", data=_answers(tires="fail"), follow_redirects=False
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/success"

        checklist = session.exec(select(Checklist)).one()
        assert checklist.vehicle_number == "BUS-9"
        assert checklist.tires is False
        assert checklist.overall_status == OverallStatus.needs_attention

    def test_submit_twice_redirects_to_dashboard(self, client: TestClient):
        client.cookies.set(VEHICLE_COOKIE, "BUS-9")
        client.post("/checklist", data=_answers(), follow_redirects=False)

        response = client.post("/checklist", data=_answers(), follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard?notice=already_submitted"

    def test_incomplete_form_rerenders(self, client: TestClient):
        client.cookies.set(VEHICLE_COOKIE, "BUS-9")
        form = _answers()
        del form["lights"]

        response = client.post("/checklist", data=form)
        assert response.status_code == 400
        assert "Lights inspection is required" in response.text
        assert "6 of 7 completed" in response.text

    def test_save_draft_then_submit(self, client: TestClient, session: Session):
        client.cookies.set(VEHICLE_COOKIE, "BUS-9")
        response = client.post(
            "/checklist", data=_answers(action="draft"), follow_redirects=False
        )
        assert response.headers["location"] == "/checklist?saved=1"
        draft = session.exec(select(Checklist)).one()
        assert draft.status == ChecklistStatus.draft

        response = client.post(
            "/checklist",
            data=_answers(draft_id=str(draft.id)),
            follow_redirects=False,
        )
        assert response.headers["location"] == "/success"

        rows = session.exec(select(Checklist)).all()
        assert len(rows) == 1
        assert rows[0].status == ChecklistStatus.completed


class TestOtherPages:
    def test_dashboard_page(self, client: TestClient, sample_checklist: Checklist):
        response = client.get("/dashboard")
        assert response.status_code == 200
        assert "Compliance rate" in response.text
        assert "PZ333M" in response.text

    def test_dashboard_notice(self, client: TestClient):
        response = client.get("/dashboard", params={"notice": "already_submitted"})
        assert "already submitted a checklist today" in response.text

    def test_history_filters(self, client: TestClient, make_checklist):
        make_checklist(vehicle_number="GOOD", submitted_at=datetime(2025, 6, 1, tzinfo=UTC))
        make_checklist(
            vehicle_number="BAD",
            submitted_at=datetime(2025, 6, 2, tzinfo=UTC),
            lights=False,
        )

        response = client.get(
            "/history", params={"status": "needs_attention", "range": "all"}
        )
        assert response.status_code == 200
        assert "BAD" in response.text
        assert "GOOD" not in response.text
        assert "Failed: Lights" in response.text

        response = client.get("/history", params={"range": "all"})
        assert "2 records found" in response.text

    def test_history_date_range(self, client: TestClient, make_checklist):
        now = datetime.now(UTC)
        make_checklist(vehicle_number="TEN-DAYS", submitted_at=now - timedelta(days=10))
        make_checklist(vehicle_number="FORTY-DAYS", submitted_at=now - timedelta(days=40))

        response = client.get("/history", params={"range": "last7"})
        assert "0 records found" in response.text
        assert "TEN-DAYS" not in response.text

        response = client.get("/history", params={"range": "last30"})
        assert "1 record found" in response.text
        assert "TEN-DAYS" in response.text
        assert "FORTY-DAYS" not in response.text

        response = client.get("/history", params={"range": "all"})
        assert "2 records found" in response.text
        assert "FORTY-DAYS" in response.text

    def test_history_defaults_to_last_30_days(self, client: TestClient, make_checklist):
        now = datetime.now(UTC)
        make_checklist(vehicle_number="TEN-DAYS", submitted_at=now - timedelta(days=10))
        make_checklist(vehicle_number="FORTY-DAYS", submitted_at=now - timedelta(days=40))

        response = client.get("/history")
        assert "TEN-DAYS" in response.text
        assert "FORTY-DAYS" not in response.text

    def test_history_combines_filters(self, client: TestClient, make_checklist):
        now = datetime.now(UTC)
        make_checklist(vehicle_number="RECENT-OK", submitted_at=now - timedelta(days=2))
        make_checklist(
            vehicle_number="RECENT-BAD", submitted_at=now - timedelta(days=3), tires=False
        )
        make_checklist(
            vehicle_number="OLD-BAD", submitted_at=now - timedelta(days=60), tires=False
        )

        response = client.get(
            "/history", params={"status": "needs_attention", "range": "last30"}
        )
        assert "RECENT-BAD" in response.text
        assert "RECENT-OK" not in response.text
        assert "OLD-BAD" not in response.text

    def test_success_page(self, client: TestClient):
        response = client.get("/success")
        assert response.status_code == 200
        assert "Checklist Submitted" in response.text

"""Browser pages for the daily checklist workflow.

The operator enters a vehicle number once (kept in a cookie), fills in the
seven inspection items, then submits or saves a draft. The dashboard and
history pages read through the same service functions as the JSON API.
"""
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic.alias_generators import to_camel
from sqlmodel import Session

from app.checklist import repository, service
from app.checklist.dates import as_utc, local_date
from app.checklist.export import MIN_YEAR
from app.checklist.status import count_completed, failed_items, inspection_values
from app.core.database import get_session
from app.core.errors import ChecklistNotFound, ChecklistValidationError, DuplicateSubmission
from app.models import INSPECTION_FIELDS, ChecklistStatus, OverallStatus

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates"))

VEHICLE_COOKIE = "vehicle_number"

# Form content for each inspection field, in display order
INSPECTION_ITEMS = [
    {
        "field": "parking_brake",
        "title": "Parking Brake Functioning",
        "description": "Verify parking brake engages and releases properly",
    },
    {
        "field": "fluid_levels",
        "title": "Fluid Level Check",
        "description": "Check brake fluid, power steering, and windshield washer fluid levels",
    },
    {
        "field": "tires",
        "title": "Tires Proper Inflation",
        "description": "Check all tires for proper inflation and visible damage",
    },
    {
        "field": "engine_fluids",
        "title": "Engine Oil and Coolant Level Check",
        "description": "Verify engine oil and coolant levels are within acceptable range",
    },
    {
        "field": "lights",
        "title": "Electrical Lights Working",
        "description": "Test headlights, tail lights, brake lights, turn signals, and hazard lights",
    },
    {
        "field": "doors_and_seatbelts",
        "title": "Seatbelts and All Doors Working",
        "description": "Check seatbelt functionality and door operation (opening, closing, locking)",
    },
    {
        "field": "emergency_equipment",
        "title": "Extinguisher/First-Aid Box",
        "description": "Verify fire extinguisher and first-aid kit are present and accessible",
    },
]

HISTORY_FILTERS = {
    "all": "All checklists",
    "all_passed": "All passed",
    "needs_attention": "Needs attention",
    "draft": "Drafts",
}

HISTORY_RANGES = {
    "last7": ("Last 7 days", 7),
    "last30": ("Last 30 days", 30),
    "last90": ("Last 90 days", 90),
    "all": ("All time", None),
}

ALREADY_SUBMITTED = "already_submitted"

_FIELD_BY_ALIAS = {to_camel(field): field for field in INSPECTION_FIELDS}


def _vehicle(request: Request) -> str:
    return request.cookies.get(VEHICLE_COOKIE, "").strip()


def _redirect(url: str, vehicle_number: str | None = None) -> RedirectResponse:
    response = RedirectResponse(url, status_code=303)
    if vehicle_number:
        response.set_cookie(VEHICLE_COOKIE, vehicle_number, samesite="lax")
    return response


def _submitted_today(session: Session, vehicle_number: str) -> bool:
    return (
        repository.get_today_for_vehicle(
            session, vehicle_number, status=ChecklistStatus.completed
        )
        is not None
    )


@router.get("/start", response_class=HTMLResponse)
async def start_page(request: Request):
    """Ask for the vehicle number to inspect."""
    return templates.TemplateResponse(
        request,
        "start.html",
        {"vehicle_number": _vehicle(request), "error": None},
    )


@router.post("/start")
async def start(
    request: Request,
    vehicle_number: str = Form(""),
    session: Session = Depends(get_session),
):
    """
    Remember the vehicle number and continue to the checklist.

    If the vehicle already has a completed checklist today, go to the
    dashboard with a notice instead.
    """
    vehicle_number = vehicle_number.strip()
    if not vehicle_number:
        return templates.TemplateResponse(
            request,
            "start.html",
            {"vehicle_number": "", "error": "Vehicle number is required"},
            status_code=400,
        )

    if _submitted_today(session, vehicle_number):
        return _redirect(f"/dashboard?notice={ALREADY_SUBMITTED}", vehicle_number)
    return _redirect("/checklist", vehicle_number)


def _render_form(
    request: Request,
    vehicle_number: str,
    values: dict,
    notes: str,
    draft_id: UUID | None,
    errors: dict[str, str] | None = None,
    saved: bool = False,
    status_code: int = 200,
):
    completed = count_completed(values)
    return templates.TemplateResponse(
        request,
        "checklist.html",
        {
            "vehicle_number": vehicle_number,
            "items": INSPECTION_ITEMS,
            "values": values,
            "notes": notes,
            "draft_id": draft_id,
            "errors": errors or {},
            "saved": saved,
            "completed": completed,
            "total": len(INSPECTION_ITEMS),
            "progress": round(completed / len(INSPECTION_ITEMS) * 100),
        },
        status_code=status_code,
    )


@router.get("/checklist", response_class=HTMLResponse)
async def checklist_page(
    request: Request,
    saved: bool = False,
    session: Session = Depends(get_session),
):
    """
    Display the inspection form.

    Prefills today's draft for the vehicle when there is one. Redirects to
    the start page when no vehicle number has been entered yet.
    """
    vehicle_number = _vehicle(request)
    if not vehicle_number:
        return _redirect("/start")
    if _submitted_today(session, vehicle_number):
        return _redirect(f"/dashboard?notice={ALREADY_SUBMITTED}")

    draft = repository.get_today_for_vehicle(
        session, vehicle_number, status=ChecklistStatus.draft
    )
    if draft is None:
        return _render_form(request, vehicle_number, {}, "", None, saved=saved)
    return _render_form(
        request,
        vehicle_number,
        inspection_values(draft),
        draft.notes or "",
        draft.id,
        saved=saved,
    )


def _form_payload(form, vehicle_number: str, action: str) -> dict:
    """Translate pass/fail radio answers into an API-shaped payload."""
    payload = {"vehicleNumber": vehicle_number, "notes": form.get("notes") or None}
    for field in INSPECTION_FIELDS:
        answer = form.get(field)
        if answer in ("pass", "fail"):
            payload[to_camel(field)] = answer == "pass"
    payload["status"] = "draft" if action == "draft" else "completed"
    return payload


@router.post("/checklist")
async def submit_checklist_form(
    request: Request,
    session: Session = Depends(get_session),
):
    """
    Handle the inspection form.

    action=submit stores a completed checklist (completing today's draft in
    place when one was loaded) and redirects to the success page.
    action=draft saves or updates a draft and returns to the form. A second
    submission on the same day redirects to the dashboard with a notice.
    """
    vehicle_number = _vehicle(request)
    if not vehicle_number:
        return _redirect("/start")

    form = await request.form()
    action = form.get("action", "submit")
    payload = _form_payload(form, vehicle_number, action)
    draft_id = _parse_uuid(form.get("draft_id"))

    try:
        if action == "draft":
            if draft_id is not None:
                service.update_checklist(session, draft_id, payload)
            else:
                service.save_draft(session, payload)
            return _redirect("/checklist?saved=1")

        if draft_id is not None:
            service.complete_draft(session, draft_id, payload)
        else:
            service.submit_checklist(session, payload)
    except DuplicateSubmission:
        return _redirect(f"/dashboard?notice={ALREADY_SUBMITTED}")
    except ChecklistNotFound:
        # The draft disappeared between loading the form and posting it
        return _redirect("/checklist")
    except ChecklistValidationError as e:
        values = {
            field: payload[to_camel(field)]
            for field in INSPECTION_FIELDS
            if to_camel(field) in payload
        }
        errors = {
            _FIELD_BY_ALIAS.get(error["field"], error["field"]): error["message"]
            for error in e.errors
        }
        return _render_form(
            request,
            vehicle_number,
            values,
            payload["notes"] or "",
            draft_id,
            errors=errors,
            status_code=400,
        )

    return _redirect("/success")


def _parse_uuid(value) -> UUID | None:
    try:
        return UUID(value) if value else None
    except ValueError:
        return None


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    notice: str | None = None,
    session: Session = Depends(get_session),
):
    """Display this month's statistics and the latest submissions."""
    summary = service.dashboard_summary(session)
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "summary": summary,
            "vehicle_number": _vehicle(request),
            "already_submitted": notice == ALREADY_SUBMITTED,
            "local_date": local_date,
            "today": local_date(datetime.now(UTC)),
        },
    )


@router.get("/history", response_class=HTMLResponse)
async def history_page(
    request: Request,
    status: str = "all",
    period: str = Query("last30", alias="range"),
    session: Session = Depends(get_session),
):
    """
    Display recent checklists with status and date filters and an export form.

    status is one of all, all_passed, needs_attention or draft. range is one
    of last7, last30, last90 or all and keeps checklists submitted within
    that many days of now.
    """
    if status not in HISTORY_FILTERS:
        status = "all"
    if period not in HISTORY_RANGES:
        period = "last30"

    checklists = service.list_recent(session)
    days = HISTORY_RANGES[period][1]
    if days is not None:
        since = datetime.now(UTC) - timedelta(days=days)
        checklists = [c for c in checklists if as_utc(c.submission_date) >= since]
    if status == "draft":
        checklists = [c for c in checklists if c.status == ChecklistStatus.draft]
    elif status != "all":
        checklists = [c for c in checklists if c.overall_status == OverallStatus(status)]

    today = local_date(datetime.now(UTC))
    return templates.TemplateResponse(
        request,
        "history.html",
        {
            "checklists": checklists,
            "failed": {c.id: failed_items(c) for c in checklists},
            "local_date": local_date,
            "filters": HISTORY_FILTERS,
            "status": status,
            "ranges": HISTORY_RANGES,
            "period": period,
            "vehicle_number": _vehicle(request),
            "years": list(range(today.year, max(MIN_YEAR, today.year - 5) - 1, -1)),
            "current_year": today.year,
            "current_month": today.month,
        },
    )


@router.get("/success", response_class=HTMLResponse)
async def success_page(request: Request):
    """Confirm that the checklist was submitted."""
    return templates.TemplateResponse(
        request, "success.html", {"vehicle_number": _vehicle(request)}
    )

"""Monthly checklist export as CSV or JSON."""
import csv
import io
import logging
import re
from dataclasses import dataclass
from typing import Any

from sqlmodel import Session

from app.checklist import repository
from app.checklist.dates import local_date, month_name, month_window
from app.core.errors import InvalidParameters
from app.models import INSPECTION_FIELDS, Checklist, OverallStatus
from app.schemas import ChecklistRead

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json")

CSV_HEADERS = [
    "Date",
    "Vehicle Number",
    "Parking Brake",
    "Fluid Levels",
    "Tires",
    "Engine Fluids",
    "Lights",
    "Doors/Seatbelts",
    "Emergency Equipment",
    "Overall Status",
    "Notes",
    "Status",
]

# Month windows for these years stay within datetime range in every timezone
MIN_YEAR = 1900
MAX_YEAR = 2999


@dataclass(frozen=True)
class ExportParams:
    year: int
    month: int
    format: str = "csv"
    vehicle_number: str | None = None


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: str
    rows: int = 0
    media_type: str = "text/csv"


def parse_export_params(
    year: Any,
    month: Any,
    format: Any = "csv",
    vehicle_number: Any = None,
) -> ExportParams:
    """
    Check raw export query values.

    Raises InvalidParameters if year or month is missing, not an integer,
    or out of range, or if the format is unknown.
    """
    if year in (None, "") or month in (None, ""):
        raise InvalidParameters("Year and month are required")
    try:
        year_num = int(year)
        month_num = int(month)
    except (TypeError, ValueError):
        raise InvalidParameters("Invalid year or month") from None
    if not 1 <= month_num <= 12 or not MIN_YEAR <= year_num <= MAX_YEAR:
        raise InvalidParameters("Invalid year or month")

    format = (format or "csv").lower()
    if format not in EXPORT_FORMATS:
        raise InvalidParameters(f"Unsupported export format: {format}")

    vehicle_number = (vehicle_number or "").strip() or None
    return ExportParams(year_num, month_num, format, vehicle_number)


def find_checklists(session: Session, params: ExportParams) -> list[Checklist]:
    """Checklists in the requested month, newest first, optionally for one vehicle."""
    start, end = month_window(params.year, params.month)
    return repository.list_in_range(session, start, end, params.vehicle_number)


def export_filename(params: ExportParams) -> str:
    """checklist_<vehicle or all_vehicles>_<MonthName>_<year>.csv"""
    if params.vehicle_number:
        vehicle = re.sub(r"[^A-Za-z0-9_-]", "_", params.vehicle_number)
    else:
        vehicle = "all_vehicles"
    return f"checklist_{vehicle}_{month_name(params.month)}_{params.year}.csv"


def _result(value: bool) -> str:
    return "PASS" if value else "FAIL"


def csv_row(checklist: Checklist) -> list[str]:
    overall = (
        "ALL PASSED"
        if checklist.overall_status == OverallStatus.all_passed
        else "NEEDS ATTENTION"
    )
    return [
        local_date(checklist.submission_date).isoformat(),
        checklist.vehicle_number,
        *(_result(getattr(checklist, field)) for field in INSPECTION_FIELDS),
        overall,
        checklist.notes or "",
        checklist.status.value.upper(),
    ]


def render_csv(checklists: list[Checklist]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for checklist in checklists:
        writer.writerow(csv_row(checklist))
    return buffer.getvalue()


def export_checklists(session: Session, params: ExportParams) -> ExportFile | list[dict]:
    """
    Export one month of checklists.

    Returns an ExportFile for CSV, or the serialized records for JSON.
    """
    checklists = find_checklists(session, params)
    logger.info(
        f"Exporting {len(checklists)} checklists for "
        f"{params.vehicle_number or 'all vehicles'} {params.year}-{params.month:02d} "
        f"as {params.format}"
    )
    if params.format == "json":
        return [
            ChecklistRead.model_validate(c).model_dump(mode="json", by_alias=True)
            for c in checklists
        ]
    return ExportFile(
        filename=export_filename(params),
        content=render_csv(checklists),
        rows=len(checklists),
    )

"""Export routes for downloading a month of checklists."""
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlmodel import Session

from app.checklist.export import export_checklists, parse_export_params
from app.core.database import get_session

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/checklists")
async def export(
    year: str | None = None,
    month: str | None = None,
    format: str = "csv",
    vehicle_number: str | None = Query(None, alias="vehicleNumber"),
    session: Session = Depends(get_session),
):
    """
    Export one calendar month of checklists.

    Year and month are required. With format=csv (the default) the response
    is a CSV attachment named after the vehicle and month; with format=json
    it is the list of records. Returns 400 for missing or invalid values.
    """
    params = parse_export_params(year, month, format, vehicle_number)
    result = export_checklists(session, params)

    if params.format == "json":
        return JSONResponse(result)

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )

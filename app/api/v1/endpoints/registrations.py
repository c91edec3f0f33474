# File: app/api/v1/endpoints/registrations.py
from typing import Any, Optional
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from app import schemas
from app.core import deps
from app.core.exceptions import InternalQueryError
from app.core.responses import success_response
from app.db.database import get_db
from app.services.activity_logger import RequestContext, activity_logger
from app.services.csv_export import EXPORT_FILENAME, csv_exporter, select_fields
from app.services.registration_query import RegistrationFilter, RegistrationQueryEngine
from app.services.registration_service import RegistrationService
from app.services.session_store import AdminSession
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
def list_registrations(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[str] = None,
    country: Optional[str] = None,
    attendance_type: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    export: Optional[str] = None,
    fields: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(deps.require_admin),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """
    List registrations for the dashboard.

    With ``export=csv`` the same filters drive a streamed CSV download of the
    columns named in ``fields`` instead.
    """
    filters = RegistrationFilter.from_params(
        search=search,
        status=status,
        country=country,
        attendance_type=attendance_type,
        date_from=date_from,
        date_to=date_to,
    )

    if export == "csv":
        logger.info(f"CSV export requested by {admin.username}")
        return StreamingResponse(
            csv_exporter.stream(filters, select_fields(fields), context),
            media_type="text/csv; charset=utf-8",
            headers={
                "Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"',
                "Cache-Control": "no-store, no-cache, must-revalidate",
                "Pragma": "no-cache",
                "Expires": "0",
            },
        )

    try:
        result = RegistrationQueryEngine(db).list_registrations(filters, page=page, limit=limit)
    except InternalQueryError as e:
        activity_logger.log("error", f"Failed to retrieve registrations: {e.cause}", context)
        raise

    activity_logger.log("view_registrations", f"Viewed registrations page {result.page}", context)

    return success_response(
        {
            "registrations": [
                schemas.Registration.model_validate(row).model_dump() for row in result.rows
            ],
            "pagination": result.pagination(),
            "statistics": result.statistics,
            "filters": filters.as_dict(),
        },
        "Registrations retrieved successfully",
    )


@router.delete("")
def delete_registration(
    payload: schemas.DeleteRegistrationRequest,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(deps.require_admin),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    RegistrationService(db).delete_registration(payload.id, context)
    logger.info(f"Registration {payload.id} deleted by {admin.username}")
    return success_response([], "Registration deleted successfully")

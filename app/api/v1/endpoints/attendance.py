# File: app/api/v1/endpoints/attendance.py
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app import schemas
from app.core import deps
from app.core.responses import success_response
from app.db.database import get_db
from app.services.activity_logger import RequestContext
from app.services.registration_service import RegistrationService
from app.services.session_store import AdminSession

router = APIRouter()


@router.post("")
def update_attendance(
    payload: schemas.AttendanceUpdate,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(deps.require_admin),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """Mark a registrant present, absent or pending at the venue"""
    result = RegistrationService(db).update_attendance(payload.registration_id, payload.status, context)
    return success_response(result.model_dump(), "Attendance status updated successfully")

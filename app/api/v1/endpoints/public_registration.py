# File: app/api/v1/endpoints/public_registration.py
from datetime import datetime
from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app import crud, schemas
from app.core import deps
from app.core.exceptions import InternalError
from app.core.responses import TIMESTAMP_FORMAT, success_response
from app.db.database import get_db
from app.services.activity_logger import RequestContext
from app.services.registration_service import RegistrationService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register")
def submit_registration(
    submission: schemas.RegistrationSubmission,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """Public conference registration form"""
    confirmation = RegistrationService(db).submit(submission, context)
    return success_response(confirmation.model_dump(), "Registration completed successfully!")


@router.get("/stats")
def registration_statistics(db: Session = Depends(get_db)) -> Any:
    try:
        stats = crud.registration.get_statistics(db)
    except SQLAlchemyError:
        logger.exception("Error retrieving registration statistics")
        raise InternalError("Failed to retrieve statistics")

    stats["last_updated"] = datetime.now().strftime(TIMESTAMP_FORMAT)
    return success_response(stats, "Statistics retrieved successfully")

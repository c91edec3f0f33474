# File: app/services/registration_service.py
"""Writes against the registrations table: public submission and admin mutations."""
import json
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.exceptions import InternalError, NotFoundError, ValidationError
from app.models.registration import Registration, VenueAttendanceStatus
from app.schemas.attendance import AttendanceResult
from app.schemas.registration import RegistrationConfirmation, RegistrationSubmission
from app.services.activity_logger import ActivityLogger, RequestContext, activity_logger
from app.services.email_service import EmailService, email_service

logger = logging.getLogger(__name__)

ATTENDANCE_STATUSES = tuple(status.value for status in VenueAttendanceStatus)


class RegistrationService:

    def __init__(
        self,
        db: Session,
        activity: ActivityLogger = activity_logger,
        mailer: EmailService = email_service,
    ):
        self.db = db
        self.activity = activity
        self.mailer = mailer

    # ==========================================
    # PUBLIC SUBMISSION
    # ==========================================

    def submit(self, submission: RegistrationSubmission, context: RequestContext) -> RegistrationConfirmation:
        errors = submission.collect_errors()
        if submission.email and crud.registration.email_exists(self.db, email=submission.email):
            errors.append("Email address is already registered")
        if errors:
            raise ValidationError("Validation failed", details=errors)

        try:
            registration = crud.registration.create(self.db, obj_in=submission)
        except IntegrityError:
            # Lost a race with a concurrent submission for the same email
            self.db.rollback()
            raise ValidationError("Validation failed", details=["Email address is already registered"])
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Registration creation failed for {submission.email}")
            raise InternalError("Failed to create registration. Please try again.")

        self.activity.log(
            "registration_created",
            json.dumps({
                "action": "registration_created",
                "registration_id": registration.id,
                "email": registration.email,
                "country": registration.country_name,
                "attendance_type": registration.attendance_type,
            }),
            context,
        )
        logger.info(f"New registration {registration.id} for {registration.email}")

        if self.mailer.send_registration_confirmation(
            registration.email, registration.first_name, registration.last_name
        ):
            email_status = "Confirmation email sent successfully."
        else:
            email_status = "Confirmation email failed to send."

        return RegistrationConfirmation(
            registration_id=registration.id,
            email=registration.email,
            full_name=registration.full_name,
            attendance_type=registration.attendance_type,
            country=registration.country_name,
            email_status=email_status,
        )

    # ==========================================
    # ADMIN MUTATIONS
    # ==========================================

    def delete_registration(self, registration_id: Optional[int], context: RequestContext) -> None:
        if registration_id is None:
            raise ValidationError("Registration ID is required")

        try:
            registration = crud.registration.get(self.db, id=registration_id)
            if registration is None:
                raise NotFoundError("Registration not found")

            identity = f"{registration.first_name} {registration.last_name} ({registration.email})"
            deleted = crud.registration.remove(self.db, id=registration_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Delete registration error for id {registration_id}")
            raise InternalError("Failed to delete registration")

        if deleted == 0:
            raise InternalError("Failed to delete registration")

        self.activity.log("delete_registration", f"Deleted registration for {identity}", context)

    def update_attendance(
        self, registration_id: Optional[int], status: Optional[str], context: RequestContext
    ) -> AttendanceResult:
        if registration_id is None or status is None:
            raise ValidationError("Missing required fields: registration_id and status")

        status = status.strip()
        if status not in ATTENDANCE_STATUSES:
            raise ValidationError("Invalid status. Must be: present, absent, or pending")
        if registration_id <= 0:
            raise ValidationError("Invalid registration ID")

        try:
            registration: Optional[Registration] = crud.registration.get(self.db, id=registration_id)
            if registration is None:
                raise NotFoundError("Registration not found")

            registration = crud.registration.set_attendance(self.db, db_obj=registration, status=status)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Attendance update failed for registration {registration_id}")
            raise InternalError("Failed to update attendance status")

        self.activity.log(
            "attendance_update",
            f"Updated venue attendance for {registration.first_name} {registration.last_name} "
            f"(ID: {registration_id}) to: {status}",
            context,
        )

        return AttendanceResult(
            registration_id=registration_id,
            status=status,
            updated_at=registration.venue_attendance_updated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )

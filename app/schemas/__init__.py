# File: app/schemas/__init__.py
from .registration import (
    RegistrationSubmission, RegistrationConfirmation, Registration, DeleteRegistrationRequest
)
from .auth import LoginRequest, AdminSummary
from .attendance import AttendanceUpdate, AttendanceResult

__all__ = [
    "RegistrationSubmission", "RegistrationConfirmation", "Registration", "DeleteRegistrationRequest",
    "LoginRequest", "AdminSummary", "AttendanceUpdate", "AttendanceResult"
]

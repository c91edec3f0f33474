from .base import BaseModel
from .registration import Registration, RegistrationStatus, AttendanceType, VenueAttendanceStatus
from .admin_user import AdminUser, AdminRole
from .admin_log import AdminLog
from .admin_session import AdminSessionRecord

__all__ = [
    "BaseModel", "Registration", "RegistrationStatus", "AttendanceType", "VenueAttendanceStatus",
    "AdminUser", "AdminRole", "AdminLog", "AdminSessionRecord"
]

# File: app/models/registration.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime
from app.models.base import BaseModel
import enum


class RegistrationStatus(enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


class AttendanceType(enum.Enum):
    PHYSICAL = "Physical"
    VIRTUAL = "Virtual"


class VenueAttendanceStatus(enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    PENDING = "pending"


class Registration(BaseModel):
    __tablename__ = "registrations"

    title = Column(String(10), nullable=False)
    gender = Column(String(20), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    age_range = Column(String(20), nullable=False)
    attendance_type = Column(String(20), nullable=False, index=True)  # Physical | Virtual
    country_code = Column(String(5), nullable=False, index=True)
    country_name = Column(String(100), nullable=False, default="")
    state_of_origin = Column(String(100), nullable=False)
    how_did_you_hear = Column(String(50), nullable=False)
    registration_date = Column(DateTime, nullable=False, default=datetime.now, index=True)
    status = Column(String(20), nullable=False, default=RegistrationStatus.ACTIVE.value, index=True)

    # Set by admins at the venue; NULL until first marked
    venue_attendance_status = Column(String(20), nullable=True)
    venue_attendance_updated_at = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

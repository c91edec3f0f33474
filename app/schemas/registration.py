# File: app/schemas/registration.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from email_validator import validate_email, EmailNotValidError
import re

PHONE_PATTERN = re.compile(r"^[+]?[0-9\s\-()]{10,20}$")
TAG_PATTERN = re.compile(r"<[^>]*>")

# Form key -> label used in "<label> is required" messages
REQUIRED_FORM_FIELDS = {
    "title": "Title",
    "gender": "Gender",
    "first_name": "First name",
    "last_name": "Last name",
    "phone": "Phone",
    "email": "Email",
    "age_range": "Age range",
    "attendance_type": "Attendance type",
    "country": "Country",
    "state_of_origin": "State of origin",
    "how_did_you_hear": "How did you hear",
}


# ==========================================
# PUBLIC SUBMISSION
# ==========================================

class RegistrationSubmission(BaseModel):
    """Public registration form; accepts the form's camelCase keys"""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = ""
    gender: Optional[str] = ""
    first_name: Optional[str] = Field("", alias="firstName")
    last_name: Optional[str] = Field("", alias="lastName")
    phone: Optional[str] = ""
    email: Optional[str] = ""
    age_range: Optional[str] = Field("", alias="ageRange")
    attendance_type: Optional[str] = Field("", alias="attendanceType")
    country: Optional[str] = ""
    country_name: Optional[str] = Field("", alias="countryName")
    state_of_origin: Optional[str] = Field("", alias="stateOfOrigin")
    how_did_you_hear: Optional[str] = Field("", alias="howDidYouHear")

    @field_validator("*", mode="before")
    @classmethod
    def clean_text(cls, v):
        if v is None:
            return ""
        return TAG_PATTERN.sub("", str(v)).strip()

    def collect_errors(self) -> List[str]:
        """Return every format problem with the submission (empty when valid)"""
        errors = []

        for field, label in REQUIRED_FORM_FIELDS.items():
            if not getattr(self, field):
                errors.append(f"{label} is required")

        if self.email:
            try:
                validate_email(self.email, check_deliverability=False)
            except EmailNotValidError:
                errors.append("Invalid email format")

        if self.phone and not PHONE_PATTERN.match(self.phone):
            errors.append("Invalid phone number format")

        return errors


class RegistrationConfirmation(BaseModel):
    registration_id: int
    email: str
    full_name: str
    attendance_type: str
    country: str
    email_status: str


# ==========================================
# ADMIN VIEWS
# ==========================================

class Registration(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    gender: str
    first_name: str
    last_name: str
    phone: str
    email: str
    age_range: str
    attendance_type: str
    country_code: str
    country_name: str
    state_of_origin: str
    how_did_you_hear: str
    registration_date: datetime
    status: str
    venue_attendance_status: Optional[str] = None
    venue_attendance_updated_at: Optional[datetime] = None


class DeleteRegistrationRequest(BaseModel):
    id: Optional[int] = None

from pydantic import BaseModel
from typing import Optional


class AttendanceUpdate(BaseModel):
    registration_id: Optional[int] = None
    status: Optional[str] = None


class AttendanceResult(BaseModel):
    registration_id: int
    status: str
    updated_at: str

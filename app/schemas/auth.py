from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    username: Optional[str] = None  # username or email
    password: Optional[str] = None


class AdminSummary(BaseModel):
    id: int
    username: str
    email: str
    full_name: str
    role: str

# File: app/models/admin_session.py
from sqlalchemy import Column, String, Integer, DateTime
from app.models.base import BaseModel


class AdminSessionRecord(BaseModel):
    """Server-side admin session; the client only holds the raw token"""
    __tablename__ = "admin_sessions"

    token_hash = Column(String(64), unique=True, index=True, nullable=False)
    admin_id = Column(Integer, nullable=False, index=True)
    username = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)
    login_time = Column(DateTime, nullable=False)  # UTC

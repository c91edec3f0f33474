# File: app/models/admin_log.py
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from app.models.base import BaseModel


class AdminLog(BaseModel):
    """Append-only audit trail of admin and system actions"""
    __tablename__ = "admin_logs"

    action = Column(String(100), nullable=False, index=True)
    details = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

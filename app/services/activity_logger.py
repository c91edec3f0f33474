# File: app/services/activity_logger.py
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.crud.admin_log import admin_log
from app.db.database import SessionLocal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Caller details recorded alongside every activity entry"""
    ip_address: str = ""
    user_agent: str = ""


class ActivityLogger:
    """
    Best-effort writer for the ``admin_logs`` audit table.

    Each entry is written in its own session so it neither rides on nor
    breaks the caller's transaction. Failures are logged and swallowed.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def log(self, action: str, details: str = "", context: Optional[RequestContext] = None) -> bool:
        context = context or RequestContext()
        db = self.session_factory()
        try:
            admin_log.add(
                db,
                action=action,
                details=details,
                ip_address=context.ip_address,
                user_agent=context.user_agent,
            )
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to log admin activity '{action}': {str(e)}")
            return False
        finally:
            db.close()


activity_logger = ActivityLogger()

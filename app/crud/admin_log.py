# File: app/crud/admin_log.py
from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.admin_log import AdminLog


class CRUDAdminLog(CRUDBase[AdminLog, BaseModel, BaseModel]):

    def add(
        self,
        db: Session,
        *,
        action: str,
        details: str = "",
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AdminLog:
        db_obj = AdminLog(action=action, details=details, ip_address=ip_address, user_agent=user_agent)
        db.add(db_obj)
        db.commit()
        return db_obj

    def get_by_action(self, db: Session, *, action: str) -> List[AdminLog]:
        return db.query(AdminLog).filter(AdminLog.action == action).order_by(AdminLog.id).all()


admin_log = CRUDAdminLog(AdminLog)

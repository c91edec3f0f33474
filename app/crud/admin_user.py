# File: app/crud/admin_user.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy import or_
from app.crud.base import CRUDBase
from app.models.admin_user import AdminUser, AdminRole
from app.core.security import get_password_hash


class CRUDAdminUser(CRUDBase[AdminUser, BaseModel, BaseModel]):

    def get_active_by_login(self, db: Session, *, login: str) -> Optional[AdminUser]:
        """Find an active admin whose username OR email equals ``login``"""
        return (
            db.query(AdminUser)
            .filter(
                or_(AdminUser.username == login, AdminUser.email == login),
                AdminUser.is_active.is_(True),
            )
            .first()
        )

    def get_by_username_or_email(self, db: Session, *, username: str, email: str) -> Optional[AdminUser]:
        return (
            db.query(AdminUser)
            .filter(or_(AdminUser.username == username, AdminUser.email == email))
            .first()
        )

    def create_admin(
        self,
        db: Session,
        *,
        username: str,
        email: str,
        password: str,
        full_name: str,
        role: str = AdminRole.ADMIN.value,
        is_active: bool = True,
    ) -> AdminUser:
        db_obj = AdminUser(
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            full_name=full_name,
            role=role,
            is_active=is_active,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def record_login(self, db: Session, *, admin: AdminUser) -> AdminUser:
        return self.update(db, db_obj=admin, obj_in={"last_login": datetime.now()})


admin_user = CRUDAdminUser(AdminUser)

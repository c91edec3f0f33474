# File: app/crud/registration.py
from typing import Any, Dict
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from sqlalchemy import func, desc
from app.crud.base import CRUDBase
from app.models.registration import Registration, RegistrationStatus
from app.schemas.registration import RegistrationSubmission
from app.schemas.attendance import AttendanceUpdate


class CRUDRegistration(CRUDBase[Registration, RegistrationSubmission, AttendanceUpdate]):

    def email_exists(self, db: Session, *, email: str) -> bool:
        return db.query(Registration.id).filter(Registration.email == email).first() is not None

    def create(self, db: Session, *, obj_in: RegistrationSubmission) -> Registration:
        db_obj = Registration(
            title=obj_in.title,
            gender=obj_in.gender,
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            phone=obj_in.phone,
            email=obj_in.email,
            age_range=obj_in.age_range,
            attendance_type=obj_in.attendance_type,
            country_code=obj_in.country,
            country_name=obj_in.country_name or "",
            state_of_origin=obj_in.state_of_origin,
            how_did_you_hear=obj_in.how_did_you_hear,
            status=RegistrationStatus.ACTIVE.value,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_attendance(self, db: Session, *, db_obj: Registration, status: str) -> Registration:
        return self.update(
            db,
            db_obj=db_obj,
            obj_in={"venue_attendance_status": status, "venue_attendance_updated_at": datetime.now()},
        )

    def get_statistics(self, db: Session) -> Dict[str, Any]:
        """Whole-table breakdowns for the public statistics endpoint"""
        total = db.query(func.count(Registration.id)).scalar()

        by_status = dict(
            db.query(Registration.status, func.count(Registration.id))
            .group_by(Registration.status)
            .all()
        )

        by_attendance = [
            {"attendance_type": attendance_type, "count": count}
            for attendance_type, count in db.query(
                Registration.attendance_type, func.count(Registration.id)
            ).group_by(Registration.attendance_type).all()
        ]

        count_col = func.count(Registration.id).label("count")
        by_country = [
            {"country_name": country_name, "count": count}
            for country_name, count in db.query(Registration.country_name, count_col)
            .group_by(Registration.country_name)
            .order_by(desc(count_col))
            .limit(10)
            .all()
        ]

        by_age = [
            {"age_range": age_range, "count": count}
            for age_range, count in db.query(
                Registration.age_range, func.count(Registration.id)
            ).group_by(Registration.age_range).all()
        ]

        recent = db.query(func.count(Registration.id)).filter(
            Registration.registration_date >= datetime.now() - timedelta(days=7)
        ).scalar()

        return {
            "total": total,
            "active": by_status.get(RegistrationStatus.ACTIVE.value, 0),
            "cancelled": by_status.get(RegistrationStatus.CANCELLED.value, 0),
            "by_attendance": by_attendance,
            "by_country": by_country,
            "by_age": by_age,
            "recent": recent,
        }


registration = CRUDRegistration(Registration)

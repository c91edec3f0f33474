# File: app/services/registration_query.py
"""
Filtered, paginated reads over the registrations table.

Filters arrive as untrusted query-string values. ``RegistrationFilter``
turns them into typed predicates, each of which renders to a SQLAlchemy
expression, so every value reaches the database as a bound parameter.

Example:
    filters = RegistrationFilter.from_params(search="ada", status="active")
    page = RegistrationQueryEngine(db).list_registrations(filters, page="2", limit="25")
    page.rows, page.total, page.statistics
"""
import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import and_, case, desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import InternalQueryError, ValidationError
from app.models.registration import AttendanceType, Registration, RegistrationStatus

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50
MIN_LIMIT = 10
MAX_LIMIT = 100

LEADING_INT = re.compile(r"\s*[+-]?\d+")

SEARCH_COLUMNS = (
    Registration.first_name,
    Registration.last_name,
    Registration.email,
    Registration.phone,
)


# ==========================================
# PAGINATION
# ==========================================

def coerce_int(value: Union[int, str, None], default: int) -> int:
    """
    Lenient integer parse: missing -> default, otherwise the leading digits.

    "25abc" -> 25, "1.5" -> 1, "abc" -> 0.
    """
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    match = LEADING_INT.match(str(value))
    return int(match.group(0)) if match else 0


def clamp_page(value: Union[int, str, None]) -> int:
    return max(1, coerce_int(value, DEFAULT_PAGE))


def clamp_limit(value: Union[int, str, None]) -> int:
    return min(MAX_LIMIT, max(MIN_LIMIT, coerce_int(value, DEFAULT_LIMIT)))


def parse_day(value: Optional[str], name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid {name}. Expected YYYY-MM-DD")


# ==========================================
# PREDICATES
# ==========================================

class Predicate:
    def clause(self) -> ColumnElement:
        raise NotImplementedError


@dataclass(frozen=True)
class SearchPredicate(Predicate):
    """Case-insensitive substring match on any of the search columns"""
    term: str

    def clause(self) -> ColumnElement:
        return or_(*(column.icontains(self.term, autoescape=True) for column in SEARCH_COLUMNS))


@dataclass(frozen=True)
class EqualsPredicate(Predicate):
    column: str
    value: str

    def clause(self) -> ColumnElement:
        return getattr(Registration, self.column) == self.value


@dataclass(frozen=True)
class DateFromPredicate(Predicate):
    """registration_date on or after the start of ``day``"""
    day: date

    def clause(self) -> ColumnElement:
        return Registration.registration_date >= datetime.combine(self.day, time.min)


@dataclass(frozen=True)
class DateToPredicate(Predicate):
    """registration_date on or before the end of ``day``"""
    day: date

    def clause(self) -> ColumnElement:
        return Registration.registration_date < datetime.combine(self.day + timedelta(days=1), time.min)


@dataclass
class RegistrationFilter:
    search: str = ""
    status: str = ""
    country: str = ""
    attendance_type: str = ""
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @classmethod
    def from_params(
        cls,
        search: Optional[str] = None,
        status: Optional[str] = None,
        country: Optional[str] = None,
        attendance_type: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> "RegistrationFilter":
        return cls(
            search=(search or "").strip(),
            status=(status or "").strip(),
            country=(country or "").strip(),
            attendance_type=(attendance_type or "").strip(),
            date_from=parse_day(date_from, "date_from"),
            date_to=parse_day(date_to, "date_to"),
        )

    def predicates(self) -> List[Predicate]:
        predicates: List[Predicate] = []
        if self.search:
            predicates.append(SearchPredicate(self.search))
        if self.status:
            predicates.append(EqualsPredicate("status", self.status))
        if self.country:
            predicates.append(EqualsPredicate("country_code", self.country))
        if self.attendance_type:
            predicates.append(EqualsPredicate("attendance_type", self.attendance_type))
        if self.date_from:
            predicates.append(DateFromPredicate(self.date_from))
        if self.date_to:
            predicates.append(DateToPredicate(self.date_to))
        return predicates

    def apply(self, query: Query) -> Query:
        clauses = [predicate.clause() for predicate in self.predicates()]
        if clauses:
            query = query.filter(and_(*clauses))
        return query

    def as_dict(self) -> Dict[str, str]:
        return {
            "search": self.search,
            "status": self.status,
            "country": self.country,
            "attendance_type": self.attendance_type,
            "date_from": self.date_from.isoformat() if self.date_from else "",
            "date_to": self.date_to.isoformat() if self.date_to else "",
        }


# ==========================================
# QUERY ENGINE
# ==========================================

@dataclass
class RegistrationPage:
    rows: List[Registration]
    total: int
    page: int
    limit: int
    statistics: Dict[str, int] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self) -> Dict[str, int]:
        return {
            "current_page": self.page,
            "per_page": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


class RegistrationQueryEngine:

    def __init__(self, db: Session):
        self.db = db

    def list_registrations(
        self,
        filters: RegistrationFilter,
        page: Union[int, str, None] = None,
        limit: Union[int, str, None] = None,
    ) -> RegistrationPage:
        page = clamp_page(page)
        limit = clamp_limit(limit)
        offset = (page - 1) * limit

        try:
            total = filters.apply(self.db.query(func.count(Registration.id))).scalar() or 0

            # Past the last page; the offset may not even fit a database integer
            if offset >= total:
                rows = []
            else:
                rows = (
                    filters.apply(self.db.query(Registration))
                    .order_by(desc(Registration.registration_date), desc(Registration.id))
                    .offset(offset)
                    .limit(limit)
                    .all()
                )

            statistics = self.dashboard_statistics()
        except (SQLAlchemyError, OverflowError) as e:
            self.db.rollback()
            logger.exception("Error retrieving registrations")
            raise InternalQueryError("Failed to retrieve registrations", cause=str(e))

        return RegistrationPage(rows=rows, total=total, page=page, limit=limit, statistics=statistics)

    def dashboard_statistics(self, today: Optional[date] = None) -> Dict[str, int]:
        """Whole-table summary shown on the dashboard; filters do not apply"""
        today = today or date.today()
        today_start = datetime.combine(today, time.min)
        tomorrow_start = today_start + timedelta(days=1)
        week_start = today_start - timedelta(days=7)

        def count_where(condition: ColumnElement) -> Any:
            return func.count(case((condition, 1)))

        row = self.db.query(
            func.count(Registration.id),
            count_where(Registration.status == RegistrationStatus.ACTIVE.value),
            count_where(Registration.status == RegistrationStatus.CANCELLED.value),
            count_where(Registration.attendance_type == AttendanceType.PHYSICAL.value),
            count_where(Registration.attendance_type == AttendanceType.VIRTUAL.value),
            count_where(and_(
                Registration.registration_date >= today_start,
                Registration.registration_date < tomorrow_start,
            )),
            count_where(Registration.registration_date >= week_start),
        ).one()

        keys = ("total", "active", "cancelled", "physical", "virtual", "today", "this_week")
        return {key: int(value or 0) for key, value in zip(keys, row)}

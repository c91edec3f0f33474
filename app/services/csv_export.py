# File: app/services/csv_export.py
"""
Streaming CSV export of registrations.

Only columns on ``ALLOWED_EXPORT_FIELDS`` can ever be exported, whatever the
client asks for. Rows are pulled from the database in batches and written
out one line at a time, so memory use does not grow with the table.
"""
import csv
import io
import logging
from datetime import datetime
from typing import Any, Callable, Iterator, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.db.database import SessionLocal
from app.models.registration import Registration
from app.services.activity_logger import ActivityLogger, RequestContext, activity_logger
from app.services.registration_query import RegistrationFilter

logger = logging.getLogger(__name__)

ALLOWED_EXPORT_FIELDS = (
    "id",
    "title",
    "gender",
    "first_name",
    "last_name",
    "email",
    "phone",
    "age_range",
    "attendance_type",
    "country_name",
    "state_of_origin",
    "how_did_you_hear",
    "registration_date",
    "status",
)

EXPORT_BATCH_SIZE = 500
EXPORT_FILENAME = "registrations.csv"


def select_fields(requested: Optional[str]) -> List[str]:
    """
    Intersect a comma-separated field list with the allow-list.

    Request order is kept and duplicates dropped. When nothing survives the
    full allow-list is returned.
    """
    selected: List[str] = []
    for name in (requested or "").split(","):
        name = name.strip()
        if name in ALLOWED_EXPORT_FIELDS and name not in selected:
            selected.append(name)
    return selected or list(ALLOWED_EXPORT_FIELDS)


def _format_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value


def _csv_line(values: List[Any]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer).writerow(values)
    return buffer.getvalue()


class CsvExporter:

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        activity: ActivityLogger = activity_logger,
        batch_size: int = EXPORT_BATCH_SIZE,
    ):
        self.session_factory = session_factory
        self.activity = activity
        self.batch_size = batch_size

    def stream(
        self, filters: RegistrationFilter, fields: List[str], context: RequestContext
    ) -> Iterator[str]:
        """
        Yield the export as CSV text chunks: header first, then one row per
        registration, newest first.

        The generator owns its own database session because it keeps running
        after the request handler has returned.
        """
        columns = [getattr(Registration, name) for name in fields]
        db = self.session_factory()
        exported = 0
        try:
            yield _csv_line(fields)

            query = (
                filters.apply(db.query(*columns))
                .order_by(desc(Registration.registration_date), desc(Registration.id))
                .yield_per(self.batch_size)
            )
            for row in query:
                yield _csv_line([_format_value(value) for value in row])
                exported += 1
        except Exception:
            logger.exception("CSV export failed")
            raise
        finally:
            db.close()

        logger.info(f"Exported {exported} registrations as CSV")
        self.activity.log("export_registrations_csv", "Exported registrations CSV", context)


csv_exporter = CsvExporter()

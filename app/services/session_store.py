# File: app/services/session_store.py
"""
Server-side admin session storage.

The client only ever holds an opaque random token. Stores key sessions by the
SHA-256 digest of that token. Expiry is not decided here: the auth guard
compares ``login_time`` against the configured TTL, and asks the store to
purge anything older than that cutoff whenever a new session is opened.
"""
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.core.security import generate_session_token, hash_session_token
from app.models.admin_session import AdminSessionRecord

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what is stored in ``admin_sessions``"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class AdminSession:
    admin_id: int
    username: str
    email: str
    full_name: str
    role: str
    login_time: datetime

    def summary(self) -> dict:
        data = asdict(self)
        data["id"] = data.pop("admin_id")
        data.pop("login_time")
        return data


class SessionStore(ABC):

    @abstractmethod
    def create(self, session: AdminSession) -> str:
        """Persist ``session`` and return the token to hand to the client"""

    @abstractmethod
    def get(self, token: str) -> Optional[AdminSession]:
        """Look a session up by client token; None when unknown"""

    @abstractmethod
    def destroy(self, token: str) -> None:
        """Remove the session; unknown tokens are ignored"""

    @abstractmethod
    def purge_expired(self, older_than: datetime) -> int:
        """Drop every session that started before ``older_than``; returns how many"""


class DatabaseSessionStore(SessionStore):
    """Sessions kept in the ``admin_sessions`` table"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, session: AdminSession) -> str:
        token = generate_session_token()
        record = AdminSessionRecord(token_hash=hash_session_token(token), **asdict(session))
        self.db.add(record)
        self.db.commit()
        return token

    def get(self, token: str) -> Optional[AdminSession]:
        record = (
            self.db.query(AdminSessionRecord)
            .filter(AdminSessionRecord.token_hash == hash_session_token(token))
            .first()
        )
        if not record:
            return None
        return AdminSession(
            admin_id=record.admin_id,
            username=record.username,
            email=record.email,
            full_name=record.full_name,
            role=record.role,
            login_time=record.login_time,
        )

    def destroy(self, token: str) -> None:
        self.db.query(AdminSessionRecord).filter(
            AdminSessionRecord.token_hash == hash_session_token(token)
        ).delete(synchronize_session=False)
        self.db.commit()

    def purge_expired(self, older_than: datetime) -> int:
        removed = (
            self.db.query(AdminSessionRecord)
            .filter(AdminSessionRecord.login_time < older_than)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed


class InMemorySessionStore(SessionStore):
    """Process-local store for single-worker deployments and tests"""

    def __init__(self):
        self._sessions: Dict[str, AdminSession] = {}
        self._lock = threading.Lock()

    def create(self, session: AdminSession) -> str:
        token = generate_session_token()
        with self._lock:
            self._sessions[hash_session_token(token)] = session
        return token

    def get(self, token: str) -> Optional[AdminSession]:
        with self._lock:
            return self._sessions.get(hash_session_token(token))

    def destroy(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(hash_session_token(token), None)

    def purge_expired(self, older_than: datetime) -> int:
        with self._lock:
            stale = [key for key, session in self._sessions.items() if session.login_time < older_than]
            for key in stale:
                del self._sessions[key]
        return len(stale)

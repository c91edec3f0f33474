# File: app/services/auth_service.py
"""
Admin authentication: login, logout and the session gate used by every
admin-only route.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.exceptions import InvalidCredentials, SessionExpired, Unauthenticated, ValidationError
from app.core.security import burn_password_check, verify_password
from app.services.activity_logger import ActivityLogger, RequestContext, activity_logger
from app.services.session_store import AdminSession, SessionStore, utcnow

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(
        self,
        db: Session,
        store: SessionStore,
        activity: ActivityLogger = activity_logger,
        ttl: Optional[timedelta] = None,
    ):
        self.db = db
        self.store = store
        self.activity = activity
        self.ttl = ttl if ttl is not None else timedelta(seconds=settings.session_ttl_seconds)

    def is_expired(self, session: AdminSession, now: Optional[datetime] = None) -> bool:
        now = now or utcnow()
        return now - session.login_time > self.ttl

    def current_session(self, token: Optional[str], now: Optional[datetime] = None) -> Optional[AdminSession]:
        """
        Resolve the session behind ``token``.

        Returns None when there is no session. An expired session is destroyed
        and reported with SessionExpired.
        """
        if not token:
            return None

        session = self.store.get(token)
        if session is None:
            return None

        if self.is_expired(session, now):
            self.store.destroy(token)
            logger.info(f"Admin session for {session.username} expired")
            raise SessionExpired()

        return session

    def require_admin_session(self, token: Optional[str], now: Optional[datetime] = None) -> AdminSession:
        session = self.current_session(token, now)
        if session is None:
            raise Unauthenticated()
        return session

    def login(
        self, username: Optional[str], password: Optional[str], context: RequestContext
    ) -> Tuple[str, AdminSession]:
        """Check credentials and open a session; returns (token, session)"""
        if username is None or password is None:
            raise ValidationError("Username and password are required")

        username = username.strip()
        if not username or not password:
            raise ValidationError("Username and password cannot be empty")

        admin = crud.admin_user.get_active_by_login(self.db, login=username)
        if admin is None:
            burn_password_check(password)
            verified = False
        else:
            verified = verify_password(password, admin.password_hash)

        if not verified:
            self.activity.log("login_failed", f"Failed login attempt for username: {username}", context)
            logger.warning(f"Failed admin login for {username} from {context.ip_address}")
            raise InvalidCredentials()

        crud.admin_user.record_login(self.db, admin=admin)

        purged = self.store.purge_expired(utcnow() - self.ttl)
        if purged:
            logger.info(f"Purged {purged} expired admin sessions")

        session = AdminSession(
            admin_id=admin.id,
            username=admin.username,
            email=admin.email,
            full_name=admin.full_name,
            role=admin.role,
            login_time=utcnow(),
        )
        token = self.store.create(session)

        self.activity.log("login_success", f"Successful login for username: {username}", context)
        logger.info(f"Admin {admin.username} logged in")
        return token, session

    def logout(self, token: Optional[str], context: RequestContext) -> None:
        """Destroy the session if there is one; calling it again is a no-op"""
        if not token:
            return

        session = self.store.get(token)
        if session is not None:
            self.activity.log("logout", f"Logout for username: {session.username}", context)

        self.store.destroy(token)

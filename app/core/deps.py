# File: app/core/deps.py
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from app.db.database import get_db
from app.core.config import settings
from app.services.activity_logger import RequestContext
from app.services.auth_service import AuthService
from app.services.session_store import AdminSession, DatabaseSessionStore, InMemorySessionStore, SessionStore

# Shared by every request when SESSION_BACKEND=memory
_memory_store = InMemorySessionStore()


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    if settings.SESSION_BACKEND == "memory":
        return _memory_store
    return DatabaseSessionStore(db)


def get_auth_service(
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> AuthService:
    return AuthService(db, store)


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(
        ip_address=request.client.host if request.client else "",
        user_agent=request.headers.get("user-agent", ""),
    )


def get_session_token(request: Request) -> Optional[str]:
    """Session token from the cookie, falling back to the header for API clients"""
    return (
        request.cookies.get(settings.SESSION_COOKIE_NAME)
        or request.headers.get(settings.SESSION_HEADER_NAME)
    )


def require_admin(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> AdminSession:
    """
    Gate for admin-only routes.

    Raises Unauthenticated when no session is present and SessionExpired
    (after destroying the session) once it is past its TTL.
    """
    return auth.require_admin_session(token)

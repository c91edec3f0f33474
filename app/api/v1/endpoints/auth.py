# File: app/api/v1/endpoints/auth.py
from typing import Any, Optional
from fastapi import APIRouter, Depends, Response
from app import schemas
from app.core import deps
from app.core.config import settings
from app.core.responses import success_response
from app.services.activity_logger import RequestContext
from app.services.auth_service import AuthService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/login")
def login(
    payload: schemas.LoginRequest,
    response: Response,
    auth: AuthService = Depends(deps.get_auth_service),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    """Admin login with username or email"""
    token, session = auth.login(payload.username, payload.password, context)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )

    return success_response(
        {"admin": schemas.AdminSummary(**session.summary()).model_dump(), "session_id": token},
        "Login successful",
    )


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(deps.get_session_token),
    auth: AuthService = Depends(deps.get_auth_service),
    context: RequestContext = Depends(deps.get_request_context),
) -> Any:
    auth.logout(token, context)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return success_response([], "Logout successful")


@router.get("/check")
def check(
    token: Optional[str] = Depends(deps.get_session_token),
    auth: AuthService = Depends(deps.get_auth_service),
) -> Any:
    """Report whether the caller holds a live admin session"""
    session = auth.current_session(token)
    if session is None:
        return success_response({"authenticated": False}, "Not authenticated")

    return success_response(
        {"authenticated": True, "admin": schemas.AdminSummary(**session.summary()).model_dump()},
        "Authenticated",
    )

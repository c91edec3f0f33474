# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, registrations, attendance, public_registration

# Create main API router
api_router = APIRouter()

api_router.include_router(
    public_registration.router,
    tags=["public-registration"]
)

api_router.include_router(
    auth.router,
    prefix="/admin/auth",
    tags=["admin-authentication"]
)

api_router.include_router(
    registrations.router,
    prefix="/admin/registrations",
    tags=["admin-registrations"]
)

api_router.include_router(
    attendance.router,
    prefix="/admin/attendance",
    tags=["admin-attendance"]
)

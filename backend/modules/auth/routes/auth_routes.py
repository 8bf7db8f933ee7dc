"""
Admin authentication routes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import create_access_token, get_current_admin
from core.database import get_db
from core.error_handling import handle_api_errors

from ..models.admin_models import AdminUser
from ..schemas.auth_schemas import LoginRequest, LoginResponse, AdminProfile
from ..services.auth_service import AdminAuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
@handle_api_errors
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate an admin and return the profile with a bearer token.

    Raises:
        400: Username or password missing
        401: Invalid credentials (same answer for unknown user and wrong password)
    """
    admin = AdminAuthService(db).authenticate(
        credentials.username, credentials.password
    )
    token = create_access_token(admin.id, admin.username)
    return LoginResponse(
        id=admin.id,
        username=admin.username,
        email=admin.email,
        created_at=admin.created_at,
        access_token=token,
    )


@router.get("/me", response_model=AdminProfile)
async def read_current_admin(current_admin: AdminUser = Depends(get_current_admin)):
    return current_admin

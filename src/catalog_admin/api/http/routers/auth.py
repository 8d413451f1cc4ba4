"""Admin sign-in endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.catalog_admin.api.http.deps import get_admin_auth_service, require_admin
from src.catalog_admin.core.models.auth import AuthUser
from src.catalog_admin.core.services import AdminAuthService
from src.catalog_admin.core.services.admin_auth import ACCESS_DENIED_MESSAGE

router = APIRouter(prefix="/admin", tags=["auth"])


class AdminLoginRequest(BaseModel):
    email: str
    password: str


class AdminLoginResponse(BaseModel):
    success: bool
    access_token: str
    token_type: str
    expires_in: int | None = None
    expires_at: int | None = None
    refresh_token: str | None = None


@router.post("/login", response_model=AdminLoginResponse)
async def login(
    credentials: AdminLoginRequest,
    admin_auth: AdminAuthService = Depends(get_admin_auth_service),
):
    """Sign in with email and password; only allow-listed accounts succeed.

    The session is returned to the caller, which owns storing it.
    """
    result = await admin_auth.authenticate_admin(credentials.email, credentials.password)
    if not result.success or result.session is None:
        status_code = 403 if result.error == ACCESS_DENIED_MESSAGE else 401
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "detail": result.error},
        )

    session = result.session
    return AdminLoginResponse(
        success=True,
        access_token=session.access_token,
        token_type=session.token_type,
        expires_in=session.expires_in,
        expires_at=session.expires_at,
        refresh_token=session.refresh_token,
    )


@router.get("/me", response_model=AuthUser)
async def me(user: AuthUser = Depends(require_admin)) -> AuthUser:
    """The admin the bearer token belongs to."""
    return user

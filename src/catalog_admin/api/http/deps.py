"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, Request

from src.catalog_admin.api.http.app_data import ApplicationDependencies
from src.catalog_admin.core.errors import AuthenticationError
from src.catalog_admin.core.models.auth import AuthUser
from src.catalog_admin.core.services import (
    AdminAuthService,
    ImageUploadService,
    ProductService,
)


def get_admin_auth_service(request: Request) -> AdminAuthService:
    """Get the admin authorization service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.admin_auth_service


def get_product_service(request: Request) -> ProductService:
    """Get the product service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.product_service


def get_upload_service(request: Request) -> ImageUploadService:
    """Get the image upload service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.upload_service


def bearer_token(request: Request) -> str:
    """Extract the token from ``Authorization: Bearer <token>``."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthenticationError("Missing Bearer token")

    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Missing Bearer token")
    return token


async def require_admin(
    request: Request,
    token: str = Depends(bearer_token),
    admin_auth: AdminAuthService = Depends(get_admin_auth_service),
) -> AuthUser:
    """Authenticate the bearer token and require an allow-listed email.

    Provider rejections become 401 and allow-list misses 403 through the
    application's ``CatalogError`` handler.
    """
    user = await admin_auth.authorize_token(token)
    request.state.admin_user = user
    return user

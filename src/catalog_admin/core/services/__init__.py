"""Core services exports."""

from .admin_auth import AdminAllowList, AdminAuthService
from .product_service import ProductService
from .supabase import (
    AnonClient,
    AuthService,
    DatabaseService,
    ServiceRoleClient,
    StorageService,
    SupabaseClient,
)
from .upload_service import ImageUploadService, UploadResult

__all__ = [
    # Managed-service handles
    "AnonClient",
    "ServiceRoleClient",
    "SupabaseClient",
    "AuthService",
    "DatabaseService",
    "StorageService",
    # Admin access
    "AdminAllowList",
    "AdminAuthService",
    # Catalog
    "ProductService",
    "ImageUploadService",
    "UploadResult",
]

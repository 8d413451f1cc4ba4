from dataclasses import dataclass

from src.catalog_admin.core.services import (
    AdminAllowList,
    AdminAuthService,
    AnonClient,
    AuthService,
    DatabaseService,
    ImageUploadService,
    ProductService,
    ServiceRoleClient,
    StorageService,
)
from src.catalog_admin.entities.product import ProductRepository
from src.catalog_admin.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    """Process-wide handles built once at startup.

    ``service_client`` bypasses row-level security and is only handed to the
    database and storage services; ``anon_client`` backs the auth service.
    """

    service_client: ServiceRoleClient
    anon_client: AnonClient
    database_service: DatabaseService
    auth_service: AuthService
    storage_service: StorageService
    admin_auth_service: AdminAuthService
    product_service: ProductService
    upload_service: ImageUploadService

    async def aclose(self) -> None:
        await self.service_client.aclose()
        await self.anon_client.aclose()


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    """Construct both capability-scoped clients and the services on top of them."""
    supabase = config.supabase
    allow_list = AdminAllowList(config.admin.emails)
    if not allow_list:
        raise RuntimeError("Admin allow-list is empty; refusing to start")

    service_client = ServiceRoleClient(
        supabase.url, supabase.service_role_key, timeout=supabase.timeout_seconds
    )
    anon_client = AnonClient(
        supabase.url, supabase.anon_key, timeout=supabase.timeout_seconds
    )

    database_service = DatabaseService(service_client)
    auth_service = AuthService(anon_client)
    storage_service = StorageService(service_client)

    return ApplicationDependencies(
        service_client=service_client,
        anon_client=anon_client,
        database_service=database_service,
        auth_service=auth_service,
        storage_service=storage_service,
        admin_auth_service=AdminAuthService(allow_list, auth_service),
        product_service=ProductService(
            ProductRepository(database_service, config.catalog.products_table)
        ),
        upload_service=ImageUploadService(storage_service, config.catalog.image_bucket),
    )

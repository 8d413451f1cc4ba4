"""HTTP application fixtures.

The app's managed-service handles are replaced by in-memory services before
any request; the lifespan (which would build real clients) is never run.
"""

from __future__ import annotations

from collections.abc import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from src.catalog_admin.api.http.app import app
from src.catalog_admin.api.http.app_data import ApplicationDependencies
from src.catalog_admin.core.services import (
    AdminAllowList,
    AdminAuthService,
    AnonClient,
    ImageUploadService,
    ProductService,
    ServiceRoleClient,
    StorageService,
)
from src.catalog_admin.entities.product import ProductRepository
from tests.fixtures.services import (
    ADMIN_EMAIL,
    ADMIN_TOKEN,
    CUSTOMER_TOKEN,
    FakeAuthService,
    InMemoryDatabase,
)
from tests.fixtures.supabase import SUPABASE_URL, RecordingTransport


def _storage_ok(request: httpx.Request) -> httpx.Response:
    key = request.url.path.removeprefix("/storage/v1/object/")
    return httpx.Response(200, json={"Key": key})


@pytest.fixture
def storage_transport() -> RecordingTransport:
    return RecordingTransport(default=_storage_ok)


@pytest.fixture
def app_database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def app_dependencies(
    app_database: InMemoryDatabase, storage_transport: RecordingTransport
) -> ApplicationDependencies:
    """Application dependencies backed by in-memory services."""
    service_client = ServiceRoleClient(
        SUPABASE_URL, "service-role-key", transport=storage_transport
    )
    anon_client = AnonClient(SUPABASE_URL, "anon-key", transport=RecordingTransport())
    auth_service = FakeAuthService()
    storage_service = StorageService(service_client)

    return ApplicationDependencies(
        service_client=service_client,
        anon_client=anon_client,
        database_service=app_database,
        auth_service=auth_service,
        storage_service=storage_service,
        admin_auth_service=AdminAuthService(AdminAllowList([ADMIN_EMAIL]), auth_service),
        product_service=ProductService(ProductRepository(app_database, "products")),
        upload_service=ImageUploadService(storage_service, "product-images"),
    )


@pytest.fixture
def installed_app(app_dependencies: ApplicationDependencies) -> Generator:
    """The FastAPI app with in-memory dependencies installed on its state."""
    previous = getattr(app.state, "app_dependencies", None)
    app.state.app_dependencies = app_dependencies
    try:
        yield app
    finally:
        app.state.app_dependencies = previous


@pytest.fixture
def client(installed_app) -> TestClient:
    """Test client; the lifespan is not entered."""
    return TestClient(installed_app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def customer_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {CUSTOMER_TOKEN}"}

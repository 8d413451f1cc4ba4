"""In-memory stand-ins for the managed services, plus service fixtures."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from src.catalog_admin.core.errors import (
    INVALID_TEXT_REPRESENTATION,
    NOT_NULL_VIOLATION,
    UNIQUE_VIOLATION,
    AuthenticationError,
    InvalidTextRepresentation,
    NotNullViolation,
    UniqueViolation,
)
from src.catalog_admin.core.models.auth import AuthSession, AuthUser
from src.catalog_admin.core.services import (
    AdminAllowList,
    AdminAuthService,
    AuthService,
    ProductService,
)
from src.catalog_admin.entities.product import ProductRepository

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"
ADMIN_TOKEN = "admin-token"
CUSTOMER_EMAIL = "customer@example.com"
CUSTOMER_PASSWORD = "customer-pass"
CUSTOMER_TOKEN = "customer-token"


class InMemoryDatabase:
    """Stands in for ``DatabaseService`` with the products table's constraints.

    Enforces a unique ``slug``, a non-null ``title`` and numeric ``price`` /
    ``review_count`` the way PostgreSQL reports them. An empty title is
    accepted, as there is no CHECK constraint.
    """

    numeric_columns = ("price", "review_count")

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())

    def _check(self, table: str, row: Mapping[str, Any], exclude: dict | None = None) -> None:
        if row.get("title") is None:
            raise NotNullViolation(
                'null value in column "title" of relation "products" violates not-null constraint',
                code=NOT_NULL_VIOLATION,
                details="Failing row contains (...).",
            )
        for column in self.numeric_columns:
            value = row.get(column)
            if isinstance(value, str):
                try:
                    float(value)
                except ValueError:
                    raise InvalidTextRepresentation(
                        f'invalid input syntax for type numeric: "{value}"',
                        code=INVALID_TEXT_REPRESENTATION,
                    ) from None
        for existing in self.rows(table):
            if existing is not exclude and existing.get("slug") == row.get("slug"):
                raise UniqueViolation(
                    'duplicate key value violates unique constraint "products_slug_key"',
                    code=UNIQUE_VIOLATION,
                    details=f"Key (slug)=({row.get('slug')}) already exists.",
                )

    async def insert(self, table: str, row: Mapping[str, Any] | Sequence) -> list[dict]:
        new_row = dict(row)
        self._check(table, new_row)
        self.rows(table).append(new_row)
        return [copy.deepcopy(new_row)]

    async def update(
        self, table: str, patch: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> list[dict]:
        updated = []
        for row in self.rows(table):
            if self._matches(row, filters):
                candidate = {**row, **patch}
                self._check(table, candidate, exclude=row)
                row.update(patch)
                updated.append(copy.deepcopy(row))
        return updated

    async def delete(self, table: str, filters: Mapping[str, Any]) -> list[dict]:
        kept, deleted = [], []
        for row in self.rows(table):
            (deleted if self._matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return deleted

    async def select(
        self,
        table: str,
        filters: Mapping[str, Any] | None = None,
        *,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        rows = [copy.deepcopy(row) for row in self.rows(table) if self._matches(row, filters)]
        if order:
            column, _, direction = order.partition(".")
            rows.sort(key=lambda row: row.get(column) or "", reverse=direction == "desc")
        if columns != "*":
            wanted = [column.strip() for column in columns.split(",")]
            rows = [{column: row.get(column) for column in wanted} for row in rows]
        if limit is not None:
            rows = rows[:limit]
        return rows


class FakeAuthService:
    """Auth provider double with one admin and one ordinary account."""

    def __init__(self) -> None:
        self.accounts = {
            ADMIN_EMAIL: (ADMIN_PASSWORD, AuthUser(id="user-admin", email=ADMIN_EMAIL)),
            CUSTOMER_EMAIL: (
                CUSTOMER_PASSWORD,
                AuthUser(id="user-customer", email=CUSTOMER_EMAIL),
            ),
        }
        self.tokens = {
            ADMIN_TOKEN: self.accounts[ADMIN_EMAIL][1],
            CUSTOMER_TOKEN: self.accounts[CUSTOMER_EMAIL][1],
        }

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthenticationError("Invalid login credentials", code="invalid_credentials")
        user = account[1]
        token = next(token for token, owner in self.tokens.items() if owner is user)
        return AuthSession(
            access_token=token,
            expires_in=3600,
            refresh_token=f"refresh-{user.id}",
            user=user,
        )

    async def get_user(self, access_token: str) -> AuthUser:
        user = self.tokens.get(access_token)
        if user is None:
            raise AuthenticationError("Invalid JWT", code="bad_jwt")
        return user


def sample_row(slug: str = "vintage-camera", **overrides: Any) -> dict[str, Any]:
    row = {
        "slug": slug,
        "title": "Vintage Camera",
        "description": "A working film camera.",
        "price": 120.0,
        "images": ["https://example.com/camera.jpg"],
        "condition": "Used",
        "category": "Cameras",
        "brand": "Leica",
        "currency": "USD",
        "in_stock": True,
    }
    row.update(overrides)
    return row


@pytest.fixture
def in_memory_database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def product_repository(in_memory_database: InMemoryDatabase) -> ProductRepository:
    return ProductRepository(in_memory_database, "products")


@pytest.fixture
def product_service(product_repository: ProductRepository) -> ProductService:
    return ProductService(product_repository)


@pytest.fixture
def admin_allow_list() -> AdminAllowList:
    return AdminAllowList([ADMIN_EMAIL, " Ops@Example.com "])


@pytest.fixture
def fake_auth_service() -> FakeAuthService:
    return FakeAuthService()


@pytest.fixture
def admin_auth_service(
    admin_allow_list: AdminAllowList, fake_auth_service: FakeAuthService
) -> AdminAuthService:
    return AdminAuthService(admin_allow_list, fake_auth_service)


@pytest.fixture
def mock_auth_service() -> Mock:
    """``AuthService`` mock with async methods, for call assertions."""
    service = Mock(spec=AuthService)
    service.sign_in_with_password = AsyncMock()
    service.get_user = AsyncMock()
    return service

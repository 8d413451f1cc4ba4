"""Product repository for data access operations."""

from typing import Any

from src.catalog_admin.core.services.supabase.database import DatabaseService
from src.catalog_admin.entities.product.entity import Product


class ProductRepository:
    """Repository for Product rows, keyed by slug."""

    def __init__(self, database: DatabaseService, table: str = "products"):
        self._database = database
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    async def create(self, row: dict[str, Any]) -> Product:
        """Insert a product and return the stored row."""
        rows = await self._database.insert(self._table, row)
        return Product.model_validate(rows[0])

    async def get(self, slug: str) -> Product | None:
        rows = await self._database.select(self._table, {"slug": slug}, limit=1)
        return Product.model_validate(rows[0]) if rows else None

    async def list_all(self) -> list[Product]:
        rows = await self._database.select(self._table, order="slug.asc")
        return [Product.model_validate(row) for row in rows]

    async def update(self, slug: str, patch: dict[str, Any]) -> Product | None:
        """Apply a patch; ``None`` when no row has ``slug``."""
        rows = await self._database.update(self._table, patch, {"slug": slug})
        return Product.model_validate(rows[0]) if rows else None

    async def delete(self, slug: str) -> bool:
        rows = await self._database.delete(self._table, {"slug": slug})
        return bool(rows)

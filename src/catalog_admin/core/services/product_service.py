"""Product write path.

Create, partial update and delete, delegating persistence to the
``ProductRepository``. There is no locking: concurrent updates to the same
row race at the database's isolation level and the last write wins.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from src.catalog_admin.core.errors import ProductNotFound
from src.catalog_admin.entities.product.entity import Product, ProductCreate
from src.catalog_admin.entities.product.policy import build_update_patch

if TYPE_CHECKING:
    from src.catalog_admin.entities.product.repository import ProductRepository


class ProductService:
    def __init__(self, repository: ProductRepository) -> None:
        self._repo = repository

    async def create_product(self, data: ProductCreate) -> Product:
        """Insert a product for the caller-provided slug.

        Raises:
            UniqueViolation: the slug is already taken.
            NotNullViolation: a required column (e.g. title) is missing.
        """
        log = logger.bind(slug=data.slug)
        product = await self._repo.create(data.to_row())
        log.info("product.created")
        return product

    async def get_product(self, slug: str) -> Product:
        product = await self._repo.get(slug)
        if product is None:
            raise ProductNotFound(slug)
        return product

    async def list_products(self) -> list[Product]:
        return await self._repo.list_all()

    async def update_product(self, slug: str, updates: Mapping[str, Any]) -> Product:
        """Apply the accepted subset of ``updates`` to the product.

        Empty required strings, non-numeric values for numeric columns and
        unknown fields are dropped silently. A rename via ``slug`` is subject
        to the same uniqueness constraint as create.

        Raises:
            ProductNotFound: no product has ``slug``.
            UniqueViolation: the new slug is already taken.
        """
        log = logger.bind(slug=slug)
        patch = build_update_patch(updates)

        ignored = sorted(set(updates) - set(patch))
        if ignored:
            log.bind(ignored_fields=ignored).debug("product.update_fields_ignored")

        if not patch:
            return await self.get_product(slug)

        product = await self._repo.update(slug, patch)
        if product is None:
            raise ProductNotFound(slug)

        if product.slug != slug:
            log.bind(new_slug=product.slug).info("product.renamed")
        log.bind(fields=sorted(patch)).info("product.updated")
        return product

    async def delete_product(self, slug: str) -> None:
        """Delete the product.

        Raises:
            ProductNotFound: no product has ``slug``.
        """
        if not await self._repo.delete(slug):
            raise ProductNotFound(slug)
        logger.bind(slug=slug).info("product.deleted")

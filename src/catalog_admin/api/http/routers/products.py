"""Admin product API router."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from src.catalog_admin.api.http.deps import get_product_service, require_admin
from src.catalog_admin.core.services import ProductService
from src.catalog_admin.entities.product import Product, ProductCreate

router = APIRouter(
    prefix="/admin/products",
    tags=["products"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=list[Product])
async def list_products(
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    """List all products ordered by slug."""
    return await service.list_products()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Create a product; a taken slug is reported as 409."""
    return await service.create_product(product)


@router.get("/{slug}", response_model=Product)
async def get_product(
    slug: str,
    service: ProductService = Depends(get_product_service),
) -> Product:
    return await service.get_product(slug)


@router.patch("/{slug}", response_model=Product)
async def update_product(
    slug: str,
    updates: dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service),
) -> Product:
    """Partially update a product.

    The body is taken as raw JSON so the field policy sees the caller's
    original types: ``{"price": "12"}`` is ignored rather than coerced.
    """
    return await service.update_product(slug, updates)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    slug: str,
    service: ProductService = Depends(get_product_service),
) -> Response:
    await service.delete_product(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

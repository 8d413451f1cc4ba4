"""Entity package: Product."""

from .entity import Product, ProductCreate
from .policy import PRODUCT_FIELD_KINDS, FieldKind, build_update_patch
from .repository import ProductRepository

__all__ = [
    "PRODUCT_FIELD_KINDS",
    "FieldKind",
    "Product",
    "ProductCreate",
    "ProductRepository",
    "build_update_patch",
]

"""Entity: Product."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Product(BaseModel):
    """A product row as stored in the products table.

    Columns the model does not name are kept as extra attributes, so a read
    never drops data the admin UI may rely on.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    slug: str
    title: str | None = None
    description: str | None = None
    price: float | None = None
    images: list[str] | None = None
    condition: str | None = None
    category: str | None = None
    brand: str | None = None
    payee_email: str | None = None
    checkout_link: str | None = None
    currency: str | None = None
    in_stock: bool | None = None
    is_featured: bool | None = None
    meta: dict[str, Any] | None = None
    review_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductCreate(BaseModel):
    """Body of a create request.

    Only ``slug`` is checked here. A missing title is left for the database
    to reject with its not-null constraint.
    """

    model_config = ConfigDict(extra="ignore")

    slug: str
    id: str | None = None
    title: str | None = None
    description: str | None = None
    price: float | None = None
    images: list[str] = Field(default_factory=list)
    condition: str | None = None
    category: str | None = None
    brand: str | None = None
    payee_email: str | None = None
    checkout_link: str | None = None
    currency: str | None = None
    in_stock: bool | None = None
    is_featured: bool | None = None
    meta: dict[str, Any] | None = None
    review_count: int | None = None

    @field_validator("slug")
    @classmethod
    def slug_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Slug must not be empty.")
        return v.strip()

    def to_row(self) -> dict[str, Any]:
        """Columns to insert: only what the caller actually sent."""
        return self.model_dump(exclude_unset=True)

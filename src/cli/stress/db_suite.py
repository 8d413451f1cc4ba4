"""Direct database stress cases, run with the service-role client.

These go straight to the table, so database semantics apply: an empty title
is stored as-is and a non-numeric price is rejected by PostgreSQL. Compare
the API suite, where the same inputs are silently ignored.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from src.catalog_admin.core.errors import (
    INVALID_TEXT_REPRESENTATION,
    NOT_NULL_VIOLATION,
    UNIQUE_VIOLATION,
    DatabaseError,
)
from src.catalog_admin.core.services.supabase.database import DatabaseService
from src.cli.stress.harness import CheckFailed, StressRunner, expect

PARALLEL_UPDATES = 5


def sample_product(slug: str) -> dict[str, Any]:
    return {
        "id": slug,
        "slug": slug,
        "title": "Stress Test Product (DB)",
        "description": "Direct DB insertion test.",
        "price": 99.99,
        "images": ["https://example.com/db-test.jpg"],
        "condition": "New",
        "category": "Test",
        "brand": "TestBrand",
        "payee_email": "test@example.com",
        "checkout_link": "https://example.com/checkout",
        "currency": "USD",
        "in_stock": True,
        "is_featured": False,
        "meta": {"source": "stress-test"},
    }


async def expect_database_error(operation, code: str, missing_message: str) -> None:
    """Await ``operation`` and require it to fail with SQLSTATE ``code``."""
    try:
        await operation
    except DatabaseError as exc:
        if exc.code != code:
            raise CheckFailed(f"Expected error code {code}, got {exc.code}") from exc
        return
    raise CheckFailed(missing_message)


async def run_database_suite(
    database: DatabaseService,
    runner: StressRunner,
    table: str = "products",
    slug: str | None = None,
) -> None:
    test_slug = slug or f"stress-test-db-{int(time.time() * 1000)}"
    product = sample_product(test_slug)
    by_slug = {"slug": test_slug}

    async def create_product() -> None:
        rows = await database.insert(table, product)
        expect(bool(rows), "Insert returned no row")
        expect(rows[0].get("slug") == test_slug, "Slug mismatch")

    async def duplicate_slug() -> None:
        await expect_database_error(
            database.insert(table, product),
            UNIQUE_VIOLATION,
            "Duplicate insert should have failed",
        )

    async def missing_title() -> None:
        invalid = {**product, "id": f"{test_slug}-invalid", "slug": f"{test_slug}-invalid"}
        del invalid["title"]
        await expect_database_error(
            database.insert(table, invalid),
            NOT_NULL_VIOLATION,
            "Insert with missing title should have failed",
        )

    async def update_product() -> None:
        rows = await database.update(
            table, {"title": "Updated Title (DB)", "price": 150.00}, by_slug
        )
        expect(bool(rows), "Update matched no row")
        expect(rows[0].get("title") == "Updated Title (DB)", "Title update failed")
        expect(float(rows[0].get("price")) == 150.0, "Price update failed")
        expect(rows[0].get("brand") == product["brand"], "Unrelated column changed")

    async def empty_title() -> None:
        rows = await database.update(table, {"title": ""}, by_slug)
        expect(bool(rows), "Update matched no row")
        expect(
            rows[0].get("title") == "",
            "DB should allow empty string if no CHECK constraint",
        )

    async def price_as_string() -> None:
        await expect_database_error(
            database.update(table, {"price": "not-a-number"}, by_slug),
            INVALID_TEXT_REPRESENTATION,
            "Update with invalid number string should fail",
        )

    async def parallel_updates() -> None:
        candidates = [100 + i for i in range(PARALLEL_UPDATES)]
        await asyncio.gather(
            *(database.update(table, {"review_count": value}, by_slug) for value in candidates)
        )
        rows = await database.select(table, by_slug, columns="review_count")
        expect(len(rows) == 1, f"Expected one row, found {len(rows)}")
        final = rows[0].get("review_count")
        expect(final in candidates, f"Final review_count {final!r} is none of {candidates}")

    async def cleanup() -> None:
        await database.delete(table, by_slug)
        rows = await database.select(table, by_slug)
        expect(not rows, "Row still present after delete")

    await runner.run("Create Product (Direct Insert)", create_product)
    await runner.run("Duplicate Slug Violation", duplicate_slug)
    await runner.run("Missing Required Field (Title)", missing_title)
    await runner.run("Update Product", update_product)
    await runner.run("Update Required Field to Empty String", empty_title)
    await runner.run("Update Price with String", price_as_string)
    await runner.run("Parallel Updates (Race Condition)", parallel_updates)
    await runner.run("Cleanup", cleanup)

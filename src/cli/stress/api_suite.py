"""End-to-end stress cases against the admin product API.

The client passed in must already carry the admin's bearer token.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from src.cli.stress.harness import CheckFailed, StressRunner, expect


def sample_product(slug: str) -> dict[str, Any]:
    return {
        "slug": slug,
        "title": "Stress Test Product",
        "description": "This is a test product created by the stress test script.",
        "price": 99.99,
        "images": ["https://example.com/image1.jpg"],
        "condition": "New",
        "category": "Test",
        "brand": "TestBrand",
        "checkout_link": "https://example.com/checkout",
        "currency": "USD",
        "in_stock": True,
    }


def require_ok(response: httpx.Response) -> Any:
    """Return the JSON body of a 2xx response, else fail with status and text."""
    if response.is_error:
        raise CheckFailed(f"Status {response.status_code}: {response.text}")
    return response.json() if response.content else None


async def expect_not_found(http: httpx.AsyncClient, slug: str) -> None:
    response = await http.get(f"/admin/products/{slug}")
    expect(
        response.status_code == 404,
        f"Expected 404 for '{slug}', got {response.status_code}",
    )


async def run_api_suite(
    http: httpx.AsyncClient,
    runner: StressRunner,
    slug: str | None = None,
) -> None:
    now_ms = int(time.time() * 1000)
    test_slug = slug or f"stress-test-{now_ms}"
    new_slug = f"stress-test-renamed-{now_ms}"
    product = sample_product(test_slug)

    async def create_valid() -> None:
        data = require_ok(await http.post("/admin/products", json=product))
        expect(data.get("slug") == test_slug, "Created product slug mismatch")

    async def create_duplicate() -> None:
        response = await http.post("/admin/products", json=product)
        expect(
            response.status_code == 409,
            f"Duplicate creation should conflict, got {response.status_code}: {response.text}",
        )
        code = response.json().get("code")
        expect(code == "23505", f"Expected unique violation 23505, got {code!r}")

    async def update_normal() -> None:
        data = require_ok(
            await http.patch(
                f"/admin/products/{test_slug}",
                json={"title": "Updated Stress Test Product", "price": 100.00},
            )
        )
        expect(data.get("title") == "Updated Stress Test Product", "Title not updated")
        expect(data.get("price") == 100, "Price not updated")
        expect(data.get("brand") == product["brand"], "Unrelated field changed")

    async def update_empty_title() -> None:
        data = require_ok(await http.patch(f"/admin/products/{test_slug}", json={"title": ""}))
        expect(
            data.get("title") != "",
            "Title should not have been updated to empty string",
        )

    async def update_invalid_types() -> None:
        response = await http.patch(
            f"/admin/products/{test_slug}", json={"price": "invalid-price"}
        )
        # Rejecting the body outright is fine; anything else must leave the price alone.
        if response.status_code in (400, 422):
            return
        data = require_ok(response)
        expect(data.get("price") == 100, f"Price changed to {data.get('price')!r}")

    async def rename_slug() -> None:
        data = require_ok(
            await http.patch(f"/admin/products/{test_slug}", json={"slug": new_slug})
        )
        expect(data.get("slug") == new_slug, "Slug not updated")
        await expect_not_found(http, test_slug)

    async def delete_product() -> None:
        require_ok(await http.delete(f"/admin/products/{new_slug}"))
        await expect_not_found(http, new_slug)

    await runner.run("Create Valid Product", create_valid)
    await runner.run("Create Duplicate Product", create_duplicate)
    await runner.run("Update Product (Normal)", update_normal)
    await runner.run("Update Required Field to Empty", update_empty_title)
    await runner.run("Update with Invalid Types", update_invalid_types)
    await runner.run("Rename Slug", rename_slug)
    await runner.run("Delete Product", delete_product)

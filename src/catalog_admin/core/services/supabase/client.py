"""HTTP handles for the hosted Supabase project.

Two capability-scoped handles exist: ``ServiceRoleClient`` (service-role key,
bypasses row-level security) and ``AnonClient`` (anonymous key). Each wraps a
single pooled ``httpx.AsyncClient`` that is created once per process and
closed at shutdown. Services receive the handle they are allowed to use in
their constructor.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger


class SupabaseClient:
    """Base handle; use one of the role-specific subclasses."""

    role: str = "unknown"

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("Supabase URL is required")
        if not api_key:
            raise ValueError(f"Supabase {self.role} key is required")

        self.url = url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
        )
        logger.debug("Created {} client for {}", self.role, self.url)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request to the project; no retries."""
        return await self._http.request(
            method,
            path,
            params=params,
            json=json,
            content=content,
            headers=headers,
        )

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def aclose(self) -> None:
        await self._http.aclose()
        logger.debug("Closed {} client", self.role)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False


class ServiceRoleClient(SupabaseClient):
    """Elevated handle configured with the service-role key."""

    role = "service_role"


class AnonClient(SupabaseClient):
    """Normal-privilege handle configured with the anonymous key."""

    role = "anon"


def response_payload(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to the raw text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text

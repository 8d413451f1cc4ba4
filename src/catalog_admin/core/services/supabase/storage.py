"""Object uploads through the project's storage endpoint."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from loguru import logger

from src.catalog_admin.core.errors import StorageError
from src.catalog_admin.core.services.supabase.client import SupabaseClient, response_payload


def clean_path(path: str) -> str:
    """Strip surrounding slashes and collapse repeated ones."""
    return "/".join(part for part in path.split("/") if part)


class StorageService:
    """Upload objects to a bucket and build their public URLs."""

    def __init__(self, client: SupabaseClient, cache_control: str = "3600") -> None:
        self._client = client
        self._cache_control = cache_control

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        upsert: bool = True,
    ) -> str:
        """Store ``content`` at ``bucket/path`` and return the stored path.

        With ``upsert`` an existing object at the same path is overwritten
        instead of reported as a conflict.

        Raises:
            StorageError: carrying the provider's message.
        """
        object_path = clean_path(path)
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true" if upsert else "false",
            "cache-control": f"max-age={self._cache_control}",
        }
        try:
            response = await self._client.request(
                "POST",
                f"/storage/v1/object/{bucket}/{quote(object_path, safe='/')}",
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise StorageError(f"Storage request failed: {exc}") from exc

        payload = response_payload(response)
        if response.is_error:
            message = None
            code = None
            if isinstance(payload, dict):
                message = payload.get("message") or payload.get("error")
                code = payload.get("error") or payload.get("statusCode")
            elif isinstance(payload, str):
                message = payload or None
            logger.bind(bucket=bucket, path=object_path, status_code=response.status_code).warning(
                "storage.upload_failed: {}", message
            )
            raise StorageError(message, code=str(code) if code else None)

        logger.bind(bucket=bucket, path=object_path, size=len(content)).info("storage.uploaded")
        return object_path

    def get_public_url(self, bucket: str, path: str) -> str:
        return (
            f"{self._client.url}/storage/v1/object/public/"
            f"{bucket}/{quote(clean_path(path), safe='/')}"
        )

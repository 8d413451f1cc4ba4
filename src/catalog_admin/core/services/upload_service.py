"""Product image uploads into object storage."""

from __future__ import annotations

from pydantic import BaseModel

from src.catalog_admin.core.services.supabase.storage import StorageService


class UploadResult(BaseModel):
    url: str
    path: str


class ImageUploadService:
    """Stores images in a single bucket, overwriting existing objects."""

    def __init__(self, storage: StorageService, bucket: str = "product-images") -> None:
        self._storage = storage
        self._bucket = bucket

    async def upload_image(
        self, path: str, content: bytes, content_type: str | None = None
    ) -> UploadResult:
        stored_path = await self._storage.upload(
            self._bucket, path, content, content_type=content_type, upsert=True
        )
        return UploadResult(
            url=self._storage.get_public_url(self._bucket, stored_path),
            path=stored_path,
        )

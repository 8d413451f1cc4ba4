"""Unit tests for product image uploads."""

from unittest.mock import AsyncMock, Mock

import pytest

from src.catalog_admin.core.errors import StorageError
from src.catalog_admin.core.services import ImageUploadService, StorageService
from tests.fixtures.supabase import json_response


@pytest.fixture
def upload_service(service_client) -> ImageUploadService:
    return ImageUploadService(StorageService(service_client), "product-images")


class TestImageUploadService:
    @pytest.mark.asyncio
    async def test_returns_public_url_and_path(self, upload_service, transport):
        """Test an upload returns the public URL and path."""
        transport.queue(json_response(200, {"Key": "product-images/cameras/leica.jpg"}))

        result = await upload_service.upload_image("cameras/leica.jpg", b"jpeg", "image/jpeg")

        assert result.path == "cameras/leica.jpg"
        assert result.url == (
            "https://project.supabase.test/storage/v1/object/public/"
            "product-images/cameras/leica.jpg"
        )
        assert transport.last_request.headers["x-upsert"] == "true"

    @pytest.mark.asyncio
    async def test_same_path_twice_overwrites(self, upload_service, transport):
        """Test uploading the same path twice overwrites."""
        first = await upload_service.upload_image("a.jpg", b"one", "image/jpeg")
        second = await upload_service.upload_image("a.jpg", b"two", "image/jpeg")

        assert first == second
        assert [request.content for request in transport.requests] == [b"one", b"two"]

    @pytest.mark.asyncio
    async def test_storage_failure_propagates(self):
        """Test storage errors propagate to the caller."""
        storage = Mock(spec=StorageService)
        storage.upload = AsyncMock(side_effect=StorageError("Bucket not found", code="404"))
        service = ImageUploadService(storage)

        with pytest.raises(StorageError, match="Bucket not found"):
            await service.upload_image("a.jpg", b"x", "image/jpeg")

        storage.upload.assert_awaited_once_with(
            "product-images", "a.jpg", b"x", content_type="image/jpeg", upsert=True
        )
        storage.get_public_url.assert_not_called()

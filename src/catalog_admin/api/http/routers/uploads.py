"""Image upload endpoint proxying files into object storage."""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.catalog_admin.api.http.deps import get_upload_service, require_admin
from src.catalog_admin.core.errors import BadRequest
from src.catalog_admin.core.services import ImageUploadService, UploadResult

router = APIRouter(prefix="/admin", tags=["uploads"], dependencies=[Depends(require_admin)])


@router.post("/upload-image", response_model=UploadResult)
async def upload_image(
    file: UploadFile | None = File(default=None),
    path: str | None = Form(default=None),
    service: ImageUploadService = Depends(get_upload_service),
) -> UploadResult:
    """Store the uploaded file at ``path``, overwriting any existing object."""
    if file is None:
        raise BadRequest("No file provided")
    if not path or not path.strip():
        raise BadRequest("No path provided")

    content = await file.read()
    return await service.upload_image(path, content, content_type=file.content_type)

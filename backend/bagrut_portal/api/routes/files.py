"""API routes for file upload and retrieval from the local blob store."""

import logging

from fastapi import APIRouter, HTTPException, Response, UploadFile, status

from bagrut_portal.api.deps import AdminUser, CurrentUser, Files
from bagrut_portal.config import get_settings, sanitize_error
from bagrut_portal.schemas import FileUploadResponse
from bagrut_portal.storage.files import LOCAL_SCHEME, StorageQuotaError, decode_data_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])
settings = get_settings()


@router.post("/", response_model=FileUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(file: UploadFile, current_user: CurrentUser, files: Files) -> FileUploadResponse:
    """
    Store an uploaded file and return its local:// locator.

    The locator goes into exam_file_url, image_url, attachment_url, etc.
    """
    content = await file.read()
    if len(content) > settings.max_upload_size_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is larger than {settings.max_upload_size_bytes} bytes",
        )

    content_type = file.content_type or "application/octet-stream"
    try:
        url = await files.store_file(content, content_type)
    except StorageQuotaError as e:
        logger.error("Upload of %s by %s failed: %s", file.filename, current_user.id, e)
        raise HTTPException(status_code=status.HTTP_507_INSUFFICIENT_STORAGE, detail=str(e))

    return FileUploadResponse(
        url=url,
        filename=file.filename,
        content_type=content_type,
        size_bytes=len(content),
    )


@router.get("/{file_id}")
async def download_file(file_id: str, files: Files) -> Response:
    """Serve a stored file with its original content type."""
    data_url = await files.get_file_data(f"{LOCAL_SCHEME}{file_id}")
    if data_url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    try:
        content_type, content = decode_data_url(data_url)
    except ValueError as e:
        logger.error("Stored file %s is corrupt: %s", file_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=sanitize_error(e, generic_message="Stored file is unreadable."),
        )
    return Response(content=content, media_type=content_type)


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(file_id: str, admin: AdminUser, files: Files) -> None:
    """Delete a stored file."""
    await files.delete_file(f"{LOCAL_SCHEME}{file_id}")

"""
Image upload and retrieval endpoints.
Stored images are served through the API (not static files) so a replaced
image shows up immediately instead of from a cache.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse

from sports_store.core.config import Settings, get_settings
from sports_store.core.exceptions import (
    NotFoundError,
    UnexpectedError,
    ValidationError,
    MSG_FILE_NOT_FOUND,
    MSG_UPLOAD_FAILED,
)
from sports_store.services.prometheus_metrics import metrics
from sports_store.services.upload_service import ImageUploadService, check_form_body, content_type_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])

NO_CACHE_HEADERS = {
    "Content-Disposition": "inline",
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def get_upload_service(settings: Settings = Depends(get_settings)) -> ImageUploadService:
    return ImageUploadService(
        upload_dir=settings.upload_directory,
        max_size_bytes=settings.MAX_UPLOAD_SIZE_BYTES,
        url_prefix=settings.UPLOAD_URL_PREFIX,
    )


@router.post("/upload")
async def upload_image(
    request: Request,
    upload_service: ImageUploadService = Depends(get_upload_service),
):
    """
    Accept one image in the multipart field `file`.
    A body that is not a complete form is an upload failure (500).

    Returns:
        {"success": true, "imageUrl": "/api/uploads/<name>", "fileName": "<name>"}
    """
    try:
        check_form_body(request.headers.get("content-type"), await request.body())
        async with request.form() as form:
            artifact = await upload_service.save_upload(form.get("file"))
    except ValidationError as e:
        logger.warning(f"Upload rejected: {e.message} {e.details}")
        metrics.track_upload("rejected")
        raise
    except Exception as e:
        logger.exception(f"❌ Upload error: {e}")
        metrics.track_upload("failed")
        raise UnexpectedError(MSG_UPLOAD_FAILED) from e

    metrics.track_upload("stored", artifact.size)
    return artifact.to_response()


@router.get("/uploads/{file_path:path}")
async def serve_upload(
    file_path: str,
    upload_service: ImageUploadService = Depends(get_upload_service),
):
    """Serve a stored image inline with caching disabled."""
    path = upload_service.resolve_stored_path(file_path)
    if path is None:
        raise NotFoundError(MSG_FILE_NOT_FOUND)

    return FileResponse(
        path,
        media_type=content_type_for(path),
        headers=NO_CACHE_HEADERS,
    )

# upload_service.py
"""
Image upload handling: validate an uploaded image, store it under the upload
directory as {epoch_ms}-{original_filename} and hand back its access URL.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from sports_store.core.exceptions import (
    ValidationError,
    MSG_NO_FILE_SELECTED,
    MSG_ONLY_IMAGES,
    MSG_FILE_TOO_LARGE,
)
from sports_store.utils.image_urls import build_upload_url, now_ms

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE_BYTES = 5 * 1024 * 1024

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
}
# Unknown extensions are still served as an image so browsers display rather than download
DEFAULT_CONTENT_TYPE = "image/jpeg"

FORM_MEDIA_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _header_param(params: str, name: str) -> Optional[str]:
    for param in params.split(";"):
        key, _, value = param.partition("=")
        if key.strip().lower() == name:
            return value.strip().strip('"') or None
    return None


def check_form_body(content_type: Optional[str], body: bytes) -> None:
    """
    Raise ValueError unless the request body is a complete form submission.
    A multipart body must end with its closing boundary.
    """
    media_type, _, params = (content_type or "").partition(";")
    media_type = media_type.strip().lower()
    if media_type not in FORM_MEDIA_TYPES:
        raise ValueError(f"Expected form data, got '{media_type or 'no content type'}'")
    if media_type == "multipart/form-data":
        boundary = _header_param(params, "boundary")
        if not boundary or b"--" + boundary.encode("latin-1") + b"--" not in body:
            raise ValueError("Incomplete multipart body")


@dataclass(frozen=True)
class StoredArtifact:
    store_name: str
    path: Path
    url: str
    size: int

    def to_response(self) -> Dict[str, Any]:
        return {"success": True, "imageUrl": self.url, "fileName": self.store_name}


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lstrip(".").lower(), DEFAULT_CONTENT_TYPE)


class ImageUploadService:
    def __init__(
        self,
        upload_dir: Path,
        max_size_bytes: int = MAX_UPLOAD_SIZE_BYTES,
        url_prefix: str = "/api/uploads",
        clock: Callable[[], int] = now_ms,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size_bytes = max_size_bytes
        self.url_prefix = url_prefix
        self.clock = clock

    def validate(self, filename: Optional[str], content_type: Optional[str], size: Optional[int]) -> None:
        """
        Check an upload in order: presence, image type, size.
        The first failing check raises ValidationError. A size of None skips
        the size check (checked again once the payload has been read).
        """
        if not filename:
            raise ValidationError(MSG_NO_FILE_SELECTED)
        if not (content_type or "").startswith("image/"):
            raise ValidationError(MSG_ONLY_IMAGES, {"content_type": content_type})
        if size is not None and size > self.max_size_bytes:
            raise ValidationError(MSG_FILE_TOO_LARGE, {"size": size, "max": self.max_size_bytes})

    def make_store_name(self, filename: str) -> str:
        return f"{self.clock()}-{filename}"

    def store(self, filename: Optional[str], content_type: Optional[str], payload: bytes) -> StoredArtifact:
        """Validate and write the payload. Returns the stored artifact."""
        # Only keep the final path component of a client-supplied name
        original_name = os.path.basename((filename or "").replace("\\", "/"))
        self.validate(original_name, content_type, len(payload))

        store_name = self.make_store_name(original_name)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / store_name

        if path.exists():
            # Same millisecond, same original name: the newer upload wins
            logger.warning(f"⚠️ Overwriting existing upload {store_name}")

        with open(path, "wb") as f:
            f.write(payload)

        logger.info(f"✅ Stored upload {store_name} ({len(payload)} bytes, {content_type})")
        return StoredArtifact(
            store_name=store_name,
            path=path,
            url=build_upload_url(store_name, self.url_prefix),
            size=len(payload),
        )

    async def save_upload(self, file: Any) -> StoredArtifact:
        """Store the `file` value of a parsed form. Plain text values are not files."""
        if file is None or file == "":
            raise ValidationError(MSG_NO_FILE_SELECTED)
        if not isinstance(file, UploadFile):
            raise TypeError(f"Expected an uploaded file, got {type(file).__name__}")
        # Reject on the declared size before reading the body when it is known
        self.validate(file.filename, file.content_type, file.size)
        payload = await file.read()
        return await run_in_threadpool(self.store, file.filename, file.content_type, payload)

    def resolve_stored_path(self, relative_path: str) -> Optional[Path]:
        """
        Map a retrieval path to a stored file, or None when it does not exist
        or points outside the upload directory.
        """
        # Drop query residue such as "image.jpg?t=123"
        parts = [part.split("?", 1)[0] for part in relative_path.split("/") if part]
        parts = [part for part in parts if part]
        if not parts:
            return None

        root = self.upload_dir.resolve()
        candidate = root.joinpath(*parts).resolve()
        if root not in candidate.parents:
            return None
        if not candidate.is_file():
            return None
        return candidate

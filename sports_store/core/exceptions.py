"""
Error taxonomy for the sports store API.
Every error carries the HTTP status it maps to; the application renders
them as {"error": message}.
"""

from typing import Any, Dict, Optional

# Client-facing messages
MSG_NO_FILE_SELECTED = "Không có file được chọn"
MSG_ONLY_IMAGES = "Chỉ chấp nhận file ảnh"
MSG_FILE_TOO_LARGE = "File quá lớn. Kích thước tối đa 5MB"
MSG_UPLOAD_FAILED = "Lỗi khi upload ảnh"
MSG_FILE_NOT_FOUND = "File not found"
MSG_INTERNAL_ERROR = "Internal server error"


class StoreError(Exception):
    """Base exception for the sports store"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(StoreError):
    """Client-caused error. Never retried."""

    status_code = 400


class NotFoundError(StoreError):
    status_code = 404


class UnexpectedError(StoreError):
    """Infrastructure failure. The message stays generic; details are only logged."""

    status_code = 500

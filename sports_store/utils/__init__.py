"""
Utility modules for the Sports Store API.
"""

from sports_store.utils.image_urls import (
    build_upload_url,
    get_image_url,
    now_ms
)

__all__ = [
    "build_upload_url",
    "get_image_url",
    "now_ms"
]

"""
Image URL helpers.

Stored images are served through /api/uploads/ rather than the static
/uploads/ path, and every rendered URL gets a fresh ?t= parameter so a
browser or CDN never shows a stale copy after an image is replaced.
"""

import time
from typing import Optional

API_UPLOADS_PREFIX = "/api/uploads/"
LEGACY_UPLOADS_PREFIX = "/uploads/"


def now_ms() -> int:
    """Current epoch time in milliseconds."""
    return int(time.time() * 1000)


def build_upload_url(store_name: str, prefix: str = API_UPLOADS_PREFIX) -> str:
    return f"{prefix.rstrip('/')}/{store_name}"


def get_image_url(url: Optional[str], timestamp: Optional[int] = None) -> str:
    """
    Rewrite an image URL for display.

    Args:
        url: stored image URL (may be empty or None)
        timestamp: cache-busting value; defaults to the current epoch ms

    Returns:
        str: "" for empty input, a /api/uploads/ URL with a fresh ?t= for
        upload URLs (legacy /uploads/ paths are rewritten), anything else unchanged
    """
    if not url:
        return ""

    if url.startswith(API_UPLOADS_PREFIX):
        path = url
    elif url.startswith(LEGACY_UPLOADS_PREFIX):
        path = API_UPLOADS_PREFIX + url[len(LEGACY_UPLOADS_PREFIX):]
    else:
        # External or other static URL
        return url

    # Replace, never stack, an earlier cache-busting query
    path = path.split("?", 1)[0]
    stamp = now_ms() if timestamp is None else timestamp
    return f"{path}?t={stamp}"

"""
Prometheus metrics for the Sports Store API.

Usage:
    from sports_store.services.prometheus_metrics import metrics

    metrics.track_upload("stored", size_bytes=1024)
"""

import logging
import threading
from typing import Optional

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

_metrics_instance: Optional['StoreMetrics'] = None
_metrics_lock = threading.Lock()


class StoreMetrics:
    """HTTP request metrics plus upload outcomes."""

    UPLOAD_RESULTS = ("stored", "rejected", "failed")

    def __init__(self):
        # =====================================================================
        # HTTP REQUEST METRICS
        # =====================================================================

        self.http_requests_total = Counter(
            'sports_store_http_requests_total',
            'Total HTTP requests',
            ['method', 'endpoint', 'status_code']
        )

        self.http_request_duration = Histogram(
            'sports_store_http_request_duration_seconds',
            'HTTP request duration',
            ['method', 'endpoint'],
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
        )

        # =====================================================================
        # UPLOAD METRICS
        # =====================================================================

        self.uploads_total = Counter(
            'sports_store_uploads_total',
            'Image uploads by outcome',
            ['result']  # stored / rejected / failed
        )

        self.upload_size_bytes = Histogram(
            'sports_store_upload_size_bytes',
            'Size of stored uploads',
            buckets=(10_000, 100_000, 500_000, 1_000_000, 2_500_000, 5_242_880)
        )

    def track_upload(self, result: str, size_bytes: Optional[int] = None) -> None:
        if result not in self.UPLOAD_RESULTS:
            logger.warning(f"⚠️ Unknown upload result label: {result}")
            return
        self.uploads_total.labels(result=result).inc()
        if result == "stored" and size_bytes is not None:
            self.upload_size_bytes.observe(size_bytes)


def get_metrics() -> StoreMetrics:
    """Get or create the singleton metrics instance (thread-safe)."""
    global _metrics_instance

    if _metrics_instance is None:
        with _metrics_lock:
            if _metrics_instance is None:
                _metrics_instance = StoreMetrics()

    return _metrics_instance


metrics = get_metrics()

"""
Health checks for the database and the upload directory.
"""

import logging
import os
import shutil
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from sports_store.core.config import settings
from sports_store.core.migrations import MIGRATIONS, current_version

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HealthService:
    def __init__(self, engine: Optional[Engine] = None, upload_dir: Optional[Path] = None):
        self._engine = engine
        self.upload_dir = Path(upload_dir) if upload_dir is not None else settings.upload_directory

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            from sports_store.core.database import engine
            self._engine = engine
        return self._engine

    async def get_liveness_status(self) -> Dict[str, Any]:
        return {"status": "alive", "service": "sports-store", "timestamp": _now()}

    async def get_readiness_status(self) -> Dict[str, Any]:
        """Ready when the database answers and uploads can be written."""
        database = await run_in_threadpool(self._check_database)
        uploads = await run_in_threadpool(self._check_upload_directory)
        ready = database["status"] != HealthStatus.UNHEALTHY and uploads["status"] != HealthStatus.UNHEALTHY
        return {
            "ready": ready,
            "timestamp": _now(),
            "components": {"database": database, "uploads": uploads},
        }

    def _check_database(self) -> Dict[str, Any]:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            version = current_version(self.engine)
            latest = MIGRATIONS[-1].version
            return {
                # Reachable but behind on migrations still serves uploads
                "status": HealthStatus.HEALTHY if version >= latest else HealthStatus.DEGRADED,
                "dialect": self.engine.dialect.name,
                "schema_version": version,
                "latest_version": latest,
            }
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {"status": HealthStatus.UNHEALTHY, "error": str(e)}

    def _check_upload_directory(self) -> Dict[str, Any]:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            if not os.access(self.upload_dir, os.W_OK):
                return {"status": HealthStatus.UNHEALTHY, "error": "upload directory is not writable"}
            usage = shutil.disk_usage(self.upload_dir)
            percent_used = (usage.used / usage.total) * 100
            status = HealthStatus.HEALTHY
            if percent_used > 90:
                status = HealthStatus.DEGRADED
            return {
                "status": status,
                "path": str(self.upload_dir),
                "free_gb": round(usage.free / (1024 ** 3), 2),
                "percent_used": round(percent_used, 2),
            }
        except Exception as e:
            logger.warning(f"Upload directory check failed: {e}")
            return {"status": HealthStatus.UNHEALTHY, "error": str(e)}


health_service = HealthService()


def get_health_service() -> HealthService:
    return health_service

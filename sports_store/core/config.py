import os
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

UPLOAD_SUBDIRECTORY = "uploads"


class Settings(BaseSettings):
    # Full SQLAlchemy URL; when unset it is composed from the DB_* values below
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "3306"))
    DB_USER: str = os.getenv("DB_USER", "root")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DB_NAME: str = os.getenv("DB_NAME", "sports_store")

    PUBLIC_DIRECTORY: str = os.getenv("PUBLIC_DIRECTORY", "./public")
    MAX_UPLOAD_SIZE_BYTES: int = int(os.getenv("MAX_UPLOAD_SIZE_BYTES", str(5 * 1024 * 1024)))
    UPLOAD_URL_PREFIX: str = os.getenv("UPLOAD_URL_PREFIX", "/api/uploads")

    AUTO_MIGRATE: bool = os.getenv("AUTO_MIGRATE", "false").lower() == "true"
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "")
    ENABLE_PROMETHEUS_METRICS: bool = os.getenv("ENABLE_PROMETHEUS_METRICS", "true").lower() in ("1", "true", "yes")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+pymysql",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    @property
    def upload_directory(self) -> Path:
        return Path(self.PUBLIC_DIRECTORY) / UPLOAD_SUBDIRECTORY

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings

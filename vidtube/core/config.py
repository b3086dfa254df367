"""
VidTube Core Settings.

All values can be overridden through ``VIDTUBE_``-prefixed environment
variables or a local ``.env`` file.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8",
        env_prefix="VIDTUBE_", case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "VidTube"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["*"]

    # ── PostgreSQL ───────────────────────────────────────────────────────
    db_host: str = "postgres"
    db_port: int = 5432
    db_user: str = "vidtube"
    db_password: str = "vidtube_secret"
    db_name: str = "vidtube"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_echo: bool = False
    # Full SQLAlchemy URL; takes precedence over the db_* parts when set.
    database_dsn: Optional[str] = None

    @property
    def database_url(self) -> str:
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # ── MinIO / S3 (media host) ──────────────────────────────────────────
    minio_endpoint: str = "minio:9000"
    minio_access_key: str = "vidtube_minio"
    minio_secret_key: str = "vidtube_minio_secret"
    minio_bucket: str = "vidtube-media"
    minio_secure: bool = False
    # Public base used to build asset urls, e.g. a CDN in front of the bucket.
    media_public_base_url: Optional[str] = None

    # ── Duration probe ───────────────────────────────────────────────────
    ffprobe_binary: str = "ffprobe"
    ffprobe_timeout_seconds: float = 30.0

    # ── Uploads ──────────────────────────────────────────────────────────
    upload_temp_dir: str = "/tmp/vidtube"

    # ── Auth collaborator ────────────────────────────────────────────────
    # Header set by the upstream gateway once the token has been verified.
    actor_header: str = "X-User-Id"

    # ── Listings ─────────────────────────────────────────────────────────
    page_size_default: int = 10
    page_size_max: int = 100

    # ── Product rules ────────────────────────────────────────────────────
    allow_self_subscription: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()

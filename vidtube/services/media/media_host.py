"""
VidTube Media Host — remote storage for uploaded video files and images.

The core only keeps the returned url; the public id used for deletion is
always derived back from that url.
"""
from __future__ import annotations

import asyncio
import logging
import mimetypes
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import urlparse

from minio import Minio
from minio.error import S3Error

from vidtube.core.config import Settings, get_settings
from vidtube.core.errors import Internal

logger = logging.getLogger(__name__)


class MediaHostError(Internal):
    default_message = "Media host request failed"


@dataclass
class UploadedAsset:
    url: str
    public_id: str


class MediaHost(Protocol):
    async def upload(self, local_path: Path) -> UploadedAsset: ...

    async def delete(self, public_id: str) -> None: ...


def public_id_from_url(url: str) -> str:
    """``https://host/bucket/ab12cd.mp4`` → ``ab12cd``."""
    last = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    return last.split(".")[0]


class MinioMediaHost:
    """S3-compatible media host backed by a MinIO bucket."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client = Minio(
            self.settings.minio_endpoint,
            access_key=self.settings.minio_access_key,
            secret_key=self.settings.minio_secret_key,
            secure=self.settings.minio_secure,
        )
        self._bucket_ready = False

    @property
    def base_url(self) -> str:
        if self.settings.media_public_base_url:
            return self.settings.media_public_base_url.rstrip("/")
        scheme = "https" if self.settings.minio_secure else "http"
        return f"{scheme}://{self.settings.minio_endpoint}/{self.settings.minio_bucket}"

    def _ensure_bucket(self):
        if self._bucket_ready:
            return
        bucket = self.settings.minio_bucket
        if not self._client.bucket_exists(bucket):
            self._client.make_bucket(bucket)
            logger.info(f"Created media bucket {bucket}")
        self._bucket_ready = True

    def _upload_sync(self, local_path: Path) -> UploadedAsset:
        self._ensure_bucket()
        public_id = uuid.uuid4().hex
        content_type = mimetypes.guess_type(local_path.name)[0] or "application/octet-stream"
        self._client.fput_object(
            self.settings.minio_bucket, public_id, str(local_path), content_type=content_type,
        )
        return UploadedAsset(url=f"{self.base_url}/{public_id}", public_id=public_id)

    async def upload(self, local_path: Path) -> UploadedAsset:
        try:
            asset = await asyncio.to_thread(self._upload_sync, Path(local_path))
        except (S3Error, OSError) as e:
            logger.error(f"Upload of {Path(local_path).name} failed: {e}")
            raise MediaHostError("Error while uploading media")
        logger.info(f"Uploaded {Path(local_path).name} as {asset.public_id}")
        return asset

    async def delete(self, public_id: str) -> None:
        try:
            await asyncio.to_thread(self._client.remove_object, self.settings.minio_bucket, public_id)
        except S3Error as e:
            logger.error(f"Delete of {public_id} failed: {e}")
            raise MediaHostError("Error while deleting media")
        logger.info(f"Deleted media {public_id}")

"""
VidTube upload staging — multipart files are spooled to a temp directory
before being probed and pushed to the media host.
"""
from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import UploadFile

from vidtube.core.config import get_settings
from vidtube.core.errors import InvalidInput

logger = logging.getLogger(__name__)
settings = get_settings()


def _spool(upload: UploadFile, directory: Path) -> Path:
    suffix = Path(upload.filename or "").suffix
    with tempfile.NamedTemporaryFile(dir=directory, suffix=suffix, delete=False) as out:
        shutil.copyfileobj(upload.file, out)
        return Path(out.name)


@asynccontextmanager
async def staged(upload: Optional[UploadFile], label: str, required: bool = True) -> AsyncIterator[Optional[Path]]:
    """Yield a local path holding the upload's bytes; the file is removed on exit."""
    if upload is None or not upload.filename:
        if required:
            raise InvalidInput(f"{label} is required")
        yield None
        return

    directory = Path(settings.upload_temp_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = await asyncio.to_thread(_spool, upload, directory)
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove staged upload {path}: {e}")

"""
VidTube Duration Probe — reads a media file's length with ffprobe.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Protocol

from vidtube.core.config import Settings, get_settings
from vidtube.core.errors import InvalidInput

logger = logging.getLogger(__name__)


class DurationProbe(Protocol):
    async def probe(self, local_path: Path) -> str: ...


def format_duration(seconds: float) -> str:
    """YouTube-style ``H:MM:SS`` or ``M:SS``."""
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class FfprobeDurationProbe:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    async def probe(self, local_path: Path) -> str:
        cmd = [
            self.settings.ffprobe_binary, "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(local_path),
        ]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd, stdout=asyncio.subprocess.PIPE, stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.settings.ffprobe_timeout_seconds,
            )
        except asyncio.TimeoutError:
            proc.kill()
            logger.warning(f"ffprobe timed out on {Path(local_path).name}")
            raise InvalidInput("Could not read video duration")
        except OSError as e:
            logger.error(f"ffprobe unavailable: {e}")
            raise InvalidInput("Could not read video duration")

        if proc.returncode != 0:
            logger.warning(f"ffprobe failed on {Path(local_path).name}: {stderr.decode(errors='ignore').strip()}")
            raise InvalidInput("Could not read video duration")
        try:
            seconds = float(stdout.decode().strip())
        except ValueError:
            raise InvalidInput("Could not read video duration")
        return format_duration(seconds)

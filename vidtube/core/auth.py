"""
VidTube actor resolution.

Token verification happens upstream; the gateway forwards the verified user
id in a trusted header which is taken at face value here.
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Request

from vidtube.core.config import get_settings
from vidtube.core.errors import Unauthorized, parse_id

settings = get_settings()


async def get_current_actor(request: Request) -> uuid.UUID:
    raw = request.headers.get(settings.actor_header)
    if not raw:
        raise Unauthorized("Authentication required")
    return parse_id(raw, "user id")


async def get_optional_actor(request: Request) -> Optional[uuid.UUID]:
    raw = request.headers.get(settings.actor_header)
    if not raw:
        return None
    return parse_id(raw, "user id")

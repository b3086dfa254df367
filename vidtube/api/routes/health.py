"""
VidTube API — health check.
"""
from __future__ import annotations

from fastapi import APIRouter, Request

from vidtube.core.responses import api_response

router = APIRouter(prefix="/healthcheck", tags=["health"])


@router.get("")
async def healthcheck(request: Request):
    health = await request.app.state.database.health_check()
    if health["status"] != "healthy":
        return api_response(health, "Service degraded", status_code=503)
    return api_response(health, "OK")

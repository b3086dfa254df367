"""
VidTube API — channel profile and the owner's dashboard.
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidtube.api.deps import get_channel_stats_service, get_relationship_service
from vidtube.core.auth import get_current_actor
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.services.aggregation.channel_stats_service import ChannelStatsService
from vidtube.services.resolver.relationship_service import RelationshipService

router = APIRouter(prefix="/channels", tags=["channels"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/{user_id}")
async def channel_profile(
    user_id: str,
    sort: Optional[str] = Query(None, description="popular, latest or oldest"),
    resolver: RelationshipService = Depends(get_relationship_service),
):
    profile = await resolver.channel_profile(parse_id(user_id, "user id"), sort=sort)
    return api_response(profile, "Channel profile fetched successfully")


@dashboard_router.get("/stats")
async def channel_stats(
    actor_id: uuid.UUID = Depends(get_current_actor),
    stats: ChannelStatsService = Depends(get_channel_stats_service),
):
    result = await stats.stats(actor_id)
    return api_response(result, "Channel stats fetched successfully")


@dashboard_router.get("/videos")
async def channel_videos(
    actor_id: uuid.UUID = Depends(get_current_actor),
    stats: ChannelStatsService = Depends(get_channel_stats_service),
):
    result = await stats.channel_videos(actor_id)
    return api_response(result, "Channel videos fetched successfully")

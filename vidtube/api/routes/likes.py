"""
VidTube API — like toggles and the liked-videos listing.

  POST /likes/toggle/v/{video_id}
  POST /likes/toggle/c/{comment_id}
  POST /likes/toggle/t/{tweet_id}
  GET  /likes/videos
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from vidtube.api.deps import get_relationship_service, get_toggle_service
from vidtube.core.auth import get_current_actor
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.services.resolver.relationship_service import RelationshipService
from vidtube.services.toggle.toggle_service import ToggleKind, ToggleService

router = APIRouter(prefix="/likes", tags=["likes"])


def _message(result, noun: str) -> str:
    return f"{noun} liked" if result.state == "added" else f"{noun} unliked"


@router.post("/toggle/v/{video_id}")
async def toggle_video_like(
    video_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    toggles: ToggleService = Depends(get_toggle_service),
):
    result = await toggles.toggle(actor_id, ToggleKind.VIDEO_LIKE, parse_id(video_id, "video id"))
    return api_response(result, _message(result, "Video"))


@router.post("/toggle/c/{comment_id}")
async def toggle_comment_like(
    comment_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    toggles: ToggleService = Depends(get_toggle_service),
):
    result = await toggles.toggle(actor_id, ToggleKind.COMMENT_LIKE, parse_id(comment_id, "comment id"))
    return api_response(result, _message(result, "Comment"))


@router.post("/toggle/t/{tweet_id}")
async def toggle_tweet_like(
    tweet_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    toggles: ToggleService = Depends(get_toggle_service),
):
    result = await toggles.toggle(actor_id, ToggleKind.TWEET_LIKE, parse_id(tweet_id, "tweet id"))
    return api_response(result, _message(result, "Tweet"))


@router.get("/videos")
async def liked_videos(
    actor_id: uuid.UUID = Depends(get_current_actor),
    resolver: RelationshipService = Depends(get_relationship_service),
):
    videos = await resolver.liked_videos(actor_id)
    return api_response(videos, "Liked videos fetched successfully")

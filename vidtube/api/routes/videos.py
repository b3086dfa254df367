"""
VidTube API — video routes.

  GET    /videos                          — public feed (search, sort, paginate)
  POST   /videos                          — publish (multipart: video_file, thumbnail)
  GET    /videos/{video_id}               — detail, counts a view
  PATCH  /videos/{video_id}               — edit title/description/thumbnail
  DELETE /videos/{video_id}               — delete with comments and likes
  PATCH  /videos/toggle/publish/{video_id}
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from vidtube.api.deps import get_video_feed_service, get_video_service
from vidtube.api.uploads import staged
from vidtube.core.auth import get_current_actor, get_optional_actor
from vidtube.core.config import get_settings
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.services.aggregation.video_feed_service import VideoFeedService
from vidtube.services.videos.video_service import VideoService

settings = get_settings()
router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("")
async def list_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.page_size_default, ge=1, le=settings.page_size_max),
    query: Optional[str] = Query(None, max_length=200),
    sort_by: str = Query("created_at"),
    sort_type: str = Query("desc"),
    user_id: Optional[str] = Query(None),
    feed: VideoFeedService = Depends(get_video_feed_service),
):
    owner_id = parse_id(user_id, "user id") if user_id else None
    result = await feed.feed(
        page=page, limit=limit, query=query,
        sort_by=sort_by, sort_type=sort_type, owner_id=owner_id,
    )
    return api_response(result, "Videos fetched successfully")


@router.post("")
async def publish_video(
    title: str = Form(""),
    description: str = Form(""),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    actor_id: uuid.UUID = Depends(get_current_actor),
    videos: VideoService = Depends(get_video_service),
):
    async with staged(video_file, "Video file") as video_path, staged(thumbnail, "Thumbnail") as thumbnail_path:
        video = await videos.publish(actor_id, title, description, video_path, thumbnail_path)
    return api_response(video, "Video published successfully", status_code=201)


@router.get("/{video_id}")
async def get_video(
    video_id: str,
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    videos: VideoService = Depends(get_video_service),
):
    video = await videos.get(parse_id(video_id, "video id"), viewer_id)
    return api_response(video, "Video fetched successfully")


@router.patch("/{video_id}")
async def update_video(
    video_id: str,
    title: str = Form(""),
    description: str = Form(""),
    thumbnail: Optional[UploadFile] = File(None),
    actor_id: uuid.UUID = Depends(get_current_actor),
    videos: VideoService = Depends(get_video_service),
):
    vid = parse_id(video_id, "video id")
    async with staged(thumbnail, "Thumbnail", required=False) as thumbnail_path:
        video = await videos.update(vid, actor_id, title, description, thumbnail_path)
    return api_response(video, "Video updated successfully")


@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    videos: VideoService = Depends(get_video_service),
):
    video = await videos.delete(parse_id(video_id, "video id"), actor_id)
    return api_response(video, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}")
async def toggle_publish(
    video_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    videos: VideoService = Depends(get_video_service),
):
    result = await videos.toggle_publish(parse_id(video_id, "video id"), actor_id)
    return api_response(result, "Publish status toggled successfully")

"""
VidTube API — comment routes.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from vidtube.api.deps import get_comment_service, get_relationship_service
from vidtube.core.auth import get_current_actor
from vidtube.core.config import get_settings
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.schemas.schemas import CommentCreate
from vidtube.services.comments.comment_service import CommentService
from vidtube.services.resolver.relationship_service import RelationshipService

settings = get_settings()
router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{video_id}")
async def list_comments(
    video_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.page_size_default, ge=1, le=settings.page_size_max),
    resolver: RelationshipService = Depends(get_relationship_service),
):
    result = await resolver.video_comments(parse_id(video_id, "video id"), page=page, limit=limit)
    return api_response(result, "Comments fetched successfully")


@router.post("/{video_id}")
async def add_comment(
    video_id: str,
    body: CommentCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    comments: CommentService = Depends(get_comment_service),
):
    comment = await comments.add(parse_id(video_id, "video id"), actor_id, body.content)
    return api_response(comment, "Comment added successfully", status_code=201)


@router.patch("/c/{comment_id}")
async def update_comment(
    comment_id: str,
    body: CommentCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    comments: CommentService = Depends(get_comment_service),
):
    comment = await comments.update(parse_id(comment_id, "comment id"), actor_id, body.content)
    return api_response(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}")
async def delete_comment(
    comment_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    comments: CommentService = Depends(get_comment_service),
):
    comment = await comments.delete(parse_id(comment_id, "comment id"), actor_id)
    return api_response(comment, "Comment deleted successfully")

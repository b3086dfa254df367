"""
VidTube Comment Service — add, edit and delete comments on videos.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import Forbidden, NotFound, require_text
from vidtube.models.models import Comment, Like, LikeKind, Video
from vidtube.schemas.builders import comment_schema
from vidtube.schemas.schemas import CommentSchema

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, comment_id: uuid.UUID, actor_id: uuid.UUID) -> Comment:
        comment = await self.db.get(Comment, comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        if comment.owner_id != actor_id:
            raise Forbidden("You are not authorized to modify this comment")
        return comment

    async def add(self, video_id: uuid.UUID, actor_id: uuid.UUID, content: str) -> CommentSchema:
        content = require_text(content, "Content")
        exists = await self.db.scalar(select(Video.id).where(Video.id == video_id))
        if exists is None:
            raise NotFound("Video not found")

        comment = Comment(content=content, video_id=video_id, owner_id=actor_id)
        self.db.add(comment)
        await self.db.commit()
        return comment_schema(comment)

    async def update(self, comment_id: uuid.UUID, actor_id: uuid.UUID, content: str) -> CommentSchema:
        content = require_text(content, "Content")
        comment = await self._get_owned(comment_id, actor_id)
        comment.content = content
        await self.db.commit()
        await self.db.refresh(comment)
        return comment_schema(comment)

    async def delete(self, comment_id: uuid.UUID, actor_id: uuid.UUID) -> CommentSchema:
        comment = await self._get_owned(comment_id, actor_id)
        deleted = comment_schema(comment)
        await self.db.execute(
            delete(Like).where(Like.target_kind == LikeKind.COMMENT, Like.target_id == comment_id)
        )
        await self.db.delete(comment)
        await self.db.commit()
        logger.info(f"Comment {comment_id} deleted by {actor_id}")
        return deleted

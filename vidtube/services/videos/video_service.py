"""
VidTube Video Service — publish, view, edit and delete videos.

Media files are pushed to the media host before any row is written, and no
store transaction stays open across a media-host call. When a step fails
after an upload succeeded, the uploaded assets are deleted again so that
nothing is orphaned on the host.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Iterable, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import Forbidden, NotFound, require_text
from vidtube.models.models import Comment, Like, LikeKind, User, Video
from vidtube.schemas.builders import owner_summary, video_fields, video_schema
from vidtube.schemas.schemas import PublishToggle, VideoDetail, VideoSchema
from vidtube.services.media.duration_probe import DurationProbe
from vidtube.services.media.media_host import MediaHost, UploadedAsset, public_id_from_url

logger = logging.getLogger(__name__)


class VideoService:
    def __init__(
        self,
        db: AsyncSession,
        media_host: Optional[MediaHost] = None,
        duration_probe: Optional[DurationProbe] = None,
    ):
        self.db = db
        self.media_host = media_host
        self.duration_probe = duration_probe

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _get_video(self, video_id: uuid.UUID) -> Video:
        video = await self.db.get(Video, video_id)
        if video is None:
            raise NotFound("Video not found")
        return video

    async def _get_owned(self, video_id: uuid.UUID, actor_id: uuid.UUID) -> Video:
        video = await self._get_video(video_id)
        if video.owner_id != actor_id:
            raise Forbidden("You don't have permission to modify this video")
        return video

    async def _discard(self, public_ids: Iterable[str]):
        """Best-effort removal of remote assets; failures are logged."""
        for public_id in public_ids:
            try:
                await self.media_host.delete(public_id)
            except Exception as e:
                logger.error(f"Could not delete orphaned media {public_id}: {e}")

    # ── Publish ──────────────────────────────────────────────────────────

    async def publish(
        self,
        actor_id: uuid.UUID,
        title: str,
        description: str,
        video_path: Path,
        thumbnail_path: Path,
    ) -> VideoSchema:
        title = require_text(title, "Title")
        description = require_text(description, "Description")

        duration = await self.duration_probe.probe(video_path)

        uploaded: List[UploadedAsset] = []
        try:
            uploaded.append(await self.media_host.upload(video_path))
            uploaded.append(await self.media_host.upload(thumbnail_path))
            video_asset, thumbnail_asset = uploaded

            video = Video(
                owner_id=actor_id,
                title=title,
                description=description,
                video_file=video_asset.url,
                thumbnail=thumbnail_asset.url,
                duration=duration,
                views=0,
                is_published=True,
            )
            self.db.add(video)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            if uploaded:
                logger.warning(f"Publishing failed after {len(uploaded)} upload(s), removing them")
                await self._discard(a.public_id for a in uploaded)
            raise

        logger.info(f"Video {video.id} published by {actor_id}")
        return video_schema(video)

    # ── Read ─────────────────────────────────────────────────────────────

    async def get(self, video_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> VideoDetail:
        """Fetch a video and count the view. Unpublished videos are visible to their owner only."""
        video = await self._get_video(video_id)
        if not video.is_published and video.owner_id != viewer_id:
            raise NotFound("Video not found")

        await self.db.execute(
            update(Video).where(Video.id == video_id).values(views=Video.views + 1)
        )
        await self.db.commit()
        await self.db.refresh(video)

        owner = await self.db.get(User, video.owner_id)
        return VideoDetail(
            **video_fields(video),
            owner=owner_summary(owner) if owner else None,
        )

    # ── Edit ─────────────────────────────────────────────────────────────

    async def update(
        self,
        video_id: uuid.UUID,
        actor_id: uuid.UUID,
        title: str,
        description: str,
        thumbnail_path: Optional[Path] = None,
    ) -> VideoSchema:
        title = require_text(title, "Title")
        description = require_text(description, "Description")
        video = await self._get_owned(video_id, actor_id)
        old_thumbnail = video.thumbnail

        new_asset: Optional[UploadedAsset] = None
        if thumbnail_path is not None:
            # the ownership read must not stay open across the upload
            await self.db.commit()
            new_asset = await self.media_host.upload(thumbnail_path)

        try:
            video = await self._get_owned(video_id, actor_id)
            video.title = title
            video.description = description
            if new_asset is not None:
                video.thumbnail = new_asset.url
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            if new_asset is not None:
                await self._discard([new_asset.public_id])
            raise

        if new_asset is not None:
            await self._discard([public_id_from_url(old_thumbnail)])

        await self.db.refresh(video)
        return video_schema(video)

    async def toggle_publish(self, video_id: uuid.UUID, actor_id: uuid.UUID) -> PublishToggle:
        video = await self._get_owned(video_id, actor_id)
        video.is_published = not video.is_published
        await self.db.commit()
        logger.info(f"Video {video_id} is_published={video.is_published}")
        return PublishToggle(id=str(video.id), is_published=video.is_published)

    # ── Delete ───────────────────────────────────────────────────────────

    async def delete(self, video_id: uuid.UUID, actor_id: uuid.UUID) -> VideoSchema:
        """Delete a video with its comments and likes, then its remote files."""
        video = await self._get_owned(video_id, actor_id)
        deleted = video_schema(video)

        comment_ids = select(Comment.id).where(Comment.video_id == video_id)
        await self.db.execute(
            delete(Like).where(Like.target_kind == LikeKind.COMMENT, Like.target_id.in_(comment_ids))
        )
        await self.db.execute(delete(Comment).where(Comment.video_id == video_id))
        await self.db.execute(
            delete(Like).where(Like.target_kind == LikeKind.VIDEO, Like.target_id == video_id)
        )
        await self.db.execute(delete(Video).where(Video.id == video_id))
        await self.db.commit()

        await self._discard([public_id_from_url(deleted.video_file), public_id_from_url(deleted.thumbnail)])
        logger.info(f"Video {video_id} deleted by {actor_id}")
        return deleted

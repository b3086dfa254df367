"""
VidTube Channel Dashboard — per-channel aggregates for the channel owner.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import NotFound
from vidtube.models.models import Like, LikeKind, Subscription, User, Video
from vidtube.schemas.schemas import ChannelStats, ChannelVideos, DashboardVideo

logger = logging.getLogger(__name__)


class ChannelStatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_channel(self, channel_id: uuid.UUID) -> User:
        user = await self.db.get(User, channel_id)
        if user is None:
            raise NotFound("Channel not found")
        return user

    async def stats(self, channel_id: uuid.UUID) -> ChannelStats:
        """
        Totals for a channel. Every aggregate is coalesced so that a channel
        without videos reports zeros.
        """
        user = await self._get_channel(channel_id)

        total_videos = await self.db.scalar(
            select(func.count(Video.id)).where(
                Video.owner_id == channel_id, Video.is_published.is_(True)
            )
        ) or 0
        total_views = await self.db.scalar(
            select(func.coalesce(func.sum(Video.views), 0)).where(Video.owner_id == channel_id)
        ) or 0
        total_subscribers = await self.db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        ) or 0
        total_likes = await self.db.scalar(
            select(func.count(Like.id))
            .select_from(Like)
            .join(Video, Video.id == Like.target_id)
            .where(Like.target_kind == LikeKind.VIDEO, Video.owner_id == channel_id)
        ) or 0

        return ChannelStats(
            channel_name=user.username,
            channel_avatar=user.avatar,
            total_subscribers=total_subscribers,
            total_videos=total_videos,
            total_views=int(total_views),
            total_likes=total_likes,
        )

    async def channel_videos(self, channel_id: uuid.UUID) -> ChannelVideos:
        """Every video the channel owns, published or not."""
        user = await self._get_channel(channel_id)
        result = await self.db.execute(
            select(Video).where(Video.owner_id == channel_id).order_by(Video.created_at.desc())
        )
        videos = result.scalars().all()
        return ChannelVideos(
            channel_name=user.username,
            channel_avatar=user.avatar,
            total_videos=len(videos),
            videos=[
                DashboardVideo(
                    id=str(v.id),
                    title=v.title,
                    video_file=v.video_file,
                    thumbnail=v.thumbnail,
                    duration=v.duration,
                    views=v.views or 0,
                    is_published=v.is_published,
                )
                for v in videos
            ],
        )

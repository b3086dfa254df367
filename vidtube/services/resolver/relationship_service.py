"""
VidTube Relationship Resolver — denormalized read models.

Every view here replaces raw foreign keys with embedded summaries of the
related rows (owner handle/avatar, subscriber lists, liked video details).
Joins are expressed explicitly in SQL and grouped in Python where the
response nests one owner over many rows.
"""
from __future__ import annotations

import logging
import math
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import InvalidInput, NotFound
from vidtube.models.models import (
    Comment, Like, LikeKind, Playlist, Subscription, Tweet, User, Video,
)
from vidtube.schemas.builders import comment_schema, playlist_schema, user_summary
from vidtube.schemas.schemas import (
    ChannelProfile,
    ChannelSummary,
    ChannelVideo,
    CommentPage,
    LikedVideo,
    LikedVideoDetails,
    PlaylistGroup,
    SubscriberListing,
    SubscriptionListing,
    TweetGroup,
    TweetItem,
)

logger = logging.getLogger(__name__)

# Channel profile sort keys accepted from clients.
PROFILE_SORTS = {
    "popular": (Video.views.desc(),),
    "latest": (Video.created_at.desc(),),
    "oldest": (Video.created_at.asc(),),
}


class RelationshipService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_user(self, user_id: uuid.UUID, label: str = "Channel") -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFound(f"{label} not found")
        return user

    async def _subscriber_count(self, channel_id: uuid.UUID) -> int:
        return await self.db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == channel_id)
        ) or 0

    # ── Channel profile ──────────────────────────────────────────────────

    async def channel_profile(self, channel_id: uuid.UUID, sort: Optional[str] = None) -> ChannelProfile:
        """Public channel page: identity, subscriber count, playlists, published videos."""
        if sort and sort not in PROFILE_SORTS:
            raise InvalidInput(f"Unknown sort '{sort}', expected one of {sorted(PROFILE_SORTS)}")

        user = await self._get_user(channel_id)

        video_query = select(Video).where(Video.owner_id == channel_id, Video.is_published.is_(True))
        order = PROFILE_SORTS[sort] if sort else (Video.created_at.asc(),)
        video_query = video_query.order_by(*order, Video.id)
        videos = (await self.db.execute(video_query)).scalars().all()

        playlists = (
            await self.db.execute(select(Playlist).where(Playlist.owner_id == channel_id))
        ).scalars().all()

        subscriber_count = await self._subscriber_count(channel_id)

        return ChannelProfile(
            id=str(user.id),
            username=user.username,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image,
            subscriber_count=subscriber_count,
            playlists=[playlist_schema(p) for p in playlists],
            videos=[
                ChannelVideo(
                    id=str(v.id),
                    title=v.title,
                    video_file=v.video_file,
                    thumbnail=v.thumbnail,
                    views=v.views or 0,
                    created_at=v.created_at,
                )
                for v in videos
            ],
        )

    # ── Comments ─────────────────────────────────────────────────────────

    async def video_comments(self, video_id: uuid.UUID, page: int = 1, limit: int = 10) -> CommentPage:
        """Newest-first page of a video's comments with commenter handle/avatar."""
        if page < 1 or limit < 1:
            raise InvalidInput("page and limit must be positive")

        exists = await self.db.scalar(select(Video.id).where(Video.id == video_id))
        if exists is None:
            raise NotFound("Video not found")

        total = await self.db.scalar(
            select(func.count(Comment.id)).where(Comment.video_id == video_id)
        ) or 0

        rows = await self.db.execute(
            select(Comment, User)
            .join(User, User.id == Comment.owner_id)
            .where(Comment.video_id == video_id)
            .order_by(Comment.created_at.desc(), Comment.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        comments = [comment_schema(c, owner) for c, owner in rows.all()]

        total_pages = math.ceil(total / limit)
        return CommentPage(
            comments=comments,
            page=page,
            limit=limit,
            total_comments=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )

    # ── Subscriptions ────────────────────────────────────────────────────

    async def channel_subscribers(self, channel_id: uuid.UUID) -> SubscriberListing:
        channel = await self._get_user(channel_id)
        rows = await self.db.execute(
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at)
        )
        subscribers = [user_summary(u) for u in rows.scalars().all()]
        return SubscriberListing(
            channel=ChannelSummary(
                id=str(channel.id),
                username=channel.username,
                avatar=channel.avatar,
                subscriber_count=len(subscribers),
            ),
            subscribers=subscribers,
        )

    async def subscribed_channels(self, subscriber_id: uuid.UUID) -> SubscriptionListing:
        subscriber = await self._get_user(subscriber_id)
        rows = await self.db.execute(
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at)
        )
        return SubscriptionListing(
            channel=user_summary(subscriber),
            subscriptions=[user_summary(u) for u in rows.scalars().all()],
        )

    # ── Likes ────────────────────────────────────────────────────────────

    async def liked_videos(self, actor_id: uuid.UUID) -> List[LikedVideo]:
        """
        Videos the actor liked.

        ``like_count`` is counted inside the actor's own likes, so with one
        like per (actor, video) it is always 1. It is not the video's global
        like count.
        """
        own_likes = (
            select(Like.target_id.label("video_id"), func.count(Like.id).label("like_count"))
            .where(Like.liked_by == actor_id, Like.target_kind == LikeKind.VIDEO)
            .group_by(Like.target_id)
            .subquery()
        )
        rows = await self.db.execute(
            select(own_likes.c.video_id, own_likes.c.like_count, Video)
            .join(Video, Video.id == own_likes.c.video_id)
        )
        return [
            LikedVideo(
                video_id=str(video_id),
                like_count=like_count,
                video_details=LikedVideoDetails(
                    title=video.title,
                    description=video.description,
                    thumbnail=video.thumbnail,
                ),
            )
            for video_id, like_count, video in rows.all()
        ]

    # ── Tweets / Playlists ───────────────────────────────────────────────

    async def user_tweets(self, user_id: uuid.UUID) -> List[TweetGroup]:
        """All tweets by a user, newest first, grouped under one owner summary."""
        rows = await self.db.execute(
            select(Tweet, User)
            .join(User, User.id == Tweet.owner_id)
            .where(Tweet.owner_id == user_id)
            .order_by(Tweet.created_at.desc())
        )
        groups: dict[uuid.UUID, TweetGroup] = {}
        for tweet, owner in rows.all():
            group = groups.get(owner.id)
            if group is None:
                group = groups[owner.id] = TweetGroup(
                    owner_id=str(owner.id), owner=user_summary(owner), tweets=[],
                )
            group.tweets.append(TweetItem(id=str(tweet.id), content=tweet.content, created_at=tweet.created_at))
        return list(groups.values())

    async def user_playlists(self, user_id: uuid.UUID) -> List[PlaylistGroup]:
        rows = await self.db.execute(
            select(Playlist, User)
            .join(User, User.id == Playlist.owner_id)
            .where(Playlist.owner_id == user_id)
            .order_by(Playlist.created_at)
        )
        groups: dict[uuid.UUID, PlaylistGroup] = {}
        for playlist, owner in rows.all():
            group = groups.get(owner.id)
            if group is None:
                group = groups[owner.id] = PlaylistGroup(
                    owner_id=str(owner.id), owner=user_summary(owner), playlists=[],
                )
            group.playlists.append(playlist_schema(playlist))
        return list(groups.values())

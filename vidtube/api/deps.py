"""
VidTube API dependencies — per-request service construction.

Services receive the request's session (and, for videos, the media
collaborators held on the application state) when they are built.
"""
from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.database import get_db
from vidtube.services.aggregation.channel_stats_service import ChannelStatsService
from vidtube.services.aggregation.video_feed_service import VideoFeedService
from vidtube.services.comments.comment_service import CommentService
from vidtube.services.media.duration_probe import DurationProbe
from vidtube.services.media.media_host import MediaHost
from vidtube.services.playlists.playlist_service import PlaylistService
from vidtube.services.resolver.relationship_service import RelationshipService
from vidtube.services.toggle.toggle_service import ToggleService
from vidtube.services.tweets.tweet_service import TweetService
from vidtube.services.videos.video_service import VideoService


def get_media_host(request: Request) -> MediaHost:
    return request.app.state.media_host


def get_duration_probe(request: Request) -> DurationProbe:
    return request.app.state.duration_probe


def get_toggle_service(db: AsyncSession = Depends(get_db)) -> ToggleService:
    return ToggleService(db)


def get_relationship_service(db: AsyncSession = Depends(get_db)) -> RelationshipService:
    return RelationshipService(db)


def get_channel_stats_service(db: AsyncSession = Depends(get_db)) -> ChannelStatsService:
    return ChannelStatsService(db)


def get_video_feed_service(db: AsyncSession = Depends(get_db)) -> VideoFeedService:
    return VideoFeedService(db)


def get_playlist_service(db: AsyncSession = Depends(get_db)) -> PlaylistService:
    return PlaylistService(db)


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(db)


def get_tweet_service(db: AsyncSession = Depends(get_db)) -> TweetService:
    return TweetService(db)


def get_video_service(
    db: AsyncSession = Depends(get_db),
    media_host: MediaHost = Depends(get_media_host),
    duration_probe: DurationProbe = Depends(get_duration_probe),
) -> VideoService:
    return VideoService(db, media_host=media_host, duration_probe=duration_probe)

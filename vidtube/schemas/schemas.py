"""
VidTube API Schemas — Pydantic v2 models for request/response validation.

Response models describe the ``data`` member of the success envelope.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


# ═══════════════════════════════════════════════════════════════════════
# Embedded summaries
# ═══════════════════════════════════════════════════════════════════════

class UserSummary(BaseModel):
    id: str
    username: str
    avatar: Optional[str] = None


class OwnerSummary(UserSummary):
    full_name: str


class ChannelSummary(UserSummary):
    subscriber_count: int = 0


# ═══════════════════════════════════════════════════════════════════════
# Videos
# ═══════════════════════════════════════════════════════════════════════

class VideoSchema(BaseModel):
    id: str
    owner_id: str
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: Optional[str] = None
    views: int = 0
    is_published: bool = True
    created_at: datetime
    updated_at: datetime


class VideoDetail(VideoSchema):
    owner: Optional[OwnerSummary] = None


class FeedVideo(VideoSchema):
    owner: OwnerSummary


class VideoFeedPage(BaseModel):
    videos: List[FeedVideo]
    current_page: int
    total_pages: int
    total_videos: int


class ChannelVideo(BaseModel):
    id: str
    title: str
    video_file: str
    thumbnail: str
    views: int = 0
    created_at: datetime


class PublishToggle(BaseModel):
    id: str
    is_published: bool


# ═══════════════════════════════════════════════════════════════════════
# Comments
# ═══════════════════════════════════════════════════════════════════════

class CommentCreate(BaseModel):
    content: str = Field(..., max_length=5000)


class CommentSchema(BaseModel):
    id: str
    content: str
    video_id: str
    owner_id: str
    owner: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CommentPage(BaseModel):
    comments: List[CommentSchema]
    page: int
    limit: int
    total_comments: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


# ═══════════════════════════════════════════════════════════════════════
# Tweets
# ═══════════════════════════════════════════════════════════════════════

class TweetCreate(BaseModel):
    content: str = Field(..., max_length=1000)


class TweetSchema(BaseModel):
    id: str
    owner_id: str
    content: str
    created_at: datetime
    updated_at: datetime


class TweetItem(BaseModel):
    id: str
    content: str
    created_at: datetime


class TweetGroup(BaseModel):
    owner_id: str
    owner: UserSummary
    tweets: List[TweetItem]


# ═══════════════════════════════════════════════════════════════════════
# Playlists
# ═══════════════════════════════════════════════════════════════════════

class PlaylistCreate(BaseModel):
    name: str = Field(..., max_length=256)
    description: str = Field(..., max_length=5000)


class PlaylistEntrySchema(BaseModel):
    video_id: str
    video_file: Optional[str] = None
    title: str
    channel: str


class PlaylistSchema(BaseModel):
    id: str
    owner_id: str
    name: str
    description: str
    videos: List[PlaylistEntrySchema] = []
    created_at: datetime
    updated_at: datetime


class PlaylistGroup(BaseModel):
    owner_id: str
    owner: UserSummary
    playlists: List[PlaylistSchema]


# ═══════════════════════════════════════════════════════════════════════
# Channel / Dashboard
# ═══════════════════════════════════════════════════════════════════════

class ChannelProfile(BaseModel):
    id: str
    username: str
    full_name: str
    avatar: Optional[str] = None
    cover_image: Optional[str] = None
    subscriber_count: int
    playlists: List[PlaylistSchema]
    videos: List[ChannelVideo]


class ChannelStats(BaseModel):
    channel_name: str
    channel_avatar: Optional[str] = None
    total_subscribers: int = 0
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0


class DashboardVideo(BaseModel):
    id: str
    title: str
    video_file: str
    thumbnail: str
    duration: Optional[str] = None
    views: int = 0
    is_published: bool


class ChannelVideos(BaseModel):
    channel_name: str
    channel_avatar: Optional[str] = None
    total_videos: int
    videos: List[DashboardVideo]


# ═══════════════════════════════════════════════════════════════════════
# Edges
# ═══════════════════════════════════════════════════════════════════════

class ToggleResult(BaseModel):
    state: Literal["added", "removed"]
    kind: str
    target_id: str
    edge_id: Optional[str] = None


class LikedVideoDetails(BaseModel):
    title: str
    description: str
    thumbnail: str


class LikedVideo(BaseModel):
    video_id: str
    like_count: int
    video_details: LikedVideoDetails


class SubscriberListing(BaseModel):
    channel: ChannelSummary
    subscribers: List[UserSummary]


class SubscriptionListing(BaseModel):
    channel: UserSummary
    subscriptions: List[UserSummary]

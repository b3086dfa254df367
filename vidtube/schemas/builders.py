"""
ORM row → response schema conversions shared across services.
"""
from __future__ import annotations

from vidtube.models.models import Comment, Playlist, Tweet, User, Video
from vidtube.schemas.schemas import (
    CommentSchema,
    OwnerSummary,
    PlaylistEntrySchema,
    PlaylistSchema,
    TweetSchema,
    UserSummary,
    VideoSchema,
)


def user_summary(user: User) -> UserSummary:
    return UserSummary(id=str(user.id), username=user.username, avatar=user.avatar)


def owner_summary(user: User) -> OwnerSummary:
    return OwnerSummary(
        id=str(user.id),
        username=user.username,
        full_name=user.full_name,
        avatar=user.avatar,
    )


def video_fields(video: Video) -> dict:
    return dict(
        id=str(video.id),
        owner_id=str(video.owner_id),
        title=video.title,
        description=video.description,
        video_file=video.video_file,
        thumbnail=video.thumbnail,
        duration=video.duration,
        views=video.views or 0,
        is_published=video.is_published,
        created_at=video.created_at,
        updated_at=video.updated_at,
    )


def video_schema(video: Video) -> VideoSchema:
    return VideoSchema(**video_fields(video))


def comment_schema(comment: Comment, owner: User | None = None) -> CommentSchema:
    return CommentSchema(
        id=str(comment.id),
        content=comment.content,
        video_id=str(comment.video_id),
        owner_id=str(comment.owner_id),
        owner=user_summary(owner) if owner else None,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def tweet_schema(tweet: Tweet) -> TweetSchema:
    return TweetSchema(
        id=str(tweet.id),
        owner_id=str(tweet.owner_id),
        content=tweet.content,
        created_at=tweet.created_at,
        updated_at=tweet.updated_at,
    )


def playlist_schema(playlist: Playlist) -> PlaylistSchema:
    return PlaylistSchema(
        id=str(playlist.id),
        owner_id=str(playlist.owner_id),
        name=playlist.name,
        description=playlist.description,
        videos=[
            PlaylistEntrySchema(
                video_id=str(e.video_id),
                video_file=e.video_file,
                title=e.title,
                channel=e.channel,
            )
            for e in playlist.entries
        ],
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )

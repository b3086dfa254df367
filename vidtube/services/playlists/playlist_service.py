"""
VidTube Playlist Service — playlist CRUD and membership.

Entries are snapshots of the video taken when it is added (id, file url,
title, channel name); later edits to the video are not reflected. A video
appears at most once per playlist, enforced by a unique constraint.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import Forbidden, InvalidState, NotFound, require_text
from vidtube.models.models import Playlist, PlaylistEntry, User, Video, utcnow
from vidtube.schemas.builders import playlist_schema
from vidtube.schemas.schemas import PlaylistSchema

logger = logging.getLogger(__name__)


class PlaylistService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, playlist_id: uuid.UUID) -> Playlist:
        playlist = await self.db.get(Playlist, playlist_id)
        if playlist is None:
            raise NotFound("Playlist not found")
        return playlist

    async def _get_owned(self, playlist_id: uuid.UUID, actor_id: uuid.UUID) -> Playlist:
        playlist = await self._get(playlist_id)
        if playlist.owner_id != actor_id:
            raise Forbidden("You are not authorized to perform this action")
        return playlist

    async def _reload(self, playlist: Playlist) -> PlaylistSchema:
        await self.db.refresh(playlist, attribute_names=["entries", "updated_at"])
        return playlist_schema(playlist)

    # ── CRUD ─────────────────────────────────────────────────────────────

    async def create(self, actor_id: uuid.UUID, name: str, description: str) -> PlaylistSchema:
        playlist = Playlist(
            owner_id=actor_id,
            name=require_text(name, "Name"),
            description=require_text(description, "Description"),
        )
        self.db.add(playlist)
        await self.db.commit()
        return await self._reload(playlist)

    async def get(self, playlist_id: uuid.UUID) -> PlaylistSchema:
        return playlist_schema(await self._get(playlist_id))

    async def update(self, playlist_id: uuid.UUID, actor_id: uuid.UUID, name: str, description: str) -> PlaylistSchema:
        name = require_text(name, "Name")
        description = require_text(description, "Description")
        playlist = await self._get_owned(playlist_id, actor_id)
        playlist.name = name
        playlist.description = description
        await self.db.commit()
        return await self._reload(playlist)

    async def delete(self, playlist_id: uuid.UUID, actor_id: uuid.UUID) -> PlaylistSchema:
        playlist = await self._get_owned(playlist_id, actor_id)
        deleted = playlist_schema(playlist)
        await self.db.delete(playlist)
        await self.db.commit()
        logger.info(f"Playlist {playlist_id} deleted by {actor_id}")
        return deleted

    # ── Membership ───────────────────────────────────────────────────────

    async def add_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID, actor_id: uuid.UUID) -> PlaylistSchema:
        playlist = await self._get_owned(playlist_id, actor_id)

        video = await self.db.get(Video, video_id)
        if video is None:
            raise NotFound("Video not found")
        owner = await self.db.get(User, video.owner_id)
        if owner is None:
            raise NotFound("User not found")

        if any(e.video_id == video_id for e in playlist.entries):
            return playlist_schema(playlist)

        entry = PlaylistEntry(
            playlist_id=playlist.id,
            video_id=video.id,
            video_file=video.video_file,
            title=video.title,
            channel=owner.username,
            position=max((e.position for e in playlist.entries), default=-1) + 1,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(entry)
                await self.db.flush()
        except IntegrityError:
            logger.info(f"Video {video_id} was added to playlist {playlist_id} concurrently")

        playlist.updated_at = utcnow()
        await self.db.commit()
        return await self._reload(playlist)

    async def remove_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID, actor_id: uuid.UUID) -> PlaylistSchema:
        playlist = await self._get_owned(playlist_id, actor_id)
        if not playlist.entries:
            raise InvalidState("No videos in the playlist to remove")
        if not any(e.video_id == video_id for e in playlist.entries):
            raise NotFound("Video not found in the playlist")

        await self.db.execute(
            delete(PlaylistEntry).where(
                PlaylistEntry.playlist_id == playlist_id,
                PlaylistEntry.video_id == video_id,
            )
        )
        playlist.updated_at = utcnow()
        await self.db.commit()
        return await self._reload(playlist)

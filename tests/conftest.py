"""
Shared fixtures: a throwaway SQLite store per test, in-memory media
collaborators and an HTTP client bound to the application.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from vidtube.core.config import get_settings
from vidtube.core.database import Database
from vidtube.core.errors import InvalidInput
from vidtube.main import app
from vidtube.models.models import (
    Comment, Like, LikeKind, Playlist, Subscription, Tweet, User, Video,
)
from vidtube.services.media.media_host import MediaHostError, UploadedAsset

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeMediaHost:
    """Records uploads and deletions; can be told to fail the Nth upload."""

    def __init__(self):
        self.uploaded: List[str] = []
        self.deleted: List[str] = []
        self.fail_on_upload: Optional[int] = None

    async def upload(self, local_path: Path) -> UploadedAsset:
        if self.fail_on_upload is not None and len(self.uploaded) + 1 == self.fail_on_upload:
            raise MediaHostError("upload rejected")
        public_id = uuid.uuid4().hex
        self.uploaded.append(public_id)
        return UploadedAsset(url=f"http://media.test/vidtube/{public_id}{local_path.suffix}", public_id=public_id)

    async def delete(self, public_id: str) -> None:
        self.deleted.append(public_id)


class FakeDurationProbe:
    def __init__(self, duration: str = "3:25"):
        self.duration = duration
        self.fail = False

    async def probe(self, local_path: Path) -> str:
        if self.fail:
            raise InvalidInput("Could not read video duration")
        return self.duration


class Seed:
    """Inserts rows through short-lived sessions so no transaction stays open."""

    def __init__(self, database: Database):
        self.database = database
        self._count = 0

    async def _add(self, row):
        async with self.database.session() as session:
            session.add(row)
            await session.commit()
        return row

    async def user(self, username: Optional[str] = None, **fields) -> User:
        self._count += 1
        username = username or f"user{self._count}"
        fields.setdefault("full_name", username.title())
        fields.setdefault("avatar", f"http://media.test/avatars/{username}.png")
        return await self._add(User(username=username, email=f"{username}@example.com", **fields))

    async def video(self, owner: User, title: str = "A video", **fields) -> Video:
        self._count += 1
        fields.setdefault("description", f"About {title}")
        fields.setdefault("video_file", f"http://media.test/vidtube/v{self._count}.mp4")
        fields.setdefault("thumbnail", f"http://media.test/vidtube/t{self._count}.png")
        fields.setdefault("duration", "1:00")
        return await self._add(Video(owner_id=owner.id, title=title, **fields))

    async def comment(self, video: Video, owner: User, content: str = "Nice", **fields) -> Comment:
        return await self._add(Comment(video_id=video.id, owner_id=owner.id, content=content, **fields))

    async def tweet(self, owner: User, content: str = "hello", **fields) -> Tweet:
        return await self._add(Tweet(owner_id=owner.id, content=content, **fields))

    async def playlist(self, owner: User, name: str = "Favourites", description: str = "Best of") -> Playlist:
        return await self._add(Playlist(owner_id=owner.id, name=name, description=description))

    async def like(self, actor: User, kind: LikeKind, target_id: uuid.UUID) -> Like:
        return await self._add(Like(liked_by=actor.id, target_kind=kind, target_id=target_id))

    async def subscription(self, subscriber: User, channel: User) -> Subscription:
        return await self._add(Subscription(subscriber_id=subscriber.id, channel_id=channel.id))


def at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def auth(user: User) -> dict:
    return {get_settings().actor_header: str(user.id)}


@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'vidtube.db'}")
    await db.connect()
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def seed(database) -> Seed:
    return Seed(database)


@pytest.fixture
def media_host() -> FakeMediaHost:
    return FakeMediaHost()


@pytest.fixture
def duration_probe() -> FakeDurationProbe:
    return FakeDurationProbe()


@pytest.fixture
async def client(database, media_host, duration_probe, tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "upload_temp_dir", str(tmp_path / "uploads"))
    app.state.database = database
    app.state.media_host = media_host
    app.state.duration_probe = duration_probe
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

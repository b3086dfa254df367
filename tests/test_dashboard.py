from __future__ import annotations

import uuid

from conftest import auth
from vidtube.models.models import LikeKind


async def test_stats_for_empty_channel_are_zero(client, seed):
    user = await seed.user("quiet")

    resp = await client.get("/api/v1/dashboard/stats", headers=auth(user))

    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "channel_name": "quiet",
        "channel_avatar": user.avatar,
        "total_subscribers": 0,
        "total_videos": 0,
        "total_views": 0,
        "total_likes": 0,
    }


async def test_stats_totals(client, seed):
    owner = await seed.user("owner")
    a = await seed.user("a")
    b = await seed.user("b")
    first = await seed.video(owner, views=10)
    second = await seed.video(owner, views=5)
    await seed.video(owner, views=7, is_published=False)
    await seed.video(a, views=100)

    await seed.subscription(a, owner)
    await seed.subscription(b, owner)
    await seed.like(a, LikeKind.VIDEO, first.id)
    await seed.like(b, LikeKind.VIDEO, first.id)
    await seed.like(a, LikeKind.VIDEO, second.id)
    comment = await seed.comment(first, a)
    await seed.like(b, LikeKind.COMMENT, comment.id)

    data = (await client.get("/api/v1/dashboard/stats", headers=auth(owner))).json()["data"]

    assert data["total_videos"] == 2
    assert data["total_views"] == 22
    assert data["total_subscribers"] == 2
    assert data["total_likes"] == 3


async def test_like_then_unlike_is_reflected_in_stats(client, seed):
    owner = await seed.user("owner")
    fan = await seed.user("fan")
    video = await seed.video(owner)

    await client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth(fan))
    stats = (await client.get("/api/v1/dashboard/stats", headers=auth(owner))).json()["data"]
    assert stats["total_likes"] == 1

    await client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth(fan))
    stats = (await client.get("/api/v1/dashboard/stats", headers=auth(owner))).json()["data"]
    assert stats["total_likes"] == 0


async def test_stats_for_unknown_actor(client):
    resp = await client.get("/api/v1/dashboard/stats", headers={"X-User-Id": str(uuid.uuid4())})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Channel not found"


async def test_dashboard_videos_include_unpublished(client, seed):
    owner = await seed.user("owner")
    await seed.video(owner, title="public")
    await seed.video(owner, title="draft", is_published=False)

    data = (await client.get("/api/v1/dashboard/videos", headers=auth(owner))).json()["data"]

    assert data["total_videos"] == 2
    assert {v["title"]: v["is_published"] for v in data["videos"]} == {"public": True, "draft": False}

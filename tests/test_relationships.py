from __future__ import annotations

import uuid

from conftest import at, auth
from vidtube.models.models import LikeKind


# ── Channel profile ──────────────────────────────────────────────────────

async def test_channel_profile(client, seed):
    channel = await seed.user("chef", full_name="Chef Jo", cover_image="http://media.test/cover.png")
    fan = await seed.user("fan")
    await seed.subscription(fan, channel)
    await seed.video(channel, title="old", views=50, created_at=at(1))
    await seed.video(channel, title="new", views=5, created_at=at(2))
    await seed.video(channel, title="draft", is_published=False, created_at=at(3))
    await seed.playlist(channel, name="Soups")

    resp = await client.get(f"/api/v1/channels/{channel.id}", params={"sort": "latest"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["username"] == "chef"
    assert data["full_name"] == "Chef Jo"
    assert data["cover_image"] == "http://media.test/cover.png"
    assert data["subscriber_count"] == 1
    assert [v["title"] for v in data["videos"]] == ["new", "old"]
    assert [p["name"] for p in data["playlists"]] == ["Soups"]


async def test_channel_profile_popular_sort(client, seed):
    channel = await seed.user()
    await seed.video(channel, title="quiet", views=1)
    await seed.video(channel, title="hit", views=900)

    data = (await client.get(f"/api/v1/channels/{channel.id}", params={"sort": "popular"})).json()["data"]

    assert [v["title"] for v in data["videos"]] == ["hit", "quiet"]


async def test_channel_profile_errors(client, seed):
    resp = await client.get(f"/api/v1/channels/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Channel not found"

    resp = await client.get("/api/v1/channels/deadbeef")
    assert resp.status_code == 400

    channel = await seed.user()
    resp = await client.get(f"/api/v1/channels/{channel.id}", params={"sort": "random"})
    assert resp.status_code == 400


# ── Comments ─────────────────────────────────────────────────────────────

async def test_comment_pages(client, seed):
    owner = await seed.user("owner")
    commenter = await seed.user("commenter")
    video = await seed.video(owner)
    for i in range(15):
        await seed.comment(video, commenter, content=f"c{i}", created_at=at(i))

    first = (await client.get(f"/api/v1/comments/{video.id}", params={"page": 1, "limit": 10})).json()["data"]
    second = (await client.get(f"/api/v1/comments/{video.id}", params={"page": 2, "limit": 10})).json()["data"]

    assert len(first["comments"]) == 10
    assert first["comments"][0]["content"] == "c14"
    assert first["comments"][0]["owner"]["username"] == "commenter"
    assert first["has_next_page"] is True
    assert first["has_prev_page"] is False

    assert len(second["comments"]) == 5
    assert second["comments"][-1]["content"] == "c0"
    assert second["total_comments"] == 15
    assert second["total_pages"] == 2
    assert second["has_next_page"] is False
    assert second["has_prev_page"] is True


async def test_comments_of_unknown_video(client):
    resp = await client.get(f"/api/v1/comments/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Video not found"


# ── Subscriptions ────────────────────────────────────────────────────────

async def test_subscriber_and_subscription_listings(client, seed):
    channel = await seed.user("channel")
    a = await seed.user("a")
    b = await seed.user("b")
    await seed.subscription(a, channel)
    await seed.subscription(b, channel)
    await seed.subscription(a, b)

    subscribers = (await client.get(f"/api/v1/subscriptions/u/{channel.id}")).json()["data"]
    assert subscribers["channel"]["username"] == "channel"
    assert subscribers["channel"]["subscriber_count"] == 2
    assert sorted(s["username"] for s in subscribers["subscribers"]) == ["a", "b"]

    subscriptions = (await client.get(f"/api/v1/subscriptions/c/{a.id}")).json()["data"]
    assert subscriptions["channel"]["username"] == "a"
    assert sorted(s["username"] for s in subscriptions["subscriptions"]) == ["b", "channel"]


async def test_listings_for_unknown_user(client):
    missing = uuid.uuid4()
    assert (await client.get(f"/api/v1/subscriptions/u/{missing}")).status_code == 404
    assert (await client.get(f"/api/v1/subscriptions/c/{missing}")).status_code == 404


# ── Likes ────────────────────────────────────────────────────────────────

async def test_liked_videos_count_only_the_actors_like(client, seed):
    owner = await seed.user("owner")
    me = await seed.user("me")
    other = await seed.user("other")
    video = await seed.video(owner, title="Loved")
    await seed.video(owner, title="Ignored")
    await seed.like(me, LikeKind.VIDEO, video.id)
    await seed.like(other, LikeKind.VIDEO, video.id)

    resp = await client.get("/api/v1/likes/videos", headers=auth(me))

    assert resp.status_code == 200
    assert resp.json()["data"] == [
        {
            "video_id": str(video.id),
            "like_count": 1,
            "video_details": {
                "title": "Loved",
                "description": "About Loved",
                "thumbnail": video.thumbnail,
            },
        }
    ]


async def test_liked_videos_ignores_comment_likes(client, seed):
    owner = await seed.user()
    me = await seed.user()
    video = await seed.video(owner)
    comment = await seed.comment(video, owner)
    await seed.like(me, LikeKind.COMMENT, comment.id)

    assert (await client.get("/api/v1/likes/videos", headers=auth(me))).json()["data"] == []


# ── Tweets / playlists ───────────────────────────────────────────────────

async def test_user_tweets_grouped_newest_first(client, seed):
    user = await seed.user("poster")
    await seed.tweet(user, "first", created_at=at(1))
    await seed.tweet(user, "second", created_at=at(2))

    data = (await client.get(f"/api/v1/tweets/user/{user.id}")).json()["data"]

    assert len(data) == 1
    assert data[0]["owner"]["username"] == "poster"
    assert [t["content"] for t in data[0]["tweets"]] == ["second", "first"]


async def test_user_without_tweets(client, seed):
    user = await seed.user()
    assert (await client.get(f"/api/v1/tweets/user/{user.id}")).json()["data"] == []


async def test_user_playlists_grouped(client, seed):
    user = await seed.user("curator")
    await seed.playlist(user, name="One")
    await seed.playlist(user, name="Two")

    data = (await client.get(f"/api/v1/playlists/user/{user.id}")).json()["data"]

    assert len(data) == 1
    assert data[0]["owner_id"] == str(user.id)
    assert sorted(p["name"] for p in data[0]["playlists"]) == ["One", "Two"]


async def test_comment_pages_with_equal_timestamps_cover_every_comment(client, seed):
    owner = await seed.user()
    video = await seed.video(owner)
    for i in range(7):
        await seed.comment(video, owner, content=f"c{i}", created_at=at(0))

    seen = []
    for page in (1, 2, 3):
        data = (await client.get(f"/api/v1/comments/{video.id}", params={"page": page, "limit": 3})).json()["data"]
        seen.extend(c["id"] for c in data["comments"])

    assert len(seen) == 7
    assert len(set(seen)) == 7


async def test_channel_profile_defaults_to_creation_order(client, seed):
    channel = await seed.user()
    await seed.video(channel, title="second", created_at=at(5))
    await seed.video(channel, title="first", created_at=at(1))

    data = (await client.get(f"/api/v1/channels/{channel.id}")).json()["data"]

    assert [v["title"] for v in data["videos"]] == ["first", "second"]

from __future__ import annotations

import pytest

from conftest import at


async def test_feed_lists_only_published_videos(client, seed):
    owner = await seed.user("owner")
    await seed.video(owner, title="visible", created_at=at(1))
    await seed.video(owner, title="hidden", is_published=False, created_at=at(2))

    resp = await client.get("/api/v1/videos")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [v["title"] for v in data["videos"]] == ["visible"]
    assert data["total_videos"] == 1
    assert data["videos"][0]["owner"]["username"] == "owner"


async def test_feed_paginates_newest_first(client, seed):
    owner = await seed.user()
    for i in range(5):
        await seed.video(owner, title=f"v{i}", created_at=at(i))

    first = (await client.get("/api/v1/videos", params={"page": 1, "limit": 2})).json()["data"]
    last = (await client.get("/api/v1/videos", params={"page": 3, "limit": 2})).json()["data"]

    assert [v["title"] for v in first["videos"]] == ["v4", "v3"]
    assert first["total_pages"] == 3
    assert first["current_page"] == 1
    assert [v["title"] for v in last["videos"]] == ["v0"]


async def test_feed_search_and_sort(client, seed):
    owner = await seed.user()
    await seed.video(owner, title="Cooking pasta", views=3)
    await seed.video(owner, title="Cooking rice", views=9)
    await seed.video(owner, title="Guitar lesson", views=50)

    data = (
        await client.get("/api/v1/videos", params={"query": "cook", "sort_by": "views", "sort_type": "asc"})
    ).json()["data"]

    assert [v["title"] for v in data["videos"]] == ["Cooking pasta", "Cooking rice"]
    assert data["total_videos"] == 2


async def test_feed_filters_by_owner(client, seed):
    a = await seed.user("a")
    b = await seed.user("b")
    await seed.video(a, title="from a")
    await seed.video(b, title="from b")

    data = (await client.get("/api/v1/videos", params={"user_id": str(b.id)})).json()["data"]

    assert [v["title"] for v in data["videos"]] == ["from b"]


async def test_feed_rejects_unknown_sort(client):
    resp = await client.get("/api/v1/videos", params={"sort_by": "password"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    resp = await client.get("/api/v1/videos", params={"sort_type": "sideways"})
    assert resp.status_code == 400


async def test_feed_on_empty_store(client):
    data = (await client.get("/api/v1/videos")).json()["data"]
    assert data == {"videos": [], "current_page": 1, "total_pages": 0, "total_videos": 0}


@pytest.mark.parametrize("sort_by", ["views", "title", "updated_at"])
@pytest.mark.parametrize("sort_type", ["asc", "-1"])
async def test_drafts_never_appear_in_filtered_feed(client, seed, sort_by, sort_type):
    owner = await seed.user("owner")
    await seed.video(owner, title="Cooking live", views=10)
    await seed.video(owner, title="Cooking draft", views=999, is_published=False)

    data = (
        await client.get(
            "/api/v1/videos",
            params={"sort_by": sort_by, "sort_type": sort_type, "query": "cooking", "user_id": str(owner.id)},
        )
    ).json()["data"]

    assert [v["title"] for v in data["videos"]] == ["Cooking live"]
    assert data["total_videos"] == 1
    assert data["total_pages"] == 1

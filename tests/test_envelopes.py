from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from conftest import auth
from vidtube.core.errors import InvalidInput, parse_id, require_text
from vidtube.services.media.duration_probe import format_duration
from vidtube.services.media.media_host import public_id_from_url
from vidtube.services.resolver.relationship_service import RelationshipService


async def test_success_envelope(client, seed):
    user = await seed.user("shape")
    resp = await client.get(f"/api/v1/channels/{user.id}")
    body = resp.json()
    assert set(body) == {"statusCode", "data", "message", "success"}
    assert body["statusCode"] == 200
    assert body["success"] is True


async def test_validation_errors_use_error_envelope(client, seed):
    user = await seed.user()
    resp = await client.post("/api/v1/tweets", json={}, headers=auth(user))
    body = resp.json()
    assert resp.status_code == 400
    assert body["statusCode"] == 400
    assert body["success"] is False
    assert body["message"] == "Invalid request"
    assert body["errors"]


async def test_unknown_route(client):
    resp = await client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


async def test_store_failure_maps_to_503(client, monkeypatch):
    async def unavailable(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(RelationshipService, "channel_profile", unavailable)
    resp = await client.get(f"/api/v1/channels/{uuid.uuid4()}")

    assert resp.status_code == 503
    assert resp.json() == {
        "statusCode": 503,
        "message": "Data store unavailable",
        "success": False,
        "errors": [],
    }


async def test_healthcheck(client):
    resp = await client.get("/api/v1/healthcheck")
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "healthy"


def test_parse_id():
    value = uuid.uuid4()
    assert parse_id(str(value)) == value
    with pytest.raises(InvalidInput):
        parse_id("deadbeef")
    with pytest.raises(InvalidInput):
        parse_id("")


def test_require_text():
    assert require_text("  hi ", "Title") == "hi"
    with pytest.raises(InvalidInput, match="Title is required"):
        require_text("   ", "Title")


def test_format_duration():
    assert format_duration(5) == "0:05"
    assert format_duration(205.4) == "3:25"
    assert format_duration(3725) == "1:02:05"


def test_public_id_from_url():
    assert public_id_from_url("https://media.example.com/vidtube/ab12cd.mp4") == "ab12cd"
    assert public_id_from_url("https://media.example.com/vidtube/ab12cd") == "ab12cd"

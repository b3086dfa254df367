"""
VidTube API — subscription routes.

  POST /subscriptions/c/{channel_id}     — toggle subscription
  GET  /subscriptions/c/{subscriber_id}  — channels the user subscribes to
  GET  /subscriptions/u/{channel_id}     — subscribers of a channel
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from vidtube.api.deps import get_relationship_service, get_toggle_service
from vidtube.core.auth import get_current_actor
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.services.resolver.relationship_service import RelationshipService
from vidtube.services.toggle.toggle_service import ToggleKind, ToggleService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/c/{channel_id}")
async def toggle_subscription(
    channel_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    toggles: ToggleService = Depends(get_toggle_service),
):
    result = await toggles.toggle(actor_id, ToggleKind.SUBSCRIPTION, parse_id(channel_id, "channel id"))
    message = "Subscribed successfully" if result.state == "added" else "Unsubscribed successfully"
    return api_response(result, message)


@router.get("/c/{subscriber_id}")
async def subscribed_channels(
    subscriber_id: str,
    resolver: RelationshipService = Depends(get_relationship_service),
):
    listing = await resolver.subscribed_channels(parse_id(subscriber_id, "subscriber id"))
    return api_response(listing, "Subscribed channels fetched successfully")


@router.get("/u/{channel_id}")
async def channel_subscribers(
    channel_id: str,
    resolver: RelationshipService = Depends(get_relationship_service),
):
    listing = await resolver.channel_subscribers(parse_id(channel_id, "channel id"))
    return api_response(listing, "Subscribers fetched successfully")

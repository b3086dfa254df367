"""
VidTube API — tweet routes.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from vidtube.api.deps import get_relationship_service, get_tweet_service
from vidtube.core.auth import get_current_actor
from vidtube.core.errors import parse_id
from vidtube.core.responses import api_response
from vidtube.schemas.schemas import TweetCreate
from vidtube.services.resolver.relationship_service import RelationshipService
from vidtube.services.tweets.tweet_service import TweetService

router = APIRouter(prefix="/tweets", tags=["tweets"])


@router.post("")
async def create_tweet(
    body: TweetCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    tweets: TweetService = Depends(get_tweet_service),
):
    tweet = await tweets.create(actor_id, body.content)
    return api_response(tweet, "Tweet created successfully", status_code=201)


@router.get("/user/{user_id}")
async def user_tweets(
    user_id: str,
    resolver: RelationshipService = Depends(get_relationship_service),
):
    groups = await resolver.user_tweets(parse_id(user_id, "user id"))
    return api_response(groups, "Tweets fetched successfully")


@router.patch("/{tweet_id}")
async def update_tweet(
    tweet_id: str,
    body: TweetCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    tweets: TweetService = Depends(get_tweet_service),
):
    tweet = await tweets.update(parse_id(tweet_id, "tweet id"), actor_id, body.content)
    return api_response(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}")
async def delete_tweet(
    tweet_id: str,
    actor_id: uuid.UUID = Depends(get_current_actor),
    tweets: TweetService = Depends(get_tweet_service),
):
    tweet = await tweets.delete(parse_id(tweet_id, "tweet id"), actor_id)
    return api_response(tweet, "Tweet deleted successfully")

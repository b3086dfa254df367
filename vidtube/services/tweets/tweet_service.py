"""
VidTube Tweet Service — short text posts on a channel.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import Forbidden, NotFound, require_text
from vidtube.models.models import Like, LikeKind, Tweet
from vidtube.schemas.builders import tweet_schema
from vidtube.schemas.schemas import TweetSchema

logger = logging.getLogger(__name__)


class TweetService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_owned(self, tweet_id: uuid.UUID, actor_id: uuid.UUID) -> Tweet:
        tweet = await self.db.get(Tweet, tweet_id)
        if tweet is None:
            raise NotFound("Tweet not found")
        if tweet.owner_id != actor_id:
            raise Forbidden("You are not authorized to modify this tweet")
        return tweet

    async def create(self, actor_id: uuid.UUID, content: str) -> TweetSchema:
        tweet = Tweet(owner_id=actor_id, content=require_text(content, "Content"))
        self.db.add(tweet)
        await self.db.commit()
        return tweet_schema(tweet)

    async def update(self, tweet_id: uuid.UUID, actor_id: uuid.UUID, content: str) -> TweetSchema:
        content = require_text(content, "Content")
        tweet = await self._get_owned(tweet_id, actor_id)
        tweet.content = content
        await self.db.commit()
        await self.db.refresh(tweet)
        return tweet_schema(tweet)

    async def delete(self, tweet_id: uuid.UUID, actor_id: uuid.UUID) -> TweetSchema:
        tweet = await self._get_owned(tweet_id, actor_id)
        deleted = tweet_schema(tweet)
        await self.db.execute(
            delete(Like).where(Like.target_kind == LikeKind.TWEET, Like.target_id == tweet_id)
        )
        await self.db.delete(tweet)
        await self.db.commit()
        logger.info(f"Tweet {tweet_id} deleted by {actor_id}")
        return deleted

"""
VidTube Toggle Engine — reversible like/subscribe edges.

    toggle(actor, kind, target)
      1. target must exist (NotFound otherwise)
      2. edge present  → delete it       → "removed"
      3. edge absent   → insert it       → "added"

Concurrency: no application lock is taken. Each edge table carries a unique
constraint on (actor, target); the insert runs inside a SAVEPOINT and a
uniqueness violation means a concurrent request inserted the same edge
first. That is reported as the current state rather than as an error.
"""
from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Optional, Union

from prometheus_client import Counter
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.config import get_settings
from vidtube.core.errors import InvalidInput, NotFound
from vidtube.models.models import (
    Comment, Like, LikeKind, LikeTarget, Subscription, Tweet, User, Video,
)
from vidtube.schemas.schemas import ToggleResult

logger = logging.getLogger(__name__)
settings = get_settings()

TOGGLES_TOTAL = Counter(
    "vidtube_toggles_total",
    "Edge toggles by kind and resulting state",
    ["kind", "state"],
)

Edge = Union[Like, Subscription]


class ToggleKind(str, Enum):
    VIDEO_LIKE = "video-like"
    COMMENT_LIKE = "comment-like"
    TWEET_LIKE = "tweet-like"
    SUBSCRIPTION = "subscription"


class ToggleState(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


# kind → (like target kind, target model, label for errors)
_LIKE_TARGETS = {
    ToggleKind.VIDEO_LIKE: (LikeKind.VIDEO, Video, "Video"),
    ToggleKind.COMMENT_LIKE: (LikeKind.COMMENT, Comment, "Comment"),
    ToggleKind.TWEET_LIKE: (LikeKind.TWEET, Tweet, "Tweet"),
}


class ToggleService:
    """Creates or deletes a Like/Subscription edge depending on its presence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def toggle(self, actor_id: uuid.UUID, kind: ToggleKind, target_id: uuid.UUID) -> ToggleResult:
        await self._ensure_target(actor_id, kind, target_id)

        existing = await self._find_edge(actor_id, kind, target_id)
        if existing is not None:
            model = type(existing)
            await self.db.execute(delete(model).where(model.id == existing.id))
            await self.db.commit()
            return self._result(kind, target_id, ToggleState.REMOVED)

        edge = self._new_edge(actor_id, kind, target_id)
        try:
            async with self.db.begin_nested():
                self.db.add(edge)
                await self.db.flush()
        except IntegrityError:
            logger.info(
                f"Toggle conflict on {kind.value} {target_id} for {actor_id}: "
                "edge inserted concurrently, reporting current state"
            )
            edge = await self._find_edge(actor_id, kind, target_id)
        await self.db.commit()

        if edge is None:
            return self._result(kind, target_id, ToggleState.REMOVED)
        return self._result(kind, target_id, ToggleState.ADDED, edge)

    # ── Targets ──────────────────────────────────────────────────────────

    async def _ensure_target(self, actor_id: uuid.UUID, kind: ToggleKind, target_id: uuid.UUID):
        if kind == ToggleKind.SUBSCRIPTION:
            if not settings.allow_self_subscription and actor_id == target_id:
                raise InvalidInput("You cannot subscribe to your own channel")
            found = await self.db.scalar(select(User.id).where(User.id == target_id))
            if found is None:
                raise NotFound("Channel not found")
            return

        _, model, label = _LIKE_TARGETS[kind]
        found = await self.db.scalar(select(model.id).where(model.id == target_id))
        if found is None:
            raise NotFound(f"{label} not found")

    # ── Edges ────────────────────────────────────────────────────────────

    async def _find_edge(self, actor_id: uuid.UUID, kind: ToggleKind, target_id: uuid.UUID) -> Optional[Edge]:
        if kind == ToggleKind.SUBSCRIPTION:
            query = select(Subscription).where(
                Subscription.subscriber_id == actor_id,
                Subscription.channel_id == target_id,
            )
        else:
            target = LikeTarget(kind=_LIKE_TARGETS[kind][0], target_id=target_id)
            query = select(Like).where(
                Like.liked_by == actor_id,
                Like.target_kind == target.kind,
                Like.target_id == target.target_id,
            )
        result = await self.db.execute(query)
        return result.scalars().first()

    @staticmethod
    def _new_edge(actor_id: uuid.UUID, kind: ToggleKind, target_id: uuid.UUID) -> Edge:
        if kind == ToggleKind.SUBSCRIPTION:
            return Subscription(subscriber_id=actor_id, channel_id=target_id)
        return Like(liked_by=actor_id, target_kind=_LIKE_TARGETS[kind][0], target_id=target_id)

    @staticmethod
    def _result(
        kind: ToggleKind,
        target_id: uuid.UUID,
        state: ToggleState,
        edge: Optional[Edge] = None,
    ) -> ToggleResult:
        TOGGLES_TOTAL.labels(kind=kind.value, state=state.value).inc()
        return ToggleResult(
            state=state.value,
            kind=kind.value,
            target_id=str(target_id),
            edge_id=str(edge.id) if edge is not None else None,
        )

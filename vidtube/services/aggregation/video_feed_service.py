"""
VidTube Video Feed — paginated listing of published videos.

Only ``is_published`` videos are ever selected; every other filter narrows
that set further.
"""
from __future__ import annotations

import logging
import math
import uuid
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.core.errors import InvalidInput
from vidtube.models.models import User, Video
from vidtube.schemas.builders import owner_summary, video_fields
from vidtube.schemas.schemas import FeedVideo, VideoFeedPage

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "created_at": Video.created_at,
    "createdAt": Video.created_at,
    "updated_at": Video.updated_at,
    "views": Video.views,
    "title": Video.title,
}

ASCENDING = {"asc", "1"}
DESCENDING = {"desc", "-1"}


class VideoFeedService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def feed(
        self,
        page: int = 1,
        limit: int = 10,
        query: Optional[str] = None,
        sort_by: str = "created_at",
        sort_type: str = "desc",
        owner_id: Optional[uuid.UUID] = None,
    ) -> VideoFeedPage:
        if page < 1 or limit < 1:
            raise InvalidInput("page and limit must be positive")
        column = SORT_FIELDS.get(sort_by)
        if column is None:
            raise InvalidInput(f"Cannot sort by '{sort_by}'")
        direction = str(sort_type).lower()
        if direction not in ASCENDING | DESCENDING:
            raise InvalidInput(f"Invalid sort type '{sort_type}'")

        conditions = [Video.is_published.is_(True)]
        if owner_id is not None:
            conditions.append(Video.owner_id == owner_id)
        if query and query.strip():
            pattern = f"%{query.strip()}%"
            conditions.append(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

        total = await self.db.scalar(select(func.count(Video.id)).where(*conditions)) or 0

        order = column.asc() if direction in ASCENDING else column.desc()
        rows = await self.db.execute(
            select(Video, User)
            .join(User, User.id == Video.owner_id)
            .where(*conditions)
            .order_by(order, Video.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        videos = [
            FeedVideo(**video_fields(video), owner=owner_summary(owner))
            for video, owner in rows.all()
        ]

        return VideoFeedPage(
            videos=videos,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_videos=total,
        )

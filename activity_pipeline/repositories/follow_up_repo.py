"""
Follow-up repository with bulk lookup by activity.
"""
import uuid
from typing import Iterable, List

from sqlmodel import select, col
from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.models.follow_up import ActivityFollowUp
from activity_pipeline.repositories.base import BaseRepository


class FollowUpRepository(BaseRepository[ActivityFollowUp]):
    """Repository for ActivityFollowUp operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(ActivityFollowUp, session)
    
    async def fetch_for_activities(
        self, activity_ids: Iterable[uuid.UUID]
    ) -> List[ActivityFollowUp]:
        """Follow-ups for all given activities, ordered by follow_up_date."""
        ids = list(dict.fromkeys(activity_ids))
        if not ids:
            return []
        
        query = select(ActivityFollowUp).where(
            col(ActivityFollowUp.activity_id).in_(ids)
        ).order_by(ActivityFollowUp.follow_up_date)
        async with self._store_errors("fetch follow-ups"):
            result = await self.session.exec(query)
            return list(result.all())

"""
Activity repository - reads used by pipeline reconstruction.
"""
import uuid
from typing import Optional, List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.models.activity import Activity
from activity_pipeline.repositories.base import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """Repository for Activity operations."""
    
    def __init__(self, session: AsyncSession):
        super().__init__(Activity, session)
    
    async def fetch_all(self) -> List[Activity]:
        """Load every activity in one query."""
        return await self.list(order_by="activity_date")
    
    async def fetch_by_id(self, activity_id: uuid.UUID) -> Optional[Activity]:
        """Point lookup of a single activity."""
        return await self.get(activity_id)
    
    async def fetch_children_of(self, activity_id: uuid.UUID) -> List[Activity]:
        """Activities whose parent is activity_id, oldest first."""
        query = select(Activity).where(
            Activity.parent_activity_id == activity_id
        ).order_by(Activity.activity_date)
        async with self._store_errors("fetch children"):
            result = await self.session.exec(query)
            return list(result.all())

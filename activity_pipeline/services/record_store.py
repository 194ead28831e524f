"""
Record store adapter - the read interface pipeline reconstruction depends on.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional, List, Set

from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.models.activity import Activity
from activity_pipeline.models.follow_up import ActivityFollowUp
from activity_pipeline.repositories.activity_repo import ActivityRepository
from activity_pipeline.repositories.follow_up_repo import FollowUpRepository


class RecordStore(ABC):
    """
    Bulk source of activities and follow-ups.
    Every method may raise StoreUnavailableError.
    """
    
    @abstractmethod
    async def fetch_all_activities(self) -> List[Activity]:
        """Return every activity."""
        pass
    
    @abstractmethod
    async def fetch_follow_ups(self, activity_ids: Set[uuid.UUID]) -> List[ActivityFollowUp]:
        """
        Return follow-ups owned by any of the given activities,
        ordered by follow_up_date. An empty id set returns [] without I/O.
        """
        pass
    
    @abstractmethod
    async def fetch_activity_by_id(self, activity_id: uuid.UUID) -> Optional[Activity]:
        """Return one activity, or None if it does not exist."""
        pass
    
    @abstractmethod
    async def fetch_children_of(self, activity_id: uuid.UUID) -> List[Activity]:
        """Return activities whose parent_activity_id is activity_id."""
        pass


class SQLRecordStore(RecordStore):
    """RecordStore backed by the SQLModel repositories."""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_repo = ActivityRepository(session)
        self.follow_up_repo = FollowUpRepository(session)
    
    async def fetch_all_activities(self) -> List[Activity]:
        return await self.activity_repo.fetch_all()
    
    async def fetch_follow_ups(self, activity_ids: Set[uuid.UUID]) -> List[ActivityFollowUp]:
        return await self.follow_up_repo.fetch_for_activities(activity_ids)
    
    async def fetch_activity_by_id(self, activity_id: uuid.UUID) -> Optional[Activity]:
        return await self.activity_repo.fetch_by_id(activity_id)
    
    async def fetch_children_of(self, activity_id: uuid.UUID) -> List[Activity]:
        return await self.activity_repo.fetch_children_of(activity_id)

"""
Follow-up service - list, create, update and delete follow-up notes on activities.
"""
import logging
import uuid
from datetime import date
from typing import Iterable, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.config import settings
from activity_pipeline.core.dates import as_utc, utcnow
from activity_pipeline.core.exceptions import NotFoundError
from activity_pipeline.repositories.activity_repo import ActivityRepository
from activity_pipeline.repositories.follow_up_repo import FollowUpRepository
from activity_pipeline.models.follow_up import ActivityFollowUp, Priority
from activity_pipeline.schemas.follow_up import (
    ActivityFollowUpsResponse, FollowUpCreate, FollowUpResponse, FollowUpStats, FollowUpUpdate
)

logger = logging.getLogger(__name__)


def is_overdue(follow_up, today: Optional[date] = None) -> bool:
    """An open follow-up whose (UTC) day is before today."""
    if follow_up.is_done:
        return False
    today = today or utcnow().date()
    return as_utc(follow_up.follow_up_date).date() < today


def follow_up_stats(follow_ups: Iterable, today: Optional[date] = None) -> FollowUpStats:
    """Count total, completed, pending and overdue follow-ups."""
    follow_ups = list(follow_ups)
    completed = sum(1 for f in follow_ups if f.is_done)
    return FollowUpStats(
        total=len(follow_ups),
        completed=completed,
        pending=len(follow_ups) - completed,
        overdue=sum(1 for f in follow_ups if is_overdue(f, today))
    )


class FollowUpService:
    """Service for follow-up operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_repo = ActivityRepository(session)
        self.follow_up_repo = FollowUpRepository(session)

    async def list_for_activity(
        self,
        activity_id: uuid.UUID,
        today: Optional[date] = None
    ) -> ActivityFollowUpsResponse:
        """Follow-ups of one activity ordered by follow_up_date, with stats."""
        if not await self.activity_repo.exists(activity_id):
            raise NotFoundError("Activity", str(activity_id))

        follow_ups = await self.follow_up_repo.fetch_for_activities([activity_id])
        return ActivityFollowUpsResponse(
            activity_id=activity_id,
            follow_ups=[FollowUpResponse.model_validate(f) for f in follow_ups],
            stats=follow_up_stats(follow_ups, today)
        )

    async def create(self, activity_id: uuid.UUID, data: FollowUpCreate) -> ActivityFollowUp:
        """Create a follow-up on an existing activity."""
        if not await self.activity_repo.exists(activity_id):
            raise NotFoundError("Activity", str(activity_id))

        payload = data.model_dump()
        payload["activity_id"] = activity_id
        payload["priority"] = Priority.normalize(
            data.priority, settings.FOLLOW_UP_DEFAULT_PRIORITY
        )

        follow_up = await self.follow_up_repo.create(payload)
        logger.info(f"Created follow-up {follow_up.id} on activity {activity_id}")
        return follow_up

    async def update(self, follow_up_id: uuid.UUID, data: FollowUpUpdate) -> ActivityFollowUp:
        """Update a follow-up; fields left unset are unchanged."""
        follow_up = await self.follow_up_repo.update(
            follow_up_id, data.model_dump(exclude_unset=True)
        )
        if not follow_up:
            raise NotFoundError("Follow-up", str(follow_up_id))
        return follow_up

    async def delete(self, follow_up_id: uuid.UUID) -> None:
        """Delete a follow-up."""
        if not await self.follow_up_repo.delete(follow_up_id):
            raise NotFoundError("Follow-up", str(follow_up_id))
        logger.info(f"Deleted follow-up {follow_up_id}")

"""
Follow-up API routes.
"""
import uuid
from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.config import settings
from activity_pipeline.database import get_session
from activity_pipeline.core.exceptions import (
    NotFoundError, StoreUnavailableError, raise_not_found, raise_service_unavailable
)
from activity_pipeline.schemas.follow_up import (
    ActivityFollowUpsResponse, FollowUpCreate, FollowUpUpdate, FollowUpResponse
)
from activity_pipeline.services.follow_up_service import FollowUpService

router = APIRouter(prefix=settings.API_PREFIX, tags=["follow-ups"])


@router.get("/activities/{activity_id}/follow-ups", response_model=ActivityFollowUpsResponse)
async def list_follow_ups(
    activity_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """List an activity's follow-ups, oldest first, with completion counts."""
    follow_up_service = FollowUpService(session)
    try:
        return await follow_up_service.list_for_activity(activity_id)
    except NotFoundError:
        raise_not_found("Activity", str(activity_id))
    except StoreUnavailableError as e:
        raise_service_unavailable(e.message)


@router.post(
    "/activities/{activity_id}/follow-ups",
    response_model=FollowUpResponse,
    status_code=201
)
async def create_follow_up(
    activity_id: uuid.UUID,
    follow_up_data: FollowUpCreate,
    session: AsyncSession = Depends(get_session)
):
    """Add a follow-up note to an activity."""
    follow_up_service = FollowUpService(session)
    try:
        return await follow_up_service.create(activity_id, follow_up_data)
    except NotFoundError:
        raise_not_found("Activity", str(activity_id))
    except StoreUnavailableError as e:
        raise_service_unavailable(e.message)


@router.patch("/follow-ups/{follow_up_id}", response_model=FollowUpResponse)
async def update_follow_up(
    follow_up_id: uuid.UUID,
    follow_up_data: FollowUpUpdate,
    session: AsyncSession = Depends(get_session)
):
    """Update a follow-up (note, date, priority, done flag, assignee)."""
    follow_up_service = FollowUpService(session)
    try:
        return await follow_up_service.update(follow_up_id, follow_up_data)
    except NotFoundError:
        raise_not_found("Follow-up", str(follow_up_id))
    except StoreUnavailableError as e:
        raise_service_unavailable(e.message)


@router.delete("/follow-ups/{follow_up_id}", status_code=204)
async def delete_follow_up(
    follow_up_id: uuid.UUID,
    session: AsyncSession = Depends(get_session)
):
    """Delete a follow-up."""
    follow_up_service = FollowUpService(session)
    try:
        await follow_up_service.delete(follow_up_id)
    except NotFoundError:
        raise_not_found("Follow-up", str(follow_up_id))
    except StoreUnavailableError as e:
        raise_service_unavailable(e.message)

"""
API dependencies - shared across all routes.
"""
from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from activity_pipeline.database import get_session
from activity_pipeline.services.record_store import RecordStore, SQLRecordStore
from activity_pipeline.services.pipeline_service import PipelineService


async def get_record_store(
    session: AsyncSession = Depends(get_session)
) -> RecordStore:
    """Record store bound to the request's database session."""
    return SQLRecordStore(session)


async def get_pipeline_service(
    store: RecordStore = Depends(get_record_store)
) -> PipelineService:
    """Pipeline service for a single request."""
    return PipelineService(store)

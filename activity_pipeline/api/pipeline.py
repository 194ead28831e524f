"""
Activity pipeline API routes.
"""
import uuid
from fastapi import APIRouter, Depends

from activity_pipeline.config import settings
from activity_pipeline.api.deps import get_pipeline_service
from activity_pipeline.core.exceptions import (
    NotFoundError, StoreUnavailableError, raise_not_found, raise_service_unavailable
)
from activity_pipeline.schemas.pipeline import PipelineResponse
from activity_pipeline.services.pipeline_service import PipelineService

router = APIRouter(prefix=f"{settings.API_PREFIX}/activities", tags=["pipeline"])


@router.get("/{activity_id}/pipeline", response_model=PipelineResponse)
async def get_activity_pipeline(
    activity_id: uuid.UUID,
    pipeline_service: PipelineService = Depends(get_pipeline_service)
):
    """Get the full pipeline (ancestors and follow-up activities) of an activity."""
    try:
        return await pipeline_service.get_pipeline(activity_id)
    except NotFoundError:
        raise_not_found("Activity", str(activity_id))
    except StoreUnavailableError as e:
        raise_service_unavailable(e.message)

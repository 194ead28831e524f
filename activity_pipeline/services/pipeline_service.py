"""
Pipeline service - public entry point for activity pipeline reconstruction.

Tries the optimized (bulk) strategy first and falls back once to the
original (per-node) strategy. NotFoundError is terminal on either tier.
"""
import logging
import uuid
from typing import Optional, List, Tuple

from activity_pipeline.config import Settings, settings as default_settings
from activity_pipeline.core.exceptions import (
    PipelineException, NotFoundError, StoreUnavailableError, ValidationError
)
from activity_pipeline.models.activity import Activity
from activity_pipeline.schemas.pipeline import PipelineActivity, PipelineResponse
from activity_pipeline.services.annotator import FollowUpAnnotator
from activity_pipeline.services.lineage import (
    LineageStrategy, OptimizedLineageStrategy, OriginalLineageStrategy, find_root
)
from activity_pipeline.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def _as_pipeline_error(error: Exception) -> PipelineException:
    if isinstance(error, PipelineException):
        return error
    return StoreUnavailableError("Record store", str(error))


class PipelineService:
    """Service for activity pipeline reconstruction."""
    
    def __init__(
        self,
        store: RecordStore,
        config: Optional[Settings] = None,
        annotator: Optional[FollowUpAnnotator] = None
    ):
        self.store = store
        self.settings = config or default_settings
        self.optimized: LineageStrategy = OptimizedLineageStrategy(store)
        self.original: LineageStrategy = OriginalLineageStrategy(store)
        self.annotator = annotator or FollowUpAnnotator(store)
        
        # Caller-observable state
        self.activities: List[PipelineActivity] = []
        self.is_loading: bool = False
        self.error: Optional[PipelineException] = None
        self.last_activity_id: Optional[uuid.UUID] = None
    
    async def get_pipeline(self, start_id: uuid.UUID) -> PipelineResponse:
        """
        Reconstruct the annotated pipeline containing start_id.
        
        On failure, activities from the previous successful call are kept
        and the error is stored on self.error before being raised.
        """
        self.last_activity_id = start_id
        self.is_loading = True
        self.error = None
        
        try:
            strategy, lineage = await self._resolve(start_id)
            annotated = await self.annotator.annotate(lineage)
        except Exception as e:
            error = _as_pipeline_error(e)
            self.error = error
            logger.error(f"Error fetching activity pipeline for {start_id}: {error.message}")
            if error is e:
                raise
            raise error from e
        finally:
            self.is_loading = False
        
        self.activities = annotated
        return self._build_response(start_id, strategy, lineage, annotated)
    
    async def refetch(self) -> PipelineResponse:
        """Repeat get_pipeline for the most recently requested activity."""
        if self.last_activity_id is None:
            raise ValidationError("No activity pipeline has been requested yet", "activity_id")
        return await self.get_pipeline(self.last_activity_id)
    
    async def _resolve(self, start_id: uuid.UUID) -> Tuple[LineageStrategy, List[Activity]]:
        if self.settings.PIPELINE_OPTIMIZED_ENABLED:
            logger.info(f"Starting optimized pipeline fetch for activity {start_id}")
            try:
                lineage = await self.optimized.resolve(start_id)
            except NotFoundError:
                raise
            except Exception as e:
                if not self.settings.PIPELINE_FALLBACK_ENABLED:
                    raise
                logger.warning(
                    f"Optimized pipeline fetch failed, falling back to original implementation: {e}"
                )
            else:
                logger.info(f"Optimized pipeline fetch succeeded with {len(lineage)} activities")
                return self.optimized, lineage
        
        logger.info(f"Using original pipeline fetch for activity {start_id}")
        lineage = await self.original.resolve(start_id)
        logger.info(f"Original pipeline fetch succeeded with {len(lineage)} activities")
        return self.original, lineage
    
    def _build_response(
        self,
        start_id: uuid.UUID,
        strategy: LineageStrategy,
        lineage: List[Activity],
        annotated: List[PipelineActivity]
    ) -> PipelineResponse:
        current_stage = next(
            (a.pipeline_stage for a in reversed(annotated) if a.pipeline_stage), None
        )
        follow_ups = [f for a in annotated for f in a.follow_ups]
        annotation_error = self.annotator.last_error
        
        return PipelineResponse(
            start_activity_id=start_id,
            root_activity_id=find_root(start_id, lineage),
            strategy=strategy.name,
            activities=annotated,
            follow_ups_error=annotation_error.message if annotation_error else None,
            current_stage=current_stage,
            total_follow_ups=len(follow_ups),
            open_follow_ups=sum(1 for f in follow_ups if not f.is_done)
        )

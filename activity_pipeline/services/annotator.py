"""
Follow-up annotation for resolved pipelines.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional

from activity_pipeline.core.exceptions import AnnotationError
from activity_pipeline.models.activity import Activity
from activity_pipeline.schemas.follow_up import FollowUpResponse
from activity_pipeline.schemas.pipeline import PipelineActivity
from activity_pipeline.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class FollowUpAnnotator:
    """
    Attaches follow-ups to every activity of a pipeline with one bulk read.
    A failed read leaves every activity with an empty follow_ups list and
    is reported through last_error.
    """
    
    def __init__(self, store: RecordStore):
        self.store = store
        self.last_error: Optional[AnnotationError] = None
    
    async def annotate(self, pipeline: List[Activity]) -> List[PipelineActivity]:
        """Return the pipeline, in the same order, with follow_ups populated."""
        self.last_error = None
        annotated = [PipelineActivity.model_validate(activity) for activity in pipeline]
        if not annotated:
            return annotated
        
        try:
            follow_ups = await self.store.fetch_follow_ups({a.id for a in annotated})
            
            # Group by owning activity, keeping store order
            by_activity: Dict = defaultdict(list)
            for follow_up in follow_ups:
                by_activity[follow_up.activity_id].append(FollowUpResponse.model_validate(follow_up))
        except Exception as e:
            # Unreadable store or malformed rows: keep the pipeline, drop follow-ups
            self.last_error = AnnotationError(str(e))
            logger.error(f"Error fetching follow-up notes for {len(annotated)} activities: {e}")
            return annotated
        
        for activity in annotated:
            activity.follow_ups = by_activity.get(activity.id, [])
        
        logger.debug(f"Attached {len(follow_ups)} follow-ups to {len(annotated)} activities")
        return annotated

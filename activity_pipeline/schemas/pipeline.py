"""
Pipeline schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, field_validator

from activity_pipeline.core.dates import as_utc
from activity_pipeline.schemas.follow_up import FollowUpResponse


class PipelineActivity(BaseModel):
    """An activity in a reconstructed pipeline, with its follow-ups."""
    id: uuid.UUID
    activity_date: datetime
    activity_type: str
    parent_activity_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = None
    customer_code: Optional[str] = None
    lead_id: Optional[uuid.UUID] = None
    lead_name: Optional[str] = None
    is_lead: bool = False
    contact_name: Optional[str] = None
    salesperson_name: Optional[str] = None
    notes: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    pipeline_stage: Optional[str] = None
    follow_ups: List[FollowUpResponse] = []
    
    @field_validator("activity_date", "follow_up_date")
    @classmethod
    def to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
    
    class Config:
        from_attributes = True


class PipelineResponse(BaseModel):
    """Full lineage of an activity in chronological order."""
    start_activity_id: uuid.UUID
    root_activity_id: Optional[uuid.UUID]
    strategy: str  # optimized, original
    activities: List[PipelineActivity]
    follow_ups_error: Optional[str] = None
    
    # Summary
    current_stage: Optional[str] = None
    total_follow_ups: int = 0
    open_follow_ups: int = 0
    
    class Config:
        json_schema_extra = {
            "example": {
                "start_activity_id": "6f1c0e9a-3c1f-4a53-9a7e-0c5c8d9b1a10",
                "root_activity_id": "0b8e4f7e-1d2a-4c8e-9f3b-7a6d5c4b3a21",
                "strategy": "optimized",
                "activities": [],
                "follow_ups_error": None,
                "current_stage": "Proposal",
                "total_follow_ups": 3,
                "open_follow_ups": 1
            }
        }

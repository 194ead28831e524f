"""
Follow-up schemas.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, field_validator

from activity_pipeline.config import settings
from activity_pipeline.core.dates import as_utc
from activity_pipeline.models.follow_up import Priority


def _check_priority(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in Priority.ALL:
        raise ValueError(f"priority must be one of {', '.join(Priority.ALL)}")
    return value


class FollowUpCreate(BaseModel):
    """Create a follow-up on an activity."""
    follow_up_note: str
    follow_up_date: datetime
    priority: Optional[str] = None
    assigned_to: Optional[str] = None
    created_by: Optional[str] = None

    @field_validator("priority")
    @classmethod
    def check_priority(cls, value: Optional[str]) -> Optional[str]:
        return _check_priority(value)

    @field_validator("follow_up_date")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    class Config:
        json_schema_extra = {
            "example": {
                "follow_up_note": "Send revised quotation",
                "follow_up_date": "2026-10-20T09:00:00Z",
                "priority": "high"
            }
        }


class FollowUpUpdate(BaseModel):
    """
    Update an existing follow-up.
    Only fields present in the request change; assigned_to and priority
    may be cleared with null.
    """
    follow_up_note: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    priority: Optional[str] = None
    is_done: Optional[bool] = None
    assigned_to: Optional[str] = None

    @field_validator("priority")
    @classmethod
    def check_priority(cls, value: Optional[str]) -> Optional[str]:
        return _check_priority(value)

    @field_validator("follow_up_note", "follow_up_date", "is_done")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        if isinstance(value, datetime):
            return as_utc(value)
        return value


class FollowUpResponse(BaseModel):
    """Follow-up response with a normalized priority."""
    id: uuid.UUID
    activity_id: uuid.UUID
    follow_up_note: str
    follow_up_date: datetime
    priority: str = Priority.DEFAULT
    is_done: bool = False
    created_by: Optional[str] = None
    assigned_to: Optional[str] = None
    created_at: datetime

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, value):
        # Stored values outside the closed set fall back to the default
        return Priority.normalize(value, settings.FOLLOW_UP_DEFAULT_PRIORITY)

    @field_validator("follow_up_date", "created_at")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    class Config:
        from_attributes = True


class FollowUpStats(BaseModel):
    """Follow-up counts for one activity."""
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0


class ActivityFollowUpsResponse(BaseModel):
    """Follow-ups of one activity, oldest first, with counts."""
    activity_id: uuid.UUID
    follow_ups: List[FollowUpResponse]
    stats: FollowUpStats

"""
Activity follow-up model - scheduled or logged notes owned by one activity.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime

from activity_pipeline.core.dates import utcnow


class ActivityFollowUp(SQLModel, table=True):
    """
    Follow-up note tied to exactly one activity.
    Priority is stored as free text and normalized on read.
    """
    __tablename__ = "activity_follow_ups"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    activity_id: uuid.UUID = Field(index=True)

    follow_up_note: str
    follow_up_date: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    priority: Optional[str] = Field(default="medium")  # low, medium, high
    is_done: bool = Field(default=False)

    created_by: Optional[str] = None
    assigned_to: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


# Priority constants for consistency
class Priority:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    ALL = (LOW, MEDIUM, HIGH)
    DEFAULT = MEDIUM

    @classmethod
    def normalize(cls, value: Optional[str], default: str = DEFAULT) -> str:
        """Return value if it is a known priority, otherwise the default."""
        if isinstance(value, str) and value.strip().lower() in cls.ALL:
            return value.strip().lower()
        return default

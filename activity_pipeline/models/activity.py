"""
Activity model - customer-relationship events linked into pipelines.
Each activity may point at the activity it follows up on.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime

from activity_pipeline.core.dates import utcnow


class Activity(SQLModel, table=True):
    """
    A single customer-relationship event (visit, call, sample, quotation...).
    parent_activity_id links follow-up activities into a forest; the parent
    may be missing from the table, so no foreign key is declared.
    """
    __tablename__ = "activities"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    activity_date: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    activity_type: str = Field(index=True)  # visit, call, email, sample, quotation, etc.
    parent_activity_id: Optional[uuid.UUID] = Field(default=None, index=True)

    # Customer / lead
    customer_name: Optional[str] = None
    customer_code: Optional[str] = Field(default=None, index=True)
    lead_id: Optional[uuid.UUID] = Field(default=None, index=True)
    lead_name: Optional[str] = None
    is_lead: bool = Field(default=False)

    # People
    contact_name: Optional[str] = None
    salesperson_name: Optional[str] = None

    # Details
    notes: Optional[str] = None
    follow_up_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    pipeline_stage: Optional[str] = None  # Lead, Prospect, Qualified, Proposal, Won, Lost

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

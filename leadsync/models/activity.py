"""
Activity model - outreach event (call, email, meeting, ...) logged
against a contact and mirrored to the remote CRM.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlmodel import SQLModel, Field


class ActivityType(str, Enum):
    CALL = "CALL"
    EMAIL = "EMAIL"
    MEETING = "MEETING"
    MEETING_REQUEST = "MEETING_REQUEST"
    LINKEDIN = "LINKEDIN"
    REFERRAL = "REFERRAL"
    CONFERENCE = "CONFERENCE"


class Activity(SQLModel, table=True):
    """
    Locally logged activity.
    sync_attempts only ever grows; it lets an outside scheduler back off.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    contact_id: uuid.UUID = Field(foreign_key="contact.id", index=True)
    campaign_id: Optional[uuid.UUID] = Field(default=None, foreign_key="campaign.id", index=True)

    # Details
    type: ActivityType = Field(index=True)
    subject: Optional[str] = None
    note: Optional[str] = None
    due_date: Optional[datetime] = None

    # Remote CRM linkage
    remote_activity_id: Optional[int] = Field(default=None, index=True)
    replicated: bool = Field(default=False, index=True)
    sync_attempts: int = Field(default=0)
    last_sync_attempt_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

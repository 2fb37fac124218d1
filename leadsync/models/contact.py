"""
Contact model - the unit that is ranked for outreach and promoted
to the remote CRM once warm.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Contact(SQLModel, table=True):
    """
    Local contact, owned by exactly one user.
    Once remote_person_id is set the sync engine never clears it.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)
    organization_id: Optional[uuid.UUID] = Field(default=None, foreign_key="organization.id", index=True)

    # Basic info
    name: str = Field(index=True)
    email: Optional[str] = Field(default=None, index=True)
    phone: Optional[str] = None
    organisation: Optional[str] = None  # free-text company name as entered

    # Prioritization
    warmness_score: int = Field(default=0, index=True)
    last_contacted_at: Optional[datetime] = None
    in_active_outreach: bool = Field(default=False, index=True)  # "added to campaign"
    is_active: bool = Field(default=True, index=True)

    # Remote CRM linkage
    remote_person_id: Optional[int] = Field(default=None, unique=True)
    remote_org_id: Optional[int] = None
    last_remote_update_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

"""
Organization model - company a contact works for.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Organization(SQLModel, table=True):
    """
    Local organization record.
    remote_org_id is written at most once (promotion is idempotent).
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    industry: Optional[str] = None
    country: Optional[str] = None

    # Remote CRM linkage
    remote_org_id: Optional[int] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

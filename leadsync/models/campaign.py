"""
Campaign model - outreach campaign identified by a short code.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class Campaign(SQLModel, table=True):
    """
    Campaign entity. The shortcode is unique and never changes once assigned.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="user.id", index=True)

    # Basic info
    name: str = Field(index=True)
    description: Optional[str] = None
    shortcode: Optional[str] = Field(default=None, unique=True, index=True, max_length=6)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

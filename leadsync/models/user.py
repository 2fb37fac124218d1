"""
User model - local owner of contacts and activities.
"""
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Local user (consultant). The remote owner id is resolved lazily
    from the remote CRM by email and cached here.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    email: str = Field(unique=True, index=True)
    name: Optional[str] = None

    # Remote CRM linkage
    remote_owner_id: Optional[int] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

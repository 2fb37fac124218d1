"""
Synchronization task schemas.
Tasks are never persisted; they live for one invocation.
"""
import uuid
from typing import Optional

from pydantic import BaseModel


class PromotionTrigger(BaseModel):
    """Lead promotion task."""
    contact_id: uuid.UUID
    owner_id: Optional[uuid.UUID] = None
    warmness_score: int


class ReplicationTrigger(BaseModel):
    """Activity replication task."""
    activity_id: uuid.UUID
    contact_id: uuid.UUID
    owner_id: uuid.UUID


class PromotionResult(BaseModel):
    promoted: bool
    remote_person_id: Optional[int] = None


class ReplicationResult(BaseModel):
    replicated: bool
    remote_activity_id: Optional[int] = None
    attempts: int = 0

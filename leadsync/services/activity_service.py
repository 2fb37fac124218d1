"""
Activity service - logs outreach and mirrors it to the remote CRM.
"""
import uuid
from typing import Optional, Tuple
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.core.exceptions import NotFoundError
from leadsync.models.activity import Activity, ActivityType
from leadsync.repositories.activity_repo import ActivityRepository
from leadsync.repositories.contact_repo import ContactRepository
from leadsync.repositories.user_repo import UserRepository
from leadsync.schemas.sync import ReplicationResult
from leadsync.services.activity_replication_service import ActivityReplicationService
from leadsync.services.integrations.base import RemoteCRMClient


class ActivityService:
    """Service for activity logging."""

    def __init__(
        self,
        session: AsyncSession,
        remote: RemoteCRMClient,
        replicator: Optional[ActivityReplicationService] = None
    ):
        self.session = session
        self.activity_repo = ActivityRepository(session)
        self.contact_repo = ContactRepository(session)
        self.user_repo = UserRepository(session)
        self.replicator = replicator or ActivityReplicationService(session, remote)

    async def log_activity(
        self,
        owner_id: uuid.UUID,
        contact_id: uuid.UUID,
        type: ActivityType,
        subject: Optional[str] = None,
        note: Optional[str] = None,
        due_date: Optional[datetime] = None,
        campaign_id: Optional[uuid.UUID] = None
    ) -> Tuple[Activity, ReplicationResult]:
        """Create an activity, mark the contact as contacted, then replicate."""
        if not await self.user_repo.exists(owner_id):
            raise NotFoundError("User", str(owner_id))
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", str(contact_id))

        activity = await self.activity_repo.create({
            "owner_id": owner_id,
            "contact_id": contact_id,
            "campaign_id": campaign_id,
            "type": type,
            "subject": subject,
            "note": note,
            "due_date": due_date,
        })
        await self.contact_repo.touch(contact_id)

        result = await self.replicator.replicate(activity.id, contact_id, owner_id)
        await self.session.refresh(activity)
        return activity, result

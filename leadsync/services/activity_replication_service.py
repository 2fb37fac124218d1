"""
Activity replication service - mirrors a logged activity to the remote CRM
once its contact is linked.

Attempts are bounded and immediate (no backoff, no background queue).
Every attempt is counted on the activity so an outside scheduler can back
off on later triggers.
"""
import logging
import uuid
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.config import settings
from leadsync.repositories.activity_repo import ActivityRepository
from leadsync.repositories.campaign_repo import CampaignRepository
from leadsync.repositories.contact_repo import ContactRepository
from leadsync.repositories.organization_repo import OrganizationRepository
from leadsync.repositories.user_repo import UserRepository
from leadsync.schemas.sync import ReplicationResult, ReplicationTrigger
from leadsync.services.integrations.base import RemoteCRMClient
from leadsync.services.payloads import build_activity_payload

logger = logging.getLogger(__name__)


class ActivityReplicationService:
    """
    Replicates activities.
    Never raises: every failure becomes replicated=False.
    """

    def __init__(
        self,
        session: AsyncSession,
        remote: RemoteCRMClient,
        max_attempts: int = settings.ACTIVITY_SYNC_MAX_ATTEMPTS
    ):
        self.session = session
        self.remote = remote
        self.max_attempts = max_attempts
        self.activity_repo = ActivityRepository(session)
        self.contact_repo = ContactRepository(session)
        self.org_repo = OrganizationRepository(session)
        self.user_repo = UserRepository(session)
        self.campaign_repo = CampaignRepository(session)

    async def handle(self, trigger: ReplicationTrigger) -> ReplicationResult:
        """Run a replication task."""
        return await self.replicate(trigger.activity_id, trigger.contact_id, trigger.owner_id)

    async def replicate(
        self,
        activity_id: uuid.UUID,
        contact_id: Optional[uuid.UUID],
        owner_id: uuid.UUID
    ) -> ReplicationResult:
        """Mirror one activity."""
        try:
            return await self._replicate(activity_id, contact_id, owner_id)
        except Exception:
            logger.exception(f"Replication of activity {activity_id} failed")
            await self.session.rollback()
            return ReplicationResult(replicated=False)

    async def _replicate(
        self,
        activity_id: uuid.UUID,
        contact_id: Optional[uuid.UUID],
        owner_id: uuid.UUID
    ) -> ReplicationResult:
        activity = await self.activity_repo.get(activity_id)
        if activity is None:
            logger.error(f"Activity not found: {activity_id}")
            return ReplicationResult(replicated=False)

        if activity.replicated and activity.remote_activity_id is not None:
            return ReplicationResult(
                replicated=True,
                remote_activity_id=activity.remote_activity_id,
                attempts=0,
            )

        owner = await self.user_repo.get(owner_id)
        if owner is None:
            logger.error(f"Owner not found: {owner_id}")
            return ReplicationResult(replicated=False)

        if contact_id is not None and contact_id != activity.contact_id:
            logger.error(f"Activity {activity_id} belongs to contact {activity.contact_id}, not {contact_id}")
            return ReplicationResult(replicated=False)

        contact = await self.contact_repo.get(activity.contact_id)
        if contact is None or contact.remote_person_id is None:
            logger.info(f"Activity {activity_id} skipped: contact is not linked to the remote CRM")
            return ReplicationResult(replicated=False)

        organization = None
        if contact.organization_id is not None:
            organization = await self.org_repo.get(contact.organization_id)

        campaign = None
        if activity.campaign_id is not None:
            campaign = await self.campaign_repo.get(activity.campaign_id)

        payload = build_activity_payload(activity, contact, owner, organization, campaign)

        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            result = None
            try:
                result = await self.remote.create_activity(payload)
            except Exception as e:
                last_error = str(e)

            if result is not None and result.success and result.activity_id is not None:
                return await self._record_success(activity_id, result.activity_id, attempt)
            if result is not None:
                last_error = result.error or "Failed to create activity in remote CRM"

            await self.activity_repo.record_sync_attempt(activity_id)
            logger.warning(f"Attempt {attempt}/{self.max_attempts} to replicate activity {activity_id} failed: {last_error}")

        logger.error(f"Failed to replicate activity {activity_id} after {self.max_attempts} attempts: {last_error}")
        return ReplicationResult(replicated=False, attempts=self.max_attempts)

    async def _record_success(
        self,
        activity_id: uuid.UUID,
        remote_activity_id: int,
        attempt: int
    ) -> ReplicationResult:
        """
        Store the remote id. The remote activity already exists, so a failed
        write ends the task instead of creating another one.
        """
        try:
            await self.activity_repo.record_sync_attempt(activity_id, remote_activity_id)
        except Exception:
            logger.exception(
                f"Remote activity {remote_activity_id} was created but activity {activity_id} "
                f"could not be marked replicated"
            )
            await self.session.rollback()
            return ReplicationResult(replicated=False, remote_activity_id=remote_activity_id, attempts=attempt)

        logger.info(f"Replicated activity {activity_id} as remote activity {remote_activity_id}")
        return ReplicationResult(replicated=True, remote_activity_id=remote_activity_id, attempts=attempt)

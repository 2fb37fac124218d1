"""
Warm lead service - promotes a warm local contact to a remote person.

Order matters: organization and label must both resolve before the person
is created, because the person payload embeds their ids. A person missing
either is worse than no person, so any failure aborts the promotion.
"""
import logging
import uuid
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.config import settings
from leadsync.core.cache import Cache
from leadsync.repositories.contact_repo import ContactRepository
from leadsync.repositories.organization_repo import OrganizationRepository
from leadsync.repositories.user_repo import UserRepository
from leadsync.schemas.sync import PromotionResult, PromotionTrigger
from leadsync.services.integrations.base import RemoteCRMClient
from leadsync.services.label_resolver import LabelResolver
from leadsync.services.organization_resolver import OrganizationResolver
from leadsync.services.owner_resolver import OwnerResolver
from leadsync.services.payloads import build_person_payload

logger = logging.getLogger(__name__)


class WarmLeadService:
    """
    Lead promotion orchestrator.
    Never raises: every failure becomes promoted=False.
    """

    def __init__(
        self,
        session: AsyncSession,
        remote: RemoteCRMClient,
        owner_cache: Optional[Cache] = None,
        label_cache: Optional[Cache] = None,
        threshold: int = settings.WARM_LEAD_THRESHOLD,
        label_name: str = settings.WARM_LEAD_LABEL
    ):
        self.session = session
        self.remote = remote
        self.contact_repo = ContactRepository(session)
        self.org_repo = OrganizationRepository(session)
        self.user_repo = UserRepository(session)
        self.org_resolver = OrganizationResolver(remote, self.org_repo)
        self.owner_resolver = OwnerResolver(remote, self.user_repo, owner_cache)
        self.label_resolver = LabelResolver(remote, label_cache)
        self.threshold = threshold
        self.label_name = label_name

    async def handle(self, trigger: PromotionTrigger) -> PromotionResult:
        """Run a promotion task."""
        return await self.promote(trigger.contact_id, trigger.warmness_score, trigger.owner_id)

    async def promote(
        self,
        contact_id: uuid.UUID,
        trigger_score: int,
        owner_id: Optional[uuid.UUID] = None
    ) -> PromotionResult:
        """Create the remote person for a warm contact."""
        if trigger_score < self.threshold:
            return PromotionResult(promoted=False)

        try:
            return await self._promote(contact_id, owner_id)
        except Exception:
            logger.exception(f"Promotion of contact {contact_id} failed")
            await self.session.rollback()
            return PromotionResult(promoted=False)

    async def _promote(self, contact_id: uuid.UUID, owner_id: Optional[uuid.UUID]) -> PromotionResult:
        contact = await self.contact_repo.get(contact_id)
        if contact is None:
            logger.error(f"Contact not found: {contact_id}")
            return PromotionResult(promoted=False)

        if contact.remote_person_id is not None:
            logger.info(f"Contact {contact_id} already promoted (person {contact.remote_person_id})")
            return PromotionResult(promoted=True, remote_person_id=contact.remote_person_id)

        owner_id = owner_id or contact.owner_id
        owner = await self.user_repo.get(owner_id)
        if owner is None:
            logger.error(f"Owner not found: {owner_id}")
            return PromotionResult(promoted=False)

        organization = None
        if contact.organization_id is not None:
            organization = await self.org_repo.get(contact.organization_id)

        remote_org_id = None
        if organization is not None:
            try:
                remote_org_id = await self.org_resolver.resolve_organization(organization)
            except Exception as e:
                logger.error(f"Organization step failed for contact {contact_id}: {e}")
                return PromotionResult(promoted=False)

        try:
            label_id = await self.label_resolver.resolve_label_id(self.label_name)
        except Exception as e:
            logger.error(f"Label step failed for contact {contact_id}: {e}")
            return PromotionResult(promoted=False)

        remote_owner_id = await self.owner_resolver.resolve_owner(owner.id)

        payload = build_person_payload(contact, organization, remote_org_id, label_id, remote_owner_id)
        try:
            result = await self.remote.create_person(payload)
        except Exception as e:
            logger.error(f"Person creation failed for contact {contact_id}: {e}")
            return PromotionResult(promoted=False)

        if not result.success or result.person_id is None:
            logger.error(f"Person creation failed for contact {contact_id}: {result.error}")
            return PromotionResult(promoted=False)

        linked = await self.contact_repo.link_remote_person(contact_id, result.person_id, remote_org_id)
        if not linked:
            # A concurrent promotion linked first; its person is authoritative.
            current = await self.contact_repo.get(contact_id)
            existing = current.remote_person_id if current else None
            logger.warning(
                f"Contact {contact_id} was promoted concurrently (person {existing}); "
                f"remote person {result.person_id} is a duplicate"
            )
            return PromotionResult(promoted=True, remote_person_id=existing)

        logger.info(f"Promoted contact {contact_id} to remote person {result.person_id}")
        return PromotionResult(promoted=True, remote_person_id=result.person_id)

"""
Contact service - warmness updates and remote linkage.
"""
import logging
import uuid
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.core.exceptions import NotFoundError
from leadsync.repositories.contact_repo import ContactRepository
from leadsync.schemas.sync import PromotionResult
from leadsync.services.integrations.base import RemoteCRMClient
from leadsync.services.warm_lead_service import WarmLeadService

logger = logging.getLogger(__name__)


class ContactService:
    """Service for contact operations that touch the remote CRM."""

    def __init__(
        self,
        session: AsyncSession,
        remote: RemoteCRMClient,
        warm_leads: Optional[WarmLeadService] = None
    ):
        self.session = session
        self.remote = remote
        self.contact_repo = ContactRepository(session)
        self.warm_leads = warm_leads or WarmLeadService(session, remote)

    async def update_warmness(self, contact_id: uuid.UUID, score: int) -> PromotionResult:
        """
        Store a new warmness score and try to promote the contact.
        Remote failures never surface here.
        """
        contact = await self.contact_repo.update_warmness(contact_id, score)
        if not contact:
            raise NotFoundError("Contact", str(contact_id))

        return await self.warm_leads.promote(contact.id, score, contact.owner_id)

    async def adopt_remote_person(self, contact_id: uuid.UUID) -> Optional[int]:
        """
        Link a contact to an existing remote person with the same email.
        Returns the linked person id, or None if there is nothing to link.
        """
        contact = await self.contact_repo.get(contact_id)
        if not contact:
            raise NotFoundError("Contact", str(contact_id))
        if contact.remote_person_id is not None:
            return contact.remote_person_id
        if not contact.email:
            return None

        person = await self.remote.find_person_by_email(contact.email)
        if person is None:
            return None

        if not await self.contact_repo.link_remote_person(contact_id, person.id, person.org_id):
            current = await self.contact_repo.get(contact_id)
            return current.remote_person_id if current else None

        logger.info(f"Linked contact {contact_id} to existing remote person {person.id}")
        return person.id

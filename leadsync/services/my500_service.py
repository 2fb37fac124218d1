"""
My 500 service - the ranked working list for a consultant.
"""
import uuid
from typing import List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.config import settings
from leadsync.models.contact import Contact
from leadsync.repositories.contact_repo import ContactRepository
from leadsync.services.ranking import rank


class My500Service:
    """Builds the prioritized contact list."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.contact_repo = ContactRepository(session)

    async def get_my_500(self, owner_id: uuid.UUID, limit: Optional[int] = None) -> List[Contact]:
        """Active contacts of an owner, best outreach candidates first."""
        limit = settings.MY_500_LIMIT if limit is None else limit
        contacts = await self.contact_repo.list_active_for_owner(owner_id)
        return rank(contacts)[:limit]

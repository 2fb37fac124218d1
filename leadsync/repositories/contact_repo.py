"""
Contact repository with remote linkage operations.
"""
import uuid
from typing import Optional, List
from datetime import datetime

from sqlmodel import select
from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.models.contact import Contact
from leadsync.repositories.base import BaseRepository


class ContactRepository(BaseRepository[Contact]):
    """Repository for Contact operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Contact, session)

    async def list_active_for_owner(self, owner_id: uuid.UUID) -> List[Contact]:
        """All active contacts of an owner, in creation order."""
        query = select(Contact).where(
            Contact.owner_id == owner_id,
            Contact.is_active == True  # noqa: E712
        ).order_by(Contact.created_at, Contact.id)
        result = await self.session.exec(query)
        return list(result.all())

    async def update_warmness(self, contact_id: uuid.UUID, score: int) -> Optional[Contact]:
        """Set the warmness score."""
        contact = await self.get(contact_id)
        if not contact:
            return None
        contact.warmness_score = score
        contact.updated_at = datetime.utcnow()
        self.session.add(contact)
        await self.session.commit()
        await self.session.refresh(contact)
        return contact

    async def touch(self, contact_id: uuid.UUID, at: Optional[datetime] = None) -> bool:
        """Record that the contact was just contacted."""
        contact = await self.get(contact_id)
        if not contact:
            return False
        contact.last_contacted_at = at or datetime.utcnow()
        contact.updated_at = datetime.utcnow()
        self.session.add(contact)
        await self.session.commit()
        return True

    async def link_remote_person(
        self,
        contact_id: uuid.UUID,
        remote_person_id: int,
        remote_org_id: Optional[int] = None
    ) -> bool:
        """
        Store the remote person id, but only if none is stored yet.

        Person id, org id and the remote update timestamp are written in
        one statement. Returns False when another promotion got there first.
        """
        now = datetime.utcnow()
        values = {
            "remote_person_id": remote_person_id,
            "last_remote_update_at": now,
            "updated_at": now,
        }
        if remote_org_id is not None:
            values["remote_org_id"] = remote_org_id

        stmt = (
            update(Contact)
            .where(Contact.id == contact_id, Contact.remote_person_id.is_(None))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()

        contact = await self.get(contact_id)
        if contact:
            await self.session.refresh(contact)
        return result.rowcount == 1

"""
Organization repository.
"""
import uuid
from datetime import datetime

from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.models.organization import Organization
from leadsync.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """Repository for Organization operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Organization, session)

    async def set_remote_org_id(self, org_id: uuid.UUID, remote_org_id: int) -> bool:
        """Store the remote organization id if none is stored yet."""
        stmt = (
            update(Organization)
            .where(Organization.id == org_id, Organization.remote_org_id.is_(None))
            .values(remote_org_id=remote_org_id, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()

        org = await self.get(org_id)
        if org:
            await self.session.refresh(org)
        return result.rowcount == 1

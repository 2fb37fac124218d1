"""
User repository.
"""
import uuid
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.models.user import User
from leadsync.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def set_remote_owner_id(self, user_id: uuid.UUID, remote_owner_id: int) -> bool:
        """Persist the resolved remote owner id."""
        user = await self.get(user_id)
        if user:
            user.remote_owner_id = remote_owner_id
            user.updated_at = datetime.utcnow()
            self.session.add(user)
            await self.session.commit()
            return True
        return False

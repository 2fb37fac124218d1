"""
Activity repository with sync bookkeeping.
"""
import uuid
from typing import Optional
from datetime import datetime

from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.models.activity import Activity
from leadsync.repositories.base import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """Repository for Activity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Activity, session)

    async def record_sync_attempt(
        self,
        activity_id: uuid.UUID,
        remote_activity_id: Optional[int] = None
    ) -> None:
        """
        Count one replication attempt.
        A remote id marks the activity replicated in the same statement.
        """
        now = datetime.utcnow()
        values = {
            "sync_attempts": Activity.sync_attempts + 1,
            "last_sync_attempt_at": now,
            "updated_at": now,
        }
        if remote_activity_id is not None:
            values["remote_activity_id"] = remote_activity_id
            values["replicated"] = True

        stmt = (
            update(Activity)
            .where(Activity.id == activity_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

        activity = await self.get(activity_id)
        if activity:
            await self.session.refresh(activity)

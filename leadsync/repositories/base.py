"""
Base repository shared by the entity repositories.
"""
import uuid
from typing import TypeVar, Generic, Type, Optional, List
from datetime import datetime

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Async CRUD over one table.
    Every write commits immediately; callers never hold open transactions.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def create(self, values: dict) -> ModelType:
        """Insert a row and return it refreshed."""
        row = self.model(**values)
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return row

    async def get(self, id: uuid.UUID) -> Optional[ModelType]:
        return await self.session.get(self.model, id)

    async def exists(self, id: uuid.UUID) -> bool:
        return await self.get(id) is not None

    async def list(self, owner_id: Optional[uuid.UUID] = None) -> List[ModelType]:
        """Rows in creation order, optionally restricted to one owner."""
        query = select(self.model)
        if owner_id is not None and hasattr(self.model, "owner_id"):
            query = query.where(self.model.owner_id == owner_id)
        if hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at)
        result = await self.session.exec(query)
        return list(result.all())

    async def update(self, id: uuid.UUID, changes: dict) -> Optional[ModelType]:
        """Apply non-None changes and bump updated_at."""
        row = await self.get(id)
        if row is None:
            return None

        for field, value in changes.items():
            if value is not None and hasattr(row, field):
                setattr(row, field, value)
        if hasattr(row, "updated_at"):
            row.updated_at = datetime.utcnow()

        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        return row

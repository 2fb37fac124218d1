from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker

from leadsync.config import settings

# Create Async Engine
engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, future=True)


def make_sessionmaker(bind: AsyncEngine = engine) -> sessionmaker:
    """Session factory bound to an engine."""
    return sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


async def init_db(bind: AsyncEngine = engine):
    # Import models so they are registered with SQLModel
    from leadsync import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

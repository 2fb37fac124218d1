"""Test configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from leadsync.database import init_db, make_sessionmaker
from leadsync.models import Campaign, Contact, Organization, User
from leadsync.schemas.remote import RemoteCustomField, RemoteFieldOption, RemoteUser
from leadsync.services.integrations.memory import InMemoryCRMClient


def label_field(options: Optional[List[str]] = None, name: str = "Label", key: str = "label") -> RemoteCustomField:
    """Enumerated label field with options numbered from 1."""
    options = ["Cold Lead", "Warm lead", "Hot Lead"] if options is None else options
    return RemoteCustomField(
        id=9000,
        name=name,
        key=key,
        field_type="enum",
        options=[RemoteFieldOption(id=i, label=label) for i, label in enumerate(options, start=1)],
    )


@pytest_asyncio.fixture
async def session(tmp_path):
    """Session on a fresh SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'leadsync.db'}")
    await init_db(engine)
    async_session = make_sessionmaker(engine)
    async with async_session() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def remote():
    """Remote CRM with one known user and a standard label field."""
    return InMemoryCRMClient(
        users=[RemoteUser(id=77, name="Sam Consultant", email="sam@example.com")],
        custom_fields=[
            RemoteCustomField(id=1, name="Birthday", key="birthday", field_type="date"),
            label_field(),
        ],
    )


@pytest_asyncio.fixture
async def user(session):
    user = User(email="sam@example.com", name="Sam Consultant")
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def organization(session):
    org = Organization(name="Northwind Care", industry="Health", country="GB")
    session.add(org)
    await session.commit()
    await session.refresh(org)
    return org


@pytest_asyncio.fixture
async def make_contact(session, user):
    """Factory for contacts owned by the default user."""
    async def _make(**fields) -> Contact:
        fields.setdefault("owner_id", user.id)
        fields.setdefault("name", "Alex Doe")
        contact = Contact(**fields)
        session.add(contact)
        await session.commit()
        await session.refresh(contact)
        return contact
    return _make


@pytest_asyncio.fixture
async def make_campaign(session, user):
    async def _make(name: str, shortcode: Optional[str] = None) -> Campaign:
        campaign = Campaign(owner_id=user.id, name=name, shortcode=shortcode)
        session.add(campaign)
        await session.commit()
        await session.refresh(campaign)
        return campaign
    return _make

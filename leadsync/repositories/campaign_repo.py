"""
Campaign repository.
"""
from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy import func

from leadsync.models.campaign import Campaign
from leadsync.repositories.base import BaseRepository


class CampaignRepository(BaseRepository[Campaign]):
    """Repository for Campaign operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Campaign, session)

    async def shortcode_exists(self, shortcode: str) -> bool:
        """Check whether a shortcode is already taken."""
        query = select(func.count()).select_from(Campaign).where(Campaign.shortcode == shortcode)
        result = await self.session.exec(query)
        return result.one() > 0

    async def get_without_shortcode(self) -> List[Campaign]:
        """Campaigns created before shortcodes existed."""
        query = select(Campaign).where(Campaign.shortcode.is_(None)).order_by(Campaign.created_at)
        result = await self.session.exec(query)
        return list(result.all())

"""
Campaign service - campaign creation with unique shortcodes.
"""
import logging
import uuid
from typing import Optional
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from leadsync.config import settings
from leadsync.core.exceptions import AlreadyExistsError, NotFoundError, ValidationError
from leadsync.models.campaign import Campaign
from leadsync.repositories.campaign_repo import CampaignRepository
from leadsync.services.shortcode_service import ShortcodeService

logger = logging.getLogger(__name__)


class CampaignService:
    """Service for campaign operations."""

    def __init__(
        self,
        session: AsyncSession,
        write_attempts: int = settings.SHORTCODE_WRITE_ATTEMPTS
    ):
        self.session = session
        self.campaign_repo = CampaignRepository(session)
        self.shortcodes = ShortcodeService(self.campaign_repo.shortcode_exists)
        self.write_attempts = write_attempts

    async def create(
        self,
        owner_id: uuid.UUID,
        name: str,
        description: Optional[str] = None
    ) -> Campaign:
        """Create a campaign with a freshly generated shortcode."""
        shortcode = None
        for attempt in range(1, self.write_attempts + 1):
            shortcode = await self.shortcodes.generate(name)
            try:
                return await self.campaign_repo.create({
                    "owner_id": owner_id,
                    "name": name,
                    "description": description,
                    "shortcode": shortcode,
                })
            except IntegrityError:
                # Taken between check and write
                await self.session.rollback()
                logger.warning(f"Shortcode {shortcode} taken on write (attempt {attempt}/{self.write_attempts})")

        raise AlreadyExistsError("Campaign", "shortcode", shortcode)

    async def get(self, campaign_id: uuid.UUID) -> Campaign:
        """Get a campaign by ID."""
        campaign = await self.campaign_repo.get(campaign_id)
        if not campaign:
            raise NotFoundError("Campaign", str(campaign_id))
        return campaign

    async def update(
        self,
        campaign_id: uuid.UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        shortcode: Optional[str] = None
    ) -> Campaign:
        """Update name/description. The shortcode cannot change."""
        campaign = await self.get(campaign_id)
        if shortcode is not None and shortcode != campaign.shortcode:
            raise ValidationError("shortcode cannot be changed once assigned", "shortcode")

        return await self.campaign_repo.update(campaign_id, {
            "name": name,
            "description": description,
        })

    async def backfill_shortcodes(self) -> int:
        """Assign shortcodes to campaigns that predate them."""
        count = 0
        for campaign in await self.campaign_repo.get_without_shortcode():
            campaign.shortcode = await self.shortcodes.generate(campaign.name)
            campaign.updated_at = datetime.utcnow()
            self.session.add(campaign)
            await self.session.commit()
            count += 1
        if count:
            logger.info(f"Assigned shortcodes to {count} campaigns")
        return count

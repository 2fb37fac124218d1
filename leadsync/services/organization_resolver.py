"""
Organization resolver - makes sure a local organization exists remotely.
"""
import logging

from leadsync.models.organization import Organization
from leadsync.repositories.organization_repo import OrganizationRepository
from leadsync.schemas.remote import RemoteOrganizationCreate
from leadsync.services.integrations.base import RemoteCRMClient

logger = logging.getLogger(__name__)


class OrganizationResolver:
    """Finds or creates the remote organization for a local one."""

    def __init__(self, remote: RemoteCRMClient, org_repo: OrganizationRepository):
        self.remote = remote
        self.org_repo = org_repo

    async def resolve_organization(self, local: Organization) -> int:
        """
        Return the remote organization id, creating the remote record the
        first time. Remote errors propagate to the caller.
        """
        if local.remote_org_id is not None:
            return local.remote_org_id

        remote_org_id = await self.remote.create_organization(
            RemoteOrganizationCreate(
                name=local.name,
                industry=local.industry or None,
                country=local.country or None,
            )
        )

        stored = await self.org_repo.set_remote_org_id(local.id, remote_org_id)
        if not stored:
            # Someone linked this organization in the meantime; keep theirs.
            current = await self.org_repo.get(local.id)
            if current is not None and current.remote_org_id is not None:
                logger.warning(
                    f"Organization {local.id} was already linked to remote org "
                    f"{current.remote_org_id}; remote org {remote_org_id} is unused"
                )
                return current.remote_org_id

        logger.info(f"Created remote organization {remote_org_id} for '{local.name}'")
        return remote_org_id

"""
Base interface for the remote CRM.
Every call crosses the network: each one may fail or be rate limited,
and rate-limit errors surface like any other transport failure.
"""
from abc import ABC, abstractmethod
from typing import Optional

from leadsync.schemas.remote import (
    RemotePerson,
    RemotePersonCreate,
    PersonCreateResult,
    RemoteOrganizationCreate,
    RemoteUser,
    CustomFieldsResult,
    RemoteActivityCreate,
    ActivityCreateResult,
)


class RemoteCRMClient(ABC):
    """Capabilities the sync engine needs from a remote CRM."""

    @abstractmethod
    async def find_person_by_email(self, email: str) -> Optional[RemotePerson]:
        """Look up a person by email. None when there is no match."""
        pass

    @abstractmethod
    async def find_user_by_email(self, email: str) -> Optional[RemoteUser]:
        """Look up a CRM user (owner) by email. None when there is no match."""
        pass

    @abstractmethod
    async def create_person(self, fields: RemotePersonCreate) -> PersonCreateResult:
        """Create a person. Failures come back as success=False."""
        pass

    @abstractmethod
    async def create_organization(self, fields: RemoteOrganizationCreate) -> int:
        """
        Create an organization and return its remote id.
        Raises ExternalServiceError on failure.
        """
        pass

    @abstractmethod
    async def get_person_custom_fields(self) -> CustomFieldsResult:
        """Fetch person custom field definitions."""
        pass

    @abstractmethod
    async def create_activity(self, payload: RemoteActivityCreate) -> ActivityCreateResult:
        """Create an activity. May return success=False or raise."""
        pass

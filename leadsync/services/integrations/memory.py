"""
In-process remote CRM.
Keeps records in dictionaries and can be told to fail, which makes it
the default backend for development and tests.
"""
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from leadsync.core.exceptions import ExternalServiceError
from leadsync.schemas.remote import (
    RemotePerson,
    RemotePersonCreate,
    PersonCreateResult,
    RemoteOrganizationCreate,
    RemoteUser,
    RemoteCustomField,
    CustomFieldsResult,
    RemoteActivityCreate,
    ActivityCreateResult,
)
from leadsync.services.integrations.base import RemoteCRMClient

SERVICE_NAME = "Remote CRM"


class InMemoryCRMClient(RemoteCRMClient):
    """
    Remote CRM kept in memory.

    Failures are scripted per operation with fail_next(); a queued failure
    is either an exception instance (raised as is) or a message string
    (returned as success=False where the result type allows it, raised as
    ExternalServiceError otherwise).
    """

    def __init__(
        self,
        users: Optional[List[RemoteUser]] = None,
        custom_fields: Optional[List[RemoteCustomField]] = None
    ):
        self.users: Dict[str, RemoteUser] = {u.email.lower(): u for u in (users or [])}
        self.custom_fields: List[RemoteCustomField] = list(custom_fields or [])
        self.persons: Dict[int, RemotePerson] = {}
        self.organizations: Dict[int, RemoteOrganizationCreate] = {}
        self.activities: Dict[int, RemoteActivityCreate] = {}
        self.calls: Dict[str, int] = defaultdict(int)
        self._failures: Dict[str, List[object]] = defaultdict(list)
        self._next_id = 1000

    # -------------------------------------------------------------------------
    # Scripting helpers
    # -------------------------------------------------------------------------

    def fail_next(self, operation: str, failure: object = "simulated failure", times: int = 1) -> None:
        """Queue failures for the next calls of an operation."""
        self._failures[operation].extend([failure] * times)

    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def _enter(self, operation: str) -> Optional[str]:
        """Count the call, then raise or hand back a scripted failure."""
        self.calls[operation] += 1
        if self._failures[operation]:
            failure = self._failures[operation].pop(0)
            if isinstance(failure, BaseException):
                raise failure
            return str(failure)
        return None

    def _allocate_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def _find(self, predicate: Callable[[RemotePerson], bool]) -> Optional[RemotePerson]:
        for person in self.persons.values():
            if predicate(person):
                return person
        return None

    # -------------------------------------------------------------------------
    # RemoteCRMClient
    # -------------------------------------------------------------------------

    async def find_person_by_email(self, email: str) -> Optional[RemotePerson]:
        error = await self._enter("find_person_by_email")
        if error:
            raise ExternalServiceError(SERVICE_NAME, error)
        wanted = email.lower()
        return self._find(lambda p: any(e.lower() == wanted for e in p.email))

    async def find_user_by_email(self, email: str) -> Optional[RemoteUser]:
        error = await self._enter("find_user_by_email")
        if error:
            raise ExternalServiceError(SERVICE_NAME, error)
        return self.users.get(email.lower())

    async def create_person(self, fields: RemotePersonCreate) -> PersonCreateResult:
        error = await self._enter("create_person")
        if error:
            return PersonCreateResult(success=False, error=error)
        person_id = self._allocate_id()
        self.persons[person_id] = RemotePerson(
            id=person_id,
            name=fields.name,
            email=fields.email,
            phone=fields.phone,
            org_id=fields.org_id,
            owner_id=fields.owner_id,
            label_ids=fields.label_ids,
        )
        return PersonCreateResult(success=True, person_id=person_id)

    async def create_organization(self, fields: RemoteOrganizationCreate) -> int:
        error = await self._enter("create_organization")
        if error:
            raise ExternalServiceError(SERVICE_NAME, error)
        org_id = self._allocate_id()
        self.organizations[org_id] = fields
        return org_id

    async def get_person_custom_fields(self) -> CustomFieldsResult:
        error = await self._enter("get_person_custom_fields")
        if error:
            return CustomFieldsResult(success=False, error=error)
        return CustomFieldsResult(success=True, fields=list(self.custom_fields))

    async def create_activity(self, payload: RemoteActivityCreate) -> ActivityCreateResult:
        error = await self._enter("create_activity")
        if error:
            return ActivityCreateResult(success=False, error=error)
        activity_id = self._allocate_id()
        self.activities[activity_id] = payload
        return ActivityCreateResult(success=True, activity_id=activity_id)

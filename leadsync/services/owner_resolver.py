"""
Owner resolver - maps a local user to a remote owner id.
Best effort: a missing owner never fails the caller.
"""
import logging
import uuid
from typing import Optional

from leadsync.core.cache import Cache, InMemoryCache
from leadsync.repositories.user_repo import UserRepository
from leadsync.services.integrations.base import RemoteCRMClient

logger = logging.getLogger(__name__)


class OwnerResolver:
    """Resolves and remembers remote owner ids."""

    def __init__(
        self,
        remote: RemoteCRMClient,
        user_repo: UserRepository,
        cache: Optional[Cache] = None
    ):
        self.remote = remote
        self.user_repo = user_repo
        self.cache = cache if cache is not None else InMemoryCache()

    async def resolve_owner(self, local_user_id: uuid.UUID) -> Optional[int]:
        """Remote owner id for a user, or None if it cannot be found."""
        cached = self.cache.get(local_user_id)
        if cached is not None:
            return cached

        try:
            user = await self.user_repo.get(local_user_id)
            if user is None:
                logger.warning(f"User {local_user_id} not found, no owner assigned")
                return None

            if user.remote_owner_id is not None:
                self.cache.set(local_user_id, user.remote_owner_id)
                return user.remote_owner_id

            remote_user = await self.remote.find_user_by_email(user.email)
            if remote_user is None:
                logger.warning(f"No remote user matches {user.email}, no owner assigned")
                return None

            await self.user_repo.set_remote_owner_id(local_user_id, remote_user.id)
            self.cache.set(local_user_id, remote_user.id)
            return remote_user.id
        except Exception as e:
            logger.warning(f"Owner lookup for user {local_user_id} failed: {e}")
            return None

    def invalidate(self, local_user_id: Optional[uuid.UUID] = None) -> None:
        """Forget one cached owner, or all of them."""
        if local_user_id is None:
            self.cache.clear()
        else:
            self.cache.invalidate(local_user_id)

"""
Label resolver - maps a local label name to a remote label option id.
"""
import logging
from typing import List, Optional

from leadsync.core.cache import Cache, NullCache
from leadsync.core.exceptions import (
    ExternalServiceError,
    NoLabelFieldError,
    NoLabelOptionsError,
)
from leadsync.schemas.remote import RemoteCustomField
from leadsync.services.integrations.base import RemoteCRMClient

logger = logging.getLogger(__name__)

ENUM_FIELD_TYPES = ("enum", "set")


def _is_label_field(field: RemoteCustomField) -> bool:
    if field.field_type not in ENUM_FIELD_TYPES:
        return False
    return "label" in (field.name or "").lower() or "label" in (field.key or "").lower()


def find_label_field(fields: List[RemoteCustomField]) -> Optional[RemoteCustomField]:
    """Pick the label field; a field literally named 'label' wins."""
    candidates = [f for f in fields if _is_label_field(f)]
    if not candidates:
        return None
    for field in candidates:
        if (field.name or "").strip().lower() == "label":
            return field
    return candidates[0]


class LabelResolver:
    """
    Resolves label ids on the remote person label field.

    If the wanted label is not among the options, the FIRST option is
    returned instead. Callers must not assume the id matches the name.
    """

    def __init__(self, remote: RemoteCRMClient, cache: Optional[Cache] = None):
        self.remote = remote
        self.cache = cache if cache is not None else NullCache()

    async def _fetch_fields(self) -> List[RemoteCustomField]:
        result = await self.remote.get_person_custom_fields()
        if not result.success:
            raise ExternalServiceError("Remote CRM", result.error or "Failed to fetch person custom fields")
        return result.fields

    async def resolve_label_id(self, wanted_label_name: str) -> int:
        """Return the option id for a label name (or the first option)."""
        cache_key = ("label", wanted_label_name.strip().lower())
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        field = find_label_field(await self._fetch_fields())
        if field is None:
            raise NoLabelFieldError()
        if not field.options:
            raise NoLabelOptionsError(field.name)

        wanted = wanted_label_name.strip().lower()
        option = next((o for o in field.options if o.label.strip().lower() == wanted), None)
        if option is None:
            option = field.options[0]
            logger.warning(
                f"Label '{wanted_label_name}' not found in field '{field.name}', "
                f"falling back to first option '{option.label}' (ID: {option.id})"
            )

        self.cache.set(cache_key, option.id)
        return option.id

    async def available_label_fields(self) -> List[RemoteCustomField]:
        """All enumerated person fields with their options."""
        fields = await self._fetch_fields()
        return [f for f in fields if f.field_type in ENUM_FIELD_TYPES]

    def invalidate(self) -> None:
        """Forget cached label ids (e.g. after options change remotely)."""
        self.cache.clear()

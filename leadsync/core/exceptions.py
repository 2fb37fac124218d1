"""
LeadSync exception hierarchy.
Resolvers raise these; the promotion and replication entry points
convert them into boolean results.
"""
from typing import Optional


class LeadSyncException(Exception):
    """Base exception for LeadSync"""
    def __init__(self, message: str = "LeadSync error"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(LeadSyncException):
    """Local record missing"""
    def __init__(self, entity: str = "Record", entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        suffix = f" {entity_id}" if entity_id else ""
        super().__init__(f"{entity}{suffix} does not exist")


class AlreadyExistsError(LeadSyncException):
    """Unique value already taken"""
    def __init__(self, entity: str = "Record", field: Optional[str] = None, value: Optional[str] = None):
        detail = f" ({field}={value})" if field and value else ""
        super().__init__(f"{entity}{detail} is already taken")


class ValidationError(LeadSyncException):
    """Rejected input"""
    def __init__(self, message: str = "Invalid value", field: Optional[str] = None):
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class ExternalServiceError(LeadSyncException):
    """Remote call failed or returned an unsuccessful result"""
    def __init__(self, service: str = "Remote CRM", message: Optional[str] = None, retryable: bool = True):
        self.service = service
        self.retryable = retryable
        super().__init__(f"{service}: {message}" if message else f"{service} request failed")


class ShortcodeLookupError(ExternalServiceError):
    """Shortcode uniqueness lookup unavailable"""
    def __init__(self, message: Optional[str] = None):
        super().__init__("Shortcode lookup", message, retryable=True)


class ConfigurationError(LeadSyncException):
    """Remote CRM is not set up the way the engine expects.
    Meant for operators, never absorbed silently by resolvers."""


class NoLabelFieldError(ConfigurationError):
    """No enumerated 'label' field on remote person records"""
    def __init__(self):
        super().__init__("No label field found in remote person custom fields")


class NoLabelOptionsError(ConfigurationError):
    """Label field exists but declares no options"""
    def __init__(self, field_name: str = "label"):
        super().__init__(f"Label field '{field_name}' has no options")

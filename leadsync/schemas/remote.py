"""
Remote CRM payload and result schemas.
One explicit value object per remote entity so field presence is part
of the type.
"""
from typing import Optional, List

from pydantic import BaseModel, Field


# =============================================================================
# PERSON
# =============================================================================

class RemotePerson(BaseModel):
    """Person record as returned by the remote CRM."""
    id: int
    name: str
    email: List[str] = []
    phone: List[str] = []
    org_id: Optional[int] = None
    owner_id: Optional[int] = None
    label_ids: List[int] = []


class RemotePersonCreate(BaseModel):
    """Fields sent when creating a remote person."""
    name: str
    email: List[str] = []
    phone: List[str] = []
    org_id: Optional[int] = None
    org_name: Optional[str] = None
    label_ids: List[int] = []
    owner_id: Optional[int] = None


class PersonCreateResult(BaseModel):
    """Outcome of a person create call."""
    success: bool
    person_id: Optional[int] = None
    error: Optional[str] = None


# =============================================================================
# ORGANIZATION
# =============================================================================

class RemoteOrganizationCreate(BaseModel):
    """Fields sent when creating a remote organization."""
    name: str
    industry: Optional[str] = None
    country: Optional[str] = None


# =============================================================================
# USERS (OWNERS)
# =============================================================================

class RemoteUser(BaseModel):
    """Remote CRM user; its id is used as owner_id on persons."""
    id: int
    name: Optional[str] = None
    email: str


# =============================================================================
# CUSTOM FIELDS
# =============================================================================

class RemoteFieldOption(BaseModel):
    id: int
    label: str
    value: Optional[str] = None


class RemoteCustomField(BaseModel):
    """Person custom field definition."""
    id: int
    name: str
    key: str
    field_type: str
    options: List[RemoteFieldOption] = []


class CustomFieldsResult(BaseModel):
    success: bool
    fields: List[RemoteCustomField] = []
    error: Optional[str] = None


# =============================================================================
# ACTIVITY
# =============================================================================

class ActivityContactBlock(BaseModel):
    """Contact context attached to an activity."""
    name: str
    remote_person_id: int
    remote_org_id: Optional[int] = None
    organisation: Optional[str] = None


class ActivityUserBlock(BaseModel):
    """Display data for the local user who logged the activity."""
    name: Optional[str] = None
    email: Optional[str] = None


class ActivityCampaignBlock(BaseModel):
    """Display data for the campaign the activity belongs to."""
    name: str
    shortcode: Optional[str] = None


class RemoteActivityCreate(BaseModel):
    """Payload sent when mirroring an activity."""
    subject: str = "Activity"
    type: str = "task"
    due_date: Optional[str] = None  # YYYY-MM-DD
    due_time: Optional[str] = None  # HH:MM:SS
    note: Optional[str] = None
    person_id: int
    org_id: Optional[int] = None
    contact: ActivityContactBlock
    user: ActivityUserBlock = Field(default_factory=ActivityUserBlock)
    campaign: Optional[ActivityCampaignBlock] = None


class ActivityCreateResult(BaseModel):
    success: bool
    activity_id: Optional[int] = None
    error: Optional[str] = None

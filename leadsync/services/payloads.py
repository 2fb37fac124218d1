"""
Builders for outbound remote CRM payloads.
"""
from typing import Optional

from leadsync.config import settings
from leadsync.models.activity import Activity, ActivityType
from leadsync.models.campaign import Campaign
from leadsync.models.contact import Contact
from leadsync.models.organization import Organization
from leadsync.models.user import User
from leadsync.schemas.remote import (
    RemotePersonCreate,
    RemoteActivityCreate,
    ActivityContactBlock,
    ActivityUserBlock,
    ActivityCampaignBlock,
)

ACTIVITY_TYPE_MAP = {
    ActivityType.CALL: "call",
    ActivityType.EMAIL: "email",
    ActivityType.MEETING: "meeting",
    ActivityType.MEETING_REQUEST: "lunch",
    ActivityType.LINKEDIN: "task",
    ActivityType.REFERRAL: "task",
    ActivityType.CONFERENCE: "meeting",
}


def sanitize_string(value: Optional[str], max_length: int) -> Optional[str]:
    """Trim and truncate; blank strings become None."""
    if value is None or not settings.ENABLE_DATA_SANITIZATION:
        return value
    cleaned = value.strip()
    if not cleaned:
        return None
    return cleaned[:max_length]


def map_activity_type(activity_type: ActivityType) -> str:
    return ACTIVITY_TYPE_MAP.get(activity_type, "task")


def build_person_payload(
    contact: Contact,
    organization: Optional[Organization],
    remote_org_id: Optional[int],
    label_id: int,
    owner_id: Optional[int]
) -> RemotePersonCreate:
    """Person create payload for a contact being promoted."""
    email = sanitize_string(contact.email, settings.MAX_EMAIL_LENGTH)
    phone = sanitize_string(contact.phone, settings.MAX_PHONE_LENGTH)
    org_name = organization.name if organization else contact.organisation

    return RemotePersonCreate(
        name=sanitize_string(contact.name, settings.MAX_NAME_LENGTH) or "Unknown Contact",
        email=[email] if email else [],
        phone=[phone] if phone else [],
        org_id=remote_org_id,
        org_name=sanitize_string(org_name, settings.MAX_ORG_NAME_LENGTH),
        label_ids=[label_id],
        owner_id=owner_id,
    )


def build_activity_payload(
    activity: Activity,
    contact: Contact,
    user: User,
    organization: Optional[Organization] = None,
    campaign: Optional[Campaign] = None
) -> RemoteActivityCreate:
    """
    Activity create payload. The contact block carries the organization's
    remote id, falling back to the one stored on the contact.
    """
    remote_org_id = None
    if organization is not None and organization.remote_org_id is not None:
        remote_org_id = organization.remote_org_id
    elif contact.remote_org_id is not None:
        remote_org_id = contact.remote_org_id

    due_date = due_time = None
    if activity.due_date is not None:
        due_date = activity.due_date.strftime("%Y-%m-%d")
        due_time = activity.due_date.strftime("%H:%M:%S")

    return RemoteActivityCreate(
        subject=sanitize_string(activity.subject, settings.MAX_SUBJECT_LENGTH) or "Activity",
        type=map_activity_type(activity.type),
        due_date=due_date,
        due_time=due_time,
        note=sanitize_string(activity.note, settings.MAX_NOTE_LENGTH),
        person_id=contact.remote_person_id,
        org_id=remote_org_id,
        contact=ActivityContactBlock(
            name=contact.name,
            remote_person_id=contact.remote_person_id,
            remote_org_id=remote_org_id,
            organisation=contact.organisation,
        ),
        user=ActivityUserBlock(name=user.name, email=user.email),
        campaign=ActivityCampaignBlock(name=campaign.name, shortcode=campaign.shortcode) if campaign else None,
    )

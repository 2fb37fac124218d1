# Models package - local store tables mirrored against the remote CRM
from leadsync.models.user import User
from leadsync.models.organization import Organization
from leadsync.models.contact import Contact
from leadsync.models.campaign import Campaign
from leadsync.models.activity import Activity, ActivityType

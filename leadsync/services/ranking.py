"""
Contact prioritization for the "my 500" working list.

rank() is pure and deterministic: same input, same order, every time.
Sort keys, in order:
1. contacts in active outreach first
2. lower warmness score first (surface neglected contacts)
3. older last contact first, never-contacted before everything
Contacts equal on all three keep their input order.
"""
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, TypeVar

ACTIVITY_STATUS_LOST = "lost"
ACTIVITY_STATUS_HOT = "hot"
ACTIVITY_STATUS_WARM = "warm"
ACTIVITY_STATUS_COLD = "cold"

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

ATTENTION_AFTER_DAYS = 30


class RankableContact(Protocol):
    in_active_outreach: bool
    warmness_score: int
    last_contacted_at: Optional[datetime]


C = TypeVar("C", bound=RankableContact)


def priority_key(contact: RankableContact) -> Tuple[int, int, int, datetime]:
    """Sort key; never compares None with a datetime."""
    last = contact.last_contacted_at
    return (
        0 if contact.in_active_outreach else 1,
        contact.warmness_score,
        0 if last is None else 1,
        last if last is not None else datetime.min,
    )


def rank(contacts: Sequence[C]) -> List[C]:
    """Return a new list in outreach priority order. Input is not modified."""
    return sorted(contacts, key=priority_key)


def activity_status(contact: RankableContact) -> str:
    if contact.warmness_score < 0:
        return ACTIVITY_STATUS_LOST
    if contact.warmness_score >= 7:
        return ACTIVITY_STATUS_HOT
    if contact.warmness_score >= 3:
        return ACTIVITY_STATUS_WARM
    return ACTIVITY_STATUS_COLD


def contact_priority(contact: RankableContact) -> str:
    if contact.in_active_outreach:
        return PRIORITY_HIGH
    if contact.warmness_score >= 3:
        return PRIORITY_MEDIUM
    return PRIORITY_LOW


def days_since_last_contact(contact: RankableContact, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days (rounded up) since last contact, None if never contacted."""
    if contact.last_contacted_at is None:
        return None
    now = now or datetime.utcnow()
    delta = now - contact.last_contacted_at
    return math.ceil(delta.total_seconds() / 86400)


def needs_attention(contact: RankableContact, now: Optional[datetime] = None) -> bool:
    """Never contacted, or cold and untouched for over a month."""
    days = days_since_last_contact(contact, now)
    return days is None or (days > ATTENTION_AFTER_DAYS and contact.warmness_score <= 2)


def contact_summary(contact: RankableContact, now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "status": activity_status(contact),
        "priority": contact_priority(contact),
        "days_since_contact": days_since_last_contact(contact, now),
        "needs_attention": needs_attention(contact, now),
    }

"""Tests for the outreach priority ranking."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from leadsync.services.ranking import (
    activity_status,
    contact_priority,
    contact_summary,
    days_since_last_contact,
    needs_attention,
    rank,
)


@dataclass
class C:
    name: str
    warmness_score: int = 0
    in_active_outreach: bool = False
    last_contacted_at: Optional[datetime] = None


def names(contacts):
    return [c.name for c in contacts]


def test_active_outreach_first_regardless_of_score_or_date():
    contacts = [
        C("cold-never", warmness_score=5, in_active_outreach=False, last_contacted_at=None),
        C("active", warmness_score=2, in_active_outreach=True, last_contacted_at=datetime(2024, 1, 1)),
    ]
    assert names(rank(contacts)) == ["active", "cold-never"]


def test_lower_score_first():
    contacts = [C("b", warmness_score=6), C("a", warmness_score=1), C("c", warmness_score=-1)]
    assert names(rank(contacts)) == ["c", "a", "b"]


def test_never_contacted_before_oldest_contact():
    contacts = [
        C("recent", last_contacted_at=datetime(2024, 6, 1)),
        C("never"),
        C("old", last_contacted_at=datetime(2023, 1, 1)),
    ]
    assert names(rank(contacts)) == ["never", "old", "recent"]


def test_full_key_order():
    contacts = [
        C("p", warmness_score=3, last_contacted_at=datetime(2024, 1, 1)),
        C("q", warmness_score=3),
        C("r", warmness_score=1, last_contacted_at=datetime(2024, 1, 1)),
        C("s", warmness_score=9, in_active_outreach=True, last_contacted_at=datetime(2024, 2, 1)),
        C("t", warmness_score=9, in_active_outreach=True, last_contacted_at=datetime(2024, 1, 1)),
    ]
    assert names(rank(contacts)) == ["t", "s", "r", "q", "p"]


def test_ties_keep_input_order():
    when = datetime(2024, 3, 3)
    contacts = [C(str(i), warmness_score=2, last_contacted_at=when) for i in range(10)]
    assert names(rank(contacts)) == [str(i) for i in range(10)]

    never = [C(f"n{i}") for i in range(5)]
    assert names(rank(never)) == [f"n{i}" for i in range(5)]


def test_rank_is_idempotent_and_does_not_mutate_input():
    contacts = [
        C("a", warmness_score=4),
        C("b", warmness_score=1, in_active_outreach=True),
        C("c", warmness_score=1, last_contacted_at=datetime(2022, 5, 5)),
        C("d", warmness_score=1),
        C("e", warmness_score=4),
    ]
    original = list(contacts)

    once = rank(contacts)
    assert rank(once) == once
    assert contacts == original
    assert once is not contacts


def test_activity_status_bands():
    assert activity_status(C("x", warmness_score=-1)) == "lost"
    assert activity_status(C("x", warmness_score=0)) == "cold"
    assert activity_status(C("x", warmness_score=3)) == "warm"
    assert activity_status(C("x", warmness_score=7)) == "hot"


def test_contact_priority():
    assert contact_priority(C("x", warmness_score=0, in_active_outreach=True)) == "high"
    assert contact_priority(C("x", warmness_score=3)) == "medium"
    assert contact_priority(C("x", warmness_score=2)) == "low"


def test_days_since_last_contact_rounds_up():
    now = datetime(2024, 1, 10, 12, 0)
    assert days_since_last_contact(C("x"), now) is None
    assert days_since_last_contact(C("x", last_contacted_at=datetime(2024, 1, 9, 18, 0)), now) == 1
    assert days_since_last_contact(C("x", last_contacted_at=datetime(2024, 1, 1, 12, 0)), now) == 9


def test_needs_attention():
    now = datetime(2024, 3, 1)
    assert needs_attention(C("never"), now)
    assert needs_attention(C("stale-cold", warmness_score=2, last_contacted_at=datetime(2024, 1, 1)), now)
    assert not needs_attention(C("stale-warm", warmness_score=5, last_contacted_at=datetime(2024, 1, 1)), now)
    assert not needs_attention(C("recent", warmness_score=0, last_contacted_at=datetime(2024, 2, 25)), now)


def test_contact_summary():
    summary = contact_summary(C("x", warmness_score=8, in_active_outreach=True), datetime(2024, 1, 1))
    assert summary == {
        "status": "hot",
        "priority": "high",
        "days_since_contact": None,
        "needs_attention": True,
    }

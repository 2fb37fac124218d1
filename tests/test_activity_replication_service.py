"""Tests for activity replication."""

import uuid
from datetime import datetime

import pytest
import pytest_asyncio

from leadsync.models.activity import ActivityType
from leadsync.repositories.activity_repo import ActivityRepository
from leadsync.schemas.sync import ReplicationTrigger
from leadsync.services.activity_replication_service import ActivityReplicationService


@pytest.fixture
def service(session, remote):
    return ActivityReplicationService(session, remote)


@pytest_asyncio.fixture
async def make_activity(session, user):
    async def _make(contact, **fields):
        fields.setdefault("type", ActivityType.CALL)
        fields.setdefault("subject", "Intro call")
        return await ActivityRepository(session).create({
            "owner_id": user.id,
            "contact_id": contact.id,
            **fields,
        })
    return _make


class TestReplication:
    @pytest.mark.asyncio
    async def test_replicates_on_first_attempt(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)

        result = await service.replicate(activity.id, contact.id, user.id)

        assert result.replicated is True
        assert result.attempts == 1
        stored = await ActivityRepository(session).get(activity.id)
        assert stored.replicated is True
        assert stored.remote_activity_id == result.remote_activity_id
        assert stored.sync_attempts == 1
        assert stored.last_sync_attempt_at is not None

    @pytest.mark.asyncio
    async def test_retry_after_transport_error(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        remote.fail_next("create_activity", ConnectionError("connection reset"))

        result = await service.replicate(activity.id, contact.id, user.id)

        assert result.replicated is True
        assert result.attempts == 2
        assert remote.calls["create_activity"] == 2
        stored = await ActivityRepository(session).get(activity.id)
        assert stored.remote_activity_id == result.remote_activity_id
        assert stored.sync_attempts == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        remote.fail_next("create_activity", "server error", times=2)

        result = await service.replicate(activity.id, contact.id, user.id)

        assert result.replicated is False
        assert result.attempts == 2
        stored = await ActivityRepository(session).get(activity.id)
        assert stored.replicated is False
        assert stored.remote_activity_id is None
        assert stored.sync_attempts == 2

    @pytest.mark.asyncio
    async def test_attempt_counter_keeps_growing(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        remote.fail_next("create_activity", "server error", times=4)

        await service.replicate(activity.id, contact.id, user.id)
        await service.replicate(activity.id, contact.id, user.id)

        stored = await ActivityRepository(session).get(activity.id)
        assert stored.sync_attempts == 4
        assert remote.calls["create_activity"] == 4

    @pytest.mark.asyncio
    async def test_max_attempts_is_configurable(self, session, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        remote.fail_next("create_activity", "server error", times=3)
        service = ActivityReplicationService(session, remote, max_attempts=3)

        result = await service.replicate(activity.id, contact.id, user.id)

        assert result.replicated is False
        assert remote.calls["create_activity"] == 3

    @pytest.mark.asyncio
    async def test_already_replicated_is_not_resent(self, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        first = await service.replicate(activity.id, contact.id, user.id)

        second = await service.replicate(activity.id, contact.id, user.id)

        assert second.replicated is True
        assert second.attempts == 0
        assert second.remote_activity_id == first.remote_activity_id
        assert remote.calls["create_activity"] == 1

    @pytest.mark.asyncio
    async def test_handle_uses_trigger_fields(self, service, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        trigger = ReplicationTrigger(activity_id=activity.id, contact_id=contact.id, owner_id=user.id)

        assert (await service.handle(trigger)).replicated is True


class TestSkipped:
    @pytest.mark.asyncio
    async def test_unlinked_contact_is_skipped(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact()
        activity = await make_activity(contact)

        result = await service.replicate(activity.id, contact.id, user.id)

        assert result.replicated is False
        assert result.attempts == 0
        assert remote.total_calls() == 0
        stored = await ActivityRepository(session).get(activity.id)
        assert stored.sync_attempts == 0

    @pytest.mark.asyncio
    async def test_missing_activity(self, service, remote, user, make_contact):
        contact = await make_contact(remote_person_id=501)

        result = await service.replicate(uuid.uuid4(), contact.id, user.id)

        assert result.replicated is False
        assert remote.total_calls() == 0

    @pytest.mark.asyncio
    async def test_missing_owner(self, service, remote, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)

        result = await service.replicate(activity.id, contact.id, uuid.uuid4())

        assert result.replicated is False
        assert remote.total_calls() == 0


class TestPayload:
    @pytest.mark.asyncio
    async def test_payload_contents(self, session, service, remote, user, make_contact, make_activity, make_campaign, organization):
        organization.remote_org_id = 880
        session.add(organization)
        await session.commit()
        campaign = await make_campaign("Autumn Care Homes", shortcode="ACH")
        contact = await make_contact(
            name="Alex Doe",
            organisation="Northwind",
            organization_id=organization.id,
            remote_person_id=501,
        )
        activity = await make_activity(
            contact,
            type=ActivityType.MEETING_REQUEST,
            subject="  Lunch with Alex  ",
            note="Discuss Q4 staffing",
            due_date=datetime(2024, 3, 5, 12, 30, 0),
            campaign_id=campaign.id,
        )

        result = await service.replicate(activity.id, contact.id, user.id)

        payload = remote.activities[result.remote_activity_id]
        assert payload.type == "lunch"
        assert payload.subject == "Lunch with Alex"
        assert payload.note == "Discuss Q4 staffing"
        assert payload.due_date == "2024-03-05"
        assert payload.due_time == "12:30:00"
        assert payload.person_id == 501
        assert payload.org_id == 880
        assert payload.contact.name == "Alex Doe"
        assert payload.contact.remote_org_id == 880
        assert payload.contact.organisation == "Northwind"
        assert payload.user.email == "sam@example.com"
        assert payload.campaign.name == "Autumn Care Homes"
        assert payload.campaign.shortcode == "ACH"

    @pytest.mark.asyncio
    async def test_org_id_falls_back_to_contact(self, service, remote, user, make_contact, make_activity, organization):
        contact = await make_contact(organization_id=organization.id, remote_person_id=501, remote_org_id=990)
        activity = await make_activity(contact, type=ActivityType.LINKEDIN, subject=None)

        result = await service.replicate(activity.id, contact.id, user.id)

        payload = remote.activities[result.remote_activity_id]
        assert payload.org_id == 990
        assert payload.type == "task"
        assert payload.subject == "Activity"
        assert payload.due_date is None
        assert payload.campaign is None


class TestLocalWriteFailures:
    @pytest.mark.asyncio
    async def test_failed_success_write_does_not_create_again(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        activity_id, contact_id, owner_id = activity.id, contact.id, user.id
        record = service.activity_repo.record_sync_attempt

        async def commit_fails_once(*args, **kwargs):
            service.activity_repo.record_sync_attempt = record
            raise RuntimeError("db commit failed")

        service.activity_repo.record_sync_attempt = commit_fails_once

        result = await service.replicate(activity_id, contact_id, owner_id)

        assert result.replicated is False
        assert remote.calls["create_activity"] == 1
        assert len(remote.activities) == 1
        assert result.remote_activity_id in remote.activities

        # Session is still usable after the swallowed error
        stored = await ActivityRepository(session).get(activity_id)
        assert stored.replicated is False
        assert stored.sync_attempts == 0

    @pytest.mark.asyncio
    async def test_failed_attempt_write_stops_retries(self, session, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)
        activity_id, contact_id, owner_id = activity.id, contact.id, user.id
        remote.fail_next("create_activity", "server error", times=2)

        async def commit_fails(*args, **kwargs):
            raise RuntimeError("db commit failed")

        service.activity_repo.record_sync_attempt = commit_fails

        result = await service.replicate(activity_id, contact_id, owner_id)

        assert result.replicated is False
        assert remote.calls["create_activity"] == 1
        assert (await ActivityRepository(session).get(activity_id)).sync_attempts == 0


class TestContactMismatch:
    @pytest.mark.asyncio
    async def test_activity_is_never_sent_to_another_contact(self, service, remote, user, make_contact, make_activity):
        owner = await make_contact(name="Alex", remote_person_id=501)
        stranger = await make_contact(name="Jo", remote_person_id=502)
        activity = await make_activity(owner)

        result = await service.replicate(activity.id, stranger.id, user.id)

        assert result.replicated is False
        assert remote.total_calls() == 0

    @pytest.mark.asyncio
    async def test_contact_comes_from_the_activity(self, service, remote, user, make_contact, make_activity):
        contact = await make_contact(remote_person_id=501)
        activity = await make_activity(contact)

        result = await service.replicate(activity.id, None, user.id)

        assert result.replicated is True
        assert remote.activities[result.remote_activity_id].person_id == 501

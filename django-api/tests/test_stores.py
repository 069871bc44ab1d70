"""Tests for the Django store implementations and the roster document codec.

Run with: pytest tests/test_stores.py -v
"""

from dataclasses import replace

import pytest

from factories import NOW, make_entry, make_session
from pickup import models as orm
from pickup.domain import GuestContact, NotificationCommand, StatDelta, UserStats
from pickup.stores.codec import entry_from_document, entry_to_document
from pickup.stores.django_store import (
    DjangoMemberStore,
    DjangoNotificationStore,
    DjangoSessionStore,
)


class TestRosterCodec:
    """Tests for the camelCase roster document format."""

    def test_document_field_names(self):
        document = entry_to_document(make_entry("guest-1", host="ana", attended=False))

        assert document == {
            "participantId": "guest-1",
            "displayName": "Guest-1",
            "isGuest": True,
            "linkedHostId": "ana",
            "joinedAt": NOW.isoformat(),
            "arrivalEstimate": "20:00",
            "attended": False,
        }

    def test_guest_contact_survives(self):
        entry = replace(
            make_entry("guest-1", host="ana"),
            guest_contact=GuestContact(first_name="Carla", last_name="Dias", phone="555"),
        )

        assert entry_from_document(entry_to_document(entry)) == entry


@pytest.mark.django_db
class TestDjangoStores:
    """Tests for the ORM-backed stores."""

    def test_session_document_is_persisted(self):
        session = make_session(players=[make_entry("ana")], waitlist=[make_entry("bruno")])
        store = DjangoSessionStore()

        store.add_session(session)

        assert store.get_session(session.id) == session

    def test_failed_locked_block_rolls_back(self):
        session = make_session()
        store = DjangoSessionStore()
        store.add_session(session)

        with pytest.raises(RuntimeError):
            with store.locked(session.id) as current:
                store.save_session(current.with_roster((make_entry("ana"),), ()))
                raise RuntimeError("boom")

        assert store.get_session(session.id).players == ()

    def test_stat_delta_is_clamped(self):
        orm.Member.objects.create(id="ana", full_name="Ana", gender="F", role="player")

        delta = StatDelta(user_id="ana", attended=-1, missed=1)

        member = DjangoMemberStore().apply_stat_delta(delta)

        assert member.stats == UserStats(attended=0, missed=1)

    def test_unknown_recipients_are_dropped(self):
        orm.Member.objects.create(id="ana", full_name="Ana", gender="F", role="player")
        commands = [
            NotificationCommand(recipient_id="ana", message="hi", created_at=NOW),
            NotificationCommand(recipient_id="guest-1", message="hi", created_at=NOW),
        ]

        assert DjangoNotificationStore().deliver(commands) == 1

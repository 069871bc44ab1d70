"""Pytest configuration and shared fixtures."""

from collections.abc import Sequence
from contextlib import contextmanager
from dataclasses import replace

import pytest
from rest_framework.test import APIClient

from pickup.domain import LogEntry, NotificationCommand, Session, StatDelta, User
from pickup.stores.interfaces import (
    ActivityLogStore,
    InboxMessage,
    MemberStore,
    NotificationStore,
    SessionStore,
)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


class InMemorySessionStore(SessionStore):
    def __init__(self, sessions: Sequence[Session] = ()) -> None:
        self.sessions = {s.id: s for s in sessions}

    def list_sessions(self, status=None):
        rows = sorted(self.sessions.values(), key=lambda s: (s.date, s.start_time))
        return [s for s in rows if status is None or s.status is status]

    def get_session(self, session_id):
        return self.sessions.get(session_id)

    @contextmanager
    def locked(self, session_id):
        snapshot = dict(self.sessions)
        try:
            yield self.sessions.get(session_id)
        except Exception:
            self.sessions = snapshot
            raise

    def add_session(self, session):
        self.sessions[session.id] = session

    def save_session(self, session):
        self.sessions[session.id] = session

    def delete_session(self, session_id):
        return self.sessions.pop(session_id, None) is not None


class InMemoryMemberStore(MemberStore):
    def __init__(self, members: Sequence[User] = ()) -> None:
        self.members = {m.id: m for m in members}

    def get_member(self, member_id):
        return self.members.get(member_id)

    def list_members(self):
        return list(self.members.values())

    def apply_stat_delta(self, delta: StatDelta):
        member = self.members.get(delta.user_id)
        if member is None:
            return None
        self.members[member.id] = replace(member, stats=delta.apply(member.stats))
        return self.members[member.id]

    def save_member(self, member):
        self.members[member.id] = member

    def delete_member(self, member_id):
        return self.members.pop(member_id, None) is not None


class InMemoryNotificationStore(NotificationStore):
    def __init__(self) -> None:
        self.sent: list[NotificationCommand] = []
        self.read: set[int] = set()

    def deliver(self, commands):
        self.sent.extend(commands)
        return len(commands)

    def list_for(self, member_id):
        return [
            InboxMessage(id=i, message=c.message, created_at=c.created_at, read=i in self.read)
            for i, c in reversed(list(enumerate(self.sent)))
            if c.recipient_id == member_id
        ]

    def mark_all_read(self, member_id):
        ids = {m.id for m in self.list_for(member_id) if not m.read}
        self.read |= ids
        return len(ids)

    def clear(self, member_id):
        before = len(self.sent)
        self.sent = [c for c in self.sent if c.recipient_id != member_id]
        return before - len(self.sent)

    def messages_for(self, member_id: str) -> list[str]:
        return [c.message for c in self.sent if c.recipient_id == member_id]


class InMemoryActivityLogStore(ActivityLogStore):
    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def record(self, entry):
        self.entries.append(entry)

    def recent(self, limit):
        return list(reversed(self.entries))[:limit]


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def member_store() -> InMemoryMemberStore:
    return InMemoryMemberStore()


@pytest.fixture
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def log_store() -> InMemoryActivityLogStore:
    return InMemoryActivityLogStore()

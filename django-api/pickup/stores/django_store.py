"""Django ORM implementations of the store interfaces."""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from django.db import transaction
from django.db.models import F, Value
from django.db.models.functions import Greatest

from pickup import models as orm
from pickup.domain import (
    LogAction,
    LogEntry,
    NotificationCommand,
    Session,
    SessionId,
    SessionStatus,
    StatDelta,
    User,
)
from pickup.stores.codec import member_to_domain, session_to_domain, session_to_fields
from pickup.stores.interfaces import (
    ActivityLogStore,
    InboxMessage,
    MemberStore,
    NotificationStore,
    SessionStore,
)


class DjangoSessionStore(SessionStore):
    """Database-backed session store using Django ORM."""

    def list_sessions(self, status: SessionStatus | None = None) -> list[Session]:
        rows = orm.GameSession.objects.all()
        if status is not None:
            rows = rows.filter(status=status.value)
        return [session_to_domain(row) for row in rows]

    def get_session(self, session_id: SessionId) -> Session | None:
        row = orm.GameSession.objects.filter(pk=session_id.value).first()
        return session_to_domain(row) if row else None

    @contextmanager
    def locked(self, session_id: SessionId) -> Iterator[Session | None]:
        with transaction.atomic():
            row = orm.GameSession.objects.select_for_update().filter(pk=session_id.value).first()
            yield session_to_domain(row) if row else None

    def add_session(self, session: Session) -> None:
        orm.GameSession.objects.create(id=session.id.value, **session_to_fields(session))

    def save_session(self, session: Session) -> None:
        row = orm.GameSession.objects.get(pk=session.id.value)
        for name, value in session_to_fields(session).items():
            setattr(row, name, value)
        # save() rather than update() so post_save invalidates the cache.
        row.save()

    def delete_session(self, session_id: SessionId) -> bool:
        row = orm.GameSession.objects.filter(pk=session_id.value).first()
        if row is None:
            return False
        row.delete()
        return True


class DjangoMemberStore(MemberStore):
    """Database-backed member store using Django ORM."""

    def get_member(self, member_id: str) -> User | None:
        row = orm.Member.objects.filter(pk=member_id).first()
        return member_to_domain(row) if row else None

    def list_members(self) -> list[User]:
        return [member_to_domain(row) for row in orm.Member.objects.all()]

    def apply_stat_delta(self, delta: StatDelta) -> User | None:
        updated = orm.Member.objects.filter(pk=delta.user_id).update(
            games_attended=Greatest(F("games_attended") + delta.attended, Value(0)),
            games_missed=Greatest(F("games_missed") + delta.missed, Value(0)),
        )
        if not updated:
            return None
        return self.get_member(delta.user_id)

    def save_member(self, member: User) -> None:
        orm.Member.objects.filter(pk=member.id).update(
            role=member.role.value,
            nickname=member.nickname or "",
        )

    def delete_member(self, member_id: str) -> bool:
        deleted, _ = orm.Member.objects.filter(pk=member_id).delete()
        return bool(deleted)


class DjangoNotificationStore(NotificationStore):
    """Database-backed member inboxes."""

    def deliver(self, commands: Sequence[NotificationCommand]) -> int:
        recipient_ids = {command.recipient_id for command in commands}
        known = set(
            orm.Member.objects.filter(pk__in=recipient_ids).values_list("pk", flat=True)
        )
        rows = [
            orm.Notification(
                recipient_id=command.recipient_id,
                message=command.message,
                created_at=command.created_at,
            )
            for command in commands
            if command.recipient_id in known
        ]
        orm.Notification.objects.bulk_create(rows)
        return len(rows)

    def list_for(self, member_id: str) -> list[InboxMessage]:
        return [
            InboxMessage(id=row.id, message=row.message, created_at=row.created_at, read=row.read)
            for row in orm.Notification.objects.filter(recipient_id=member_id)
        ]

    def mark_all_read(self, member_id: str) -> int:
        return orm.Notification.objects.filter(recipient_id=member_id, read=False).update(
            read=True
        )

    def clear(self, member_id: str) -> int:
        deleted, _ = orm.Notification.objects.filter(recipient_id=member_id).delete()
        return deleted


class DjangoActivityLogStore(ActivityLogStore):
    """Database-backed audit log."""

    def record(self, entry: LogEntry) -> None:
        orm.ActivityLog.objects.create(
            action=entry.action.value,
            details=entry.details,
            author_name=entry.author_name or "",
            timestamp=entry.timestamp,
        )

    def recent(self, limit: int) -> list[LogEntry]:
        return [
            LogEntry(
                action=LogAction(row.action),
                details=row.details,
                timestamp=row.timestamp,
                author_name=row.author_name or None,
            )
            for row in orm.ActivityLog.objects.all()[:limit]
        ]

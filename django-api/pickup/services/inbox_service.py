"""Inbox service - member notifications and the administrator activity log."""

from pickup.domain import LogEntry, User
from pickup.domain.errors import PermissionDeniedError
from pickup.stores.interfaces import ActivityLogStore, InboxMessage, NotificationStore

RECENT_LOG_LIMIT = 200


class InboxService:
    def __init__(self, notifications: NotificationStore, logs: ActivityLogStore) -> None:
        self._notifications = notifications
        self._logs = logs

    def notifications_for(self, member: User) -> list[InboxMessage]:
        return self._notifications.list_for(member.id)

    def mark_all_read(self, member: User) -> int:
        return self._notifications.mark_all_read(member.id)

    def clear(self, member: User) -> int:
        return self._notifications.clear(member.id)

    def recent_logs(self, actor: User, limit: int = RECENT_LOG_LIMIT) -> list[LogEntry]:
        """Return the newest activity log entries (staff only)."""
        if not actor.is_staff:
            raise PermissionDeniedError("Only admins can read the activity log")
        return self._logs.recent(min(limit, RECENT_LOG_LIMIT))

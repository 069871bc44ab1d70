"""Executes the side-effect commands returned by the roster engine."""

import logging
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from django.utils import timezone

from pickup.domain import LogEntry, NotificationCommand, SessionId
from pickup.domain.errors import InvalidSessionIdError
from pickup.stores.interfaces import ActivityLogStore, NotificationStore

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    """Timezone-aware current time in the configured ``TIME_ZONE``."""
    return timezone.localtime()


def parse_session_id(raw: str) -> SessionId:
    """Parse a session ID.

    Raises:
        InvalidSessionIdError: If ``raw`` is not a valid UUID.
    """
    if isinstance(raw, UUID):
        return SessionId(value=raw)
    try:
        return SessionId.from_string(str(raw))
    except ValueError as exc:
        raise InvalidSessionIdError() from exc


class EffectDispatcher:
    """Sends notifications and log entries to their sinks."""

    def __init__(self, notifications: NotificationStore, logs: ActivityLogStore) -> None:
        self._notifications = notifications
        self._logs = logs

    def emit(
        self,
        notifications: Sequence[NotificationCommand] = (),
        log: LogEntry | None = None,
    ) -> None:
        if log is not None:
            logger.info("%s: %s", log.action.value, log.details)
            self._logs.record(log)
        if notifications:
            delivered = self._notifications.deliver(notifications)
            logger.debug("Delivered %d of %d notifications", delivered, len(notifications))

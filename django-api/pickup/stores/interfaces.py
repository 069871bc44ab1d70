"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from datetime import datetime

from pickup.domain import (
    LogEntry,
    NotificationCommand,
    Session,
    SessionId,
    SessionStatus,
    StatDelta,
    User,
)


class SessionStore(ABC):
    """Interface for session persistence operations."""

    @abstractmethod
    def list_sessions(self, status: SessionStatus | None = None) -> list[Session]:
        """Return sessions ordered by date and start time, optionally by status."""
        ...

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def locked(self, session_id: SessionId) -> AbstractContextManager[Session | None]:
        """Hold the session's write lock for a read-modify-write.

        Yields the current session (or None). Saves made inside the block
        commit together; an exception leaves the stored session untouched.
        """
        ...

    @abstractmethod
    def add_session(self, session: Session) -> None:
        """Persist a new session."""
        ...

    @abstractmethod
    def save_session(self, session: Session) -> None:
        """Overwrite an existing session document."""
        ...

    @abstractmethod
    def delete_session(self, session_id: SessionId) -> bool:
        """Delete a session, returning whether it existed."""
        ...


class MemberStore(ABC):
    """Interface for member lookups and stat updates."""

    @abstractmethod
    def get_member(self, member_id: str) -> User | None:
        """Return a member by ID, or None if not found."""
        ...

    @abstractmethod
    def list_members(self) -> list[User]:
        """Return every member."""
        ...

    @abstractmethod
    def apply_stat_delta(self, delta: StatDelta) -> User | None:
        """Apply a stat change, clamped at zero. Returns None for unknown members."""
        ...

    @abstractmethod
    def save_member(self, member: User) -> None:
        """Persist a member's role and nickname."""
        ...

    @abstractmethod
    def delete_member(self, member_id: str) -> bool:
        """Delete a member, returning whether it existed."""
        ...


@dataclass(frozen=True)
class InboxMessage:
    """A delivered notification as seen by its recipient."""

    id: int
    message: str
    created_at: datetime
    read: bool


class NotificationStore(ABC):
    """Interface for the notification sink and member inboxes."""

    @abstractmethod
    def deliver(self, commands: Sequence[NotificationCommand]) -> int:
        """Store notifications for their recipients, returning how many were kept.

        Commands addressed to unknown members are dropped.
        """
        ...

    @abstractmethod
    def list_for(self, member_id: str) -> list[InboxMessage]:
        """Return a member's notifications, newest first."""
        ...

    @abstractmethod
    def mark_all_read(self, member_id: str) -> int:
        """Mark every notification of a member as read."""
        ...

    @abstractmethod
    def clear(self, member_id: str) -> int:
        """Delete every notification of a member."""
        ...


class ActivityLogStore(ABC):
    """Interface for the audit log sink."""

    @abstractmethod
    def record(self, entry: LogEntry) -> None:
        """Append a log entry."""
        ...

    @abstractmethod
    def recent(self, limit: int) -> list[LogEntry]:
        """Return the newest entries, newest first."""
        ...

from pickup.domain.models import (
    GuestContact,
    LogAction,
    LogEntry,
    NotificationCommand,
    RosterEntry,
    Session,
    SessionDraft,
    StatDelta,
    User,
    UserStats,
)
from pickup.domain.value_objects import (
    Capacity,
    Gender,
    GenderRestriction,
    Role,
    SessionId,
    SessionStatus,
    SessionType,
)

__all__ = [
    "GuestContact",
    "LogAction",
    "LogEntry",
    "NotificationCommand",
    "RosterEntry",
    "Session",
    "SessionDraft",
    "StatDelta",
    "User",
    "UserStats",
    "Capacity",
    "Gender",
    "GenderRestriction",
    "Role",
    "SessionId",
    "SessionStatus",
    "SessionType",
]

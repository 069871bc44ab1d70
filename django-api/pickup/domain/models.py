"""Domain models representing persisted state and engine outputs.

These are pure domain objects with no API input rules.
Django ORM models are in pickup/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import Enum

from pickup.domain.clock import to_minutes
from pickup.domain.value_objects import (
    Capacity,
    Gender,
    GenderRestriction,
    Role,
    SessionId,
    SessionStatus,
    SessionType,
)


@dataclass(frozen=True)
class UserStats:
    """Cumulative attendance counters for a member."""

    attended: int = 0
    missed: int = 0

    def __post_init__(self) -> None:
        if self.attended < 0 or self.missed < 0:
            raise ValueError("Stats cannot be negative")


@dataclass(frozen=True)
class User:
    """Domain representation of a community member."""

    id: str
    full_name: str
    gender: Gender
    role: Role
    stats: UserStats = field(default_factory=UserStats)
    nickname: str | None = None

    @property
    def display_name(self) -> str:
        return self.nickname or self.full_name

    @property
    def is_staff(self) -> bool:
        return self.role.is_staff

    @property
    def is_pending(self) -> bool:
        return self.role is Role.PENDING


@dataclass(frozen=True)
class GuestContact:
    """Contact snapshot a host provides when bringing a guest."""

    first_name: str
    last_name: str = ""
    email: str = ""
    phone: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class RosterEntry:
    """One occupant of a session's player list or waitlist."""

    participant_id: str
    display_name: str
    is_guest: bool
    joined_at: datetime
    arrival_estimate: str
    linked_host_id: str | None = None
    attended: bool | None = None
    guest_contact: GuestContact | None = None

    def __post_init__(self) -> None:
        if self.is_guest != (self.linked_host_id is not None):
            raise ValueError("linked_host_id must be set if and only if the entry is a guest")

    @property
    def notify_id(self) -> str:
        """Member who receives messages about this entry."""
        return self.linked_host_id if self.is_guest else self.participant_id


@dataclass(frozen=True)
class Session:
    """Domain representation of a Session and its roster."""

    id: SessionId
    name: str
    date: date
    start_time: str
    max_spots: Capacity
    guest_window_opens_at: datetime
    type: SessionType = SessionType.CASUAL
    gender_restriction: GenderRestriction = GenderRestriction.ALL
    allow_guests: bool = True
    status: SessionStatus = SessionStatus.OPEN
    created_by: str = "system"
    players: tuple[RosterEntry, ...] = ()
    waitlist: tuple[RosterEntry, ...] = ()

    @property
    def is_closed(self) -> bool:
        return self.status is SessionStatus.CLOSED

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_spots.value

    @property
    def starts_at(self) -> datetime:
        minutes = to_minutes(self.start_time)
        return datetime.combine(self.date, time(minutes // 60 % 24, minutes % 60))

    @property
    def entries(self) -> tuple[RosterEntry, ...]:
        return self.players + self.waitlist

    def find(self, participant_id: str) -> RosterEntry | None:
        for entry in self.entries:
            if entry.participant_id == participant_id:
                return entry
        return None

    def holds_spot(self, participant_id: str) -> bool:
        return any(e.participant_id == participant_id for e in self.players)

    def is_waitlisted(self, participant_id: str) -> bool:
        return any(e.participant_id == participant_id for e in self.waitlist)

    def with_roster(
        self,
        players: tuple[RosterEntry, ...],
        waitlist: tuple[RosterEntry, ...],
    ) -> "Session":
        return replace(self, players=players, waitlist=waitlist)


@dataclass(frozen=True)
class NotificationCommand:
    """A message the notification collaborator must deliver to a member."""

    recipient_id: str
    message: str
    created_at: datetime


class LogAction(Enum):
    JOIN = "JOIN"
    LEAVE = "LEAVE"
    PROMOTION = "PROMOTION"
    ARRIVAL_CHANGE = "ARRIVAL_CHANGE"
    ATTENDANCE = "ATTENDANCE"
    CREATE_SESSION = "CREATE_SESSION"
    UPDATE_SESSION = "UPDATE_SESSION"
    DELETE_SESSION = "DELETE_SESSION"
    CLOSE_SESSION = "CLOSE_SESSION"
    REOPEN_SESSION = "REOPEN_SESSION"
    ROLE_CHANGE = "ROLE_CHANGE"
    REJECT_MEMBER = "REJECT_MEMBER"
    PROFILE_UPDATE = "PROFILE_UPDATE"


@dataclass(frozen=True)
class LogEntry:
    """Audit record of a roster or session change."""

    action: LogAction
    details: str
    timestamp: datetime
    author_name: str | None = None


@dataclass(frozen=True)
class StatDelta:
    """Change to apply to a member's cumulative stats."""

    user_id: str
    attended: int = 0
    missed: int = 0

    def apply(self, stats: UserStats) -> UserStats:
        return UserStats(
            attended=max(0, stats.attended + self.attended),
            missed=max(0, stats.missed + self.missed),
        )


@dataclass(frozen=True)
class SessionDraft:
    """Administrator input for creating or editing a session."""

    name: str
    date: date
    start_time: str
    max_spots: int
    guest_window_opens_at: datetime
    type: SessionType = SessionType.CASUAL
    gender_restriction: GenderRestriction = GenderRestriction.ALL
    allow_guests: bool = True

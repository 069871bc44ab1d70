"""Builders for domain objects used across the test suite."""

from collections.abc import Sequence
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from pickup.domain import (
    Capacity,
    Gender,
    GenderRestriction,
    Role,
    RosterEntry,
    Session,
    SessionId,
    SessionStatus,
    SessionType,
    User,
    UserStats,
)

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)
GAME_DAY = date(2026, 3, 14)


def make_user(
    user_id: str,
    *,
    gender: Gender = Gender.MALE,
    role: Role = Role.PLAYER,
    stats: UserStats | None = None,
    name: str | None = None,
) -> User:
    return User(
        id=user_id,
        full_name=name or user_id.title(),
        gender=gender,
        role=role,
        stats=stats or UserStats(),
    )


def make_entry(
    participant_id: str,
    arrival: str = "20:00",
    *,
    host: str | None = None,
    attended: bool | None = None,
    joined_at: datetime = NOW,
) -> RosterEntry:
    return RosterEntry(
        participant_id=participant_id,
        display_name=participant_id.title(),
        is_guest=host is not None,
        linked_host_id=host,
        joined_at=joined_at,
        arrival_estimate=arrival,
        attended=attended,
    )


def make_session(
    *,
    max_spots: int = 18,
    start_time: str = "20:00",
    session_type: SessionType = SessionType.CASUAL,
    restriction: GenderRestriction = GenderRestriction.ALL,
    allow_guests: bool = True,
    status: SessionStatus = SessionStatus.OPEN,
    players: Sequence[RosterEntry] = (),
    waitlist: Sequence[RosterEntry] = (),
    on: date = GAME_DAY,
    guest_window_opens_at: datetime = NOW - timedelta(hours=1),
    name: str = "Thursday Pickup",
) -> Session:
    return Session(
        id=SessionId(value=uuid4()),
        name=name,
        date=on,
        start_time=start_time,
        max_spots=Capacity(value=max_spots),
        guest_window_opens_at=guest_window_opens_at,
        type=session_type,
        gender_restriction=restriction,
        allow_guests=allow_guests,
        status=status,
        players=tuple(players),
        waitlist=tuple(waitlist),
    )

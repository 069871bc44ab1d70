"""Session scheduling rules: drafts, start-time conflicts and stale-session closing."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from uuid import uuid4

from pickup.domain.clock import parse_clock, to_minutes
from pickup.domain.errors import InvalidSessionError, SchedulingConflictError
from pickup.domain.models import NotificationCommand, Session, SessionDraft, User
from pickup.domain.value_objects import Capacity, SessionId, SessionStatus, SessionType

MIN_SPOTS = 6
MAX_SPOTS = 60
MIN_SESSION_GAP_MINUTES = 110
AUTO_CLOSE_AFTER = timedelta(hours=4)


def validate_draft(draft: SessionDraft) -> SessionDraft:
    """Check a draft against the creation rules and normalize it.

    Championships never take guests, whatever the draft says.

    Raises:
        InvalidSessionError: Blank name, bad start time or spots outside 6-60.
    """
    if not draft.name.strip():
        raise InvalidSessionError("Session name is required")
    if parse_clock(draft.start_time) is None:
        raise InvalidSessionError("Start time must be given as HH:MM")
    if not MIN_SPOTS <= draft.max_spots <= MAX_SPOTS:
        raise InvalidSessionError(f"Spots must be between {MIN_SPOTS} and {MAX_SPOTS}")
    if draft.type is SessionType.CHAMPIONSHIP and draft.allow_guests:
        return replace(draft, allow_guests=False)
    return draft


def new_session(draft: SessionDraft, created_by: str) -> Session:
    """Build an open, empty session from a validated draft."""
    return Session(
        id=SessionId(value=uuid4()),
        name=draft.name.strip(),
        date=draft.date,
        start_time=draft.start_time,
        max_spots=Capacity(value=draft.max_spots),
        guest_window_opens_at=draft.guest_window_opens_at,
        type=draft.type,
        gender_restriction=draft.gender_restriction,
        allow_guests=draft.allow_guests,
        created_by=created_by,
    )


def apply_draft(session: Session, draft: SessionDraft) -> Session:
    """Apply edited settings to an existing session, keeping its roster and status.

    Raises:
        InvalidSessionError: The new capacity is below the confirmed player count.
    """
    if draft.max_spots < len(session.players):
        raise InvalidSessionError("Spots cannot be fewer than the confirmed players")
    return replace(
        session,
        name=draft.name.strip(),
        date=draft.date,
        start_time=draft.start_time,
        max_spots=Capacity(value=draft.max_spots),
        guest_window_opens_at=draft.guest_window_opens_at,
        type=draft.type,
        gender_restriction=draft.gender_restriction,
        allow_guests=draft.allow_guests,
    )


def validate_no_conflict(
    candidate_date: date,
    candidate_time: str,
    sessions: Iterable[Session],
    exclude_id: SessionId | None = None,
) -> None:
    """Reject a start that falls within 110 minutes of another open session that day.

    Raises:
        SchedulingConflictError: An open session on the same date is too close.
    """
    candidate = to_minutes(candidate_time)
    for session in sessions:
        if session.id == exclude_id or session.is_closed or session.date != candidate_date:
            continue
        if abs(to_minutes(session.start_time) - candidate) < MIN_SESSION_GAP_MINUTES:
            raise SchedulingConflictError(session.name)


@dataclass(frozen=True)
class SweepOutcome:
    closed: tuple[Session, ...]
    notifications: tuple[NotificationCommand, ...]


def is_stale(session: Session, now: datetime) -> bool:
    starts_at = session.starts_at
    if now.tzinfo is not None:
        starts_at = starts_at.replace(tzinfo=now.tzinfo)
    return now - starts_at > AUTO_CLOSE_AFTER


def sweep_auto_close(
    sessions: Iterable[Session],
    now: datetime,
    staff: Iterable[User] = (),
) -> SweepOutcome:
    """Close every open session that started more than four hours ago.

    Each closed session yields one reminder per admin or owner that
    attendance still has to be reconciled. Closed sessions are skipped, so a
    second sweep over the persisted result emits nothing.
    """
    recipients = [user for user in staff if user.is_staff]
    closed = []
    notifications = []
    for session in sessions:
        if session.is_closed or not is_stale(session, now):
            continue
        closed_session = replace(session, status=SessionStatus.CLOSED)
        closed.append(closed_session)
        for user in recipients:
            notifications.append(
                NotificationCommand(
                    recipient_id=user.id,
                    message=(
                        f"{session.name} ({session.date.isoformat()}) was closed automatically. "
                        "Please reconcile attendance."
                    ),
                    created_at=now,
                )
            )
    return SweepOutcome(closed=tuple(closed), notifications=tuple(notifications))

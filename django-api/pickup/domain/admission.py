"""Admission: placing a member or a guest on a session roster."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from pickup.domain.broadcast import capacity_notices, crossed_threshold
from pickup.domain.clock import MAX_ARRIVAL_DELAY, is_late, parse_clock, signed_diff_minutes
from pickup.domain.errors import (
    AlreadyJoinedError,
    ArrivalTooLateError,
    GenderRestrictedError,
    GuestLimitReachedError,
    GuestsNotAllowedError,
    GuestWindowClosedError,
    HostNotJoinedError,
    InvalidArrivalError,
    SessionClosedError,
)
from pickup.domain.models import (
    GuestContact,
    LogAction,
    LogEntry,
    NotificationCommand,
    RosterEntry,
    Session,
    User,
)
from pickup.domain.value_objects import SessionType


@dataclass(frozen=True)
class AdmissionOutcome:
    session: Session
    entry: RosterEntry
    waitlisted: bool
    notifications: tuple[NotificationCommand, ...]
    log: LogEntry


def admit(
    session: Session,
    actor: User,
    arrival: str | None,
    *,
    now: datetime,
    guest: GuestContact | None = None,
    spectator: bool = False,
    audience: Iterable[User] = (),
) -> AdmissionOutcome:
    """Place ``actor`` (or the guest they bring) on the roster.

    Raises:
        SessionClosedError: The session no longer accepts changes.
        AlreadyJoinedError: The member is already on either list.
        GuestsNotAllowedError: Guests are off for this session or it is a championship.
        GuestWindowClosedError: Guest sign-up opens later.
        HostNotJoinedError: The member bringing a guest is not on the roster.
        GuestLimitReachedError: The member already has a guest in the session.
        GenderRestrictedError: The member's gender is outside the restriction.
        InvalidArrivalError: ``arrival`` is missing or not HH:MM.
        ArrivalTooLateError: ``arrival`` is more than four hours after kickoff.
    """
    is_guest = guest is not None
    spectator = spectator and session.type is SessionType.CHAMPIONSHIP

    if session.is_closed:
        raise SessionClosedError()
    if not is_guest and session.find(actor.id) is not None:
        raise AlreadyJoinedError(actor.id)
    if is_guest:
        if not session.allow_guests or session.type is SessionType.CHAMPIONSHIP:
            raise GuestsNotAllowedError()
        if now < session.guest_window_opens_at:
            raise GuestWindowClosedError()
        if session.find(actor.id) is None:
            raise HostNotJoinedError(actor.id)
        if any(e.linked_host_id == actor.id for e in session.entries):
            raise GuestLimitReachedError(actor.id)
    elif not spectator and not session.gender_restriction.admits(actor.gender):
        raise GenderRestrictedError()
    if parse_clock(arrival) is None:
        raise InvalidArrivalError()
    if signed_diff_minutes(session.start_time, arrival) > MAX_ARRIVAL_DELAY:
        raise ArrivalTooLateError()

    entry = _build_entry(actor, arrival, guest, now)
    late = session.type.enforces_lateness and is_late(session.start_time, arrival)
    waitlisted = spectator or session.is_full or late

    if waitlisted:
        updated = session.with_roster(session.players, session.waitlist + (entry,))
    else:
        updated = session.with_roster(session.players + (entry,), session.waitlist)

    notifications: list[NotificationCommand] = []
    percentage = crossed_threshold(
        session.max_spots.value, len(session.players), len(updated.players)
    )
    if percentage is not None:
        notifications = capacity_notices(updated, percentage, audience, now)

    return AdmissionOutcome(
        session=updated,
        entry=entry,
        waitlisted=waitlisted,
        notifications=tuple(notifications),
        log=LogEntry(
            action=LogAction.JOIN,
            details=_log_details(session, actor, entry, spectator),
            timestamp=now,
            author_name=actor.full_name,
        ),
    )


def _build_entry(
    actor: User, arrival: str, guest: GuestContact | None, now: datetime
) -> RosterEntry:
    if guest is not None:
        return RosterEntry(
            participant_id=f"guest-{uuid4().hex[:12]}",
            display_name=guest.full_name,
            is_guest=True,
            linked_host_id=actor.id,
            joined_at=now,
            arrival_estimate=arrival,
            guest_contact=guest,
        )
    return RosterEntry(
        participant_id=actor.id,
        display_name=actor.display_name,
        is_guest=False,
        joined_at=now,
        arrival_estimate=arrival,
    )


def _log_details(session: Session, actor: User, entry: RosterEntry, spectator: bool) -> str:
    if entry.is_guest:
        return f"Guest {entry.display_name} added by {actor.full_name} to {session.name}"
    if spectator:
        return f"{actor.full_name} joined {session.name} as a supporter"
    return f"{actor.full_name} joined {session.name} (arrival: {entry.arrival_estimate})"

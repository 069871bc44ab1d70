"""Withdrawal from a session and promotion from its waitlist."""

from dataclasses import dataclass
from datetime import datetime

from pickup.domain.clock import is_late
from pickup.domain.errors import EntryNotFoundError, SessionClosedError
from pickup.domain.models import (
    LogAction,
    LogEntry,
    NotificationCommand,
    RosterEntry,
    Session,
)


@dataclass(frozen=True)
class WithdrawalOutcome:
    session: Session
    removed: tuple[RosterEntry, ...]
    promoted: tuple[RosterEntry, ...]
    notifications: tuple[NotificationCommand, ...]
    log: LogEntry


def promote_waitlisted(session: Session) -> tuple[Session, tuple[RosterEntry, ...]]:
    """Fill free player spots from the waitlist in join order.

    Only entries arriving within the lateness tolerance are eligible; once
    no eligible entry remains the loop stops, leaving the late ones queued.
    Championship and social waitlists are never auto-filled.
    """
    if not session.type.enforces_lateness:
        return session, ()

    players = list(session.players)
    waitlist = list(session.waitlist)
    promoted = []
    while len(players) < session.max_spots.value and waitlist:
        index = next(
            (
                i
                for i, entry in enumerate(waitlist)
                if not is_late(session.start_time, entry.arrival_estimate)
            ),
            None,
        )
        if index is None:
            break
        candidate = waitlist.pop(index)
        players.append(candidate)
        promoted.append(candidate)

    if not promoted:
        return session, ()
    return session.with_roster(tuple(players), tuple(waitlist)), tuple(promoted)


def promotion_notices(
    session: Session, promoted: tuple[RosterEntry, ...], now: datetime
) -> list[NotificationCommand]:
    """Tell each promoted member, or the host of a promoted guest."""
    notices = []
    for entry in promoted:
        if entry.is_guest:
            message = (
                f"A spot opened up! Your guest {entry.display_name} moved from the "
                f"waitlist into {session.name}."
            )
        else:
            message = f"A spot opened up! You moved from the waitlist into {session.name}."
        notices.append(
            NotificationCommand(recipient_id=entry.notify_id, message=message, created_at=now)
        )
    return notices


def withdraw(
    session: Session,
    participant_id: str,
    *,
    now: datetime,
    author_name: str | None = None,
) -> WithdrawalOutcome:
    """Remove a participant and every guest they host, then backfill.

    Raises:
        SessionClosedError: The session no longer accepts changes.
        EntryNotFoundError: ``participant_id`` is not on the roster.
    """
    if session.is_closed:
        raise SessionClosedError()
    if session.find(participant_id) is None:
        raise EntryNotFoundError(participant_id)

    def leaving(entry: RosterEntry) -> bool:
        return entry.participant_id == participant_id or entry.linked_host_id == participant_id

    removed = tuple(e for e in session.entries if leaving(e))
    remaining = session.with_roster(
        tuple(e for e in session.players if not leaving(e)),
        tuple(e for e in session.waitlist if not leaving(e)),
    )
    updated, promoted = promote_waitlisted(remaining)

    details = f"Left {session.name}. Removed: {', '.join(e.display_name for e in removed)}"
    if promoted:
        details += f". Promoted: {', '.join(e.display_name for e in promoted)}"

    return WithdrawalOutcome(
        session=updated,
        removed=removed,
        promoted=promoted,
        notifications=tuple(promotion_notices(updated, promoted, now)),
        log=LogEntry(
            action=LogAction.LEAVE,
            details=details,
            timestamp=now,
            author_name=author_name,
        ),
    )

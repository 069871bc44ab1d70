"""Re-evaluating list membership when an arrival estimate changes."""

from dataclasses import dataclass, replace
from datetime import datetime

from pickup.domain.clock import is_late, parse_clock
from pickup.domain.errors import EntryNotFoundError, InvalidArrivalError, SessionClosedError
from pickup.domain.models import NotificationCommand, RosterEntry, Session
from pickup.domain.withdrawal import promote_waitlisted, promotion_notices


@dataclass(frozen=True)
class ArrivalOutcome:
    session: Session
    entry: RosterEntry
    moved_to_waitlist: bool
    promoted: tuple[RosterEntry, ...]
    notifications: tuple[NotificationCommand, ...]


def mutate_arrival(
    session: Session,
    participant_id: str,
    new_arrival: str | None,
    *,
    now: datetime,
) -> ArrivalOutcome:
    """Update an entry's arrival estimate and move it between lists if needed.

    A player who becomes late drops to the end of the waitlist and the freed
    spot is backfilled. A waitlisted entry that becomes on time takes a free
    spot directly. Championship and social sessions only record the time.

    Raises:
        SessionClosedError: The session no longer accepts changes.
        EntryNotFoundError: ``participant_id`` is not on the roster.
        InvalidArrivalError: ``new_arrival`` is not HH:MM.
    """
    if session.is_closed:
        raise SessionClosedError()
    current = session.find(participant_id)
    if current is None:
        raise EntryNotFoundError(participant_id)
    if parse_clock(new_arrival) is None:
        raise InvalidArrivalError()

    entry = replace(current, arrival_estimate=new_arrival)
    in_players = session.holds_spot(participant_id)
    late = is_late(session.start_time, new_arrival)

    if session.type.enforces_lateness and in_players and late:
        demoted = session.with_roster(
            tuple(e for e in session.players if e.participant_id != participant_id),
            session.waitlist + (entry,),
        )
        updated, promoted = promote_waitlisted(demoted)
        return ArrivalOutcome(
            session=updated,
            entry=entry,
            moved_to_waitlist=True,
            promoted=promoted,
            notifications=tuple(promotion_notices(updated, promoted, now)),
        )

    if session.type.enforces_lateness and not in_players and not late and not session.is_full:
        updated = session.with_roster(
            session.players + (entry,),
            tuple(e for e in session.waitlist if e.participant_id != participant_id),
        )
        return ArrivalOutcome(
            session=updated,
            entry=entry,
            moved_to_waitlist=False,
            promoted=(entry,),
            notifications=tuple(promotion_notices(updated, (entry,), now)),
        )

    updated = session.with_roster(
        _swap(session.players, entry),
        _swap(session.waitlist, entry),
    )
    return ArrivalOutcome(
        session=updated,
        entry=entry,
        moved_to_waitlist=False,
        promoted=(),
        notifications=(),
    )


def _swap(entries: tuple[RosterEntry, ...], entry: RosterEntry) -> tuple[RosterEntry, ...]:
    return tuple(entry if e.participant_id == entry.participant_id else e for e in entries)

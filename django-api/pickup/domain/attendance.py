"""Post-game attendance reconciliation."""

from dataclasses import dataclass, replace

from pickup.domain.errors import EntryNotFoundError
from pickup.domain.models import RosterEntry, Session, StatDelta, UserStats


@dataclass(frozen=True)
class AttendanceOutcome:
    session: Session
    entry: RosterEntry
    stat_delta: StatDelta | None
    changed: bool


def reconcile_attendance(
    session: Session,
    participant_id: str,
    attended: bool,
    *,
    stats: UserStats | None = None,
) -> AttendanceOutcome:
    """Set the attended flag on an entry and derive the member's stat change.

    Setting the value already stored is a no-op. Marking present adds an
    attendance and, when the entry was marked absent before, takes back the
    miss. Marking absent adds a miss and removes an attendance without
    letting it drop below zero. ``stats`` are the member's current counters,
    used to keep the delta from pushing them negative.

    Raises:
        EntryNotFoundError: ``participant_id`` is not on the roster.
    """
    current = session.find(participant_id)
    if current is None:
        raise EntryNotFoundError(participant_id)
    if current.attended == attended:
        return AttendanceOutcome(session=session, entry=current, stat_delta=None, changed=False)

    entry = replace(current, attended=attended)
    updated = session.with_roster(
        tuple(entry if e.participant_id == participant_id else e for e in session.players),
        tuple(entry if e.participant_id == participant_id else e for e in session.waitlist),
    )

    delta = None
    if not entry.is_guest:
        stats = stats or UserStats()
        if attended:
            delta = StatDelta(
                user_id=participant_id,
                attended=1,
                missed=-1 if current.attended is False and stats.missed > 0 else 0,
            )
        else:
            delta = StatDelta(
                user_id=participant_id,
                attended=-1 if stats.attended > 0 else 0,
                missed=1,
            )

    return AttendanceOutcome(session=updated, entry=entry, stat_delta=delta, changed=True)

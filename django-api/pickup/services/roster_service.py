"""Roster service - join, leave, arrival and attendance changes.

Services:
- Depend only on interfaces (stores)
- Run every read-modify-write inside the session's write lock
- Check who may act on whose entry
- Dispatch the engine's notifications and log entries
"""

import logging
from collections.abc import Callable
from datetime import datetime

from pickup.domain import GuestContact, LogAction, LogEntry, Session, User
from pickup.domain.admission import AdmissionOutcome, admit
from pickup.domain.arrival import ArrivalOutcome, mutate_arrival
from pickup.domain.attendance import AttendanceOutcome, reconcile_attendance
from pickup.domain.errors import PermissionDeniedError, SessionNotFoundError
from pickup.domain.withdrawal import WithdrawalOutcome, withdraw
from pickup.services.effects import EffectDispatcher, local_now, parse_session_id
from pickup.stores.interfaces import (
    ActivityLogStore,
    MemberStore,
    NotificationStore,
    SessionStore,
)

logger = logging.getLogger(__name__)


class RosterService:
    """Service for roster operations on a single session."""

    def __init__(
        self,
        sessions: SessionStore,
        members: MemberStore,
        notifications: NotificationStore,
        logs: ActivityLogStore,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._sessions = sessions
        self._members = members
        self._effects = EffectDispatcher(notifications, logs)
        self._clock = clock

    def join(
        self,
        session_id: str,
        actor: User,
        arrival: str | None,
        *,
        guest: GuestContact | None = None,
        spectator: bool = False,
    ) -> AdmissionOutcome:
        """Put the actor, or a guest they bring, on the roster.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
            PermissionDeniedError: If the actor's account is still pending.
            DomainError: Any admission rejection from the engine.
        """
        sid = parse_session_id(session_id)
        if actor.is_pending:
            raise PermissionDeniedError("Your account is awaiting approval")
        audience = self._members.list_members()

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            outcome = admit(
                session,
                actor,
                arrival,
                now=self._clock(),
                guest=guest,
                spectator=spectator,
                audience=audience,
            )
            self._sessions.save_session(outcome.session)
            self._effects.emit(outcome.notifications, outcome.log)
        return outcome

    def leave(
        self, session_id: str, actor: User, participant_id: str | None = None
    ) -> WithdrawalOutcome:
        """Remove the actor (or an entry they may manage) and backfill from the waitlist.

        Members may drop themselves or their own guests; staff may drop anyone.
        """
        sid = parse_session_id(session_id)
        target = participant_id or actor.id

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            self._check_manages(actor, session, target)
            outcome = withdraw(session, target, now=self._clock(), author_name=actor.display_name)
            self._sessions.save_session(outcome.session)
            self._effects.emit(outcome.notifications, outcome.log)
        return outcome

    def change_arrival(
        self, session_id: str, actor: User, participant_id: str, new_arrival: str | None
    ) -> ArrivalOutcome:
        """Change an arrival estimate, demoting or promoting the entry as needed."""
        sid = parse_session_id(session_id)

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            self._check_manages(actor, session, participant_id)
            now = self._clock()
            outcome = mutate_arrival(session, participant_id, new_arrival, now=now)
            self._sessions.save_session(outcome.session)
            self._effects.emit(
                outcome.notifications,
                LogEntry(
                    action=LogAction.ARRIVAL_CHANGE,
                    details=_arrival_details(session, outcome),
                    timestamp=now,
                    author_name=actor.display_name,
                ),
            )
        return outcome

    def mark_attendance(
        self, session_id: str, actor: User, participant_id: str, attended: bool
    ) -> AttendanceOutcome:
        """Record whether a participant showed up and update their stats (staff only)."""
        sid = parse_session_id(session_id)
        if not actor.is_staff:
            raise PermissionDeniedError("Only admins can reconcile attendance")

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            member = self._members.get_member(participant_id)
            outcome = reconcile_attendance(
                session,
                participant_id,
                attended,
                stats=member.stats if member else None,
            )
            if not outcome.changed:
                return outcome
            self._sessions.save_session(outcome.session)
            if outcome.stat_delta is not None:
                self._members.apply_stat_delta(outcome.stat_delta)
            self._effects.emit(
                log=LogEntry(
                    action=LogAction.ATTENDANCE,
                    details=(
                        f"{outcome.entry.display_name} marked "
                        f"{'present' if attended else 'absent'} in {session.name}"
                    ),
                    timestamp=self._clock(),
                    author_name=actor.display_name,
                )
            )
        return outcome

    @staticmethod
    def _check_manages(actor: User, session: Session, participant_id: str) -> None:
        if actor.is_staff or participant_id == actor.id:
            return
        entry = session.find(participant_id)
        if entry is not None and entry.linked_host_id == actor.id:
            return
        logger.info("%s may not change entry %s in %s", actor.id, participant_id, session.id)
        raise PermissionDeniedError("You can only change your own entry or your guests")


def _arrival_details(session: Session, outcome: ArrivalOutcome) -> str:
    entry = outcome.entry
    details = f"{entry.display_name} now arrives at {entry.arrival_estimate} for {session.name}"
    if outcome.moved_to_waitlist:
        details += " and moved to the waitlist"
    if outcome.promoted:
        details += f". Promoted: {', '.join(e.display_name for e in outcome.promoted)}"
    return details

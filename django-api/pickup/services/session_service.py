"""Session service - catalog reads and administrator session management.

Raise domain errors for invalid IDs and not found. Mutations other than
creation run inside the session's write lock.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from pickup.domain import (
    LogAction,
    LogEntry,
    Session,
    SessionDraft,
    SessionStatus,
    User,
)
from pickup.domain.errors import PermissionDeniedError, SessionNotFoundError
from pickup.domain.history import GuestRecord, guest_history
from pickup.domain.scheduling import (
    SweepOutcome,
    apply_draft,
    new_session,
    sweep_auto_close,
    validate_draft,
    validate_no_conflict,
)
from pickup.domain.withdrawal import promote_waitlisted, promotion_notices
from pickup.services.effects import EffectDispatcher, local_now, parse_session_id
from pickup.stores.interfaces import (
    ActivityLogStore,
    MemberStore,
    NotificationStore,
    SessionStore,
)

logger = logging.getLogger(__name__)

SYSTEM_AUTHOR = "System"


class SessionService:
    """Service for session catalog and lifecycle operations."""

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

    def list_sessions(self, status: SessionStatus | None = None) -> list[Session]:
        """Return sessions ordered by date and start time."""
        return self._sessions.list_sessions(status)

    def get_session(self, session_id: str) -> Session:
        """Return a session by ID.

        Raises:
            InvalidSessionIdError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        session = self._sessions.get_session(parse_session_id(session_id))
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def create_session(self, actor: User, draft: SessionDraft) -> Session:
        """Create an open session after checking draft rules and the schedule.

        Raises:
            PermissionDeniedError: If the actor is not staff.
            InvalidSessionError: If the draft breaks a creation rule.
            SchedulingConflictError: If another open session starts too close.
        """
        self._require_staff(actor)
        draft = validate_draft(draft)
        validate_no_conflict(
            draft.date, draft.start_time, self._sessions.list_sessions(SessionStatus.OPEN)
        )
        session = new_session(draft, created_by=actor.id)
        self._sessions.add_session(session)
        self._effects.emit(
            log=LogEntry(
                action=LogAction.CREATE_SESSION,
                details=f"Session created: {session.name} on {session.date.isoformat()}",
                timestamp=self._clock(),
                author_name=actor.display_name,
            )
        )
        return session

    def update_session(self, actor: User, session_id: str, draft: SessionDraft) -> Session:
        """Edit a session's settings, keeping its roster.

        A larger capacity or earlier start can make waitlisted entries
        eligible, so the waitlist is re-evaluated after the edit.
        """
        self._require_staff(actor)
        sid = parse_session_id(session_id)
        draft = validate_draft(draft)

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            now = self._clock()
            edited = apply_draft(session, draft)
            promoted = ()
            if not session.is_closed:
                validate_no_conflict(
                    draft.date,
                    draft.start_time,
                    self._sessions.list_sessions(SessionStatus.OPEN),
                    exclude_id=sid,
                )
                edited, promoted = promote_waitlisted(edited)
            self._sessions.save_session(edited)
            self._effects.emit(
                log=LogEntry(
                    action=LogAction.UPDATE_SESSION,
                    details=f"Session updated: {edited.name} on {edited.date.isoformat()}",
                    timestamp=now,
                    author_name=actor.display_name,
                )
            )
            if promoted:
                self._effects.emit(
                    promotion_notices(edited, promoted, now),
                    LogEntry(
                        action=LogAction.PROMOTION,
                        details=(
                            f"Promoted in {edited.name}: "
                            f"{', '.join(e.display_name for e in promoted)}"
                        ),
                        timestamp=now,
                        author_name=SYSTEM_AUTHOR,
                    ),
                )
        return edited

    def delete_session(self, actor: User, session_id: str) -> None:
        self._require_staff(actor)
        sid = parse_session_id(session_id)
        if not self._sessions.delete_session(sid):
            raise SessionNotFoundError(session_id)
        self._effects.emit(
            log=LogEntry(
                action=LogAction.DELETE_SESSION,
                details=f"Session {sid} cancelled",
                timestamp=self._clock(),
                author_name=actor.display_name,
            )
        )

    def set_status(self, actor: User, session_id: str, status: SessionStatus) -> Session:
        """Open or close a session by hand.

        Reopening checks the schedule again, since another session may have
        been created at a nearby time while this one was closed.
        """
        self._require_staff(actor)
        sid = parse_session_id(session_id)

        with self._sessions.locked(sid) as session:
            if session is None:
                raise SessionNotFoundError(session_id)
            if session.status is status:
                return session
            if status is SessionStatus.OPEN:
                validate_no_conflict(
                    session.date,
                    session.start_time,
                    self._sessions.list_sessions(SessionStatus.OPEN),
                    exclude_id=sid,
                )
            updated = replace(session, status=status)
            self._sessions.save_session(updated)
            action = (
                LogAction.CLOSE_SESSION if status is SessionStatus.CLOSED
                else LogAction.REOPEN_SESSION
            )
            self._effects.emit(
                log=LogEntry(
                    action=action,
                    details=f"{session.name} is now {status.value}",
                    timestamp=self._clock(),
                    author_name=actor.display_name,
                )
            )
        return updated

    def close_stale_sessions(self, now: datetime | None = None) -> SweepOutcome:
        """Close open sessions that started more than four hours ago.

        Candidates come from a snapshot read; each one is closed again under
        its own lock so roster changes made since the snapshot are kept.
        """
        now = now or self._clock()
        staff = [member for member in self._members.list_members() if member.is_staff]
        candidates = sweep_auto_close(self._sessions.list_sessions(SessionStatus.OPEN), now)

        closed = []
        notifications = []
        for candidate in candidates.closed:
            with self._sessions.locked(candidate.id) as session:
                if session is None:
                    continue
                outcome = sweep_auto_close([session], now, staff)
                if not outcome.closed:
                    continue
                self._sessions.save_session(outcome.closed[0])
                self._effects.emit(
                    outcome.notifications,
                    LogEntry(
                        action=LogAction.CLOSE_SESSION,
                        details=f"{session.name} closed automatically",
                        timestamp=now,
                        author_name=SYSTEM_AUTHOR,
                    ),
                )
                closed.extend(outcome.closed)
                notifications.extend(outcome.notifications)

        if closed:
            logger.info("Auto-close sweep closed %d session(s)", len(closed))
        return SweepOutcome(closed=tuple(closed), notifications=tuple(notifications))

    def guest_history(self, actor: User) -> list[GuestRecord]:
        self._require_staff(actor)
        return guest_history(self._sessions.list_sessions())

    @staticmethod
    def _require_staff(actor: User) -> None:
        if not actor.is_staff:
            raise PermissionDeniedError("Only admins can manage sessions")

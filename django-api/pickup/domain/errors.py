"""Domain error codes for the pickup module.

Every error rejects a single attempted mutation as a whole; nothing is
partially applied and nothing is retried by the engine.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SESSION_CLOSED = "SESSION_CLOSED"
    ALREADY_JOINED = "ALREADY_JOINED"
    GUESTS_NOT_ALLOWED = "GUESTS_NOT_ALLOWED"
    GUEST_WINDOW_CLOSED = "GUEST_WINDOW_CLOSED"
    GENDER_RESTRICTED = "GENDER_RESTRICTED"
    INVALID_ARRIVAL = "INVALID_ARRIVAL"
    ARRIVAL_TOO_LATE = "ARRIVAL_TOO_LATE"
    SCHEDULING_CONFLICT = "SCHEDULING_CONFLICT"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    INVALID_SESSION = "INVALID_SESSION"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    HOST_NOT_JOINED = "HOST_NOT_JOINED"
    GUEST_LIMIT_REACHED = "GUEST_LIMIT_REACHED"
    INVALID_ROLE_CHANGE = "INVALID_ROLE_CHANGE"
    NICKNAME_TAKEN = "NICKNAME_TAKEN"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class SessionClosedError(DomainError):
    """Raised when a roster change targets a closed session."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SESSION_CLOSED,
            message="Session is closed",
        )


class AlreadyJoinedError(DomainError):
    """Raised when a member is already on the player list or waitlist."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_JOINED,
            message="You are already on this list",
        )
        self.participant_id = participant_id


class GuestsNotAllowedError(DomainError):
    """Raised when a guest is added to a session that does not take guests."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GUESTS_NOT_ALLOWED,
            message="Guests are not allowed in this session",
        )


class GuestWindowClosedError(DomainError):
    """Raised when a guest is added before the guest window opens."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GUEST_WINDOW_CLOSED,
            message="Guest sign-up has not opened yet",
        )


class GenderRestrictedError(DomainError):
    """Raised when the member's gender is outside the session restriction."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.GENDER_RESTRICTED,
            message="This session is restricted by gender",
        )


class InvalidArrivalError(DomainError):
    """Raised when an arrival estimate is missing or not HH:MM."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ARRIVAL,
            message="Arrival time must be given as HH:MM",
        )


class ArrivalTooLateError(DomainError):
    """Raised when the arrival is more than four hours after kickoff."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ARRIVAL_TOO_LATE,
            message="Arrival is too long after the session starts",
        )


class SchedulingConflictError(DomainError):
    """Raised when another open session starts too close on the same day."""

    def __init__(self, conflicting_name: str) -> None:
        super().__init__(
            code=ErrorCode.SCHEDULING_CONFLICT,
            message=f"Conflicts with session '{conflicting_name}'",
        )


class EntryNotFoundError(DomainError):
    """Raised when a participant is not on the session roster."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            code=ErrorCode.ENTRY_NOT_FOUND,
            message="Participant not found in session",
        )
        self.participant_id = participant_id


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class MemberNotFoundError(DomainError):
    """Raised when a member is not found."""

    def __init__(self, member_id: str) -> None:
        super().__init__(
            code=ErrorCode.MEMBER_NOT_FOUND,
            message="Member not found",
        )
        self.member_id = member_id


class InvalidSessionIdError(DomainError):
    """Raised when a session ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION_ID,
            message="Invalid session ID format",
        )


class InvalidSessionError(DomainError):
    """Raised when a session draft breaks a creation rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SESSION, message=message)


class PermissionDeniedError(DomainError):
    """Raised when the acting member may not perform the operation."""

    def __init__(self, message: str = "You are not allowed to do this") -> None:
        super().__init__(code=ErrorCode.PERMISSION_DENIED, message=message)


class HostNotJoinedError(DomainError):
    """Raised when a member adds a guest without being on the roster."""

    def __init__(self, host_id: str) -> None:
        super().__init__(
            code=ErrorCode.HOST_NOT_JOINED,
            message="Join the session before adding a guest",
        )
        self.host_id = host_id


class GuestLimitReachedError(DomainError):
    """Raised when a host already has a guest in the session."""

    def __init__(self, host_id: str) -> None:
        super().__init__(
            code=ErrorCode.GUEST_LIMIT_REACHED,
            message="You already have a guest in this session",
        )
        self.host_id = host_id


class InvalidRoleChangeError(DomainError):
    """Raised when a role change or rejection is not allowed for the target."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ROLE_CHANGE, message=message)


class NicknameTakenError(DomainError):
    def __init__(self, nickname: str) -> None:
        super().__init__(
            code=ErrorCode.NICKNAME_TAKEN,
            message="This nickname is already in use",
        )
        self.nickname = nickname

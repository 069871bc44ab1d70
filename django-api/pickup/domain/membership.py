"""Member approval, role changes and nicknames.

Admins approve pending members and send them back to pending; only the
owner grants or revokes the admin role. Nobody gains or loses the owner
role through these rules.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime

from pickup.domain.errors import (
    InvalidRoleChangeError,
    NicknameTakenError,
    PermissionDeniedError,
)
from pickup.domain.models import LogAction, LogEntry, NotificationCommand, User
from pickup.domain.value_objects import Role

ROLE_NOTICES = {
    (Role.PENDING, Role.PLAYER): "Your account was approved!",
    (Role.PLAYER, Role.ADMIN): "You were promoted to admin!",
    (Role.PENDING, Role.ADMIN): "You were promoted to admin!",
    (Role.PLAYER, Role.PENDING): "Your account is pending approval again.",
    (Role.ADMIN, Role.PENDING): "Your account is pending approval again.",
}


@dataclass(frozen=True)
class RoleChangeOutcome:
    member: User
    changed: bool
    notification: NotificationCommand | None
    log: LogEntry | None


def _require_staff(actor: User) -> None:
    if not actor.is_staff:
        raise PermissionDeniedError("Only admins can manage members")


def change_role(actor: User, member: User, role: Role, *, now: datetime) -> RoleChangeOutcome:
    """Move ``member`` to ``role``.

    Raises:
        PermissionDeniedError: The actor is not staff, or an admin touches the admin role.
        InvalidRoleChangeError: The owner role is involved or the actor targets themselves.
    """
    _require_staff(actor)
    if Role.OWNER in (role, member.role):
        raise InvalidRoleChangeError("The owner role cannot be granted or changed")
    if member.id == actor.id:
        raise InvalidRoleChangeError("You cannot change your own role")
    if Role.ADMIN in (role, member.role) and actor.role is not Role.OWNER:
        raise PermissionDeniedError("Only the owner can grant or revoke admin")
    if member.role is role:
        return RoleChangeOutcome(member=member, changed=False, notification=None, log=None)

    updated = replace(member, role=role)
    message = ROLE_NOTICES.get((member.role, role))
    notification = (
        NotificationCommand(recipient_id=member.id, message=message, created_at=now)
        if message
        else None
    )
    return RoleChangeOutcome(
        member=updated,
        changed=True,
        notification=notification,
        log=LogEntry(
            action=LogAction.ROLE_CHANGE,
            details=f"{member.full_name} changed from {member.role.value} to {role.value}",
            timestamp=now,
            author_name=actor.display_name,
        ),
    )


def reject_member(actor: User, member: User, *, now: datetime) -> LogEntry:
    """Check that a sign-up may be rejected and describe the rejection.

    Raises:
        PermissionDeniedError: The actor is not staff.
        InvalidRoleChangeError: The member has already been approved.
    """
    _require_staff(actor)
    if not member.is_pending:
        raise InvalidRoleChangeError("Only pending members can be rejected")
    return LogEntry(
        action=LogAction.REJECT_MEMBER,
        details=f"Sign-up of {member.full_name} rejected",
        timestamp=now,
        author_name=actor.display_name,
    )


def rename_member(
    actor: User,
    member: User,
    nickname: str | None,
    others: Iterable[User],
    *,
    now: datetime,
) -> tuple[User, LogEntry]:
    """Set or clear a member's nickname; nicknames are unique ignoring case.

    Raises:
        PermissionDeniedError: The actor is neither the member nor staff.
        NicknameTakenError: Another member already uses the nickname.
    """
    if actor.id != member.id and not actor.is_staff:
        raise PermissionDeniedError("You can only change your own nickname")
    nickname = (nickname or "").strip() or None
    if nickname is not None:
        wanted = nickname.casefold()
        for other in others:
            if other.id != member.id and (other.nickname or "").casefold() == wanted:
                raise NicknameTakenError(nickname)
    updated = replace(member, nickname=nickname)
    return updated, LogEntry(
        action=LogAction.PROFILE_UPDATE,
        details=f"{member.full_name} now goes by {updated.display_name}",
        timestamp=now,
        author_name=actor.display_name,
    )

"""Member service - approvals, role changes and nicknames."""

from collections.abc import Callable
from datetime import datetime

from pickup.domain import Role, User
from pickup.domain.errors import MemberNotFoundError, PermissionDeniedError
from pickup.domain.membership import RoleChangeOutcome, change_role, reject_member, rename_member
from pickup.services.effects import EffectDispatcher, local_now
from pickup.stores.interfaces import ActivityLogStore, MemberStore, NotificationStore


class MemberService:
    """Service for administering community members."""

    def __init__(
        self,
        members: MemberStore,
        notifications: NotificationStore,
        logs: ActivityLogStore,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._members = members
        self._effects = EffectDispatcher(notifications, logs)
        self._clock = clock

    def list_members(self, actor: User) -> list[User]:
        if not actor.is_staff:
            raise PermissionDeniedError("Only admins can list members")
        return self._members.list_members()

    def set_role(self, actor: User, member_id: str, role: Role) -> RoleChangeOutcome:
        """Approve, promote or demote a member and tell them about it.

        Raises:
            MemberNotFoundError: If the member does not exist.
            PermissionDeniedError: If the actor may not make this change.
            InvalidRoleChangeError: If the owner role is involved.
        """
        member = self._get(member_id)
        outcome = change_role(actor, member, role, now=self._clock())
        if outcome.changed:
            self._members.save_member(outcome.member)
            notices = [outcome.notification] if outcome.notification else []
            self._effects.emit(notices, outcome.log)
        return outcome

    def reject(self, actor: User, member_id: str) -> None:
        """Delete a pending sign-up."""
        member = self._get(member_id)
        log = reject_member(actor, member, now=self._clock())
        self._members.delete_member(member.id)
        self._effects.emit(log=log)

    def update_nickname(self, actor: User, member_id: str, nickname: str | None) -> User:
        member = self._get(member_id)
        updated, log = rename_member(
            actor, member, nickname, self._members.list_members(), now=self._clock()
        )
        self._members.save_member(updated)
        self._effects.emit(log=log)
        return updated

    def _get(self, member_id: str) -> User:
        member = self._members.get_member(member_id)
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

"""Unit tests for member approval, role changes and nicknames.

Run with: pytest tests/test_membership.py -v
"""

from dataclasses import replace

import pytest

from factories import NOW, make_user
from pickup.domain import LogAction, Role
from pickup.domain.errors import (
    InvalidRoleChangeError,
    NicknameTakenError,
    PermissionDeniedError,
)
from pickup.domain.membership import change_role, reject_member, rename_member

OWNER = make_user("own", role=Role.OWNER, name="Olga")
ADMIN = make_user("boss", role=Role.ADMIN, name="Boss")
PLAYER = make_user("ana", name="Ana Lima")
PENDING = make_user("newbie", role=Role.PENDING, name="Newbie")


class TestChangeRole:
    """Tests for approving, promoting and demoting members."""

    def test_admin_approves_pending_member(self):
        outcome = change_role(ADMIN, PENDING, Role.PLAYER, now=NOW)

        assert outcome.changed
        assert outcome.member.role is Role.PLAYER
        assert outcome.notification.recipient_id == "newbie"
        assert outcome.notification.message == "Your account was approved!"
        assert outcome.log.action is LogAction.ROLE_CHANGE
        assert outcome.log.details == "Newbie changed from pending to player"

    def test_admin_sends_player_back_to_pending(self):
        outcome = change_role(ADMIN, PLAYER, Role.PENDING, now=NOW)

        assert outcome.member.role is Role.PENDING
        assert "pending approval" in outcome.notification.message

    def test_owner_promotes_and_demotes_admin(self):
        promoted = change_role(OWNER, PLAYER, Role.ADMIN, now=NOW).member
        demoted = change_role(OWNER, promoted, Role.PLAYER, now=NOW)

        assert promoted.role is Role.ADMIN
        assert demoted.member.role is Role.PLAYER
        assert demoted.notification is None
        assert demoted.log is not None

    @pytest.mark.parametrize(
        "target,role",
        [(PLAYER, Role.ADMIN), (make_user("deputy", role=Role.ADMIN), Role.PLAYER)],
    )
    def test_admin_cannot_touch_admin_role(self, target, role):
        with pytest.raises(PermissionDeniedError):
            change_role(ADMIN, target, role, now=NOW)

    def test_player_cannot_change_roles(self):
        with pytest.raises(PermissionDeniedError):
            change_role(PLAYER, PENDING, Role.PLAYER, now=NOW)

    @pytest.mark.parametrize("target,role", [(PLAYER, Role.OWNER), (OWNER, Role.PLAYER)])
    def test_owner_role_is_fixed(self, target, role):
        actor = replace(OWNER, id="other-owner")

        with pytest.raises(InvalidRoleChangeError):
            change_role(actor, target, role, now=NOW)

    def test_nobody_changes_their_own_role(self):
        with pytest.raises(InvalidRoleChangeError):
            change_role(ADMIN, ADMIN, Role.PLAYER, now=NOW)

    def test_same_role_is_a_no_op(self):
        outcome = change_role(ADMIN, PLAYER, Role.PLAYER, now=NOW)

        assert not outcome.changed
        assert outcome.member == PLAYER
        assert outcome.notification is None
        assert outcome.log is None


class TestRejectMember:
    """Tests for rejecting sign-ups."""

    def test_pending_member_is_rejected(self):
        log = reject_member(ADMIN, PENDING, now=NOW)

        assert log.action is LogAction.REJECT_MEMBER
        assert "Newbie" in log.details
        assert log.author_name == "Boss"

    def test_approved_member_cannot_be_rejected(self):
        with pytest.raises(InvalidRoleChangeError):
            reject_member(ADMIN, PLAYER, now=NOW)

    def test_only_staff_reject(self):
        with pytest.raises(PermissionDeniedError):
            reject_member(PLAYER, PENDING, now=NOW)


class TestRenameMember:
    """Tests for nickname edits."""

    def test_member_sets_own_nickname(self):
        updated, log = rename_member(PLAYER, PLAYER, " Aninha ", [PLAYER], now=NOW)

        assert updated.nickname == "Aninha"
        assert log.action is LogAction.PROFILE_UPDATE
        assert log.details == "Ana Lima now goes by Aninha"

    @pytest.mark.parametrize("nickname", [None, "", "   "])
    def test_blank_nickname_clears_it(self, nickname):
        member = replace(PLAYER, nickname="Aninha")

        updated, _ = rename_member(PLAYER, member, nickname, [member], now=NOW)

        assert updated.nickname is None
        assert updated.display_name == "Ana Lima"

    def test_staff_renames_anyone(self):
        updated, log = rename_member(ADMIN, PLAYER, "Aninha", [PLAYER], now=NOW)

        assert updated.nickname == "Aninha"
        assert log.author_name == "Boss"

    def test_player_cannot_rename_others(self):
        with pytest.raises(PermissionDeniedError):
            rename_member(PLAYER, PENDING, "Nova", [PENDING], now=NOW)

    def test_nickname_unique_ignoring_case(self):
        others = [PLAYER, replace(PENDING, nickname="Beto")]

        with pytest.raises(NicknameTakenError):
            rename_member(PLAYER, PLAYER, "BETO", others, now=NOW)

    def test_keeping_own_nickname_is_allowed(self):
        member = replace(PLAYER, nickname="Aninha")

        updated, _ = rename_member(PLAYER, member, "aninha", [member], now=NOW)

        assert updated.nickname == "aninha"

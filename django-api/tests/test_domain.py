"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import pytest

from factories import NOW, make_entry, make_session
from pickup.domain import (
    Capacity,
    Gender,
    GenderRestriction,
    GuestContact,
    Role,
    RosterEntry,
    SessionId,
    SessionType,
    StatDelta,
    UserStats,
)


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(value=0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(value=-1)


class TestSessionId:
    """Tests for SessionId value object."""

    def test_from_string_valid_uuid(self):
        """SessionId.from_string parses valid UUID."""
        raw = "2b1c7c2e-4a1f-4f43-9a66-2a1f0f3f8a10"
        assert str(SessionId.from_string(raw)) == raw

    def test_from_string_invalid_uuid(self):
        """SessionId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            SessionId.from_string("not-a-uuid")


class TestEnums:
    """Tests for behaviour attached to domain enums."""

    @pytest.mark.parametrize(
        "role,expected",
        [(Role.PENDING, False), (Role.PLAYER, False), (Role.ADMIN, True), (Role.OWNER, True)],
    )
    def test_staff_roles(self, role, expected):
        assert role.is_staff is expected

    @pytest.mark.parametrize(
        "restriction,gender,expected",
        [
            (GenderRestriction.ALL, Gender.MALE, True),
            (GenderRestriction.MALE, Gender.MALE, True),
            (GenderRestriction.MALE, Gender.FEMALE, False),
            (GenderRestriction.FEMALE, Gender.OTHER, True),
        ],
    )
    def test_gender_restriction(self, restriction, gender, expected):
        assert restriction.admits(gender) is expected

    def test_lateness_enforced_for_casual_and_training_only(self):
        enforcing = {t for t in SessionType if t.enforces_lateness}
        assert enforcing == {SessionType.CASUAL, SessionType.TRAINING}


class TestStats:
    """Tests for UserStats and StatDelta."""

    def test_stats_reject_negative_counts(self):
        with pytest.raises(ValueError):
            UserStats(attended=-1)

    def test_delta_is_clamped_at_zero(self):
        stats = StatDelta(user_id="ana", attended=-1, missed=1).apply(UserStats())
        assert stats == UserStats(attended=0, missed=1)


class TestRosterEntry:
    """Tests for the guest/host link invariant."""

    def test_guest_requires_host(self):
        with pytest.raises(ValueError):
            RosterEntry(
                participant_id="guest-1",
                display_name="Carla",
                is_guest=True,
                joined_at=NOW,
                arrival_estimate="20:00",
            )

    def test_member_cannot_have_host(self):
        with pytest.raises(ValueError):
            RosterEntry(
                participant_id="ana",
                display_name="Ana",
                is_guest=False,
                linked_host_id="bruno",
                joined_at=NOW,
                arrival_estimate="20:00",
            )

    def test_guest_notifications_go_to_host(self):
        assert make_entry("guest-1", host="ana").notify_id == "ana"
        assert make_entry("ana").notify_id == "ana"

    def test_guest_contact_full_name(self):
        assert GuestContact(first_name="Carla").full_name == "Carla"
        assert GuestContact(first_name="Carla", last_name="Dias").full_name == "Carla Dias"


class TestSession:
    """Tests for Session roster helpers."""

    def test_full_when_players_reach_capacity(self):
        session = make_session(max_spots=1, players=[make_entry("ana")])
        assert session.is_full

    def test_find_looks_in_both_lists(self):
        session = make_session(players=[make_entry("ana")], waitlist=[make_entry("bruno")])

        assert session.find("bruno").participant_id == "bruno"
        assert session.holds_spot("ana")
        assert session.is_waitlisted("bruno")
        assert session.find("carla") is None

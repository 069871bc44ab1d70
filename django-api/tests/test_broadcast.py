"""Unit tests for capacity threshold broadcasts.

Run with: pytest tests/test_broadcast.py -v
"""

import pytest

from factories import NOW, make_entry, make_session, make_user
from pickup.domain import Role
from pickup.domain.admission import admit
from pickup.domain.broadcast import capacity_notices, crossed_threshold, thresholds


class TestThresholds:
    """Tests for threshold counts and crossing detection."""

    def test_threshold_counts_round_up(self):
        assert thresholds(18) == {50: 9, 75: 14, 100: 18}

    @pytest.mark.parametrize("after,expected", [(9, 50), (14, 75), (18, 100)])
    def test_landing_on_a_threshold_fires(self, after, expected):
        assert crossed_threshold(18, after - 1, after) == expected

    @pytest.mark.parametrize("after", [1, 8, 10, 13, 15, 17])
    def test_other_counts_do_not_fire(self, after):
        assert crossed_threshold(18, after - 1, after) is None

    def test_unchanged_count_does_not_fire(self):
        assert crossed_threshold(18, 9, 9) is None

    def test_zero_capacity_never_fires(self):
        assert crossed_threshold(0, 0, 1) is None

    def test_coinciding_thresholds_fire_once_with_highest(self):
        """With one spot, 50%, 75% and 100% are all reached by the same join."""
        assert crossed_threshold(1, 0, 1) == 100


class TestCapacityNotices:
    """Tests for the broadcast message audience and wording."""

    def test_spot_holders_and_others_get_different_messages(self):
        session = make_session(players=[make_entry("ana")])
        audience = [make_user("ana"), make_user("bruno")]

        notices = capacity_notices(session, 50, audience, NOW)

        by_recipient = {n.recipient_id: n.message for n in notices}
        assert by_recipient["ana"] == "Thursday Pickup: the list reached 50%."
        assert by_recipient["bruno"] == "Hurry! Thursday Pickup reached 50%, grab your spot."

    def test_pending_members_are_skipped(self):
        session = make_session()
        audience = [make_user("ana"), make_user("newbie", role=Role.PENDING)]

        notices = capacity_notices(session, 75, audience, NOW)

        assert [n.recipient_id for n in notices] == ["ana"]


class TestSequentialJoins:
    """Broadcasts across a session filling up one join at a time."""

    def test_eighteen_joins_broadcast_at_nine_fourteen_and_eighteen(self):
        session = make_session(max_spots=18)
        members = [make_user(f"m{i:02d}") for i in range(18)]
        fired_at = []

        for member in members:
            outcome = admit(session, member, "20:00", now=NOW, audience=members)
            session = outcome.session
            if outcome.notifications:
                fired_at.append(len(session.players))

        assert fired_at == [9, 14, 18]
        assert len(session.players) == 18

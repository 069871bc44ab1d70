"""Unit tests for attendance reconciliation.

Run with: pytest tests/test_attendance.py -v
"""

import pytest

from factories import make_entry, make_session
from pickup.domain import SessionStatus, UserStats
from pickup.domain.attendance import reconcile_attendance
from pickup.domain.errors import EntryNotFoundError


class TestReconcileAttendance:
    """Tests for the attended flag and derived stat deltas."""

    def test_marking_present_adds_attendance(self):
        session = make_session(players=[make_entry("ana")])

        outcome = reconcile_attendance(session, "ana", True, stats=UserStats())

        assert outcome.changed
        assert outcome.session.find("ana").attended is True
        assert (outcome.stat_delta.attended, outcome.stat_delta.missed) == (1, 0)

    def test_marking_absent_adds_miss(self):
        session = make_session(players=[make_entry("ana")])

        outcome = reconcile_attendance(session, "ana", False, stats=UserStats(attended=3))

        assert (outcome.stat_delta.attended, outcome.stat_delta.missed) == (-1, 1)

    def test_absent_never_drops_attended_below_zero(self):
        session = make_session(players=[make_entry("ana")])

        outcome = reconcile_attendance(session, "ana", False, stats=UserStats())

        assert outcome.stat_delta.apply(UserStats()) == UserStats(attended=0, missed=1)

    def test_same_value_is_a_no_op(self):
        session = make_session(players=[make_entry("ana", attended=True)])

        outcome = reconcile_attendance(session, "ana", True, stats=UserStats(attended=1))

        assert not outcome.changed
        assert outcome.stat_delta is None
        assert outcome.session is session

    def test_works_on_closed_sessions(self):
        session = make_session(status=SessionStatus.CLOSED, players=[make_entry("ana")])

        outcome = reconcile_attendance(session, "ana", True)

        assert outcome.changed

    def test_guest_has_no_stats(self):
        session = make_session(players=[make_entry("guest-1", host="ana")])

        outcome = reconcile_attendance(session, "guest-1", True)

        assert outcome.changed
        assert outcome.stat_delta is None

    def test_waitlisted_entry_can_be_marked(self):
        session = make_session(waitlist=[make_entry("ana")])

        outcome = reconcile_attendance(session, "ana", True)

        assert outcome.session.waitlist[0].attended is True

    def test_unknown_entry_rejected(self):
        with pytest.raises(EntryNotFoundError):
            reconcile_attendance(make_session(), "ghost", True)

    def test_present_then_absent_then_present_restores_stats(self):
        """Flipping the flag back and forth ends with one attendance and no miss."""
        session = make_session(players=[make_entry("ana")])
        stats = UserStats(attended=4, missed=2)

        for attended in (True, False, True):
            outcome = reconcile_attendance(session, "ana", attended, stats=stats)
            session = outcome.session
            stats = outcome.stat_delta.apply(stats)

        assert stats == UserStats(attended=5, missed=2)

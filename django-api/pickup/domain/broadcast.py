"""Roster-size threshold broadcasts.

A broadcast fires when a change to the player list lands exactly on 50%,
75% or 100% of the session capacity. Callers invoke this once per
successful placement, so a count that does not move never re-fires.
"""

import math
from collections.abc import Iterable
from datetime import datetime

from pickup.domain.models import NotificationCommand, Session, User

THRESHOLD_PERCENTAGES = (50, 75, 100)


def thresholds(max_spots: int) -> dict[int, int]:
    """Map each percentage to the player count that reaches it."""
    return {pct: math.ceil(max_spots * pct / 100) for pct in THRESHOLD_PERCENTAGES}


def crossed_threshold(max_spots: int, count_before: int, count_after: int) -> int | None:
    """Return the percentage reached by moving from ``count_before`` to ``count_after``.

    Small capacities can make thresholds coincide (one spot is 50%, 75% and
    100% at once); the highest percentage is reported once.
    """
    if max_spots <= 0 or count_after == count_before:
        return None
    reached = [pct for pct, count in thresholds(max_spots).items() if count == count_after]
    return max(reached) if reached else None


def capacity_notices(
    session: Session,
    percentage: int,
    audience: Iterable[User],
    now: datetime,
) -> list[NotificationCommand]:
    """Build one message per non-pending member about the list filling up."""
    notices = []
    for user in audience:
        if user.is_pending:
            continue
        if session.holds_spot(user.id):
            message = f"{session.name}: the list reached {percentage}%."
        else:
            message = f"Hurry! {session.name} reached {percentage}%, grab your spot."
        notices.append(NotificationCommand(recipient_id=user.id, message=message, created_at=now))
    return notices

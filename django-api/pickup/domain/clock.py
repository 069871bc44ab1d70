"""Day-minute arithmetic for ``HH:MM`` clock strings.

Sessions store their start time and every roster entry its arrival estimate
as wall-clock strings. All lateness, cutoff and gap rules compare them as
minutes since midnight.
"""

import re

MINUTES_PER_DAY = 24 * 60

# A candidate more than 12h "before" the reference is read as the next day:
# a 23:30 kickoff with a 00:15 arrival is 45 minutes late, not 23h early.
ROLLOVER_THRESHOLD = -12 * 60

LATENESS_TOLERANCE = 30
MAX_ARRIVAL_DELAY = 4 * 60

_CLOCK_RE = re.compile(r"(\d{2}):(\d{2})")


def to_minutes(value: str | None) -> int:
    """Convert ``HH:MM`` to minutes since midnight.

    Malformed or empty input yields 0 instead of raising; callers that must
    reject bad input validate with :func:`parse_clock` first.
    """
    if not value or not isinstance(value, str) or ":" not in value:
        return 0
    hours, _, minutes = value.partition(":")
    return _as_int(hours) * 60 + _as_int(minutes)


def _as_int(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def parse_clock(value: str | None) -> int | None:
    """Strictly parse zero-padded ``HH:MM`` (00-23, 00-59), returning None when invalid.

    Stored times are ordered as strings, so ``9:00`` and `` 20:00`` are
    rejected.
    """
    if not isinstance(value, str):
        return None
    match = _CLOCK_RE.fullmatch(value)
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def signed_diff_minutes(reference: str, candidate: str) -> int:
    """Return ``candidate - reference`` in minutes with midnight rollover."""
    diff = to_minutes(candidate) - to_minutes(reference)
    if diff < ROLLOVER_THRESHOLD:
        diff += MINUTES_PER_DAY
    return diff


def is_late(start_time: str, arrival: str) -> bool:
    return signed_diff_minutes(start_time, arrival) > LATENESS_TOLERANCE

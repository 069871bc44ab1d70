"""Guest history across sessions, for administrators."""

from collections.abc import Iterable
from dataclasses import dataclass

from pickup.domain.models import Session


@dataclass(frozen=True)
class GuestRecord:
    name: str
    host_id: str
    sessions: int


def guest_history(sessions: Iterable[Session]) -> list[GuestRecord]:
    """Count the sessions each guest appeared in, keyed by name and host."""
    counts: dict[tuple[str, str], int] = {}
    for session in sessions:
        for entry in session.entries:
            if entry.is_guest:
                key = (entry.display_name, entry.linked_host_id)
                counts[key] = counts.get(key, 0) + 1
    return [
        GuestRecord(name=name, host_id=host_id, sessions=count)
        for (name, host_id), count in counts.items()
    ]

"""Cache keys for session payloads and their invalidation."""

from django.core.cache import cache

from pickup.domain import SessionStatus

LIST_SCOPES = ("all",) + tuple(status.value for status in SessionStatus)


def session_list_key(status: SessionStatus | None = None) -> str:
    return f"sessions:list:{status.value if status else 'all'}"


def session_detail_key(session_id: str) -> str:
    return f"sessions:{session_id}"


def invalidate_session(session_id: str) -> None:
    """Drop every cached payload that can contain the session."""
    keys = [f"sessions:list:{scope}" for scope in LIST_SCOPES]
    keys.append(session_detail_key(session_id))
    cache.delete_many(keys)

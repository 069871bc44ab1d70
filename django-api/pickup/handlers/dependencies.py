"""Wires services to the Django-backed stores."""

from pickup.services import InboxService, MemberService, RosterService, SessionService
from pickup.stores.django_store import (
    DjangoActivityLogStore,
    DjangoMemberStore,
    DjangoNotificationStore,
    DjangoSessionStore,
)


def roster_service() -> RosterService:
    return RosterService(
        DjangoSessionStore(),
        DjangoMemberStore(),
        DjangoNotificationStore(),
        DjangoActivityLogStore(),
    )


def session_service() -> SessionService:
    return SessionService(
        DjangoSessionStore(),
        DjangoMemberStore(),
        DjangoNotificationStore(),
        DjangoActivityLogStore(),
    )


def member_service() -> MemberService:
    return MemberService(
        DjangoMemberStore(), DjangoNotificationStore(), DjangoActivityLogStore()
    )


def inbox_service() -> InboxService:
    return InboxService(DjangoNotificationStore(), DjangoActivityLogStore())

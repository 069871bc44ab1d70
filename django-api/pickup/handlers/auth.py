"""Identity for API requests.

Identity is owned by an upstream service; requests arrive with the member
ID in the ``X-Member-Id`` header and the member record is looked up here.
"""

from dataclasses import dataclass

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication
from rest_framework.permissions import BasePermission

from pickup.domain import User
from pickup.stores.django_store import DjangoMemberStore

MEMBER_HEADER = "X-Member-Id"


@dataclass(frozen=True)
class AuthenticatedMember:
    """Request principal wrapping the domain member."""

    member: User

    is_authenticated = True

    @property
    def pk(self) -> str:
        return self.member.id


class MemberHeaderAuthentication(BaseAuthentication):
    def authenticate(self, request):
        member_id = request.headers.get(MEMBER_HEADER)
        if not member_id:
            return None
        member = DjangoMemberStore().get_member(member_id)
        if member is None:
            raise exceptions.AuthenticationFailed("Unknown member")
        return AuthenticatedMember(member=member), None

    def authenticate_header(self, request) -> str:
        return MEMBER_HEADER


class IsMember(BasePermission):
    def has_permission(self, request, view) -> bool:
        return isinstance(request.user, AuthenticatedMember)


class IsStaff(IsMember):
    message = "Only admins can do this."

    def has_permission(self, request, view) -> bool:
        return super().has_permission(request, view) and request.user.member.is_staff

"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to handlers/errors.py
- Never contain business logic
"""

from django.conf import settings
from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from pickup.cache import session_detail_key, session_list_key
from pickup.domain import SessionStatus
from pickup.handlers.auth import IsStaff
from pickup.handlers.dependencies import (
    inbox_service,
    member_service,
    roster_service,
    session_service,
)
from pickup.handlers.serializers import (
    ArrivalSerializer,
    AttendanceSerializer,
    EnumField,
    GuestRecordSerializer,
    JoinSerializer,
    LeaveSerializer,
    LogEntrySerializer,
    MemberSerializer,
    NicknameSerializer,
    NotificationSerializer,
    RoleSerializer,
    RosterEntrySerializer,
    SessionDraftSerializer,
    SessionSerializer,
    SessionStatusSerializer,
)
from pickup.services.effects import parse_session_id


def _participant_ids(entries) -> list[str]:
    return [entry.participant_id for entry in entries]


class SessionListView(APIView):
    """Handler for GET/POST /api/sessions"""

    def get(self, request: Request) -> Response:
        raw_status = request.query_params.get("status")
        status_filter = EnumField(SessionStatus).run_validation(raw_status) if raw_status else None
        key = session_list_key(status_filter)
        payload = cache.get(key)
        if payload is None:
            sessions = session_service().list_sessions(status_filter)
            payload = SessionSerializer(sessions, many=True).data
            cache.set(key, payload, settings.SESSIONS_CACHE_TIMEOUT)
        return Response(payload)

    def post(self, request: Request) -> Response:
        serializer = SessionDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = session_service().create_session(request.user.member, serializer.to_draft())
        return Response(SessionSerializer(session).data, status=status.HTTP_201_CREATED)


class SessionDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/sessions/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        key = session_detail_key(str(parse_session_id(session_id)))
        payload = cache.get(key)
        if payload is None:
            payload = SessionSerializer(session_service().get_session(session_id)).data
            cache.set(key, payload, settings.SESSIONS_CACHE_TIMEOUT)
        return Response(payload)

    def put(self, request: Request, session_id: str) -> Response:
        serializer = SessionDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = session_service().update_session(
            request.user.member, session_id, serializer.to_draft()
        )
        return Response(SessionSerializer(session).data)

    def delete(self, request: Request, session_id: str) -> Response:
        session_service().delete_session(request.user.member, session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SessionJoinView(APIView):
    """Handler for POST /api/sessions/{session_id}/join"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = JoinSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = roster_service().join(
            session_id,
            request.user.member,
            serializer.validated_data["arrival"],
            guest=serializer.guest_contact(),
            spectator=serializer.validated_data["spectator"],
        )
        return Response(
            {
                "session": SessionSerializer(outcome.session).data,
                "entry": RosterEntrySerializer(outcome.entry).data,
                "waitlisted": outcome.waitlisted,
            },
            status=status.HTTP_201_CREATED,
        )


class SessionLeaveView(APIView):
    """Handler for POST /api/sessions/{session_id}/leave"""

    def post(self, request: Request, session_id: str) -> Response:
        serializer = LeaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = roster_service().leave(
            session_id, request.user.member, serializer.validated_data["participant_id"]
        )
        return Response(
            {
                "session": SessionSerializer(outcome.session).data,
                "removed": _participant_ids(outcome.removed),
                "promoted": _participant_ids(outcome.promoted),
            }
        )


class SessionArrivalView(APIView):
    """Handler for PATCH /api/sessions/{session_id}/arrival"""

    def patch(self, request: Request, session_id: str) -> Response:
        serializer = ArrivalSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = roster_service().change_arrival(
            session_id,
            request.user.member,
            serializer.validated_data["participant_id"],
            serializer.validated_data["arrival"],
        )
        return Response(
            {
                "session": SessionSerializer(outcome.session).data,
                "movedToWaitlist": outcome.moved_to_waitlist,
                "promoted": _participant_ids(outcome.promoted),
            }
        )


class SessionAttendanceView(APIView):
    """Handler for POST /api/sessions/{session_id}/attendance"""

    permission_classes = [IsStaff]

    def post(self, request: Request, session_id: str) -> Response:
        serializer = AttendanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = roster_service().mark_attendance(
            session_id,
            request.user.member,
            serializer.validated_data["participant_id"],
            serializer.validated_data["attended"],
        )
        return Response(
            {
                "session": SessionSerializer(outcome.session).data,
                "changed": outcome.changed,
            }
        )


class SessionStatusView(APIView):
    """Handler for POST /api/sessions/{session_id}/status"""

    permission_classes = [IsStaff]

    def post(self, request: Request, session_id: str) -> Response:
        serializer = SessionStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = session_service().set_status(
            request.user.member, session_id, serializer.validated_data["status"]
        )
        return Response(SessionSerializer(session).data)


class CloseStaleSessionsView(APIView):
    """Handler for POST /api/sessions/close-stale"""

    permission_classes = [IsStaff]

    def post(self, request: Request) -> Response:
        outcome = session_service().close_stale_sessions()
        return Response({"closed": [str(session.id) for session in outcome.closed]})


class GuestHistoryView(APIView):
    """Handler for GET /api/sessions/guest-history"""

    permission_classes = [IsStaff]

    def get(self, request: Request) -> Response:
        records = session_service().guest_history(request.user.member)
        return Response(GuestRecordSerializer(records, many=True).data)


class NotificationListView(APIView):
    """Handler for GET/DELETE /api/notifications"""

    def get(self, request: Request) -> Response:
        messages = inbox_service().notifications_for(request.user.member)
        return Response(NotificationSerializer(messages, many=True).data)

    def delete(self, request: Request) -> Response:
        inbox_service().clear(request.user.member)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationReadView(APIView):
    """Handler for POST /api/notifications/read"""

    def post(self, request: Request) -> Response:
        updated = inbox_service().mark_all_read(request.user.member)
        return Response({"updated": updated})


class ActivityLogView(APIView):
    """Handler for GET /api/logs"""

    permission_classes = [IsStaff]

    def get(self, request: Request) -> Response:
        try:
            limit = int(request.query_params.get("limit", 200))
        except ValueError:
            limit = 200
        entries = inbox_service().recent_logs(request.user.member, max(limit, 1))
        return Response(LogEntrySerializer(entries, many=True).data)


class MemberListView(APIView):
    """Handler for GET /api/members"""

    permission_classes = [IsStaff]

    def get(self, request: Request) -> Response:
        members = member_service().list_members(request.user.member)
        return Response(MemberSerializer(members, many=True).data)


class MemberDetailView(APIView):
    """Handler for PATCH/DELETE /api/members/{member_id}"""

    def patch(self, request: Request, member_id: str) -> Response:
        serializer = NicknameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = member_service().update_nickname(
            request.user.member, member_id, serializer.validated_data["nickname"]
        )
        return Response(MemberSerializer(member).data)

    def delete(self, request: Request, member_id: str) -> Response:
        member_service().reject(request.user.member, member_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MemberRoleView(APIView):
    """Handler for POST /api/members/{member_id}/role"""

    permission_classes = [IsStaff]

    def post(self, request: Request, member_id: str) -> Response:
        serializer = RoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        outcome = member_service().set_role(
            request.user.member, member_id, serializer.validated_data["role"]
        )
        return Response(MemberSerializer(outcome.member).data)

from django.urls import path

from pickup.handlers import (
    ActivityLogView,
    CloseStaleSessionsView,
    GuestHistoryView,
    MemberDetailView,
    MemberListView,
    MemberRoleView,
    NotificationListView,
    NotificationReadView,
    SessionArrivalView,
    SessionAttendanceView,
    SessionDetailView,
    SessionJoinView,
    SessionLeaveView,
    SessionListView,
    SessionStatusView,
)

urlpatterns = [
    path("sessions", SessionListView.as_view(), name="session-list"),
    path("sessions/close-stale", CloseStaleSessionsView.as_view(), name="session-close-stale"),
    path("sessions/guest-history", GuestHistoryView.as_view(), name="guest-history"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path("sessions/<str:session_id>/join", SessionJoinView.as_view(), name="session-join"),
    path("sessions/<str:session_id>/leave", SessionLeaveView.as_view(), name="session-leave"),
    path(
        "sessions/<str:session_id>/arrival",
        SessionArrivalView.as_view(),
        name="session-arrival",
    ),
    path(
        "sessions/<str:session_id>/attendance",
        SessionAttendanceView.as_view(),
        name="session-attendance",
    ),
    path(
        "sessions/<str:session_id>/status",
        SessionStatusView.as_view(),
        name="session-status",
    ),
    path("notifications", NotificationListView.as_view(), name="notification-list"),
    path("notifications/read", NotificationReadView.as_view(), name="notification-read"),
    path("members", MemberListView.as_view(), name="member-list"),
    path("members/<str:member_id>", MemberDetailView.as_view(), name="member-detail"),
    path("members/<str:member_id>/role", MemberRoleView.as_view(), name="member-role"),
    path("logs", ActivityLogView.as_view(), name="activity-log"),
]

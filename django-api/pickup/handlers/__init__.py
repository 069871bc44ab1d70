from pickup.handlers.views import (
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

__all__ = [
    "ActivityLogView",
    "CloseStaleSessionsView",
    "GuestHistoryView",
    "MemberDetailView",
    "MemberListView",
    "MemberRoleView",
    "NotificationListView",
    "NotificationReadView",
    "SessionArrivalView",
    "SessionAttendanceView",
    "SessionDetailView",
    "SessionJoinView",
    "SessionLeaveView",
    "SessionListView",
    "SessionStatusView",
]

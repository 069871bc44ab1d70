"""Serializers for API input and for rendering domain models.

Field names follow the camelCase wire contract shared with the roster
documents.
"""

from rest_framework import serializers

from pickup.domain import (
    Gender,
    GenderRestriction,
    GuestContact,
    Role,
    SessionDraft,
    SessionStatus,
    SessionType,
)


class EnumField(serializers.Field):
    """Reads and writes an Enum by its value."""

    default_error_messages = {"invalid_choice": '"{input}" is not a valid choice.'}

    def __init__(self, enum, **kwargs) -> None:
        self.enum = enum
        super().__init__(**kwargs)

    def to_representation(self, value) -> str:
        return value.value

    def to_internal_value(self, data):
        try:
            return self.enum(data)
        except ValueError:
            self.fail("invalid_choice", input=data)


class RosterEntrySerializer(serializers.Serializer):
    """Serializer for RosterEntry domain model."""

    participantId = serializers.CharField(source="participant_id")
    displayName = serializers.CharField(source="display_name")
    isGuest = serializers.BooleanField(source="is_guest")
    linkedHostId = serializers.CharField(source="linked_host_id", allow_null=True)
    joinedAt = serializers.DateTimeField(source="joined_at")
    arrivalEstimate = serializers.CharField(source="arrival_estimate")
    attended = serializers.BooleanField(allow_null=True)


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    date = serializers.DateField()
    startTime = serializers.CharField(source="start_time")
    maxSpots = serializers.IntegerField(source="max_spots.value")
    guestWindowOpensAt = serializers.DateTimeField(source="guest_window_opens_at")
    type = EnumField(SessionType)
    genderRestriction = EnumField(GenderRestriction, source="gender_restriction")
    allowGuests = serializers.BooleanField(source="allow_guests")
    status = EnumField(SessionStatus)
    createdBy = serializers.CharField(source="created_by")
    players = RosterEntrySerializer(many=True)
    waitlist = RosterEntrySerializer(many=True)


class SessionDraftSerializer(serializers.Serializer):
    """Input for creating or editing a session."""

    name = serializers.CharField(max_length=255)
    date = serializers.DateField()
    startTime = serializers.CharField(source="start_time", max_length=5)
    maxSpots = serializers.IntegerField(source="max_spots")
    guestWindowOpensAt = serializers.DateTimeField(source="guest_window_opens_at")
    type = EnumField(SessionType, default=SessionType.CASUAL)
    genderRestriction = EnumField(
        GenderRestriction, source="gender_restriction", default=GenderRestriction.ALL
    )
    allowGuests = serializers.BooleanField(source="allow_guests", default=True)

    def to_draft(self) -> SessionDraft:
        return SessionDraft(**self.validated_data)


class GuestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    surname = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class JoinSerializer(serializers.Serializer):
    arrivalEstimate = serializers.CharField(
        source="arrival", required=False, allow_blank=True, allow_null=True, default=None
    )
    guest = GuestSerializer(required=False, allow_null=True, default=None)
    spectator = serializers.BooleanField(required=False, default=False)

    def guest_contact(self) -> GuestContact | None:
        data = self.validated_data.get("guest")
        if not data:
            return None
        return GuestContact(
            first_name=data["name"],
            last_name=data["surname"],
            email=data["email"],
            phone=data["phone"],
        )


class LeaveSerializer(serializers.Serializer):
    participantId = serializers.CharField(source="participant_id", required=False, default=None)


class ArrivalSerializer(serializers.Serializer):
    participantId = serializers.CharField(source="participant_id")
    arrivalEstimate = serializers.CharField(source="arrival", allow_blank=True)


class AttendanceSerializer(serializers.Serializer):
    participantId = serializers.CharField(source="participant_id")
    attended = serializers.BooleanField()


class SessionStatusSerializer(serializers.Serializer):
    status = EnumField(SessionStatus)


class NotificationSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    message = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    read = serializers.BooleanField()


class LogEntrySerializer(serializers.Serializer):
    action = serializers.CharField(source="action.value")
    details = serializers.CharField()
    authorName = serializers.CharField(source="author_name", allow_null=True)
    timestamp = serializers.DateTimeField()


class GuestRecordSerializer(serializers.Serializer):
    name = serializers.CharField()
    hostId = serializers.CharField(source="host_id")
    sessions = serializers.IntegerField()


class MemberSerializer(serializers.Serializer):
    id = serializers.CharField()
    fullName = serializers.CharField(source="full_name")
    nickname = serializers.CharField(allow_null=True)
    displayName = serializers.CharField(source="display_name")
    gender = EnumField(Gender)
    role = EnumField(Role)
    gamesAttended = serializers.IntegerField(source="stats.attended")
    gamesMissed = serializers.IntegerField(source="stats.missed")


class RoleSerializer(serializers.Serializer):
    role = EnumField(Role)


class NicknameSerializer(serializers.Serializer):
    nickname = serializers.CharField(max_length=64, allow_blank=True, allow_null=True)

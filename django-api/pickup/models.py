"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
Rosters are stored as JSON documents whose field names are part of the
wire contract (see stores/codec.py).
"""

import uuid

from django.db import models

from pickup.domain.value_objects import (
    Gender,
    GenderRestriction,
    Role,
    SessionStatus,
    SessionType,
)


def _choices(enum) -> list[tuple[str, str]]:
    return [(member.value, member.name.replace("_", " ").title()) for member in enum]


class Member(models.Model):
    """Persistence model for community members."""

    id = models.CharField(primary_key=True, max_length=64)
    full_name = models.CharField(max_length=255)
    nickname = models.CharField(max_length=64, blank=True)
    gender = models.CharField(max_length=1, choices=_choices(Gender))
    role = models.CharField(max_length=16, choices=_choices(Role), default=Role.PENDING.value)
    games_attended = models.PositiveIntegerField(default=0)
    games_missed = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["full_name"]

    def __str__(self) -> str:
        return self.nickname or self.full_name


class GameSession(models.Model):
    """Persistence model for a session and its roster document."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    date = models.DateField()
    start_time = models.CharField(max_length=5)
    max_spots = models.PositiveIntegerField()
    guest_window_opens_at = models.DateTimeField()
    type = models.CharField(
        max_length=16, choices=_choices(SessionType), default=SessionType.CASUAL.value
    )
    gender_restriction = models.CharField(
        max_length=3,
        choices=_choices(GenderRestriction),
        default=GenderRestriction.ALL.value,
    )
    allow_guests = models.BooleanField(default=True)
    status = models.CharField(
        max_length=8, choices=_choices(SessionStatus), default=SessionStatus.OPEN.value
    )
    created_by = models.CharField(max_length=64, default="system")
    players = models.JSONField(default=list, blank=True)
    waitlist = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["date", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.date} {self.start_time}"


class Notification(models.Model):
    """Persistence model for a member's inbox message."""

    recipient = models.ForeignKey(
        Member, on_delete=models.CASCADE, related_name="notifications"
    )
    message = models.TextField()
    created_at = models.DateTimeField()
    read = models.BooleanField(default=False)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "-created_at"]),
        ]

    def __str__(self) -> str:
        return self.message


class ActivityLog(models.Model):
    """Persistence model for audit log entries."""

    action = models.CharField(max_length=32)
    details = models.TextField()
    author_name = models.CharField(max_length=255, blank=True)
    timestamp = models.DateTimeField()

    class Meta:
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["-timestamp"]),
        ]

    def __str__(self) -> str:
        return f"{self.action} - {self.details}"

"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class Gender(Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"


class Role(Enum):
    """Member roles, lowest privilege first."""

    PENDING = "pending"
    PLAYER = "player"
    ADMIN = "admin"
    OWNER = "owner"

    @property
    def is_staff(self) -> bool:
        return self in (Role.ADMIN, Role.OWNER)


class SessionType(Enum):
    CASUAL = "casual"
    TRAINING = "training"
    CHAMPIONSHIP = "championship"
    SOCIAL = "social"

    @property
    def enforces_lateness(self) -> bool:
        """Championship and social sessions never demote or promote on lateness."""
        return self not in (SessionType.CHAMPIONSHIP, SessionType.SOCIAL)


class GenderRestriction(Enum):
    MALE = "M"
    FEMALE = "F"
    ALL = "all"

    def admits(self, gender: Gender) -> bool:
        if self is GenderRestriction.ALL or gender is Gender.OTHER:
            return True
        return self.value == gender.value


class SessionStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"

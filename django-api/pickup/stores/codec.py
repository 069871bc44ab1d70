"""Conversion between ORM rows, roster JSON documents and domain models.

Roster documents keep the camelCase field names other layers rely on:
``participantId``, ``displayName``, ``isGuest``, ``linkedHostId``,
``joinedAt``, ``arrivalEstimate``, ``attended`` and ``guestContact``.
"""

from datetime import datetime
from typing import Any

from pickup import models as orm
from pickup.domain import (
    Capacity,
    Gender,
    GenderRestriction,
    GuestContact,
    Role,
    RosterEntry,
    Session,
    SessionId,
    SessionStatus,
    SessionType,
    User,
    UserStats,
)


def entry_to_document(entry: RosterEntry) -> dict[str, Any]:
    document = {
        "participantId": entry.participant_id,
        "displayName": entry.display_name,
        "isGuest": entry.is_guest,
        "linkedHostId": entry.linked_host_id,
        "joinedAt": entry.joined_at.isoformat(),
        "arrivalEstimate": entry.arrival_estimate,
        "attended": entry.attended,
    }
    if entry.guest_contact is not None:
        document["guestContact"] = {
            "name": entry.guest_contact.first_name,
            "surname": entry.guest_contact.last_name,
            "email": entry.guest_contact.email,
            "phone": entry.guest_contact.phone,
        }
    return document


def entry_from_document(document: dict[str, Any]) -> RosterEntry:
    contact = document.get("guestContact")
    return RosterEntry(
        participant_id=document["participantId"],
        display_name=document["displayName"],
        is_guest=bool(document.get("isGuest", False)),
        linked_host_id=document.get("linkedHostId"),
        joined_at=datetime.fromisoformat(document["joinedAt"]),
        arrival_estimate=document.get("arrivalEstimate", ""),
        attended=document.get("attended"),
        guest_contact=(
            GuestContact(
                first_name=contact.get("name", ""),
                last_name=contact.get("surname", ""),
                email=contact.get("email", ""),
                phone=contact.get("phone", ""),
            )
            if contact
            else None
        ),
    )


def session_to_domain(row: orm.GameSession) -> Session:
    return Session(
        id=SessionId(value=row.id),
        name=row.name,
        date=row.date,
        start_time=row.start_time,
        max_spots=Capacity(value=row.max_spots),
        guest_window_opens_at=row.guest_window_opens_at,
        type=SessionType(row.type),
        gender_restriction=GenderRestriction(row.gender_restriction),
        allow_guests=row.allow_guests,
        status=SessionStatus(row.status),
        created_by=row.created_by,
        players=tuple(entry_from_document(doc) for doc in row.players),
        waitlist=tuple(entry_from_document(doc) for doc in row.waitlist),
    )


def session_to_fields(session: Session) -> dict[str, Any]:
    """Column values for persisting ``session`` (everything but the primary key)."""
    return {
        "name": session.name,
        "date": session.date,
        "start_time": session.start_time,
        "max_spots": session.max_spots.value,
        "guest_window_opens_at": session.guest_window_opens_at,
        "type": session.type.value,
        "gender_restriction": session.gender_restriction.value,
        "allow_guests": session.allow_guests,
        "status": session.status.value,
        "created_by": session.created_by,
        "players": [entry_to_document(e) for e in session.players],
        "waitlist": [entry_to_document(e) for e in session.waitlist],
    }


def member_to_domain(row: orm.Member) -> User:
    return User(
        id=row.id,
        full_name=row.full_name,
        nickname=row.nickname or None,
        gender=Gender(row.gender),
        role=Role(row.role),
        stats=UserStats(attended=row.games_attended, missed=row.games_missed),
    )

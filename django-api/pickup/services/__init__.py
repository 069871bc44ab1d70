from pickup.services.inbox_service import InboxService
from pickup.services.member_service import MemberService
from pickup.services.roster_service import RosterService
from pickup.services.session_service import SessionService

__all__ = [
    "InboxService",
    "MemberService",
    "RosterService",
    "SessionService",
]

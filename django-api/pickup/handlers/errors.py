"""Maps domain errors to HTTP responses.

Only the error code and its user-safe message leave the API.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from pickup.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ENTRY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MEMBER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_SESSION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SESSION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ARRIVAL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ROLE_CHANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ARRIVAL_TOO_LATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.GENDER_RESTRICTED: status.HTTP_403_FORBIDDEN,
    ErrorCode.SESSION_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_JOINED: status.HTTP_409_CONFLICT,
    ErrorCode.GUESTS_NOT_ALLOWED: status.HTTP_409_CONFLICT,
    ErrorCode.GUEST_WINDOW_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.SCHEDULING_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.HOST_NOT_JOINED: status.HTTP_409_CONFLICT,
    ErrorCode.GUEST_LIMIT_REACHED: status.HTTP_409_CONFLICT,
    ErrorCode.NICKNAME_TAKEN: status.HTTP_409_CONFLICT,
}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        logger.info("Rejected %s: %s", context["view"].__class__.__name__, exc.code.value)
        return Response(
            {"code": exc.code.value, "message": exc.message},
            status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        )
    return exception_handler(exc, context)

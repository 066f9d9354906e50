"""Typed errors raised by services and mapped onto the response envelope.

Every failure a client can observe is an ``ApiError`` subclass carrying a
stable ``code``. The HTTP layer translates each one into a status code and
the uniform ``{"success": false, "error": {...}}`` body, so clients never
have to parse ``message`` text.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable error codes exposed in the response envelope."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_VOTED = "ALREADY_VOTED"
    VOTE_NOT_FOUND = "VOTE_NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ApiError(Exception):
    """Base class for errors that carry an envelope code and HTTP status."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(ApiError):
    code = ErrorCode.UNAUTHORIZED
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ApiError):
    code = ErrorCode.FORBIDDEN
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    code = ErrorCode.NOT_FOUND
    status_code = 404
    default_message = "Not found"


class VoteNotFoundError(NotFoundError):
    code = ErrorCode.VOTE_NOT_FOUND
    default_message = "Vote does not exist"


class ConflictError(ApiError):
    code = ErrorCode.CONFLICT
    status_code = 409
    default_message = "Resource already exists"


class AlreadyVotedError(ConflictError):
    code = ErrorCode.ALREADY_VOTED
    default_message = "User has already voted for this feature"


class InternalError(ApiError):
    """Store failure or rollback; the operation did not happen."""

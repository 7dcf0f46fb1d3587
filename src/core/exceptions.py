"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    NOT_A_GROUP_MEMBER = "NOT_A_GROUP_MEMBER"

    # Not found errors (404)
    GROUP_NOT_FOUND = "GROUP_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"

    # Validation errors (400 / 422)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CANDIDATE = "INVALID_CANDIDATE"
    EMPTY_CANDIDATE_SET = "EMPTY_CANDIDATE_SET"

    # Conflict errors (409)
    SESSION_INACTIVE = "SESSION_INACTIVE"
    CONCURRENT_UPDATE = "CONCURRENT_UPDATE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class GroupNotFoundError(AppException):
    """Group not found."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROUP_NOT_FOUND,
            message=f"Group not found: {group_id}",
            status_code=404,
            details={"group_id": group_id},
        )


class NotAGroupMemberError(AppException):
    """Member does not belong to the group."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_GROUP_MEMBER,
            message="You are not a member of this group",
            status_code=403,
            details={"group_id": group_id},
        )


class SessionNotFoundError(AppException):
    """Voting session not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SESSION_NOT_FOUND,
            message=f"Session not found: {session_id}",
            status_code=404,
            details={"session_id": session_id},
        )


class NoActiveSessionError(AppException):
    """Group has no active voting session."""

    def __init__(self, group_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NO_ACTIVE_SESSION,
            message="This group has no active session",
            status_code=404,
            details={"group_id": group_id},
        )


class SessionInactiveError(AppException):
    """Session was concluded or superseded and accepts no more votes."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SESSION_INACTIVE,
            message="This session is no longer accepting votes",
            status_code=409,
            details={"session_id": session_id},
        )


class InvalidCandidateError(AppException):
    """Vote references a candidate outside the session's candidate list."""

    def __init__(self, candidate_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CANDIDATE,
            message=f"Candidate is not part of this session: {candidate_id}",
            status_code=400,
            details={"candidate_id": candidate_id},
        )


class EmptyCandidateSetError(AppException):
    """Sourcing produced no candidates for the requested filters."""

    def __init__(self, status: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.EMPTY_CANDIDATE_SET,
            message=(
                "No restaurants found with the selected filters. "
                "Try adjusting your search criteria."
            ),
            status_code=422,
            details={"sourcing_status": status} if status else None,
        )


class InvalidFiltersError(AppException):
    """Session filters are out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
        )


class ConcurrentUpdateError(AppException):
    """A document write was based on a stale version."""

    def __init__(self, session_id: str, expected_version: int) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_UPDATE,
            message="Session was modified concurrently, reload and retry",
            status_code=409,
            details={"session_id": session_id, "expected_version": expected_version},
        )


class UpstreamUnavailableError(AppException):
    """The places search service could not be used."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message=f"Places search unavailable: {reason}",
            status_code=502,
            details={"reason": reason},
        )

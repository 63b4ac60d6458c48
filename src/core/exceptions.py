"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    ROLE_MISMATCH = "ROLE_MISMATCH"

    # Not found errors (404)
    COMPLAINT_NOT_FOUND = "COMPLAINT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PROFILE_EXISTS = "PROFILE_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"


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


class RoleMismatchError(AppException):
    """The role selected at sign-in differs from the registered role."""

    def __init__(self, registered_role: str) -> None:
        super().__init__(
            error_code=ErrorCode.ROLE_MISMATCH,
            message=f"Invalid role. You are registered as a {registered_role}",
            status_code=403,
            details={"registered_role": registered_role},
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class DomainValidationError(AppException):
    """Domain-level validation failed."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=422,
            details=details,
        )


class PersistenceError(AppException):
    """A read or write against the complaint/profile store failed."""

    def __init__(
        self,
        message: str = "The data store rejected the operation",
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 503,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status_code,
            details=details,
        )


class ComplaintNotFoundError(PersistenceError):
    """Complaint not found."""

    def __init__(self, complaint_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMPLAINT_NOT_FOUND,
            message=f"Complaint not found: {complaint_id}",
            status_code=404,
            details={"complaint_id": complaint_id},
        )


class ProfileNotFoundError(PersistenceError):
    """Profile not found for the given user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found for user: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileAlreadyExistsError(AppException):
    """A profile is already registered for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_EXISTS,
            message="A profile already exists for this user",
            status_code=409,
            details={"user_id": user_id},
        )


class InvalidTransitionError(AppException):
    """Requested complaint status change is not a legal forward step."""

    def __init__(self, current: str, requested: str, message: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_TRANSITION,
            message=message or f"Cannot move complaint from '{current}' to '{requested}'",
            status_code=409,
            details={"current": current, "requested": requested},
        )


class IdentityProviderError(AppException):
    """The hosted identity provider returned an unexpected failure."""

    def __init__(self, message: str = "Identity provider request failed") -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_PROVIDER_ERROR,
            message=message,
            status_code=502,
        )


class ScoringError(Exception):
    """Urgency scoring failed. Always absorbed into the fallback score."""

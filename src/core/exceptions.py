"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Not found errors (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_PROFILE_FIELD = "UNKNOWN_PROFILE_FIELD"

    # Conflict errors (409)
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TRANSACTION_FAILED = "TRANSACTION_FAILED"


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


class InvalidCredentialsError(AuthenticationError):
    """Email unknown or password mismatch.

    Both cases share one message so callers cannot probe which emails exist.
    """

    def __init__(self) -> None:
        super().__init__(
            message="Invalid email or password",
            error_code=ErrorCode.INVALID_CREDENTIALS,
        )


class DuplicateAccountError(AppException):
    """An account with this email already exists."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_ACCOUNT,
            message="An account with this email already exists",
            status_code=409,
            details={"email": email} if email else None,
        )


class AccountNotFoundError(AppException):
    """Account not found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ACCOUNT_NOT_FOUND,
            message=f"Account not found: {account_id}",
            status_code=404,
            details={"account_id": account_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found for the account."""

    def __init__(self, account_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found for account: {account_id}",
            status_code=404,
            details={"account_id": account_id},
        )


class UnknownProfileFieldError(AppException):
    """Profile update named a field outside the mutable set."""

    def __init__(self, fields: list[str], allowed: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.UNKNOWN_PROFILE_FIELD,
            message=f"Unknown profile fields: {', '.join(fields)}",
            status_code=400,
            details={"fields": fields, "allowed": allowed},
        )


class TransactionError(AppException):
    """A storage transaction failed and was rolled back.

    The underlying driver error is chained via ``__cause__`` for logging
    and never placed in the response body.
    """

    def __init__(self, message: str = "The operation could not be completed") -> None:
        super().__init__(
            error_code=ErrorCode.TRANSACTION_FAILED,
            message=message,
            status_code=500,
        )

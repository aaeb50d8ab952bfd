"""Closed error code taxonomy and its HTTP status mapping."""

from __future__ import annotations

from enum import Enum

from fastapi import status


class ErrorCode(str, Enum):
    # The client specified an invalid argument regardless of the state of the system.
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    # The system is not in a state required for the operation, e.g. deleting a non-empty directory.
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    # The requested entity was not found.
    NOT_FOUND = "NOT_FOUND"
    # The entity that a client tried to create already exists.
    ALREADY_EXISTS = "ALREADY_EXISTS"
    # The caller does not have valid authentication credentials for the operation.
    UNAUTHENTICATED = "UNAUTHENTICATED"
    # The caller does not have permission to execute the specified operation.
    PERMISSION_DENIED = "PERMISSION_DENIED"
    # The caller has exhausted their rate limit or quota.
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    # Part of the underlying system is broken.
    INTERNAL = "INTERNAL"
    # The application does not know how to handle the caught error.
    UNKNOWN = "UNKNOWN"
    # The service is currently unavailable. Can be retried with a backoff.
    UNAVAILABLE = "UNAVAILABLE"

    def __str__(self) -> str:
        return self.value

    @property
    def http_status(self) -> int:
        return code_to_status(self)


HTTP_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.FAILED_PRECONDITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.TOO_MANY_REQUESTS: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_unmapped = set(ErrorCode) - set(HTTP_STATUS_BY_CODE)
if _unmapped:
    raise RuntimeError(f"Error codes without an HTTP status: {sorted(code.value for code in _unmapped)}")

RETRYABLE_CODES = frozenset({ErrorCode.UNAVAILABLE, ErrorCode.TOO_MANY_REQUESTS})


def code_to_status(code: ErrorCode) -> int:
    """Return the HTTP status code a response for ``code`` is sent with."""
    return HTTP_STATUS_BY_CODE[code]


def is_retryable(code: ErrorCode) -> bool:
    """Whether callers may retry a request that failed with ``code``."""
    return code in RETRYABLE_CODES

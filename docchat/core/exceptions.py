"""
Exception hierarchy for the docchat RPC API.

Provides the classified error kinds procedures can raise and the HTTP
status each kind maps to at the transport boundary.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any


class DocChatException(Exception):
    """Base exception for all docchat application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ErrorCode(str, enum.Enum):
    """
    Error kinds visible to RPC callers.

    BAD_REQUEST: Input failed schema validation
    UNAUTHORIZED: Identity missing/unresolvable, or owning record missing
    NOT_FOUND: Owner-scoped lookup miss, or unknown procedure
    METHOD_NOT_SUPPORTED: Query called as mutation or vice versa
    INTERNAL_SERVER_ERROR: Collaborator or unexpected failure
    """

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_SUPPORTED = "METHOD_NOT_SUPPORTED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

    @property
    def http_status(self) -> int:
        """HTTP status code used when the error crosses the transport."""
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_SUPPORTED: 405,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
}


class RPCError(DocChatException):
    """
    Classified procedure error.

    Only the code and the message reach the caller; details stay server-side
    for logging.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize RPC error.

        Args:
            code: Error kind
            message: Optional caller-visible message (defaults to the code)
            details: Server-side context for logs
        """
        self.code = code
        super().__init__(message or code.value, details)


class StorageError(DocChatException):
    """Raised when the file storage collaborator fails."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            key: Storage object key involved
            details: Additional context
        """
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, details)


class PaymentProviderError(DocChatException):
    """Raised when the payment provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize payment provider error.

        Args:
            message: Error message
            operation: Provider operation that failed
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)

"""
Exception hierarchy for the document chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocChatException(Exception):
    """Base exception for all document chat application errors."""

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


class ValidationError(DocChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class SessionNotFoundError(DocChatException):
    """Raised when a session cannot be found."""

    def __init__(self, assistant_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            assistant_id: Assistant ID keying the missing session
            details: Additional context
        """
        details = details or {}
        details["assistant_id"] = assistant_id
        self.assistant_id = assistant_id
        super().__init__(f"Session not found: {assistant_id}", details)


class ProviderError(DocChatException):
    """Raised when a call to the AI provider fails."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Provider's error message, passed through verbatim
            status_code: Provider HTTP status (502 when the provider gave none)
            operation: Provider operation that failed
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        self.status_code = status_code
        self.operation = operation
        super().__init__(message, details)


class ProviderResponseShapeError(ProviderError):
    """Raised when a provider payload does not match the expected shape."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(
            f"Unexpected provider response shape: {message}",
            status_code=502,
            operation=operation,
        )


class PollTimeoutError(DocChatException):
    """Raised when a provider resource does not reach a terminal state in time."""

    def __init__(self, resource: str, resource_id: str, timeout_seconds: float) -> None:
        """
        Initialize poll timeout error.

        Args:
            resource: Kind of resource being polled (run, file_batch)
            resource_id: Provider ID of the polled resource
            timeout_seconds: Deadline that was exceeded
        """
        super().__init__(
            f"Timed out after {timeout_seconds:g}s waiting for {resource} {resource_id}",
            {"resource": resource, "resource_id": resource_id},
        )


class RunNotCompletedError(DocChatException):
    """Raised when an assistant run ends in a status other than completed."""

    def __init__(self, status: str, run_id: str | None = None) -> None:
        """
        Initialize run failure.

        Args:
            status: Terminal run status reported by the provider
            run_id: Provider run ID
        """
        self.status = status
        super().__init__(
            f"Run failed with status: {status}",
            {"run_id": run_id} if run_id else None,
        )


class NoAssistantReplyError(DocChatException):
    """Raised when a completed run produced no usable assistant text."""

    def __init__(self, thread_id: str, run_id: str) -> None:
        super().__init__(
            "No assistant response",
            {"thread_id": thread_id, "run_id": run_id},
        )

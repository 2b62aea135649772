"""
Service error handling for API endpoints.

Provides a decorator that maps the application's exception hierarchy to
HTTPExceptions, so every router reports errors the same way.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docchat.core.exceptions import (
    DocChatException,
    NoAssistantReplyError,
    PollTimeoutError,
    ProviderError,
    RunNotCompletedError,
    SessionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def status_code_for(exc: BaseException | None) -> int:
    """
    Map an exception to the HTTP status code it is reported with.

    Provider errors keep the provider's own status code.
    """
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, SessionNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ProviderError):
        return exc.status_code
    if isinstance(exc, PollTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    if isinstance(exc, (RunNotCompletedError, NoAssistantReplyError)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_service_errors(func: F) -> F:
    """
    Decorator to handle service errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping exception types to HTTP status codes
    - Uniform `detail` messages (the exception's message, never its details)
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (ValidationError, SessionNotFoundError) as e:
            logger.warning(
                "Invalid request",
                extra={"error": e.message, "details": e.details},
            )
            raise HTTPException(status_code=status_code_for(e), detail=e.message)

        except DocChatException as e:
            logger.error(
                "Service operation failed",
                extra={"error": e.message, "error_type": type(e).__name__, "details": e.details},
            )
            raise HTTPException(status_code=status_code_for(e), detail=e.message)

        except Exception as e:
            logger.exception(
                "Unexpected failure in service operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred: {str(e)}",
            )

    return wrapper  # type: ignore

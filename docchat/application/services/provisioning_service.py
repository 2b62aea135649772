"""
Session provisioning workflow.

Creates the linked provider resources for a new chat session and persists
the session row only once all of them exist:

1. vector store
2. upload documents into it and wait for indexing
3. assistant bound to the vector store
4. thread
5. session row (committed)

If any step fails, the resources created so far are deleted through
CleanupService.compensate() and a single failed result is returned.

Dependencies: docchat.boundary.provider, docchat.boundary.db.CRUD, docchat.application.services.cleanup_service
System role: Provisioning workflow orchestration
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services.cleanup_service import CleanupService, InFlightResources
from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.boundary.db.models.session_model import SessionModel
from docchat.boundary.provider.client import ProviderClient
from docchat.core.cleanup import CleanupReport
from docchat.core.documents import UploadedDocument, validate_documents
from docchat.core.exceptions import DocChatException
from docchat.core.prompts import ASSISTANT_INSTRUCTIONS
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ProvisionStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ProvisionResult:
    """
    Tagged result of one provisioning attempt.

    On success `session` is the persisted row. On failure `session` is None,
    `cause` is the original error and `cleanup` reports the compensating deletes.
    """

    status: ProvisionStatus
    message: str
    session: SessionModel | None = None
    cleanup: CleanupReport | None = None
    cause: Exception | None = None


def _describe_failure(error: Exception) -> str:
    """Client-facing cause; database errors are summarised, the full text is only logged."""
    if isinstance(error, DocChatException):
        return error.message
    if isinstance(error, SQLAlchemyError):
        return "failed to save session"
    return str(error)


def default_session_name(now: datetime | None = None) -> str:
    """Generate a display name for sessions created without one."""
    now = now or datetime.now(timezone.utc)
    return f"Document Chat {now.isoformat(timespec='seconds')}"


class ProvisioningService:
    """Provisions provider resources and the session row for a new chat."""

    def __init__(
        self,
        db: AsyncSession,
        provider: ProviderClient,
        cleanup: CleanupService | None = None,
    ) -> None:
        """
        Initialize provisioning service.

        Args:
            db: Async SQLAlchemy session
            provider: Provider client
            cleanup: Cleanup service used for compensation (built from db and provider if None)
        """
        self.db = db
        self.provider = provider
        self.cleanup = cleanup or CleanupService(db=db, provider=provider)

    async def provision(
        self,
        documents: Sequence[UploadedDocument],
        name: str | None = None,
    ) -> ProvisionResult:
        """
        Create a new session from uploaded documents.

        Args:
            documents: Documents to index, in upload order
            name: Display name (blank falls back to a timestamped default)

        Returns:
            ProvisionResult: Success with the session row, or failure with the cause

        Raises:
            ValidationError: No documents or a rejected filename (no provider call made)
        """
        validate_documents(documents)

        now = datetime.now(timezone.utc)
        display_name = (name or "").strip() or default_session_name(now)
        in_flight = InFlightResources()

        logger.info(
            f"{__name__}:provision - START name={display_name!r} files={len(documents)}",
        )

        try:
            in_flight.vector_store_id = await self.provider.create_vector_store(
                f"File Search Vector Store - {now.isoformat()}"
            )
            await self.provider.upload_and_wait(in_flight.vector_store_id, documents)
            in_flight.assistant_id = await self.provider.create_assistant(
                in_flight.vector_store_id,
                ASSISTANT_INSTRUCTIONS,
            )
            in_flight.thread_id = await self.provider.create_thread()

            session = await session_crud.create_session(
                self.db,
                assistant_id=in_flight.assistant_id,
                vector_store_id=in_flight.vector_store_id,
                thread_id=in_flight.thread_id,
                name=display_name,
            )
            await self.db.commit()
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:provision - failed, compensating",
                e,
                vector_store_id=in_flight.vector_store_id,
                assistant_id=in_flight.assistant_id,
                thread_id=in_flight.thread_id,
            )
            cleanup = await self.cleanup.compensate(in_flight)
            await self.db.rollback()
            cause = _describe_failure(e)
            return ProvisionResult(
                status=ProvisionStatus.ERROR,
                message=f"Upload failed: {cause}",
                cleanup=cleanup,
                cause=e,
            )

        logger.info(
            f"{__name__}:provision - END assistant_id={session.assistant_id}",
            extra={
                "assistant_id": session.assistant_id,
                "vector_store_id": session.vector_store_id,
                "thread_id": session.thread_id,
            },
        )
        return ProvisionResult(
            status=ProvisionStatus.SUCCESS,
            message="Assistant created successfully!",
            session=session,
        )

"""
Session deletion and compensating cleanup.

Tears down the provider resources behind a session in dependency order
(vector store files, vector store, assistant, thread). Every sub-delete is
attempted independently; a failure is recorded in the CleanupReport and
logged, never raised. Two entry points:

- delete_session(): user-initiated delete. Removes the session row at the
  end no matter how many provider deletes failed.
- compensate(): rollback of a failed provisioning attempt. Only touches
  the resources recorded as created and never touches the table.

Dependencies: docchat.boundary.provider, docchat.boundary.db.CRUD
System role: Deletion / cleanup workflow
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.boundary.provider.client import ProviderClient
from docchat.core.cleanup import CleanupReport, ResourceKind, SubDeleteResult
from docchat.core.exceptions import DocChatException
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


@dataclass
class InFlightResources:
    """
    Resources confirmed created during one provisioning attempt.

    Filled in step by step; whatever is set when a step fails is exactly
    what compensation deletes.
    """

    vector_store_id: str | None = None
    assistant_id: str | None = None
    thread_id: str | None = None


class DeletionStatus(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class DeletionResult:
    """Tagged result of an explicit session delete."""

    status: DeletionStatus
    message: str
    assistant_id: str
    cleanup: CleanupReport | None = None


class CleanupService:
    """Deletes sessions and rolls back partially provisioned resources."""

    def __init__(self, db: AsyncSession, provider: ProviderClient) -> None:
        """
        Initialize cleanup service.

        Args:
            db: Async SQLAlchemy session
            provider: Provider client used for the remote deletes
        """
        self.db = db
        self.provider = provider

    async def delete_session(self, assistant_id: str) -> DeletionResult:
        """
        Delete a session and all provider resources behind it.

        Flow:
        1. Look up the session row (absent: not found, no provider calls)
        2. Delete every file in the vector store, then the vector store
        3. Delete the assistant
        4. Delete the thread
        5. Delete the row and commit, regardless of steps 2-4

        Args:
            assistant_id: Assistant ID keying the session

        Returns:
            DeletionResult: Status, message and the per-resource cleanup report
        """
        session = await session_crud.get_by_id(self.db, assistant_id)
        if session is None:
            logger.info(
                f"{__name__}:delete_session - not found",
                extra={"assistant_id": assistant_id},
            )
            return DeletionResult(
                status=DeletionStatus.NOT_FOUND,
                message=f"Session not found: {assistant_id}",
                assistant_id=assistant_id,
            )

        report = CleanupReport()
        await self._delete_vector_store(report, session.vector_store_id)
        await self._attempt(report, ResourceKind.ASSISTANT, session.assistant_id, self.provider.delete_assistant)
        await self._attempt(report, ResourceKind.THREAD, session.thread_id, self.provider.delete_thread)

        try:
            await session_crud.delete_by_id(self.db, assistant_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:delete_session - failed to remove session row",
                e,
                assistant_id=assistant_id,
            )
            return DeletionResult(
                status=DeletionStatus.ERROR,
                message=f"Failed to delete session: {type(e).__name__}",
                assistant_id=assistant_id,
                cleanup=report,
            )

        if report.all_succeeded:
            message = "Session and all associated resources deleted successfully."
        else:
            message = (
                f"Session deleted; {len(report.failures)} provider resource(s) "
                "could not be deleted and may need manual cleanup."
            )
        logger.info(
            f"{__name__}:delete_session - {message}",
            extra={"assistant_id": assistant_id, "failed_deletes": len(report.failures)},
        )
        return DeletionResult(
            status=DeletionStatus.SUCCESS,
            message=message,
            assistant_id=assistant_id,
            cleanup=report,
        )

    async def compensate(self, in_flight: InFlightResources) -> CleanupReport:
        """
        Delete the resources created by a failed provisioning attempt.

        Args:
            in_flight: Resources confirmed created before the failure

        Returns:
            CleanupReport: Outcome of each attempted delete
        """
        report = CleanupReport()
        if in_flight.vector_store_id:
            await self._delete_vector_store(report, in_flight.vector_store_id)
        if in_flight.assistant_id:
            await self._attempt(report, ResourceKind.ASSISTANT, in_flight.assistant_id, self.provider.delete_assistant)
        if in_flight.thread_id:
            await self._attempt(report, ResourceKind.THREAD, in_flight.thread_id, self.provider.delete_thread)

        logger.info(
            f"{__name__}:compensate - attempted {len(report.results)} delete(s), "
            f"{len(report.failures)} failed",
            extra={
                "vector_store_id": in_flight.vector_store_id,
                "assistant_id": in_flight.assistant_id,
                "thread_id": in_flight.thread_id,
            },
        )
        return report

    async def _delete_vector_store(self, report: CleanupReport, vector_store_id: str) -> None:
        """Delete each file of a vector store, then the store itself."""
        try:
            file_ids = await self.provider.list_vector_store_file_ids(vector_store_id)
        except Exception as e:
            self._record_failure(report, ResourceKind.VECTOR_STORE_FILES, vector_store_id, e)
            file_ids = []

        for file_id in file_ids:
            await self._attempt(report, ResourceKind.FILE, file_id, self.provider.delete_file)

        await self._attempt(report, ResourceKind.VECTOR_STORE, vector_store_id, self.provider.delete_vector_store)

    async def _attempt(
        self,
        report: CleanupReport,
        resource: ResourceKind,
        resource_id: str,
        delete: Callable[[str], Awaitable[None]],
    ) -> None:
        try:
            await delete(resource_id)
        except Exception as e:
            self._record_failure(report, resource, resource_id, e)
            return
        report.results.append(SubDeleteResult(resource=resource, resource_id=resource_id, succeeded=True))

    @staticmethod
    def _record_failure(
        report: CleanupReport,
        resource: ResourceKind,
        resource_id: str,
        error: Exception,
    ) -> None:
        reason = error.message if isinstance(error, DocChatException) else str(error)
        log_with_context(
            logger,
            logging.WARNING,
            f"{__name__}:cleanup - failed to delete {resource.value} {resource_id}: {reason}",
            resource=resource.value,
            resource_id=resource_id,
            error_type=type(error).__name__,
        )
        report.results.append(
            SubDeleteResult(resource=resource, resource_id=resource_id, succeeded=False, reason=reason)
        )

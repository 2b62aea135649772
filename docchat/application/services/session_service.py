"""
Session service orchestrator.

Read-side session operations and adding documents to an existing session.
Creation and deletion live in ProvisioningService and CleanupService.

Dependencies: docchat.boundary.db.CRUD, docchat.boundary.provider
System role: Session use case orchestration
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.session_crud import session_crud
from docchat.boundary.db.models.session_model import SessionModel
from docchat.boundary.provider.client import ProviderClient
from docchat.core.documents import UploadedDocument, validate_documents
from docchat.core.exceptions import DocChatException, SessionNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionWithFiles:
    """Session row plus the names of the files indexed in its vector store."""

    assistant_id: str
    vector_store_id: str
    thread_id: str
    name: str
    files: list[str] = field(default_factory=list)


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession, provider: ProviderClient) -> None:
        """
        Initialize session service.

        Args:
            db: Async SQLAlchemy session
            provider: Provider client for file listings and uploads
        """
        self.db = db
        self.provider = provider

    async def get_session(self, assistant_id: str) -> SessionModel:
        """
        Get session by assistant ID.

        Raises:
            SessionNotFoundError: If no session has this assistant ID
        """
        session = await session_crud.get_by_id(self.db, assistant_id)
        if session is None:
            raise SessionNotFoundError(assistant_id)
        return session

    async def list_sessions(
        self,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SessionWithFiles]:
        """
        List sessions with the filenames indexed in each vector store.

        Filename lookups are issued concurrently. A session whose file
        listing fails is returned with an empty file list.

        Args:
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            list[SessionWithFiles]: Sessions with their document names
        """
        sessions = await session_crud.get_all(self.db, limit=limit, offset=offset)
        return list(await asyncio.gather(*(self._with_files(session) for session in sessions)))

    async def add_files(
        self,
        assistant_id: str,
        documents: Sequence[UploadedDocument],
    ) -> SessionModel:
        """
        Upload more documents into an existing session's vector store.

        The session row is not modified.

        Args:
            assistant_id: Session to extend
            documents: Documents to add

        Returns:
            SessionModel: The (unchanged) session

        Raises:
            ValidationError: No documents or a rejected filename
            SessionNotFoundError: Unknown assistant ID
            ProviderError: Upload or indexing failed
            PollTimeoutError: Indexing did not finish in time
        """
        validate_documents(documents)
        session = await self.get_session(assistant_id)
        await self.provider.upload_and_wait(session.vector_store_id, documents)
        logger.info(
            f"{__name__}:add_files - added {len(documents)} file(s)",
            extra={"assistant_id": assistant_id, "vector_store_id": session.vector_store_id},
        )
        return session

    async def _with_files(self, session: SessionModel) -> SessionWithFiles:
        try:
            file_ids = await self.provider.list_vector_store_file_ids(session.vector_store_id)
            files = list(await asyncio.gather(*(self._file_name(file_id) for file_id in file_ids)))
        except DocChatException as e:
            logger.error(
                f"{__name__}:list_sessions - failed to list files for vector store {session.vector_store_id}",
                extra={"assistant_id": session.assistant_id, "error": str(e)},
            )
            files = []

        return SessionWithFiles(
            assistant_id=session.assistant_id,
            vector_store_id=session.vector_store_id,
            thread_id=session.thread_id,
            name=session.name,
            files=files,
        )

    async def _file_name(self, file_id: str) -> str:
        try:
            return await self.provider.retrieve_file_name(file_id)
        except DocChatException:
            return file_id

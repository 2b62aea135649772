"""
Session CRUD operations.

Provides Create, Read, Delete operations for SessionModel.
There is no update path: sessions are immutable once created.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Session persistence operations
"""

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.models.session_model import SessionModel
from docchat.boundary.db.CRUD.base_crud import BaseCRUD


class SessionCRUD(BaseCRUD[SessionModel]):
    """CRUD operations for SessionModel, keyed by assistant ID."""

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def create_session(
        self,
        session: AsyncSession,
        assistant_id: str,
        vector_store_id: str,
        thread_id: str,
        name: str,
    ) -> SessionModel:
        """
        Insert a fully provisioned session row.

        Args:
            session: Async database session
            assistant_id: Provider assistant ID
            vector_store_id: Provider vector store ID
            thread_id: Provider thread ID
            name: Display name

        Returns:
            SessionModel: The flushed row
        """
        return await self.create(
            session,
            assistant_id=assistant_id,
            vector_store_id=vector_store_id,
            thread_id=thread_id,
            name=name,
        )


session_crud = SessionCRUD()

"""
Session ORM model.

Links a human-facing chat session to the provider resources that back it.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Session persistence for chat context management
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base


class SessionModel(Base):
    """
    Session ORM model keyed by provider assistant ID.

    A row is written only after the vector store, assistant and thread
    all exist at the provider, and is never updated afterwards.

    Attributes:
        assistant_id: Provider assistant ID (primary key)
        vector_store_id: Provider vector store holding the session documents
        thread_id: Provider thread holding the initial conversation
        name: Display label
    """

    __tablename__ = "assistant"

    assistant_id: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
        nullable=False,
        doc="Provider assistant ID",
    )
    vector_store_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Provider vector store ID",
    )
    thread_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Provider thread ID",
    )
    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Session display name",
    )

    def __repr__(self) -> str:
        return f"SessionModel(assistant_id={self.assistant_id!r}, name={self.name!r})"

"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base: Declarative base
  - get_async_engine(), get_async_session_factory(), get_async_db(), create_tables()
  - SessionModel: The session linkage table
  - SessionCRUD, session_crud: CRUD for sessions

Dependencies: sqlalchemy, aiosqlite, docchat.configs
System role: Database adapter providing persistent storage for sessions
"""

from docchat.boundary.db.base import Base
from docchat.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docchat.boundary.db.models.session_model import SessionModel
from docchat.boundary.db.CRUD import BaseCRUD, SessionCRUD, session_crud

__all__ = [
    "Base",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "SessionModel",
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
]

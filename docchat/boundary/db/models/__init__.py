"""
Database models package.

Exports:
  - SessionModel: Chat session ORM model

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from docchat.boundary.db.models.session_model import SessionModel

__all__ = ["SessionModel"]

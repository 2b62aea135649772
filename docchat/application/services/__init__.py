"""Service orchestrators."""

from .chat_service import ChatService
from .cleanup_service import CleanupService
from .provisioning_service import ProvisioningService
from .session_service import SessionService

__all__ = [
    "ChatService",
    "CleanupService",
    "ProvisioningService",
    "SessionService",
]

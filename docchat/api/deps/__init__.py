"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_chat_service,
    get_cleanup_service,
    get_provider_client,
    get_provisioning_service,
    get_service_cache,
    get_session_service,
)

__all__ = [
    "get_chat_service",
    "get_cleanup_service",
    "get_provider_client",
    "get_provisioning_service",
    "get_service_cache",
    "get_session_service",
]

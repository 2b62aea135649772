"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docchat.configs, docchat.application, docchat.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services import (
    ChatService,
    CleanupService,
    ProvisioningService,
    SessionService,
)
from docchat.boundary.db import get_async_db
from docchat.boundary.provider import ProviderClient
from docchat.configs import get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._provider = None

    @property
    def provider(self) -> ProviderClient:
        """Get cached provider client."""
        if self._provider is None:
            self._provider = ProviderClient.from_settings(get_settings().provider)
        return self._provider

    async def aclose(self) -> None:
        """Close cached clients and clear the cache."""
        if self._provider is not None:
            await self._provider.close()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._provider = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_provider_client() -> ProviderClient:
    """
    Get the shared provider client.

    Returns:
        ProviderClient: Client configured from provider settings
    """
    return get_service_cache().provider


def get_cleanup_service(
    db: AsyncSession = Depends(get_async_db),
    provider: ProviderClient = Depends(get_provider_client),
) -> CleanupService:
    """
    Get cleanup service instance.

    Args:
        db: Async database session (injected via Depends)
        provider: Provider client (injected via Depends)

    Returns:
        CleanupService: Cleanup service instance
    """
    return CleanupService(db=db, provider=provider)


def get_provisioning_service(
    db: AsyncSession = Depends(get_async_db),
    provider: ProviderClient = Depends(get_provider_client),
) -> ProvisioningService:
    """
    Get provisioning service instance.

    Args:
        db: Async database session (injected via Depends)
        provider: Provider client (injected via Depends)

    Returns:
        ProvisioningService: Provisioning service with its own cleanup service
    """
    return ProvisioningService(db=db, provider=provider)


def get_session_service(
    db: AsyncSession = Depends(get_async_db),
    provider: ProviderClient = Depends(get_provider_client),
) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)
        provider: Provider client (injected via Depends)

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db, provider=provider)


def get_chat_service(provider: ProviderClient = Depends(get_provider_client)) -> ChatService:
    """
    Get chat service instance.

    Args:
        provider: Provider client (injected via Depends)

    Returns:
        ChatService: Chat relay for both chat modes
    """
    return ChatService(provider=provider)

"""
AI provider boundary.

Exports:
  - ProviderClient: Injected wrapper around the OpenAI async client
  - Decoded payload models for runs, messages, file batches and responses
"""

from docchat.boundary.provider.client import ProviderClient
from docchat.boundary.provider.schemas import (
    TERMINAL_RUN_STATUSES,
    FileBatchSnapshot,
    ResponseSnapshot,
    RunSnapshot,
    ThreadMessage,
)

__all__ = [
    "ProviderClient",
    "TERMINAL_RUN_STATUSES",
    "FileBatchSnapshot",
    "ResponseSnapshot",
    "RunSnapshot",
    "ThreadMessage",
]

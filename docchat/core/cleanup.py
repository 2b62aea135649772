"""
Cleanup report types.

Per-resource outcome of a deletion or compensation run. Produced by the
cleanup workflow and rendered by the API schemas.
"""

from dataclasses import dataclass, field
from enum import Enum


class ResourceKind(str, Enum):
    """Provider resource kinds that cleanup deletes."""

    VECTOR_STORE_FILES = "vector_store_files"
    FILE = "file"
    VECTOR_STORE = "vector_store"
    ASSISTANT = "assistant"
    THREAD = "thread"


@dataclass(frozen=True)
class SubDeleteResult:
    """Outcome of one attempted provider-side delete."""

    resource: ResourceKind
    resource_id: str
    succeeded: bool
    reason: str | None = None


@dataclass
class CleanupReport:
    """Aggregated outcome of every sub-delete in one cleanup run."""

    results: list[SubDeleteResult] = field(default_factory=list)

    @property
    def failures(self) -> list[SubDeleteResult]:
        return [result for result in self.results if not result.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failures

    def attempted(self, resource: ResourceKind) -> list[str]:
        """IDs of every resource of a kind that a delete was attempted for."""
        return [result.resource_id for result in self.results if result.resource is resource]

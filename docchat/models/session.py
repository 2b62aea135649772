"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic, docchat.core.cleanup
System role: Session API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from docchat.core.cleanup import CleanupReport


class SessionResponse(BaseModel):
    """Response schema for a single session."""

    model_config = ConfigDict(from_attributes=True)

    assistant_id: str
    vector_store_id: str
    thread_id: str
    name: str


class SessionWithFilesResponse(SessionResponse):
    """Session plus the names of the documents indexed for it."""

    files: list[str] = Field(default_factory=list, description="Indexed document filenames")


class SubDeleteResultResponse(BaseModel):
    """Outcome of one provider-side delete."""

    resource: str
    resource_id: str
    succeeded: bool
    reason: str | None = None


class CleanupReportResponse(BaseModel):
    """Per-resource outcome of a cleanup run."""

    all_succeeded: bool
    results: list[SubDeleteResultResponse]

    @classmethod
    def from_report(cls, report: CleanupReport) -> "CleanupReportResponse":
        return cls(
            all_succeeded=report.all_succeeded,
            results=[
                SubDeleteResultResponse(
                    resource=result.resource.value,
                    resource_id=result.resource_id,
                    succeeded=result.succeeded,
                    reason=result.reason,
                )
                for result in report.results
            ],
        )


class ProvisionResponse(BaseModel):
    """Response schema for a successfully provisioned session."""

    message: str
    session: SessionResponse


class DeleteSessionResponse(BaseModel):
    """Response schema for a session delete."""

    message: str
    assistant_id: str
    cleanup: CleanupReportResponse | None = None


class AddFilesResponse(BaseModel):
    """Response schema for adding documents to a session."""

    message: str
    assistant_id: str
    files_added: int = Field(description="Number of documents indexed")

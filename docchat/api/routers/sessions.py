"""
Session API endpoints.

Routes:
- POST /sessions - Upload documents and provision a new session
- GET /sessions - List sessions with their document names
- GET /sessions/{assistant_id} - Get one session
- DELETE /sessions/{assistant_id} - Delete session and its provider resources
- POST /sessions/{assistant_id}/files - Add documents to a session

Dependencies: docchat.application.services, docchat.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from docchat.api.deps import (
    get_cleanup_service,
    get_provisioning_service,
    get_session_service,
)
from docchat.api.routers.error_handling import handle_service_errors, status_code_for
from docchat.application.services.cleanup_service import CleanupService, DeletionStatus
from docchat.application.services.provisioning_service import ProvisioningService, ProvisionStatus
from docchat.application.services.session_service import SessionService
from docchat.core.documents import UploadedDocument
from docchat.models.session import (
    AddFilesResponse,
    CleanupReportResponse,
    DeleteSessionResponse,
    ProvisionResponse,
    SessionResponse,
    SessionWithFilesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


async def _read_documents(files: list[UploadFile] | None) -> list[UploadedDocument]:
    return [UploadedDocument(filename=file.filename or "", content=await file.read()) for file in files or []]


@router.post("", response_model=ProvisionResponse, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_session(
    files: list[UploadFile] | None = File(default=None),
    name: str | None = Form(default=None),
    provisioning_service: ProvisioningService = Depends(get_provisioning_service),
) -> ProvisionResponse:
    """
    Upload documents and provision a new chat session.

    Args:
        files: Documents to index (multipart form, field "files")
        name: Optional display name
        provisioning_service: Injected ProvisioningService

    Returns:
        ProvisionResponse: Success message and the created session

    Raises:
        HTTPException(400): No files or a rejected file type
        HTTPException(4xx/5xx): Provisioning failed; detail holds the message and cleanup report
    """
    logger.info(
        "Session creation request received",
        extra={"document_names": [file.filename for file in files or []]},
    )
    documents = await _read_documents(files)
    result = await provisioning_service.provision(documents, name=name)

    if result.status is not ProvisionStatus.SUCCESS:
        raise HTTPException(
            status_code=status_code_for(result.cause),
            detail={
                "message": result.message,
                "cleanup": (
                    CleanupReportResponse.from_report(result.cleanup).model_dump()
                    if result.cleanup
                    else None
                ),
            },
        )

    return ProvisionResponse(
        message=result.message,
        session=SessionResponse.model_validate(result.session),
    )


@router.get("", response_model=list[SessionWithFilesResponse])
@handle_service_errors
async def list_sessions(
    limit: int = 100,
    offset: int = 0,
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionWithFilesResponse]:
    """
    List sessions with the filenames indexed for each.

    Args:
        limit: Maximum number of sessions (default 100)
        offset: Number to skip (default 0)
        session_service: Injected SessionService

    Returns:
        list[SessionWithFilesResponse]: Sessions with document names
    """
    sessions = await session_service.list_sessions(limit=limit, offset=offset)
    return [SessionWithFilesResponse.model_validate(session, from_attributes=True) for session in sessions]


@router.get("/{assistant_id}", response_model=SessionResponse)
@handle_service_errors
async def get_session(
    assistant_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Get session by assistant ID.

    Raises:
        HTTPException(404): Session not found
    """
    session = await session_service.get_session(assistant_id)
    return SessionResponse.model_validate(session)


@router.delete("/{assistant_id}", response_model=DeleteSessionResponse)
@handle_service_errors
async def delete_session(
    assistant_id: str,
    cleanup_service: CleanupService = Depends(get_cleanup_service),
) -> DeleteSessionResponse:
    """
    Delete a session and every provider resource behind it.

    Provider-side delete failures do not fail the request; they are
    listed in the cleanup report.

    Args:
        assistant_id: Assistant ID keying the session
        cleanup_service: Injected CleanupService

    Returns:
        DeleteSessionResponse: Message and per-resource cleanup report

    Raises:
        HTTPException(404): Session not found
        HTTPException(500): Session row could not be removed
    """
    result = await cleanup_service.delete_session(assistant_id)

    if result.status is DeletionStatus.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    if result.status is DeletionStatus.ERROR:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result.message)

    return DeleteSessionResponse(
        message=result.message,
        assistant_id=result.assistant_id,
        cleanup=CleanupReportResponse.from_report(result.cleanup) if result.cleanup else None,
    )


@router.post("/{assistant_id}/files", response_model=AddFilesResponse)
@handle_service_errors
async def add_files(
    assistant_id: str,
    files: list[UploadFile] | None = File(default=None),
    session_service: SessionService = Depends(get_session_service),
) -> AddFilesResponse:
    """
    Upload more documents into an existing session.

    Raises:
        HTTPException(400): No files or a rejected file type
        HTTPException(404): Session not found
    """
    documents = await _read_documents(files)
    await session_service.add_files(assistant_id, documents)
    return AddFilesResponse(
        message="Files added successfully!",
        assistant_id=assistant_id,
        files_added=len(documents),
    )

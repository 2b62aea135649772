"""Chat API endpoints (thread mode).

Routes:
- POST /chat - Send a message on a provider thread and wait for the reply
- GET /chat/{thread_id}/history - Get the text messages of a thread

Dependencies: docchat.application.services.chat_service
System role: Thread-mode chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from docchat.api.deps import get_chat_service
from docchat.api.routers.error_handling import handle_service_errors
from docchat.application.services.chat_service import ChatService
from docchat.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
@handle_service_errors
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Send a chat message to an assistant.

    Flow:
    1. Create a thread if the request has none
    2. Append the message, run the assistant and wait for a terminal status
    3. Return the assistant's reply with its rendering hint

    Args:
        request: ChatRequest with message, assistant ID and optional thread ID
        chat_service: Injected ChatService

    Returns:
        ChatResponse: Reply text, thread ID to reuse and format hint

    Raises:
        HTTPException(400): Missing assistant ID or empty message
        HTTPException(500): Run did not complete or produced no reply
        HTTPException(504): Run did not finish in time
    """
    reply = await chat_service.send_message(
        message=request.message,
        assistant_id=request.assistant_id,
        thread_id=request.thread_id,
    )
    return ChatResponse(response=reply.text, thread_id=reply.thread_id, format=reply.format)


@router.get("/{thread_id}/history", response_model=ChatHistoryResponse)
@handle_service_errors
async def get_chat_history(
    thread_id: str,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """
    Get chat history for a thread, oldest message first.

    Args:
        thread_id: Provider thread ID
        chat_service: Injected ChatService

    Returns:
        ChatHistoryResponse: List of messages with total count
    """
    history = await chat_service.get_history(thread_id)
    messages = [
        ChatMessageResponse(role=message.role, content=message.content, format=message.format)
        for message in history
    ]
    return ChatHistoryResponse(messages=messages, total=len(messages))

"""Chat API endpoints (response-chaining mode).

Routes:
- POST /chat/responses - Send a message chained to the previous response

Dependencies: docchat.application.services.chat_service
System role: Stateless chat messaging HTTP API
"""

from fastapi import APIRouter, Depends

from docchat.api.deps import get_chat_service
from docchat.api.routers.error_handling import handle_service_errors
from docchat.application.services.chat_service import ChatService
from docchat.models.chat import ChainedChatRequest, ChainedChatResponse

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/responses", response_model=ChainedChatResponse)
@handle_service_errors
async def chat_chained(
    request: ChainedChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChainedChatResponse:
    """Send a chat message without server-side conversation state.

    The client passes back `response_id` as `previous_response_id` on the
    next turn.

    Raises:
        HTTPException(400): Missing vector store ID or empty message
    """
    reply = await chat_service.send_chained(
        message=request.message,
        vector_store_id=request.vector_store_id,
        previous_response_id=request.previous_response_id,
    )
    return ChainedChatResponse(response=reply.text, response_id=reply.response_id, format=reply.format)

"""
Chat domain models and schemas.

Request/response schemas for both chat modes.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field

from docchat.core.reply_format import ReplyFormat


class ChatRequest(BaseModel):
    """Request schema for thread-mode chat messages."""

    message: str = Field(default="", description="User question or message")
    assistant_id: str | None = Field(default=None, description="Assistant to run")
    thread_id: str | None = Field(default=None, description="Existing thread; omitted starts a new one")


class ChatResponse(BaseModel):
    """Response schema for thread-mode chat messages."""

    response: str
    thread_id: str
    format: ReplyFormat = Field(description="Rendering hint: 'mermaid' or 'markdown'")


class ChatMessageResponse(BaseModel):
    """Single chat message in history."""

    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    format: ReplyFormat


class ChatHistoryResponse(BaseModel):
    """Response schema for chat history."""

    messages: list[ChatMessageResponse]
    total: int = Field(description="Total number of messages")


class ChainedChatRequest(BaseModel):
    """Request schema for response-chaining chat messages."""

    message: str = Field(default="", description="User question or message")
    vector_store_id: str | None = Field(default=None, description="Vector store searched for this turn")
    previous_response_id: str | None = Field(default=None, description="Response ID of the previous turn")


class ChainedChatResponse(BaseModel):
    """Response schema for response-chaining chat messages."""

    response: str
    response_id: str = Field(description="Pass as previous_response_id on the next turn")
    format: ReplyFormat

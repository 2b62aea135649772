"""
Chat relay service.

Relays user messages to the provider in one of two modes:

- thread mode: append to a persistent provider thread, run the assistant,
  poll the run to a terminal status and return the assistant's reply
- chaining mode: one stateless responses call that references the previous
  turn's response ID and searches the session's vector store

Every reply carries a rendering hint (Mermaid diagram or markdown).

Dependencies: docchat.boundary.provider, docchat.core.reply_format
System role: Chat service orchestration layer
"""

import logging
from dataclasses import dataclass

from docchat.boundary.provider.client import ProviderClient
from docchat.core.exceptions import NoAssistantReplyError, RunNotCompletedError, ValidationError
from docchat.core.prompts import ASSISTANT_INSTRUCTIONS
from docchat.core.reply_format import ReplyFormat, classify_reply

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatReply:
    """Assistant reply in thread mode."""

    text: str
    thread_id: str
    run_id: str
    format: ReplyFormat


@dataclass(frozen=True)
class ChainedReply:
    """Assistant reply in chaining mode."""

    text: str
    response_id: str
    format: ReplyFormat


@dataclass(frozen=True)
class HistoryMessage:
    role: str
    content: str
    format: ReplyFormat


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value


class ChatService:
    """
    Chat relay for thread and chaining modes.

    Holds no per-conversation state; thread IDs and response IDs travel
    with each request.
    """

    def __init__(self, provider: ProviderClient) -> None:
        """
        Initialize chat service.

        Args:
            provider: Provider client
        """
        self.provider = provider

    async def send_message(
        self,
        message: str | None,
        assistant_id: str | None,
        thread_id: str | None = None,
    ) -> ChatReply:
        """
        Send a message in thread mode and wait for the assistant's reply.

        Flow:
        1. Validate inputs (before any provider call)
        2. Create a thread if none was given
        3. Append the user message
        4. Run the assistant and poll to a terminal status
        5. Pick the newest assistant message produced by this run

        Args:
            message: User message
            assistant_id: Assistant to run
            thread_id: Existing thread, or None to start a new one

        Returns:
            ChatReply: Reply text, thread ID (new or given) and format hint

        Raises:
            ValidationError: Missing assistant ID or empty message
            RunNotCompletedError: Run ended in a status other than completed
            NoAssistantReplyError: No text reply from this run was found
            PollTimeoutError: Run did not finish before the deadline
            ProviderError: Provider call failed
        """
        assistant_id = _require(assistant_id, "assistant_id")
        message = _require(message, "message")

        if not thread_id:
            thread_id = await self.provider.create_thread()
            logger.info(f"{__name__}:send_message - created thread {thread_id}")

        await self.provider.add_user_message(thread_id, message)
        run = await self.provider.run_until_terminal(thread_id, assistant_id)

        if run.status != "completed":
            logger.warning(
                f"{__name__}:send_message - run {run.id} ended with status {run.status}",
                extra={"thread_id": thread_id, "assistant_id": assistant_id},
            )
            raise RunNotCompletedError(run.status, run_id=run.id)

        messages = await self.provider.list_messages(thread_id)
        reply = next(
            (m for m in messages if m.role == "assistant" and m.run_id == run.id),
            None,
        )
        if reply is None or reply.text is None:
            raise NoAssistantReplyError(thread_id=thread_id, run_id=run.id)

        return ChatReply(
            text=reply.text,
            thread_id=thread_id,
            run_id=run.id,
            format=classify_reply(reply.text),
        )

    async def get_history(self, thread_id: str) -> list[HistoryMessage]:
        """
        Get the text messages of a thread in chronological order.

        Args:
            thread_id: Provider thread ID

        Returns:
            list[HistoryMessage]: Oldest first; non-text messages omitted
        """
        thread_id = _require(thread_id, "thread_id")
        messages = await self.provider.list_messages(thread_id)

        history = [
            HistoryMessage(role=m.role, content=m.text, format=classify_reply(m.text))
            for m in messages
            if m.text is not None
        ]
        history.reverse()
        return history

    async def send_chained(
        self,
        message: str | None,
        vector_store_id: str | None,
        previous_response_id: str | None = None,
    ) -> ChainedReply:
        """
        Send a message in chaining mode.

        Args:
            message: User message
            vector_store_id: Vector store searched by the file search tool
            previous_response_id: Previous turn's response ID, if continuing

        Returns:
            ChainedReply: Reply text and the new response ID to chain from

        Raises:
            ValidationError: Missing vector store ID or empty message
            ProviderError: Provider call failed
        """
        vector_store_id = _require(vector_store_id, "vector_store_id")
        message = _require(message, "message")

        response = await self.provider.create_response(
            message=message,
            vector_store_id=vector_store_id,
            instructions=ASSISTANT_INSTRUCTIONS,
            previous_response_id=previous_response_id or None,
        )
        return ChainedReply(
            text=response.output_text,
            response_id=response.id,
            format=classify_reply(response.output_text),
        )

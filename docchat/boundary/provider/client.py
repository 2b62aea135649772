"""
AI provider client.

Wraps the OpenAI async SDK for the four resource kinds the application
uses: files, vector stores, assistants and threads (messages and runs),
plus the stateless responses API. The client is constructed explicitly
and injected into services; there is no module-level instance.

Every SDK error is translated into ProviderError carrying the provider's
status code and message. Every payload is decoded through
docchat.boundary.provider.schemas before it leaves this module.

Dependencies: openai, tenacity, docchat.boundary.provider.schemas
System role: Remote resource boundary for the provider
"""

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

import openai
from openai import AsyncOpenAI
from tenacity import AsyncRetrying, RetryError, retry_if_result, stop_after_delay, wait_fixed

from docchat.boundary.provider.schemas import (
    FileBatchSnapshot,
    FileRecord,
    ProviderResource,
    ResponseSnapshot,
    RunSnapshot,
    ThreadMessage,
    decode,
)
from docchat.configs.provider import ProviderSettings
from docchat.core.documents import UploadedDocument
from docchat.core.exceptions import PollTimeoutError, ProviderError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def translate_provider_errors(operation: str) -> Callable[[F], F]:
    """
    Decorator translating OpenAI SDK errors into ProviderError.

    The provider's status code and message are kept verbatim. Errors
    without a status code (connection failures, timeouts) become 502.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except openai.APIError as e:
                status_code = getattr(e, "status_code", None) or 502
                logger.warning(
                    f"{__name__}:{operation} - provider error",
                    extra={"operation": operation, "status_code": status_code, "error": e.message},
                )
                raise ProviderError(e.message, status_code=status_code, operation=operation) from e

        return wrapper  # type: ignore

    return decorator


class ProviderClient:
    """Async client for provider vector stores, assistants, threads and responses."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o",
        assistant_name: str = "AI Document Chat",
        poll_interval_seconds: float = 1.0,
        run_timeout_seconds: float = 120.0,
        indexing_timeout_seconds: float = 300.0,
    ) -> None:
        """
        Initialize provider client.

        Args:
            client: OpenAI async SDK client
            model: Model used for assistants and responses
            assistant_name: Name given to created assistants
            poll_interval_seconds: Interval between run / batch status polls
            run_timeout_seconds: Deadline for a run to reach a terminal status
            indexing_timeout_seconds: Deadline for a file batch to finish indexing
        """
        self._client = client
        self.model = model
        self.assistant_name = assistant_name
        self.poll_interval_seconds = poll_interval_seconds
        self.run_timeout_seconds = run_timeout_seconds
        self.indexing_timeout_seconds = indexing_timeout_seconds

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> "ProviderClient":
        """Build a client from provider settings."""
        return cls(
            client=AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url),
            model=settings.model,
            assistant_name=settings.assistant_name,
            poll_interval_seconds=settings.poll_interval_seconds,
            run_timeout_seconds=settings.run_timeout_seconds,
            indexing_timeout_seconds=settings.indexing_timeout_seconds,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    # Files

    @translate_provider_errors("retrieve_file")
    async def retrieve_file_name(self, file_id: str) -> str:
        """Return the filename of an uploaded file, falling back to its ID."""
        file = decode(FileRecord, await self._client.files.retrieve(file_id), "retrieve_file")
        return file.filename or file.id

    @translate_provider_errors("delete_file")
    async def delete_file(self, file_id: str) -> None:
        await self._client.files.delete(file_id)

    # Vector stores

    @translate_provider_errors("create_vector_store")
    async def create_vector_store(self, name: str) -> str:
        """
        Create an empty vector store.

        Args:
            name: Vector store display name

        Returns:
            str: Vector store ID
        """
        store = await self._client.vector_stores.create(name=name)
        return decode(ProviderResource, store, "create_vector_store").id

    @translate_provider_errors("upload_and_wait")
    async def upload_and_wait(
        self,
        vector_store_id: str,
        documents: Sequence[UploadedDocument],
    ) -> FileBatchSnapshot:
        """
        Upload documents into a vector store and block until indexing finishes.

        The whole batch succeeds or fails together.

        Args:
            vector_store_id: Target vector store
            documents: Documents to upload

        Returns:
            FileBatchSnapshot: Completed batch

        Raises:
            PollTimeoutError: Indexing did not finish before the deadline
            ProviderError: Upload failed or the batch did not complete cleanly
        """
        files = [(document.filename, document.content) for document in documents]
        try:
            batch = await asyncio.wait_for(
                self._client.vector_stores.file_batches.upload_and_poll(
                    vector_store_id=vector_store_id,
                    files=files,
                    poll_interval_ms=int(self.poll_interval_seconds * 1000),
                ),
                timeout=self.indexing_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise PollTimeoutError("file_batch", vector_store_id, self.indexing_timeout_seconds) from e

        snapshot = decode(FileBatchSnapshot, batch, "upload_and_wait")
        if snapshot.status != "completed" or snapshot.file_counts.failed:
            raise ProviderError(
                f"File batch {snapshot.id} ended with status {snapshot.status} "
                f"({snapshot.file_counts.failed} of {snapshot.file_counts.total} files failed)",
                operation="upload_and_wait",
            )
        logger.info(
            f"{__name__}:upload_and_wait - indexed {snapshot.file_counts.completed} files",
            extra={"vector_store_id": vector_store_id, "batch_id": snapshot.id},
        )
        return snapshot

    @translate_provider_errors("list_vector_store_files")
    async def list_vector_store_file_ids(self, vector_store_id: str) -> list[str]:
        """Return the IDs of all files indexed in a vector store."""
        file_ids = []
        async for vector_store_file in self._client.vector_stores.files.list(vector_store_id):
            file_ids.append(decode(ProviderResource, vector_store_file, "list_vector_store_files").id)
        return file_ids

    @translate_provider_errors("delete_vector_store")
    async def delete_vector_store(self, vector_store_id: str) -> None:
        await self._client.vector_stores.delete(vector_store_id)

    # Assistants

    @translate_provider_errors("create_assistant")
    async def create_assistant(self, vector_store_id: str, instructions: str) -> str:
        """
        Create an assistant with file search bound to a vector store.

        Args:
            vector_store_id: Vector store the assistant searches
            instructions: System instructions

        Returns:
            str: Assistant ID
        """
        assistant = await self._client.beta.assistants.create(
            name=self.assistant_name,
            instructions=instructions,
            model=self.model,
            tools=[{"type": "file_search"}],
            tool_resources={"file_search": {"vector_store_ids": [vector_store_id]}},
        )
        return decode(ProviderResource, assistant, "create_assistant").id

    @translate_provider_errors("delete_assistant")
    async def delete_assistant(self, assistant_id: str) -> None:
        await self._client.beta.assistants.delete(assistant_id)

    # Threads, messages and runs

    @translate_provider_errors("create_thread")
    async def create_thread(self) -> str:
        thread = await self._client.beta.threads.create()
        return decode(ProviderResource, thread, "create_thread").id

    @translate_provider_errors("delete_thread")
    async def delete_thread(self, thread_id: str) -> None:
        await self._client.beta.threads.delete(thread_id)

    @translate_provider_errors("add_message")
    async def add_user_message(self, thread_id: str, content: str) -> str:
        """Append a user message to a thread and return the message ID."""
        message = await self._client.beta.threads.messages.create(
            thread_id,
            role="user",
            content=content,
        )
        return decode(ProviderResource, message, "add_message").id

    @translate_provider_errors("list_messages")
    async def list_messages(self, thread_id: str) -> list[ThreadMessage]:
        """
        List all messages of a thread, newest first (provider order).

        Args:
            thread_id: Thread to read

        Returns:
            list[ThreadMessage]: Decoded messages
        """
        messages = []
        async for message in self._client.beta.threads.messages.list(thread_id, order="desc"):
            messages.append(decode(ThreadMessage, message, "list_messages"))
        return messages

    @translate_provider_errors("retrieve_run")
    async def _retrieve_run(self, thread_id: str, run_id: str) -> RunSnapshot:
        run = await self._client.beta.threads.runs.retrieve(run_id, thread_id=thread_id)
        return decode(RunSnapshot, run, "retrieve_run")

    @translate_provider_errors("create_run")
    async def _create_run(self, thread_id: str, assistant_id: str) -> RunSnapshot:
        run = await self._client.beta.threads.runs.create(thread_id, assistant_id=assistant_id)
        return decode(RunSnapshot, run, "create_run")

    async def run_until_terminal(self, thread_id: str, assistant_id: str) -> RunSnapshot:
        """
        Start a run of an assistant on a thread and poll until it is terminal.

        Polls every poll_interval_seconds; gives up after run_timeout_seconds.

        Args:
            thread_id: Thread to run on
            assistant_id: Assistant to run

        Returns:
            RunSnapshot: Run in a terminal status (not necessarily completed)

        Raises:
            PollTimeoutError: Run still pending at the deadline
            ProviderError: Creating or retrieving the run failed
        """
        run = await self._create_run(thread_id, assistant_id)
        if run.is_terminal:
            return run

        retrying = AsyncRetrying(
            retry=retry_if_result(lambda snapshot: not snapshot.is_terminal),
            wait=wait_fixed(self.poll_interval_seconds),
            stop=stop_after_delay(self.run_timeout_seconds),
            before_sleep=lambda retry_state: logger.debug(
                f"{__name__}:run_until_terminal - poll #{retry_state.attempt_number} run={run.id}"
            ),
        )
        try:
            return await retrying(self._retrieve_run, thread_id, run.id)
        except RetryError as e:
            raise PollTimeoutError("run", run.id, self.run_timeout_seconds) from e

    # Responses

    @translate_provider_errors("create_response")
    async def create_response(
        self,
        message: str,
        vector_store_id: str,
        instructions: str,
        previous_response_id: str | None = None,
    ) -> ResponseSnapshot:
        """
        Issue one stateless responses call with file search over a vector store.

        Args:
            message: User message
            vector_store_id: Vector store to search
            instructions: System instructions
            previous_response_id: Response to chain from, if any

        Returns:
            ResponseSnapshot: New response ID and output text
        """
        request: dict[str, Any] = {
            "model": self.model,
            "input": message,
            "instructions": instructions,
            "tools": [{"type": "file_search", "vector_store_ids": [vector_store_id]}],
        }
        if previous_response_id:
            request["previous_response_id"] = previous_response_id

        response = await self._client.responses.create(**request)
        return decode(
            ResponseSnapshot,
            {"id": getattr(response, "id", None), "output_text": getattr(response, "output_text", None)},
            "create_response",
        )

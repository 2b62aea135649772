"""
Test suite for ProviderClient.

Tests SDK error translation, payload decoding, run polling deadlines and
file batch indexing against a mocked AsyncOpenAI client.

System role: Verification of the provider boundary
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from docchat.boundary.provider.client import ProviderClient
from docchat.core.documents import UploadedDocument
from docchat.core.exceptions import PollTimeoutError, ProviderError, ProviderResponseShapeError


class AsyncPage:
    """Async-iterable stand-in for the SDK's auto-paginating list results."""

    def __init__(self, items: list) -> None:
        self._items = items

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for item in self._items:
            yield item


def _status_error(status_code: int, message: str) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/test")
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError(message, response=response, body=None)


@pytest.fixture
def mock_openai() -> MagicMock:
    """Provide mock AsyncOpenAI client."""
    return MagicMock()


@pytest.fixture
def provider(mock_openai: MagicMock) -> ProviderClient:
    """Provide ProviderClient with zero poll interval and short deadlines."""
    return ProviderClient(
        client=mock_openai,
        poll_interval_seconds=0,
        run_timeout_seconds=5,
        indexing_timeout_seconds=5,
    )


class TestErrorTranslation:
    """Test suite for provider error translation."""

    @pytest.mark.asyncio
    async def test_status_error_should_keep_status_and_message(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test provider status code and message pass through unchanged."""
        # Arrange
        mock_openai.beta.assistants.delete = AsyncMock(side_effect=_status_error(404, "No assistant found"))

        # Act & Assert
        with pytest.raises(ProviderError) as exc_info:
            await provider.delete_assistant("asst_missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "No assistant found"
        assert exc_info.value.operation == "delete_assistant"

    @pytest.mark.asyncio
    async def test_connection_error_should_map_to_502(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test errors without a status code become 502."""
        # Arrange
        request = httpx.Request("POST", "https://api.openai.com/v1/threads")
        mock_openai.beta.threads.create = AsyncMock(side_effect=openai.APIConnectionError(request=request))

        # Act & Assert
        with pytest.raises(ProviderError) as exc_info:
            await provider.create_thread()

        assert exc_info.value.status_code == 502


class TestResourceCreation:
    """Test suite for create operations."""

    @pytest.mark.asyncio
    async def test_create_vector_store_should_return_id(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test create_vector_store passes the name and returns the ID."""
        mock_openai.vector_stores.create = AsyncMock(return_value={"id": "vs_1", "object": "vector_store"})

        vector_store_id = await provider.create_vector_store("File Search Vector Store")

        assert vector_store_id == "vs_1"
        mock_openai.vector_stores.create.assert_awaited_once_with(name="File Search Vector Store")

    @pytest.mark.asyncio
    async def test_create_assistant_should_bind_vector_store(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test the assistant gets file search over the given vector store."""
        mock_openai.beta.assistants.create = AsyncMock(return_value={"id": "asst_1"})

        assistant_id = await provider.create_assistant("vs_1", "Be helpful")

        assert assistant_id == "asst_1"
        kwargs = mock_openai.beta.assistants.create.call_args.kwargs
        assert kwargs["name"] == "AI Document Chat"
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["tools"] == [{"type": "file_search"}]
        assert kwargs["tool_resources"] == {"file_search": {"vector_store_ids": ["vs_1"]}}

    @pytest.mark.asyncio
    async def test_create_thread_should_raise_shape_error_without_id(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test a payload missing its ID fails loudly."""
        mock_openai.beta.threads.create = AsyncMock(return_value={"object": "thread"})

        with pytest.raises(ProviderResponseShapeError, match="ProviderResource"):
            await provider.create_thread()


class TestUploadAndWait:
    """Test suite for upload_and_wait."""

    @pytest.mark.asyncio
    async def test_upload_and_wait_should_return_completed_batch(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test documents are forwarded as (filename, bytes) pairs."""
        # Arrange
        mock_openai.vector_stores.file_batches.upload_and_poll = AsyncMock(
            return_value={"id": "vsfb_1", "status": "completed", "file_counts": {"completed": 1, "total": 1}}
        )
        documents = [UploadedDocument(filename="a.pdf", content=b"data")]

        # Act
        batch = await provider.upload_and_wait("vs_1", documents)

        # Assert
        assert batch.status == "completed"
        kwargs = mock_openai.vector_stores.file_batches.upload_and_poll.call_args.kwargs
        assert kwargs["vector_store_id"] == "vs_1"
        assert kwargs["files"] == [("a.pdf", b"data")]

    @pytest.mark.asyncio
    async def test_upload_and_wait_should_fail_on_failed_files(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test a batch with failed files is a provider error."""
        mock_openai.vector_stores.file_batches.upload_and_poll = AsyncMock(
            return_value={
                "id": "vsfb_1",
                "status": "completed",
                "file_counts": {"completed": 1, "failed": 1, "total": 2},
            }
        )

        with pytest.raises(ProviderError, match="1 of 2 files failed"):
            await provider.upload_and_wait("vs_1", [UploadedDocument(filename="a.pdf", content=b"x")])

    @pytest.mark.asyncio
    async def test_upload_and_wait_should_time_out(
        self, mock_openai: MagicMock
    ) -> None:
        """Test indexing that outlives the deadline raises PollTimeoutError."""
        # Arrange
        async def never_finishes(**kwargs):
            await asyncio.sleep(10)

        mock_openai.vector_stores.file_batches.upload_and_poll = never_finishes
        provider = ProviderClient(client=mock_openai, indexing_timeout_seconds=0.01)

        # Act & Assert
        with pytest.raises(PollTimeoutError, match="file_batch vs_1"):
            await provider.upload_and_wait("vs_1", [UploadedDocument(filename="a.pdf", content=b"x")])


class TestRunUntilTerminal:
    """Test suite for run polling."""

    @pytest.mark.asyncio
    async def test_run_until_terminal_should_poll_until_completed(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test polling stops at the first terminal status."""
        # Arrange
        mock_openai.beta.threads.runs.create = AsyncMock(return_value={"id": "run_1", "status": "queued"})
        mock_openai.beta.threads.runs.retrieve = AsyncMock(
            side_effect=[
                {"id": "run_1", "status": "in_progress"},
                {"id": "run_1", "status": "completed"},
            ]
        )

        # Act
        run = await provider.run_until_terminal("thread_1", "asst_1")

        # Assert
        assert run.status == "completed"
        assert mock_openai.beta.threads.runs.retrieve.await_count == 2
        mock_openai.beta.threads.runs.create.assert_awaited_once_with("thread_1", assistant_id="asst_1")
        mock_openai.beta.threads.runs.retrieve.assert_awaited_with("run_1", thread_id="thread_1")

    @pytest.mark.asyncio
    async def test_run_until_terminal_should_return_failed_run(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test a failed run is terminal and returned, not raised."""
        mock_openai.beta.threads.runs.create = AsyncMock(return_value={"id": "run_1", "status": "queued"})
        mock_openai.beta.threads.runs.retrieve = AsyncMock(return_value={"id": "run_1", "status": "failed"})

        run = await provider.run_until_terminal("thread_1", "asst_1")

        assert run.status == "failed"

    @pytest.mark.asyncio
    async def test_run_until_terminal_should_time_out(
        self, mock_openai: MagicMock
    ) -> None:
        """Test a run still pending at the deadline raises PollTimeoutError."""
        # Arrange
        mock_openai.beta.threads.runs.create = AsyncMock(return_value={"id": "run_1", "status": "queued"})
        mock_openai.beta.threads.runs.retrieve = AsyncMock(return_value={"id": "run_1", "status": "in_progress"})
        provider = ProviderClient(client=mock_openai, poll_interval_seconds=0, run_timeout_seconds=0)

        # Act & Assert
        with pytest.raises(PollTimeoutError, match="run run_1"):
            await provider.run_until_terminal("thread_1", "asst_1")

    @pytest.mark.asyncio
    async def test_run_with_unknown_status_should_raise_shape_error(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test an unexpected status value is rejected at the boundary."""
        mock_openai.beta.threads.runs.create = AsyncMock(return_value={"id": "run_1", "status": "sleeping"})

        with pytest.raises(ProviderResponseShapeError, match="status"):
            await provider.run_until_terminal("thread_1", "asst_1")


class TestListings:
    """Test suite for paginated listings."""

    @pytest.mark.asyncio
    async def test_list_vector_store_file_ids(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test every page item is collected."""
        mock_openai.vector_stores.files.list = MagicMock(return_value=AsyncPage([{"id": "file_1"}, {"id": "file_2"}]))

        file_ids = await provider.list_vector_store_file_ids("vs_1")

        assert file_ids == ["file_1", "file_2"]

    @pytest.mark.asyncio
    async def test_list_messages_should_decode_text_parts(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test message content is decoded by part type."""
        # Arrange
        mock_openai.beta.threads.messages.list = MagicMock(
            return_value=AsyncPage(
                [
                    {
                        "id": "msg_2",
                        "role": "assistant",
                        "run_id": "run_1",
                        "content": [{"type": "text", "text": {"value": "Answer", "annotations": []}}],
                    },
                    {
                        "id": "msg_1",
                        "role": "user",
                        "content": [{"type": "image_file", "image_file": {"file_id": "file_9"}}],
                    },
                ]
            )
        )

        # Act
        messages = await provider.list_messages("thread_1")

        # Assert
        assert [m.text for m in messages] == ["Answer", None]
        assert messages[0].run_id == "run_1"
        mock_openai.beta.threads.messages.list.assert_called_once_with("thread_1", order="desc")

    @pytest.mark.asyncio
    async def test_list_messages_should_reject_unknown_content_type(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test an unknown content part type raises a shape error."""
        mock_openai.beta.threads.messages.list = MagicMock(
            return_value=AsyncPage([{"id": "msg_1", "role": "assistant", "content": [{"type": "video"}]}])
        )

        with pytest.raises(ProviderResponseShapeError):
            await provider.list_messages("thread_1")

    @pytest.mark.asyncio
    async def test_retrieve_file_name_should_fall_back_to_id(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test a file without a filename is reported by ID."""
        mock_openai.files.retrieve = AsyncMock(return_value={"id": "file_1", "filename": None})

        assert await provider.retrieve_file_name("file_1") == "file_1"


class TestCreateResponse:
    """Test suite for chained responses."""

    @pytest.mark.asyncio
    async def test_create_response_should_chain_previous_id(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test the previous response ID and file search tool are sent."""
        # Arrange
        mock_openai.responses.create = AsyncMock(return_value=SimpleNamespace(id="resp_2", output_text="Hi"))

        # Act
        response = await provider.create_response(
            message="Hello",
            vector_store_id="vs_1",
            instructions="Be helpful",
            previous_response_id="resp_1",
        )

        # Assert
        assert response.id == "resp_2"
        assert response.output_text == "Hi"
        kwargs = mock_openai.responses.create.call_args.kwargs
        assert kwargs["previous_response_id"] == "resp_1"
        assert kwargs["input"] == "Hello"
        assert kwargs["tools"] == [{"type": "file_search", "vector_store_ids": ["vs_1"]}]

    @pytest.mark.asyncio
    async def test_create_response_should_omit_missing_previous_id(
        self, provider: ProviderClient, mock_openai: MagicMock
    ) -> None:
        """Test a first turn sends no previous_response_id."""
        mock_openai.responses.create = AsyncMock(return_value=SimpleNamespace(id="resp_1", output_text="Hi"))

        await provider.create_response(message="Hello", vector_store_id="vs_1", instructions="x")

        assert "previous_response_id" not in mock_openai.responses.create.call_args.kwargs

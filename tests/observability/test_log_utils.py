"""
Test suite for structured logging helpers.

System role: Verification of log context rendering
"""

import logging

import pytest

from docchat.core.exceptions import ProviderError
from docchat.observability.log_utils import log_exception_with_context, log_with_context, safe_log_value


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "None"),
        (b"%PDF-1.4", "<8 bytes>"),
        (["a", "b"], "list(2 items)"),
        ({"a": 1}, "dict(1 keys)"),
        (42, "42"),
    ],
)
def test_safe_log_value(value, expected: str) -> None:
    """Test values are summarised or stringified."""
    assert safe_log_value(value) == expected


def test_safe_log_value_should_truncate_long_text() -> None:
    """Test long strings are truncated with their original length."""
    assert safe_log_value("x" * 20, max_length=5) == "xxxxx... (truncated, 20 total)"


def test_log_with_context_should_attach_extra(caplog: pytest.LogCaptureFixture) -> None:
    """Test context values land on the log record."""
    logger = logging.getLogger("docchat.test")

    with caplog.at_level(logging.WARNING, logger="docchat.test"):
        log_with_context(logger, logging.WARNING, "delete failed", resource_id="vs_1")

    assert caplog.records[0].resource_id == "vs_1"


def test_log_exception_with_context_should_use_error_message(caplog: pytest.LogCaptureFixture) -> None:
    """Test domain exceptions are logged by message with a traceback."""
    logger = logging.getLogger("docchat.test")
    error = ProviderError("Rate limit exceeded", status_code=429, operation="create_thread")

    with caplog.at_level(logging.ERROR, logger="docchat.test"):
        log_exception_with_context(logger, "provision failed", error, assistant_id=None)

    record = caplog.records[0]
    assert record.error_type == "ProviderError"
    assert record.error_msg == "Rate limit exceeded"
    assert record.assistant_id == "None"
    assert record.exc_info is not None

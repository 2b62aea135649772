"""
Test suite for observability middleware and logging.

System role: Verification of correlation ID propagation
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from docchat.observability.correlation import get_correlation_id
from docchat.observability.logger import CorrelationIdFilter
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    @app.get("/ping")
    async def ping() -> dict:
        return {"correlation_id": get_correlation_id()}

    return app


def test_correlation_middleware_should_echo_incoming_id() -> None:
    """Test a supplied X-Correlation-ID is used for the request and returned."""
    client = TestClient(_app())

    response = client.get("/ping", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
    assert response.json() == {"correlation_id": "abc-123"}


def test_correlation_middleware_should_generate_id() -> None:
    """Test a correlation ID is generated when none is supplied."""
    client = TestClient(_app())

    response = client.get("/ping")

    assert response.headers["X-Correlation-ID"]
    assert response.json()["correlation_id"] == response.headers["X-Correlation-ID"]


def test_correlation_filter_should_default_outside_request() -> None:
    """Test log records get a placeholder correlation ID outside a request."""
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)

    CorrelationIdFilter().filter(record)

    assert record.correlation_id == "-"

"""
Test suite for health endpoints.

System role: Verification of health check HTTP API
"""

from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.api.routers.health import router
from docchat.boundary.db import get_async_db


def _client(db: AsyncMock) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_async_db] = lambda: db
    return TestClient(app)


def test_health_check() -> None:
    """Test basic liveness."""
    response = _client(AsyncMock(spec=AsyncSession)).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db_should_run_query() -> None:
    """Test the database check executes a query."""
    db = AsyncMock(spec=AsyncSession)

    response = _client(db).get("/health/db")

    assert response.status_code == 200
    db.execute.assert_awaited_once()


def test_health_check_db_should_return_503_on_failure() -> None:
    """Test a failing database is reported as unavailable."""
    db = AsyncMock(spec=AsyncSession)
    db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("unable to open database file"))

    response = _client(db).get("/health/db")

    assert response.status_code == 503

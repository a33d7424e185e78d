"""Tests for mrlister.core.health: health check probes."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from mrlister.core.health import check_database, get_health_status


@pytest.fixture
async def sqlite_engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield eng
    await eng.dispose()


def _broken_engine(message: str = "connection refused") -> MagicMock:
    engine = MagicMock()
    engine.connect.side_effect = OSError(message)
    return engine


class TestCheckDatabase:
    """Verify database connectivity probe."""

    async def test_returns_up_on_success(self, sqlite_engine):
        result = await check_database(sqlite_engine)
        assert result["status"] == "up"
        assert result["latency_ms"] >= 0

    async def test_returns_down_on_failure(self):
        result = await check_database(_broken_engine())
        assert result["status"] == "down"
        assert "connection refused" in result["error"]


class TestGetHealthStatus:
    """Verify overall health status aggregation."""

    async def test_memory_backend_has_no_probes(self):
        result = await get_health_status(
            app_name="MrLister",
            app_version="0.1.0",
            app_env="development",
            storage_backend="memory",
        )
        assert result["status"] == "healthy"
        assert result["components"] == {}
        assert result["storage"] == "memory"
        assert "timestamp" in result

    async def test_healthy_when_database_up(self, sqlite_engine):
        result = await get_health_status(
            app_name="MrLister",
            app_version="0.1.0",
            app_env="production",
            storage_backend="sql",
            engine=sqlite_engine,
        )
        assert result["status"] == "healthy"
        assert result["components"]["database"]["status"] == "up"

    async def test_degraded_when_database_down(self):
        result = await get_health_status(
            app_name="MrLister",
            app_version="0.1.0",
            app_env="production",
            storage_backend="sql",
            engine=_broken_engine("db gone"),
        )
        assert result["status"] == "degraded"
        assert result["components"]["database"]["status"] == "down"

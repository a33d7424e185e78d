"""
Health check with dependency probes.

Checks:
- Application: always up if responding
- Database: execute ``SELECT 1`` (SQL storage backend only)

Returns 200 with ``"healthy"`` or ``"degraded"`` status: never 503.
Load balancers check for 200; the body indicates component health.
"""

import logging
import time
from datetime import UTC, datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def check_database(engine: AsyncEngine) -> dict:
    """
    Probe database connectivity.

    Returns:
        ``{"status": "up", "latency_ms": float}`` or
        ``{"status": "down", "error": str}``
    """
    try:
        start = time.monotonic()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        latency = round((time.monotonic() - start) * 1000, 1)
        return {"status": "up", "latency_ms": latency}
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database health check failed: {e}")
        return {"status": "down", "error": str(e)}


async def get_health_status(
    app_name: str,
    app_version: str,
    app_env: str,
    storage_backend: str,
    engine: AsyncEngine | None = None,
) -> dict:
    """
    Build complete health status response.

    Overall status is ``"healthy"`` if all configured probes pass,
    ``"degraded"`` if any fail. The in-memory backend has no probes.
    """
    components: dict[str, dict] = {}
    if engine is not None:
        components["database"] = await check_database(engine)

    all_up = all(c["status"] == "up" for c in components.values())
    overall = "healthy" if (not components or all_up) else "degraded"

    return {
        "status": overall,
        "app": app_name,
        "version": app_version,
        "environment": app_env,
        "storage": storage_backend,
        "timestamp": datetime.now(UTC).isoformat(),
        "components": components,
    }

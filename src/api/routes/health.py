"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import HealthResponse, ProviderHealthResponse
from src.config import get_settings
from src.core.exceptions import ConnectivityError

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Service and database health.

    Runs a lightweight count against the inventory table; the service is
    reported degraded when the database cannot answer.
    """
    from src.infrastructure.storage.sqlite import get_pool

    settings = get_settings()
    start = time.time()
    try:
        pool = await get_pool()
        available = await pool.check_health()
        database = ProviderHealthResponse(
            name="sqlite",
            available=available,
            latency_ms=(time.time() - start) * 1000,
        )
    except ConnectivityError as e:
        database = ProviderHealthResponse(name="sqlite", available=False, error=e.message)

    return HealthResponse(
        status="healthy" if database.available else "degraded",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and liveness endpoints for the API.
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from emoreg.api.dependencies import get_catalog
from emoreg.core.config import Settings, get_settings
from emoreg.core.emotional.strategies import StrategyCatalog
from emoreg.infrastructure.database.connection import check_database_connection
from emoreg.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    latency_ms: float | None = Field(None, description="Response latency in ms")
    message: str | None = Field(None, description="Additional status message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    strategies: int = Field(description="Strategies in the loaded catalog")
    database: ComponentHealth


class LivenessResponse(BaseModel):
    """Liveness check response model."""
    alive: bool = True


async def check_database() -> ComponentHealth:
    """Check the database connection."""
    start = time.time()
    healthy = await check_database_connection()
    latency = (time.time() - start) * 1000

    if healthy:
        return ComponentHealth(status="healthy", latency_ms=round(latency, 2))
    return ComponentHealth(status="unhealthy", message="Database not reachable")


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    catalog: StrategyCatalog = Depends(get_catalog),
) -> HealthResponse:
    """Report service status, version and component health.

    The service is "degraded" when the database is unreachable; the
    engines and catalog keep working without it.
    """
    db_health = await check_database()

    return HealthResponse(
        status="healthy" if db_health.status == "healthy" else "degraded",
        timestamp=utc_now(),
        version=settings.version,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
        strategies=len(catalog),
        database=db_health,
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check() -> LivenessResponse:
    """Liveness probe: the process is up and serving requests."""
    return LivenessResponse()

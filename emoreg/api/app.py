# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the emotional
regulation API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from emoreg.api.dependencies import close_db, init_db
from emoreg.api.middleware.auth import AuthMiddleware
from emoreg.api.middleware.rate_limit import limiter
from emoreg.api.routes import health
from emoreg.api.v1 import router as v1_router
from emoreg.core.config import get_settings
from emoreg.core.emotional.exceptions import InvalidRequestValueError
from emoreg.core.emotional.strategies import get_strategy_catalog
from emoreg.domains.regulation.service import (
    SettingsNotFoundError,
    StrategyNotFoundError,
)
from emoreg.infrastructure.database.connection import DatabaseError
from emoreg.utils.logging import clear_context, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Loads the strategy catalog (failing fast if it is invalid) and opens
    the database pool on startup; closes the pool on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting emotional regulation API",
        extra={"environment": settings.environment, "debug": settings.debug},
    )

    catalog = get_strategy_catalog(settings.analysis.strategy_catalog_path)
    logger.info("Strategy catalog ready: %d strategies", len(catalog))

    try:
        await init_db()
    except DatabaseError as e:
        logger.error("Failed to initialize database: %s", str(e))
        raise

    yield

    try:
        await close_db()
        logger.info("Database connections closed")
    except DatabaseError as e:
        logger.warning("Error closing database connections: %s", str(e))

    logger.info("Shutting down emotional regulation API")


# =========================================================================
# Exception handlers
# =========================================================================


async def invalid_request_value_handler(
    request: Request, exc: InvalidRequestValueError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid parameters",
            "details": {
                "field": exc.field,
                "value": str(exc.value),
                "allowed": list(exc.allowed),
            },
        },
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid parameters", "details": jsonable_encoder(exc.errors())},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def settings_not_found_handler(
    request: Request, exc: SettingsNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "User settings not found"},
    )


async def strategy_not_found_handler(
    request: Request, exc: StrategyNotFoundError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Strategy not found"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Emotional Regulation API",
        description="Emotion pattern recognition and regulation strategy recommendations",
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(InvalidRequestValueError, invalid_request_value_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SettingsNotFoundError, settings_not_found_handler)
    app.add_exception_handler(StrategyNotFoundError, strategy_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    # Rate limiting runs after auth so limits are keyed by user
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(AuthMiddleware)

    @app.middleware("http")
    async def reset_log_context(request: Request, call_next):
        clear_context()
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app

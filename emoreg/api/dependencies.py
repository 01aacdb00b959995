# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Dependencies are used to:
- Get database sessions
- Get the authenticated user
- Get the strategy catalog and service instances

Example:
    @router.get("/strategies")
    async def list_strategies(
        current_user: CurrentUser = Depends(require_auth),
        catalog: StrategyCatalog = Depends(get_catalog),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from emoreg.api.middleware.auth import CurrentUser, get_current_user
from emoreg.core.config import Settings, get_settings
from emoreg.core.emotional.strategies import StrategyCatalog, get_strategy_catalog
from emoreg.domains.regulation.service import EmotionalRegulationService
from emoreg.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from emoreg.utils.logging import bind_context

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool.

    Called during application startup.
    """
    settings = get_settings()
    await init_database(settings)
    logger.info("Database initialized")


async def close_db() -> None:
    """Close the database connection pool.

    Called during application shutdown.
    """
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession committed on success and rolled back on error.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require an authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        HTTPException: If not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    bind_context(user_id=user.id)
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_catalog(settings: Settings = Depends(get_settings)) -> StrategyCatalog:
    """Get the regulation strategy catalog."""
    return get_strategy_catalog(settings.analysis.strategy_catalog_path)


def get_regulation_service(
    db: AsyncSession = Depends(get_db),
    catalog: StrategyCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
) -> EmotionalRegulationService:
    """Get an emotional regulation service bound to the request session."""
    return EmotionalRegulationService(db=db, catalog=catalog, settings=settings)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

Limits are applied per client: the authenticated user when known,
otherwise the remote IP address. Limits are kept in process memory.

Example:
    @router.get("/strategy-recommendations")
    @limiter.limit("30/minute")
    async def get_strategy_recommendations(request: Request, ...):
        ...
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from emoreg.core.config import get_settings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Args:
        request: HTTP request.

    Returns:
        ``user:<id>`` for authenticated requests, ``ip:<address>`` otherwise.
    """
    user = getattr(request.state, "user", None)
    if user:
        return f"user:{user.id}"
    return f"ip:{get_remote_address(request)}"


def create_limiter() -> Limiter:
    """Create the limiter from the current settings."""
    settings = get_settings()
    return Limiter(
        key_func=get_client_identifier,
        default_limits=[f"{settings.rate_limit.requests_per_minute}/minute"],
        enabled=settings.rate_limit.enabled,
    )


limiter = create_limiter()

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    emotional_regulation: Pattern recognition and strategy recommendation
        endpoints.
"""

from fastapi import APIRouter

from emoreg.api.v1 import emotional_regulation

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(
    emotional_regulation.router,
    prefix="/emotional-regulation",
    tags=["Emotional Regulation"],
)

__all__ = ["router"]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gateway identity middleware.

Token validation happens in the platform gateway in front of this service.
The gateway forwards the authenticated user's id in the ``X-User-Id``
header; this middleware turns it into ``request.state.user``.

Example:
    GET /api/v1/emotional-regulation/pattern-recognition
    X-User-Id: 7f1c...
"""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


class CurrentUser:
    """Authenticated user resolved by the gateway.

    Attributes:
        id: User identifier.
    """

    def __init__(self, user_id: str) -> None:
        self.id = user_id

    def __repr__(self) -> str:
        return f"CurrentUser(id={self.id!r})"


class AuthMiddleware(BaseHTTPMiddleware):
    """Populate request.state.user from the gateway identity header.

    Requests without the header continue with ``request.state.user = None``
    and endpoints decide whether authentication is required.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        request.state.user = None

        user_id = request.headers.get(USER_ID_HEADER, "").strip()
        if user_id:
            request.state.user = CurrentUser(user_id)
            logger.debug("User resolved from gateway header: %s", user_id)

        return await call_next(request)


def get_current_user(request: Request) -> CurrentUser | None:
    """Get the current user from request state, None if anonymous."""
    return getattr(request.state, "user", None)

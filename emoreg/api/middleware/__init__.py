# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware: gateway identity and rate limiting."""

from emoreg.api.middleware.auth import AuthMiddleware, CurrentUser, get_current_user
from emoreg.api.middleware.rate_limit import get_client_identifier, limiter

__all__ = [
    "AuthMiddleware",
    "CurrentUser",
    "get_current_user",
    "get_client_identifier",
    "limiter",
]

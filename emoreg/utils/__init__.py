# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from emoreg.utils.datetime import (
    days_ago,
    ensure_utc,
    format_iso,
    parse_iso,
    resolve_timezone,
    to_local,
    utc_date_key,
    utc_now,
)
from emoreg.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "ensure_utc",
    "days_ago",
    "resolve_timezone",
    "to_local",
    "utc_date_key",
    "format_iso",
    "parse_iso",
]

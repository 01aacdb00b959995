# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point.

Run with ``uvicorn emoreg.main:app`` or the ``emoreg-api`` script.
"""

import uvicorn

from emoreg.api import create_app
from emoreg.core.config import get_settings

app = create_app()


def run() -> None:
    """Serve the API with the configured host, port and workers."""
    settings = get_settings()
    uvicorn.run(
        "emoreg.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
        log_config=None,
    )

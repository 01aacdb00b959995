# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure: async connection management and ORM models."""

from emoreg.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    get_session,
    get_sessionmaker,
    init_database,
)
from emoreg.infrastructure.database.models import (
    Base,
    EmotionalRegulationLog,
    EmotionalRegulationSettings,
    EmotionJournal,
    EmotionRecord,
)

__all__ = [
    "DatabaseError",
    "init_database",
    "close_database",
    "get_session",
    "get_sessionmaker",
    "check_database_connection",
    "Base",
    "EmotionRecord",
    "EmotionJournal",
    "EmotionalRegulationSettings",
    "EmotionalRegulationLog",
]

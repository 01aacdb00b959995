# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for emotional regulation data.

Tables:
- emotion_records: emotions a user logged
- emotion_journals: free-text journal entries
- emotional_regulation_settings: one row of regulation settings per user
- emotional_regulation_logs: append-only activity log (feedback, updates)
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from emoreg.utils.datetime import utc_now

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    """Declarative base for all emoreg tables."""

    pass


class EmotionRecord(Base):
    """A logged emotion with intensity and optional triggers."""

    __tablename__ = "emotion_records"
    __table_args__ = (Index("ix_emotion_records_user_timestamp", "user_id", "timestamp"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    emotion: Mapped[str] = mapped_column(String(100), nullable=False)
    intensity: Mapped[float] = mapped_column(Float, nullable=False)
    # Free text or a list of tags; legacy rows may hold anything
    triggers: Mapped[Any | None] = mapped_column(JSONType, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )


class EmotionJournal(Base):
    """A free-text journal entry."""

    __tablename__ = "emotion_journals"
    __table_args__ = (Index("ix_emotion_journals_user_timestamp", "user_id", "timestamp"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    emotion: Mapped[str | None] = mapped_column(String(100), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )


class EmotionalRegulationSettings(Base):
    """Per-user regulation settings.

    ``strategy_preferences`` holds the stored preference document
    (preferredTypes, complexity, autoSuggest, favorites).
    """

    __tablename__ = "emotional_regulation_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    strategy_preferences: Mapped[dict[str, Any] | None] = mapped_column(
        JSONType, nullable=True
    )
    reminder_frequency: Mapped[str] = mapped_column(
        String(20), nullable=False, default="medium"
    )
    pattern_recognition_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    pattern_recognition_settings: Mapped[dict[str, Any] | None] = mapped_column(
        JSONType, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )


class EmotionalRegulationLog(Base):
    """Append-only regulation activity log entry."""

    __tablename__ = "emotional_regulation_logs"
    __table_args__ = (
        Index("ix_emotional_regulation_logs_user_action", "user_id", "action", "timestamp"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

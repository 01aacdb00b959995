# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotional regulation service.

This module provides the EmotionalRegulationService class for:
- Pattern analysis over a user's emotion history
- Personalized strategy recommendations
- Recording strategy feedback
- Updating strategy preferences and pattern recognition settings

Rows are fetched scoped to the user and handed to the pure engines in
emoreg.core.emotional; the engines never touch the database.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from emoreg.core.config.settings import Settings
from emoreg.core.emotional.constants import RegulationLogAction
from emoreg.core.emotional.context import (
    EmotionEvent,
    EmotionJournalEntry,
    RecommendationRequest,
    StrategyEffectiveness,
    StrategyFeedback,
    StrategyRecommendation,
    UserPreferences,
)
from emoreg.core.emotional.patterns import analyze, parse_scope
from emoreg.core.emotional.recommendations import (
    HashJitter,
    aggregate_feedback,
    recommend,
    rerank_for_mood,
)
from emoreg.core.emotional.strategies import StrategyCatalog
from emoreg.infrastructure.database.models import (
    EmotionalRegulationLog,
    EmotionalRegulationSettings,
    EmotionJournal,
    EmotionRecord,
)
from emoreg.models.regulation import (
    EmotionJournalResponse,
    EmotionRecordResponse,
    PatternRecognitionResponse,
    StrategyRecommendationsResponse,
)
from emoreg.utils.datetime import days_ago, resolve_timezone, utc_now

logger = logging.getLogger(__name__)

FEEDBACK_DEFAULT_EMOTION = "Unknown"


class RegulationServiceError(Exception):
    """Base exception for emotional regulation service errors."""

    pass


class SettingsNotFoundError(RegulationServiceError):
    """Raised when a user has no emotional regulation settings row."""

    pass


class StrategyNotFoundError(RegulationServiceError):
    """Raised when feedback names a strategy that is not in the catalog."""

    pass


class EmotionalRegulationService:
    """Service for emotional pattern analysis and strategy recommendation.

    Attributes:
        db: Async database session.
        catalog: Regulation strategy catalog.
        settings: Application settings.
    """

    def __init__(
        self,
        db: AsyncSession,
        catalog: StrategyCatalog,
        settings: Settings,
    ) -> None:
        """Initialize the emotional regulation service.

        Args:
            db: Async database session.
            catalog: Regulation strategy catalog.
            settings: Application settings (analysis window, timezone).
        """
        self.db = db
        self.catalog = catalog
        self.settings = settings
        self._jitter = HashJitter(settings.analysis.score_jitter_salt)

    # =========================================================================
    # Pattern recognition
    # =========================================================================

    async def get_pattern_analysis(
        self,
        user_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        emotions: Sequence[str] | None = None,
        analysis_type: str = "all",
    ) -> PatternRecognitionResponse:
        """Analyze a user's emotion history in a time window.

        Args:
            user_id: User whose records are analyzed.
            start: Window start. Defaults to ``default_window_days`` before end.
            end: Window end. Defaults to now.
            emotions: Only include these labels. Ignored when empty or when
                it contains "all".
            analysis_type: Scope of the analysis.

        Returns:
            Records, journals and the pattern analysis for the window.

        Raises:
            InvalidScopeRequestError: If analysis_type is not a known scope.
        """
        scope = parse_scope(analysis_type)

        end = end or utc_now()
        start = start or days_ago(self.settings.analysis.default_window_days, end)

        record_query = select(EmotionRecord).where(
            EmotionRecord.user_id == user_id,
            EmotionRecord.timestamp >= start,
            EmotionRecord.timestamp <= end,
        )
        if emotions and "all" not in emotions:
            record_query = record_query.where(EmotionRecord.emotion.in_(list(emotions)))
        record_query = record_query.order_by(EmotionRecord.timestamp.desc())

        journal_query = (
            select(EmotionJournal)
            .where(
                EmotionJournal.user_id == user_id,
                EmotionJournal.timestamp >= start,
                EmotionJournal.timestamp <= end,
            )
            .order_by(EmotionJournal.timestamp.desc())
        )

        records = (await self.db.execute(record_query)).scalars().all()
        journals = (await self.db.execute(journal_query)).scalars().all()

        analysis = analyze(
            [_to_event(record) for record in records],
            [_to_journal_entry(journal) for journal in journals],
            scope=scope,
            tz=resolve_timezone(self.settings.analysis.timezone),
        )

        logger.info(
            "Pattern analysis for user %s: %d records, %d journals (%s)",
            user_id,
            len(records),
            len(journals),
            scope.value,
        )

        return PatternRecognitionResponse(
            emotion_records=[EmotionRecordResponse.model_validate(r) for r in records],
            emotion_journals=[EmotionJournalResponse.model_validate(j) for j in journals],
            pattern_analysis=analysis,
        )

    async def update_pattern_settings(
        self,
        user_id: str,
        enabled: bool | None = None,
        settings: dict[str, Any] | None = None,
    ) -> None:
        """Update pattern recognition settings.

        Args:
            user_id: User whose settings are updated.
            enabled: Whether pattern recognition is on. Defaults to True.
            settings: Free-form settings document. Defaults to {}.

        Raises:
            SettingsNotFoundError: If the user has no settings row.
        """
        row = await self._require_settings(user_id)
        row.pattern_recognition_enabled = True if enabled is None else enabled
        row.pattern_recognition_settings = settings if settings is not None else {}

        self._log_action(
            user_id,
            RegulationLogAction.UPDATE_PATTERN_RECOGNITION_SETTINGS,
            {"enabled": enabled, "settings": settings},
        )
        await self.db.commit()

        logger.info("Updated pattern recognition settings for user %s", user_id)

    # =========================================================================
    # Strategy recommendations
    # =========================================================================

    async def get_recommendations(
        self,
        user_id: str,
        request: RecommendationRequest,
        current_mood: str | None = None,
    ) -> StrategyRecommendationsResponse:
        """Recommend regulation strategies for a user.

        Args:
            user_id: User to recommend for.
            request: Per-call parameters.
            current_mood: Mood the user reports right now; re-ranks the
                result towards strategies suited to it.

        Returns:
            Recommendations and the stored preferences they used.

        Raises:
            SettingsNotFoundError: If the user has no settings row.
        """
        row = await self._require_settings(user_id)
        preferences = UserPreferences.from_stored(
            row.strategy_preferences, row.reminder_frequency
        )

        since = days_ago(self.settings.analysis.recommendation_history_days)
        record_query = (
            select(EmotionRecord)
            .where(EmotionRecord.user_id == user_id, EmotionRecord.timestamp >= since)
            .order_by(EmotionRecord.timestamp.desc())
        )
        records = (await self.db.execute(record_query)).scalars().all()
        events = [_to_event(record) for record in records]
        feedback_log = await self._load_feedback(user_id)

        recommendations: list[StrategyRecommendation] = recommend(
            self.catalog,
            events,
            feedback_log,
            preferences,
            request,
            jitter=self._jitter,
        )
        if current_mood:
            recommendations = rerank_for_mood(
                self.catalog, recommendations, current_mood, jitter=self._jitter
            )

        logger.info(
            "Generated %d recommendations for user %s from %d records and %d feedback",
            len(recommendations),
            user_id,
            len(events),
            len(feedback_log),
        )

        return StrategyRecommendationsResponse(
            recommendations=recommendations,
            user_preferences=preferences,
        )

    async def record_feedback(self, user_id: str, feedback: StrategyFeedback) -> None:
        """Append strategy feedback to the activity log.

        Raises:
            StrategyNotFoundError: If the strategy is not in the catalog.
        """
        if feedback.strategy_id not in self.catalog:
            raise StrategyNotFoundError(f"Strategy not found: {feedback.strategy_id}")

        self._log_action(
            user_id,
            RegulationLogAction.STRATEGY_FEEDBACK,
            {
                "strategyId": feedback.strategy_id,
                "effectiveness": feedback.effectiveness,
                "notes": feedback.notes or "",
                "emotion": feedback.emotion or FEEDBACK_DEFAULT_EMOTION,
            },
            timestamp=feedback.timestamp,
        )
        await self.db.commit()

        logger.info(
            "Recorded feedback for strategy %s from user %s (%d/5)",
            feedback.strategy_id,
            user_id,
            feedback.effectiveness,
        )

    async def update_preferences(
        self,
        user_id: str,
        preferences: UserPreferences,
    ) -> UserPreferences:
        """Replace the stored strategy preferences.

        Raises:
            SettingsNotFoundError: If the user has no settings row.
        """
        row = await self._require_settings(user_id)
        row.strategy_preferences = preferences.to_stored()
        row.reminder_frequency = preferences.reminder_frequency.value

        self._log_action(
            user_id,
            RegulationLogAction.UPDATE_STRATEGY_PREFERENCES,
            preferences.model_dump(mode="json"),
        )
        await self.db.commit()

        logger.info("Updated strategy preferences for user %s", user_id)
        return preferences

    async def get_strategy_effectiveness(self, user_id: str) -> list[StrategyEffectiveness]:
        """Aggregate the user's feedback per strategy."""
        return list(aggregate_feedback(await self._load_feedback(user_id)).values())

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _require_settings(self, user_id: str) -> EmotionalRegulationSettings:
        query = select(EmotionalRegulationSettings).where(
            EmotionalRegulationSettings.user_id == user_id
        )
        result = await self.db.execute(query)
        row = result.scalar_one_or_none()
        if row is None:
            raise SettingsNotFoundError(f"User settings not found: {user_id}")
        return row

    async def _load_feedback(self, user_id: str) -> list[StrategyFeedback]:
        """Load feedback log entries, newest first."""
        query = (
            select(EmotionalRegulationLog)
            .where(
                EmotionalRegulationLog.user_id == user_id,
                EmotionalRegulationLog.action == RegulationLogAction.STRATEGY_FEEDBACK.value,
            )
            .order_by(EmotionalRegulationLog.timestamp.desc())
        )
        rows = (await self.db.execute(query)).scalars().all()

        feedback: list[StrategyFeedback] = []
        for row in rows:
            details = row.details or {}
            try:
                feedback.append(
                    StrategyFeedback(
                        strategy_id=details.get("strategyId"),
                        effectiveness=details.get("effectiveness"),
                        notes=details.get("notes"),
                        emotion=details.get("emotion"),
                        timestamp=row.timestamp,
                    )
                )
            except ValidationError:
                logger.warning("Skipping malformed feedback log entry %s", row.id)
        return feedback

    def _log_action(
        self,
        user_id: str,
        action: RegulationLogAction,
        details: dict[str, Any],
        timestamp: datetime | None = None,
    ) -> None:
        self.db.add(
            EmotionalRegulationLog(
                user_id=user_id,
                action=action.value,
                details=details,
                timestamp=timestamp or utc_now(),
            )
        )


def _to_event(record: EmotionRecord) -> EmotionEvent:
    return EmotionEvent(
        id=record.id,
        user_id=record.user_id,
        timestamp=record.timestamp,
        emotion=record.emotion,
        intensity=record.intensity,
        triggers=record.triggers,
    )


def _to_journal_entry(journal: EmotionJournal) -> EmotionJournalEntry:
    return EmotionJournalEntry(
        id=journal.id,
        user_id=journal.user_id,
        timestamp=journal.timestamp,
        content=journal.content or "",
        emotion=journal.emotion,
    )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the emotional regulation service."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from emoreg.core.config.settings import Settings
from emoreg.core.emotional.constants import ReasonType, StrategyComplexity
from emoreg.core.emotional.context import (
    RecommendationRequest,
    StrategyFeedback,
    UserPreferences,
)
from emoreg.core.emotional.exceptions import InvalidScopeRequestError
from emoreg.domains.regulation.service import (
    EmotionalRegulationService,
    SettingsNotFoundError,
    StrategyNotFoundError,
)
from emoreg.infrastructure.database.models import (
    EmotionalRegulationLog,
    EmotionalRegulationSettings,
    EmotionJournal,
    EmotionRecord,
)


def scalars_result(rows):
    """Mock an execute() result whose scalars().all() returns rows."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


def scalar_result(row):
    """Mock an execute() result whose scalar_one_or_none() returns row."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def service(mock_db, catalog):
    """Create the regulation service with mock database."""
    return EmotionalRegulationService(db=mock_db, catalog=catalog, settings=Settings())


@pytest.fixture
def settings_row(sample_user_id):
    """A stored settings row preferring simple physical strategies."""
    now = datetime.now(timezone.utc)
    return EmotionalRegulationSettings(
        id="settings-1",
        user_id=sample_user_id,
        strategy_preferences={
            "preferredTypes": ["physical"],
            "complexity": "simple",
            "autoSuggest": True,
            "favorites": [],
        },
        reminder_frequency="low",
        pattern_recognition_enabled=False,
        pattern_recognition_settings=None,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def make_record(sample_user_id, base_time):
    """Build stored emotion records, one hour apart."""

    def _make(index: int, emotion: str, triggers=None) -> EmotionRecord:
        return EmotionRecord(
            id=f"record-{index}",
            user_id=sample_user_id,
            emotion=emotion,
            intensity=3.0,
            triggers=triggers,
            notes=None,
            timestamp=base_time + timedelta(hours=index),
        )

    return _make


@pytest.fixture
def make_log(sample_user_id, base_time):
    """Build stored feedback log rows."""

    def _make(index: int, details: dict) -> EmotionalRegulationLog:
        return EmotionalRegulationLog(
            id=f"log-{index}",
            user_id=sample_user_id,
            action="strategy_feedback",
            details=details,
            timestamp=base_time - timedelta(days=index),
        )

    return _make


class TestPatternAnalysis:
    """Tests for get_pattern_analysis."""

    @pytest.mark.asyncio
    async def test_analyzes_records_in_window(
        self, service, mock_db, make_record, sample_user_id, base_time
    ):
        """Test records and journals are returned with their analysis."""
        records = [
            make_record(1, "Sad", triggers="Exam"),
            make_record(0, "Anxious", triggers="Exam"),
        ]
        journal = EmotionJournal(
            id="journal-1",
            user_id=sample_user_id,
            title="Monday",
            content="Long day.",
            emotion="Sad",
            timestamp=base_time,
        )
        mock_db.execute.side_effect = [scalars_result(records), scalars_result([journal])]

        result = await service.get_pattern_analysis(
            sample_user_id,
            start=base_time - timedelta(days=1),
            end=base_time + timedelta(days=1),
        )

        assert [r.id for r in result.emotion_records] == ["record-1", "record-0"]
        assert result.emotion_journals[0].title == "Monday"
        analysis = result.pattern_analysis
        assert analysis.event_count == 2
        assert analysis.journal_count == 1
        assert analysis.trigger_patterns[0].trigger == "Exam"
        assert analysis.trigger_patterns[0].total == 2
        assert analysis.emotion_correlations[0].count == 1
        assert mock_db.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_no_records_gives_empty_analysis(self, service, mock_db, sample_user_id):
        mock_db.execute.side_effect = [scalars_result([]), scalars_result([])]

        result = await service.get_pattern_analysis(sample_user_id)

        assert result.emotion_records == []
        assert result.pattern_analysis.insights == []
        assert result.pattern_analysis.time_patterns.hourly == []

    @pytest.mark.asyncio
    async def test_scope_is_validated_first(self, service, mock_db, sample_user_id):
        """Test an unknown analysis type fails before querying."""
        with pytest.raises(InvalidScopeRequestError):
            await service.get_pattern_analysis(sample_user_id, analysis_type="moods")

        mock_db.execute.assert_not_awaited()


class TestPatternSettings:
    """Tests for update_pattern_settings."""

    @pytest.mark.asyncio
    async def test_defaults_applied(self, service, mock_db, settings_row, sample_user_id):
        mock_db.execute.return_value = scalar_result(settings_row)

        await service.update_pattern_settings(sample_user_id)

        assert settings_row.pattern_recognition_enabled is True
        assert settings_row.pattern_recognition_settings == {}
        logged = mock_db.add.call_args.args[0]
        assert logged.action == "update_pattern_recognition_settings"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_values_stored(self, service, mock_db, settings_row, sample_user_id):
        mock_db.execute.return_value = scalar_result(settings_row)

        await service.update_pattern_settings(
            sample_user_id, enabled=False, settings={"sensitivity": "high"}
        )

        assert settings_row.pattern_recognition_enabled is False
        assert settings_row.pattern_recognition_settings == {"sensitivity": "high"}

    @pytest.mark.asyncio
    async def test_missing_settings_row(self, service, mock_db, sample_user_id):
        mock_db.execute.return_value = scalar_result(None)

        with pytest.raises(SettingsNotFoundError):
            await service.update_pattern_settings(sample_user_id, enabled=True)

        mock_db.commit.assert_not_awaited()


class TestRecommendations:
    """Tests for get_recommendations."""

    @pytest.mark.asyncio
    async def test_uses_stored_preferences_and_feedback(
        self, service, mock_db, settings_row, make_record, make_log, sample_user_id
    ):
        """Test proven strategies rank first and preferences filter the pool."""
        records = [make_record(0, "Anxious"), make_record(1, "Angry")]
        logs = [
            make_log(0, {"strategyId": "deep-breathing", "effectiveness": 5}),
            make_log(1, {"strategyId": "deep-breathing", "effectiveness": 5}),
        ]
        mock_db.execute.side_effect = [
            scalar_result(settings_row),
            scalars_result(records),
            scalars_result(logs),
        ]

        result = await service.get_recommendations(sample_user_id, RecommendationRequest())

        first = result.recommendations[0]
        assert first.id == "deep-breathing"
        assert first.reason_type is ReasonType.EFFECTIVENESS
        assert first.score == 100.0
        assert all(rec.category == "physical" for rec in result.recommendations)
        assert result.user_preferences.strategy_complexity is StrategyComplexity.SIMPLE
        assert result.user_preferences.reminder_frequency.value == "low"

    @pytest.mark.asyncio
    async def test_current_mood_reranks(
        self, service, mock_db, settings_row, make_record, make_log, sample_user_id
    ):
        logs = [
            make_log(0, {"strategyId": "deep-breathing", "effectiveness": 5}),
            make_log(1, {"strategyId": "deep-breathing", "effectiveness": 5}),
        ]
        mock_db.execute.side_effect = [
            scalar_result(settings_row),
            scalars_result([make_record(0, "Angry")]),
            scalars_result(logs),
        ]

        result = await service.get_recommendations(
            sample_user_id, RecommendationRequest(), current_mood="Anxious"
        )

        assert len(result.recommendations) <= 6
        assert result.recommendations[0].id == "deep-breathing"
        assert result.recommendations[0].score == 110.0
        assert all(
            rec.reason_type is ReasonType.CURRENT_MOOD for rec in result.recommendations
        )

    @pytest.mark.asyncio
    async def test_no_history_gives_no_recommendations(
        self, service, mock_db, settings_row, sample_user_id
    ):
        mock_db.execute.side_effect = [
            scalar_result(settings_row),
            scalars_result([]),
            scalars_result([]),
        ]

        result = await service.get_recommendations(sample_user_id, RecommendationRequest())

        assert result.recommendations == []

    @pytest.mark.asyncio
    async def test_missing_settings_row(self, service, mock_db, sample_user_id):
        mock_db.execute.return_value = scalar_result(None)

        with pytest.raises(SettingsNotFoundError):
            await service.get_recommendations(sample_user_id, RecommendationRequest())


class TestFeedback:
    """Tests for record_feedback and get_strategy_effectiveness."""

    @pytest.mark.asyncio
    async def test_record_feedback_logs_details(self, service, mock_db, sample_user_id):
        feedback = StrategyFeedback(strategy_id="counting", effectiveness=4)

        await service.record_feedback(sample_user_id, feedback)

        logged = mock_db.add.call_args.args[0]
        assert logged.action == "strategy_feedback"
        assert logged.details == {
            "strategyId": "counting",
            "effectiveness": 4,
            "notes": "",
            "emotion": "Unknown",
        }
        assert logged.timestamp == feedback.timestamp
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_strategy_is_rejected(self, service, mock_db, sample_user_id):
        feedback = StrategyFeedback(strategy_id="levitation", effectiveness=4)

        with pytest.raises(StrategyNotFoundError):
            await service.record_feedback(sample_user_id, feedback)

        mock_db.add.assert_not_called()
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_effectiveness_skips_malformed_rows(
        self, service, mock_db, make_log, sample_user_id
    ):
        logs = [
            make_log(0, {"strategyId": "counting", "effectiveness": 4}),
            make_log(1, {"strategyId": "counting"}),
            make_log(2, {"strategyId": "counting", "effectiveness": 9}),
            make_log(3, {"strategyId": "movement", "effectiveness": 2}),
            make_log(4, {"strategyId": "counting", "effectiveness": 5}),
        ]
        mock_db.execute.return_value = scalars_result(logs)

        result = await service.get_strategy_effectiveness(sample_user_id)

        assert [(e.strategy_id, e.count, e.average) for e in result] == [
            ("counting", 2, 4.5),
            ("movement", 1, 2.0),
        ]


class TestPreferences:
    """Tests for update_preferences."""

    @pytest.mark.asyncio
    async def test_preferences_stored(self, service, mock_db, settings_row, sample_user_id):
        mock_db.execute.return_value = scalar_result(settings_row)
        preferences = UserPreferences(
            preferred_strategy_types=["social", "expressive"],
            strategy_complexity=StrategyComplexity.ADVANCED,
            reminder_frequency="high",
            auto_suggest_enabled=False,
            favorite_strategies=["creative-expression"],
        )

        result = await service.update_preferences(sample_user_id, preferences)

        assert result == preferences
        assert settings_row.strategy_preferences == {
            "preferredTypes": ["social", "expressive"],
            "complexity": "advanced",
            "autoSuggest": False,
            "favorites": ["creative-expression"],
        }
        assert settings_row.reminder_frequency == "high"
        logged = mock_db.add.call_args.args[0]
        assert logged.action == "update_strategy_preferences"
        assert logged.details["strategy_complexity"] == "advanced"
        mock_db.commit.assert_awaited_once()

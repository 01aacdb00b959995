# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for emotional data structures."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from emoreg.core.emotional.constants import (
    ReminderFrequency,
    StrategyComplexity,
    TimeOfDay,
)
from emoreg.core.emotional.context import (
    EmotionEvent,
    RecommendationRequest,
    StrategyEffectiveness,
    StrategyFeedback,
    UserPreferences,
)
from emoreg.core.emotional.triggers import StructuredTrigger


class TestEmotionEvent:
    """Tests for EmotionEvent."""

    def test_naive_timestamp_is_treated_as_utc(self) -> None:
        event = EmotionEvent(
            id="1",
            user_id="u",
            timestamp=datetime(2024, 1, 1, 12, 0),
            emotion="Happy",
            intensity=3,
        )

        assert event.timestamp == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_timestamp_is_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        event = EmotionEvent(
            id="1",
            user_id="u",
            timestamp=datetime(2024, 1, 1, 12, 0, tzinfo=plus_two),
            emotion="Happy",
            intensity=3,
        )

        assert event.timestamp.hour == 10
        assert event.timestamp.tzinfo == timezone.utc

    def test_triggers_are_normalized(self) -> None:
        event = EmotionEvent(
            id="1",
            user_id="u",
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            emotion="Sad",
            intensity=2,
            triggers=["friends"],
        )

        assert event.triggers == StructuredTrigger(items=("friends",))
        assert event.trigger_key == '["friends"]'

    def test_empty_trigger_has_no_key(self) -> None:
        event = EmotionEvent(
            id="1",
            user_id="u",
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            emotion="Sad",
            intensity=2,
            triggers="",
        )

        assert event.triggers is None
        assert event.trigger_key is None

    def test_event_is_frozen(self) -> None:
        event = EmotionEvent(
            id="1",
            user_id="u",
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            emotion="Sad",
            intensity=2,
        )

        with pytest.raises(ValidationError):
            event.emotion = "Happy"


class TestStrategyFeedback:
    """Tests for StrategyFeedback."""

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range_is_rejected(self, rating: int) -> None:
        with pytest.raises(ValidationError):
            StrategyFeedback(strategy_id="counting", effectiveness=rating)


class TestStrategyEffectiveness:
    """Tests for StrategyEffectiveness."""

    def test_average_without_feedback_is_zero(self) -> None:
        assert StrategyEffectiveness(strategy_id="x").average == 0.0

    def test_effective_needs_average_and_count(self) -> None:
        assert StrategyEffectiveness(strategy_id="x", total_rating=8, count=2).is_effective
        assert not StrategyEffectiveness(strategy_id="x", total_rating=5, count=1).is_effective
        assert not StrategyEffectiveness(strategy_id="x", total_rating=6, count=2).is_effective

    def test_average_is_serialized(self) -> None:
        data = StrategyEffectiveness(strategy_id="x", total_rating=9, count=2).model_dump()

        assert data["average"] == 4.5


class TestUserPreferences:
    """Tests for UserPreferences."""

    def test_defaults(self) -> None:
        prefs = UserPreferences()

        assert prefs.preferred_strategy_types == ["physical", "cognitive", "social"]
        assert prefs.strategy_complexity is StrategyComplexity.MODERATE
        assert prefs.reminder_frequency is ReminderFrequency.MEDIUM
        assert prefs.auto_suggest_enabled is True
        assert prefs.favorite_strategies == []

    def test_from_stored_reads_document(self) -> None:
        prefs = UserPreferences.from_stored(
            {
                "preferredTypes": ["social"],
                "complexity": "simple",
                "autoSuggest": False,
                "favorites": ["counting"],
            },
            reminder_frequency="high",
        )

        assert prefs.preferred_strategy_types == ["social"]
        assert prefs.strategy_complexity is StrategyComplexity.SIMPLE
        assert prefs.reminder_frequency is ReminderFrequency.HIGH
        assert prefs.auto_suggest_enabled is False
        assert prefs.favorite_strategies == ["counting"]

    def test_from_stored_falls_back_on_unknown_values(self) -> None:
        prefs = UserPreferences.from_stored(
            {"preferredTypes": "physical", "complexity": "extreme", "autoSuggest": "yes"},
            reminder_frequency="hourly",
        )

        assert prefs == UserPreferences()

    def test_from_stored_handles_missing_document(self) -> None:
        assert UserPreferences.from_stored(None) == UserPreferences()

    def test_to_stored_round_trips(self) -> None:
        prefs = UserPreferences(
            preferred_strategy_types=["expressive"],
            strategy_complexity=StrategyComplexity.ADVANCED,
            auto_suggest_enabled=False,
            favorite_strategies=["movement"],
        )

        assert UserPreferences.from_stored(prefs.to_stored()) == prefs


class TestRecommendationRequest:
    """Tests for RecommendationRequest."""

    def test_default_limit(self) -> None:
        assert RecommendationRequest().limit == 10

    @pytest.mark.parametrize("limit", [0, 21])
    def test_limit_bounds(self, limit: int) -> None:
        with pytest.raises(ValidationError):
            RecommendationRequest(limit=limit)


class TestTimeOfDay:
    """Tests for TimeOfDay bucketing."""

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [
            (5, TimeOfDay.MORNING),
            (11, TimeOfDay.MORNING),
            (12, TimeOfDay.AFTERNOON),
            (16, TimeOfDay.AFTERNOON),
            (17, TimeOfDay.EVENING),
            (21, TimeOfDay.EVENING),
            (22, TimeOfDay.NIGHT),
            (0, TimeOfDay.NIGHT),
            (4, TimeOfDay.NIGHT),
        ],
    )
    def test_bucket_boundaries(self, hour: int, expected: TimeOfDay) -> None:
        assert TimeOfDay.for_hour(hour) is expected


class TestStrategyComplexity:
    """Tests for complexity compatibility."""

    def test_allows(self) -> None:
        simple, moderate, advanced = (
            StrategyComplexity.SIMPLE,
            StrategyComplexity.MODERATE,
            StrategyComplexity.ADVANCED,
        )

        assert simple.allows(simple)
        assert not simple.allows(moderate)
        assert moderate.allows(simple) and moderate.allows(moderate)
        assert not moderate.allows(advanced)
        assert all(advanced.allows(c) for c in StrategyComplexity)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data structures shared by the pattern and strategy engines.

Inputs:
- EmotionEvent / EmotionJournalEntry: what a user logged
- StrategyFeedback: how well a strategy worked for the user
- UserPreferences: stored strategy preferences
- RecommendationRequest: per-call recommendation parameters

Outputs:
- PatternAnalysis and its sub-reports
- StrategyRecommendation

Immutable records are frozen so a caller can share them between
concurrent analyses without copying.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from emoreg.core.emotional.constants import (
    DEFAULT_PREFERRED_STRATEGY_TYPES,
    DEFAULT_REMINDER_FREQUENCY,
    DEFAULT_STRATEGY_COMPLEXITY,
    ReasonType,
    RecommendationThresholds,
    ReminderFrequency,
    StrategyComplexity,
)
from emoreg.core.emotional.triggers import TriggerValue, parse_trigger
from emoreg.utils.datetime import ensure_utc, utc_now


# =============================================================================
# Inputs
# =============================================================================


class EmotionEvent(BaseModel):
    """A single logged emotion.

    Attributes:
        id: Record identifier.
        user_id: Owner of the record.
        timestamp: When the emotion was felt (UTC).
        emotion: Case-sensitive emotion label, e.g. "Anxious".
        intensity: Self-rated intensity (typically 1-5 or 1-10, not bounded).
        triggers: What set the emotion off, if recorded.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    timestamp: datetime
    emotion: str
    intensity: float
    triggers: TriggerValue | None = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("triggers", mode="before")
    @classmethod
    def _normalize_triggers(cls, value: Any) -> TriggerValue | None:
        return parse_trigger(value)

    @property
    def trigger_key(self) -> str | None:
        """Canonical trigger key, None when no trigger was recorded."""
        return self.triggers.key if self.triggers is not None else None


class EmotionJournalEntry(BaseModel):
    """Free-text journal entry, passed through analysis untouched."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    timestamp: datetime
    content: str = ""
    emotion: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class StrategyFeedback(BaseModel):
    """A user's rating of how well a strategy worked."""

    model_config = ConfigDict(frozen=True)

    strategy_id: str
    effectiveness: int = Field(ge=1, le=5)
    emotion: str | None = None
    notes: str | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class StrategyEffectiveness(BaseModel):
    """Running aggregate of feedback ratings for one strategy."""

    strategy_id: str
    total_rating: float = 0.0
    count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def average(self) -> float:
        """Mean rating, 0.0 when there is no feedback."""
        if self.count == 0:
            return 0.0
        return self.total_rating / self.count

    @property
    def is_effective(self) -> bool:
        """Whether the strategy has a proven track record for the user."""
        return (
            self.average >= RecommendationThresholds.MIN_EFFECTIVE_AVERAGE
            and self.count >= RecommendationThresholds.MIN_EFFECTIVE_COUNT
        )


class UserPreferences(BaseModel):
    """Stored strategy preferences for a user.

    Read by the recommendation engine, never written by it.
    """

    preferred_strategy_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PREFERRED_STRATEGY_TYPES)
    )
    strategy_complexity: StrategyComplexity = DEFAULT_STRATEGY_COMPLEXITY
    reminder_frequency: ReminderFrequency = DEFAULT_REMINDER_FREQUENCY
    auto_suggest_enabled: bool = True
    favorite_strategies: list[str] = Field(default_factory=list)

    @classmethod
    def from_stored(
        cls,
        stored: Mapping[str, Any] | None,
        reminder_frequency: str | None = None,
    ) -> "UserPreferences":
        """Build preferences from the persisted settings row.

        Stored state is trusted, so unknown or missing values fall back to
        the defaults instead of raising.

        Args:
            stored: The ``strategy_preferences`` JSON document
                (keys: preferredTypes, complexity, autoSuggest, favorites).
            reminder_frequency: The stored reminder frequency column.

        Returns:
            UserPreferences with defaults filled in.
        """
        stored = stored or {}

        types = stored.get("preferredTypes")
        if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
            types = list(DEFAULT_PREFERRED_STRATEGY_TYPES)

        try:
            complexity = StrategyComplexity(stored.get("complexity"))
        except ValueError:
            complexity = DEFAULT_STRATEGY_COMPLEXITY

        try:
            frequency = ReminderFrequency(reminder_frequency)
        except ValueError:
            frequency = DEFAULT_REMINDER_FREQUENCY

        auto_suggest = stored.get("autoSuggest")
        favorites = stored.get("favorites")

        return cls(
            preferred_strategy_types=types,
            strategy_complexity=complexity,
            reminder_frequency=frequency,
            auto_suggest_enabled=auto_suggest if isinstance(auto_suggest, bool) else True,
            favorite_strategies=[f for f in favorites if isinstance(f, str)]
            if isinstance(favorites, list)
            else [],
        )

    def to_stored(self) -> dict[str, Any]:
        """Serialize to the ``strategy_preferences`` JSON document."""
        return {
            "preferredTypes": list(self.preferred_strategy_types),
            "complexity": self.strategy_complexity.value,
            "autoSuggest": self.auto_suggest_enabled,
            "favorites": list(self.favorite_strategies),
        }


class RecommendationRequest(BaseModel):
    """Per-call recommendation parameters.

    ``categories`` and ``complexity`` override the stored preferences for
    this call only.
    """

    emotion: str | None = None
    categories: list[str] | None = None
    complexity: StrategyComplexity | None = None
    limit: int = Field(
        default=RecommendationThresholds.DEFAULT_LIMIT,
        ge=1,
        le=RecommendationThresholds.MAX_LIMIT,
    )


# =============================================================================
# Pattern analysis outputs
# =============================================================================


class Insight(BaseModel):
    """A human-readable finding plus the raw values behind it."""

    id: str
    type: str
    title: str
    description: str
    emotion: str | None = None
    count: int | None = None
    intensity: float | None = None
    time_of_day: str | None = None
    day_of_week: str | None = None
    trigger: str | None = None


class TriggerPattern(BaseModel):
    """Emotion counts for one canonical trigger."""

    trigger: str
    emotions: dict[str, int] = Field(default_factory=dict)
    total: int = 0


class HourlyCount(BaseModel):
    """Events logged in one local hour of the day."""

    hour: int
    count: int = 0


class DailyCount(BaseModel):
    """Events logged on one weekday (0 = Sunday)."""

    day: int
    name: str
    count: int = 0


class TimePatterns(BaseModel):
    """Hour-of-day and day-of-week histograms."""

    hourly: list[HourlyCount] = Field(default_factory=list)
    daily: list[DailyCount] = Field(default_factory=list)


class EmotionTrend(BaseModel):
    """Emotion counts for one UTC calendar date."""

    date: str
    emotions: dict[str, int] = Field(default_factory=dict)


class EmotionCorrelation(BaseModel):
    """Two emotions that tend to follow each other closely."""

    source: str
    target: str
    count: int = 0
    strength: float = 0.0


class PatternAnalysis(BaseModel):
    """Complete pattern analysis result."""

    insights: list[Insight] = Field(default_factory=list)
    trigger_patterns: list[TriggerPattern] = Field(default_factory=list)
    time_patterns: TimePatterns = Field(default_factory=TimePatterns)
    emotion_trends: list[EmotionTrend] = Field(default_factory=list)
    emotion_correlations: list[EmotionCorrelation] = Field(default_factory=list)
    event_count: int = 0
    journal_count: int = 0


# =============================================================================
# Recommendation outputs
# =============================================================================


class StrategyRecommendation(BaseModel):
    """A ranked regulation strategy with its justification."""

    id: str
    title: str
    description: str
    steps: list[str]
    category: str
    suitability: int
    time_required: str
    reason: str
    reason_type: ReasonType
    score: float

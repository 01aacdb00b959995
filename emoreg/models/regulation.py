# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response schemas for the emotional regulation API.

Request bodies use the camelCase keys clients already send
(``strategyId``, ``preferredStrategyTypes``); responses use snake_case.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from emoreg.core.emotional.constants import (
    ReminderFrequency,
    StrategyComplexity,
    StrategyDuration,
)
from emoreg.core.emotional.context import (
    PatternAnalysis,
    StrategyEffectiveness,
    StrategyFeedback,
    StrategyRecommendation,
    UserPreferences,
)
from emoreg.core.emotional.strategies import RegulationStrategy


# =============================================================================
# Requests
# =============================================================================


class StrategyFeedbackRequest(BaseModel):
    """Feedback on how well a strategy worked."""

    model_config = ConfigDict(populate_by_name=True)

    strategy_id: str = Field(alias="strategyId", min_length=1)
    effectiveness: int = Field(ge=1, le=5)
    notes: str | None = None
    emotion: str | None = None

    def to_feedback(self) -> StrategyFeedback:
        return StrategyFeedback(
            strategy_id=self.strategy_id,
            effectiveness=self.effectiveness,
            notes=self.notes,
            emotion=self.emotion,
        )


class PreferencesPayload(BaseModel):
    """Complete set of strategy preferences sent by the client."""

    model_config = ConfigDict(populate_by_name=True)

    preferred_strategy_types: list[str] = Field(alias="preferredStrategyTypes")
    strategy_complexity: StrategyComplexity = Field(alias="strategyComplexity")
    reminder_frequency: ReminderFrequency = Field(alias="reminderFrequency")
    auto_suggest_enabled: bool = Field(alias="autoSuggestEnabled")
    favorite_strategies: list[str] = Field(alias="favoriteStrategies")

    def to_preferences(self) -> UserPreferences:
        return UserPreferences(
            preferred_strategy_types=self.preferred_strategy_types,
            strategy_complexity=self.strategy_complexity,
            reminder_frequency=self.reminder_frequency,
            auto_suggest_enabled=self.auto_suggest_enabled,
            favorite_strategies=self.favorite_strategies,
        )


class PreferencesUpdateRequest(BaseModel):
    """Body of POST /strategy-recommendations with action=update_preferences."""

    action: Literal["update_preferences"]
    preferences: PreferencesPayload


class PatternSettingsRequest(BaseModel):
    """Pattern recognition settings update. Missing fields use defaults."""

    enabled: bool | None = None
    settings: dict[str, Any] | None = None


# =============================================================================
# Responses
# =============================================================================


class EmotionRecordResponse(BaseModel):
    """A stored emotion record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    emotion: str
    intensity: float
    triggers: Any | None = None
    notes: str | None = None
    timestamp: datetime


class EmotionJournalResponse(BaseModel):
    """A stored journal entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str | None = None
    content: str = ""
    emotion: str | None = None
    timestamp: datetime


class PatternRecognitionResponse(BaseModel):
    """Emotion history for the requested window and its analysis."""

    emotion_records: list[EmotionRecordResponse] = Field(default_factory=list)
    emotion_journals: list[EmotionJournalResponse] = Field(default_factory=list)
    pattern_analysis: PatternAnalysis = Field(default_factory=PatternAnalysis)


class StrategyRecommendationsResponse(BaseModel):
    """Ranked recommendations plus the preferences they were based on."""

    recommendations: list[StrategyRecommendation] = Field(default_factory=list)
    user_preferences: UserPreferences


class StrategyResponse(BaseModel):
    """A catalog strategy."""

    id: str
    name: str
    description: str
    steps: list[str]
    suitable_for: list[str]
    category: str
    complexity: StrategyComplexity
    duration: StrategyDuration
    time_required: str
    evidence_base: str

    @classmethod
    def from_strategy(cls, strategy: RegulationStrategy) -> "StrategyResponse":
        return cls(
            id=strategy.id,
            name=strategy.name,
            description=strategy.description,
            steps=list(strategy.steps),
            suitable_for=sorted(strategy.suitable_for),
            category=strategy.category,
            complexity=strategy.complexity,
            duration=strategy.duration,
            time_required=strategy.time_required,
            evidence_base=strategy.evidence_base,
        )


class StrategyListResponse(BaseModel):
    """The regulation strategy catalog."""

    items: list[StrategyResponse]
    total: int


class StrategyEffectivenessResponse(BaseModel):
    """Aggregated feedback per strategy, in first-rated order."""

    items: list[StrategyEffectiveness]
    total: int


class ActionResponse(BaseModel):
    """Acknowledgement of a write operation."""

    success: bool = True
    message: str | None = None


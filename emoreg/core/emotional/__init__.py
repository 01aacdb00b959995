# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotional pattern recognition and strategy recommendation.

This package holds the two stateless engines of the service:

- Pattern analysis: insights, trigger patterns, time histograms, daily
  trends and emotion correlations over a user's logged emotions
- Strategy recommendation: ranks regulation strategies from the catalog
  against the user's emotion history, feedback and preferences

Both engines are pure functions of their inputs. Persistence and HTTP
live in emoreg.domains and emoreg.api.

Example usage:

    from emoreg.core.emotional import analyze, recommend, get_strategy_catalog

    analysis = analyze(events, journals, scope="all")
    recommendations = recommend(
        get_strategy_catalog(), events, feedback, preferences, request
    )
"""

from emoreg.core.emotional.constants import (
    AnalysisScope,
    InsightType,
    ReasonType,
    RegulationLogAction,
    ReminderFrequency,
    StrategyComplexity,
    StrategyDuration,
    TimeOfDay,
)
from emoreg.core.emotional.context import (
    EmotionCorrelation,
    EmotionEvent,
    EmotionJournalEntry,
    EmotionTrend,
    Insight,
    PatternAnalysis,
    RecommendationRequest,
    StrategyEffectiveness,
    StrategyFeedback,
    StrategyRecommendation,
    TimePatterns,
    TriggerPattern,
    UserPreferences,
)
from emoreg.core.emotional.exceptions import (
    EmotionalRegulationError,
    InvalidComplexityError,
    InvalidRequestValueError,
    InvalidScopeRequestError,
    StrategyCatalogError,
)
from emoreg.core.emotional.patterns import (
    analyze,
    generate_emotion_correlations,
    generate_emotion_trends,
    generate_insights,
    generate_time_patterns,
    generate_trigger_patterns,
    parse_scope,
)
from emoreg.core.emotional.recommendations import (
    HashJitter,
    RandomJitter,
    ScoreJitter,
    aggregate_feedback,
    parse_complexity,
    recommend,
    rerank_for_mood,
)
from emoreg.core.emotional.strategies import (
    RegulationStrategy,
    StrategyCatalog,
    get_strategy_catalog,
)
from emoreg.core.emotional.triggers import (
    RawTrigger,
    StructuredTrigger,
    TriggerValue,
    parse_trigger,
    trigger_key,
)

__all__ = [
    # Engines
    "analyze",
    "recommend",
    "rerank_for_mood",
    # Pattern sub-reports
    "generate_insights",
    "generate_trigger_patterns",
    "generate_time_patterns",
    "generate_emotion_trends",
    "generate_emotion_correlations",
    "parse_scope",
    # Recommendation helpers
    "aggregate_feedback",
    "parse_complexity",
    "ScoreJitter",
    "HashJitter",
    "RandomJitter",
    # Catalog
    "RegulationStrategy",
    "StrategyCatalog",
    "get_strategy_catalog",
    # Triggers
    "RawTrigger",
    "StructuredTrigger",
    "TriggerValue",
    "parse_trigger",
    "trigger_key",
    # Data structures
    "EmotionEvent",
    "EmotionJournalEntry",
    "StrategyFeedback",
    "StrategyEffectiveness",
    "UserPreferences",
    "RecommendationRequest",
    "Insight",
    "TriggerPattern",
    "TimePatterns",
    "EmotionTrend",
    "EmotionCorrelation",
    "PatternAnalysis",
    "StrategyRecommendation",
    # Constants
    "AnalysisScope",
    "InsightType",
    "TimeOfDay",
    "StrategyComplexity",
    "StrategyDuration",
    "ReminderFrequency",
    "ReasonType",
    "RegulationLogAction",
    # Exceptions
    "EmotionalRegulationError",
    "InvalidRequestValueError",
    "InvalidScopeRequestError",
    "InvalidComplexityError",
    "StrategyCatalogError",
]

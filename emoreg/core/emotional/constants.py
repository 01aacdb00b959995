# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Constants for the emotional pattern and strategy engines.

This module defines the enums, thresholds and fixed lookup tables used by
pattern analysis and strategy recommendation.
"""

from enum import Enum


class AnalysisScope(str, Enum):
    """Sub-reports a pattern analysis request can select."""

    ALL = "all"
    INSIGHTS = "insights"
    TRIGGERS = "triggers"
    TIME = "time"
    TRENDS = "trends"
    CORRELATIONS = "correlations"

    def includes(self, part: "AnalysisScope") -> bool:
        """Check whether this scope computes the given sub-report."""
        return self is AnalysisScope.ALL or self is part


class InsightType(str, Enum):
    """Type tag carried by every insight."""

    FREQUENCY = "frequency"
    INTENSITY = "intensity"
    TIME = "time"
    DAY = "day"
    TRIGGER = "trigger"
    SUGGESTION = "suggestion"


class TimeOfDay(str, Enum):
    """Coarse local-time buckets, in tie-break order."""

    MORNING = "morning"  # 05:00-11:59
    AFTERNOON = "afternoon"  # 12:00-16:59
    EVENING = "evening"  # 17:00-21:59
    NIGHT = "night"  # 22:00-04:59

    @classmethod
    def for_hour(cls, hour: int) -> "TimeOfDay":
        """Bucket a local hour (0-23)."""
        if 5 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 17:
            return cls.AFTERNOON
        if 17 <= hour < 22:
            return cls.EVENING
        return cls.NIGHT


class StrategyComplexity(str, Enum):
    """How demanding a regulation strategy is (ordered)."""

    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"

    def allows(self, complexity: "StrategyComplexity") -> bool:
        """Check whether a strategy of the given complexity fits this preference.

        simple admits only simple strategies, moderate excludes advanced ones
        and advanced admits everything.
        """
        if self is StrategyComplexity.SIMPLE:
            return complexity is StrategyComplexity.SIMPLE
        if self is StrategyComplexity.MODERATE:
            return complexity is not StrategyComplexity.ADVANCED
        return True


class StrategyDuration(str, Enum):
    """Rough time needed to carry out a strategy."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def time_required(self) -> str:
        """Display string for the duration."""
        return DURATION_TIME_REQUIRED[self]


class ReminderFrequency(str, Enum):
    """How often the user wants regulation reminders."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReasonType(str, Enum):
    """Why a strategy was recommended."""

    EFFECTIVENESS = "effectiveness"
    EMOTION = "emotion"
    EVIDENCE = "evidence"
    PREFERENCE = "preference"
    CURRENT_MOOD = "current_mood"


class RegulationLogAction(str, Enum):
    """Actions written to the emotional regulation activity log."""

    STRATEGY_FEEDBACK = "strategy_feedback"
    UPDATE_STRATEGY_PREFERENCES = "update_strategy_preferences"
    UPDATE_PATTERN_RECOGNITION_SETTINGS = "update_pattern_recognition_settings"


# =============================================================================
# Thresholds
# =============================================================================

class PatternThresholds:
    """Limits used by pattern analysis."""

    TOP_TRIGGER_PATTERNS = 5
    TOP_CORRELATIONS = 10

    # Correlation neighbourhood: next N events, no further than H hours away
    CORRELATION_LOOKAHEAD = 3
    CORRELATION_WINDOW_HOURS = 24

    # A trigger seen only once is not "common"
    MIN_COMMON_TRIGGER_COUNT = 2


class RecommendationThresholds:
    """Scores and limits used by strategy recommendation."""

    MIN_EFFECTIVE_AVERAGE = 3.5
    MIN_EFFECTIVE_COUNT = 2

    TOP_EMOTIONS = 3
    STRATEGIES_PER_EMOTION = 2
    EVIDENCE_STRATEGIES = 2

    DEFAULT_LIMIT = 10
    MAX_LIMIT = 20
    MOOD_LIMIT = 6

    # Ratings are 1-5; score is on a 0-100 scale
    RATING_TO_SCORE = 20
    MOOD_BOOST = 10


# Fixed display suitability per reason type
SUITABILITY = {
    ReasonType.EFFECTIVENESS: 90,
    ReasonType.EMOTION: 85,
    ReasonType.EVIDENCE: 80,
    ReasonType.PREFERENCE: 75,
    ReasonType.CURRENT_MOOD: 85,
}

# Jittered score ranges [low, high) per reason type
SCORE_RANGES = {
    ReasonType.EMOTION: (70.0, 85.0),
    ReasonType.EVIDENCE: (65.0, 80.0),
    ReasonType.PREFERENCE: (60.0, 70.0),
    ReasonType.CURRENT_MOOD: (75.0, 90.0),
}

DURATION_TIME_REQUIRED = {
    StrategyDuration.SHORT: "5 minutes",
    StrategyDuration.MEDIUM: "15 minutes",
    StrategyDuration.LONG: "30 minutes",
}

# Substrings of a strategy's evidence_base that mark a recognized authority
EVIDENCE_MARKERS = ("NICE", "NHS", "research")

DEFAULT_PREFERRED_STRATEGY_TYPES = ("physical", "cognitive", "social")
DEFAULT_STRATEGY_COMPLEXITY = StrategyComplexity.MODERATE
DEFAULT_REMINDER_FREQUENCY = ReminderFrequency.MEDIUM

# Index 0 is Sunday, matching the daily histogram
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# Canned coping suggestion for each negative emotion label
COPING_SUGGESTIONS = {
    "Anxious": (
        "Consider practicing mindfulness or deep breathing exercises "
        "when you notice anxiety building."
    ),
    "Angry": (
        "Taking a short break or using the 5-4-3-2-1 grounding technique "
        "might help when you feel anger rising."
    ),
    "Frustrated": (
        "Taking a short break or using the 5-4-3-2-1 grounding technique "
        "might help when you feel anger rising."
    ),
    "Sad": (
        "Connecting with friends or engaging in activities you enjoy "
        "might help improve your mood."
    ),
    "Overwhelmed": (
        "Breaking tasks into smaller steps and focusing on one thing at a time "
        "might help reduce feeling overwhelmed."
    ),
}

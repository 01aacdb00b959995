# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pattern analysis over a user's logged emotions.

This module provides pure functions for:
- Generating human-readable insights (frequency, intensity, time, trigger)
- Grouping emotions by trigger
- Building hour-of-day and day-of-week histograms
- Building daily emotion trends
- Finding emotions that tend to follow each other

Every function is a pure computation over its inputs. Ties are always
broken by first appearance in the input (or by the fixed bucket order for
time-of-day and weekday), so the same input gives the same output.
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import timezone, tzinfo

from emoreg.core.emotional.constants import (
    COPING_SUGGESTIONS,
    WEEKDAY_NAMES,
    AnalysisScope,
    InsightType,
    PatternThresholds,
    TimeOfDay,
)
from emoreg.core.emotional.context import (
    DailyCount,
    EmotionCorrelation,
    EmotionEvent,
    EmotionJournalEntry,
    EmotionTrend,
    HourlyCount,
    Insight,
    PatternAnalysis,
    TimePatterns,
    TriggerPattern,
)
from emoreg.core.emotional.exceptions import InvalidScopeRequestError
from emoreg.utils.datetime import to_local, utc_date_key

logger = logging.getLogger(__name__)


def parse_scope(value: str | AnalysisScope | None) -> AnalysisScope:
    """Resolve an analysis scope from its request value.

    Args:
        value: Scope member or its string value. None means "all".

    Returns:
        The matching AnalysisScope.

    Raises:
        InvalidScopeRequestError: If the value is not a known scope.
    """
    if value is None:
        return AnalysisScope.ALL
    if isinstance(value, AnalysisScope):
        return value
    try:
        return AnalysisScope(value)
    except ValueError:
        raise InvalidScopeRequestError(
            value, [scope.value for scope in AnalysisScope]
        ) from None


def _weekday_index(event: EmotionEvent, tz: tzinfo) -> int:
    # datetime.weekday() is Monday-based; shift so 0 is Sunday
    return (to_local(event.timestamp, tz).weekday() + 1) % 7


def _local_hour(event: EmotionEvent, tz: tzinfo) -> int:
    return to_local(event.timestamp, tz).hour


# =============================================================================
# Insights
# =============================================================================


def _most_common(counts: Counter[str]) -> tuple[str, int] | None:
    # max() keeps the first maximal item, i.e. the first label encountered
    if not counts:
        return None
    return max(counts.items(), key=lambda item: item[1])


def generate_insights(
    events: Sequence[EmotionEvent],
    tz: tzinfo = timezone.utc,
) -> list[Insight]:
    """Generate ordered insights for a set of events.

    Args:
        events: Emotion events to analyze.
        tz: Zone used for time-of-day and weekday bucketing.

    Returns:
        Insights in a fixed order: frequency, intensity, time, day,
        trigger, suggestion. Each one is omitted when it does not apply.
    """
    insights: list[Insight] = []
    if not events:
        return insights

    # Most common emotion
    emotion_counts: Counter[str] = Counter(event.emotion for event in events)
    top_emotion, top_count = _most_common(emotion_counts)
    insights.append(
        Insight(
            id="most-common-emotion",
            type=InsightType.FREQUENCY.value,
            title="Most Common Emotion",
            description=(
                f"Your most frequently recorded emotion is {top_emotion} "
                f"({top_count} times)."
            ),
            emotion=top_emotion,
            count=top_count,
        )
    )

    # Highest average intensity
    intensities: dict[str, list[float]] = {}
    for event in events:
        intensities.setdefault(event.emotion, []).append(event.intensity)
    averages = {
        emotion: sum(values) / len(values) for emotion, values in intensities.items()
    }
    intense_emotion, intense_average = max(averages.items(), key=lambda item: item[1])
    insights.append(
        Insight(
            id="highest-intensity-emotion",
            type=InsightType.INTENSITY.value,
            title="Highest Intensity Emotion",
            description=(
                f"{intense_emotion} tends to be your most intense emotion "
                f"(average intensity: {intense_average:.1f})."
            ),
            emotion=intense_emotion,
            intensity=intense_average,
        )
    )

    # Time of day
    time_counts: Counter[str] = Counter({bucket.value: 0 for bucket in TimeOfDay})
    for event in events:
        time_counts[TimeOfDay.for_hour(_local_hour(event, tz)).value] += 1
    time_of_day, time_count = _most_common(time_counts)
    if time_count > 0:
        insights.append(
            Insight(
                id="common-time-of-day",
                type=InsightType.TIME.value,
                title="Time Pattern",
                description=(
                    f"You tend to record emotions most often during the "
                    f"{time_of_day} ({time_count} entries)."
                ),
                time_of_day=time_of_day,
                count=time_count,
            )
        )

    # Day of week
    day_counts: Counter[str] = Counter({name: 0 for name in WEEKDAY_NAMES})
    for event in events:
        day_counts[WEEKDAY_NAMES[_weekday_index(event, tz)]] += 1
    day_name, day_count = _most_common(day_counts)
    if day_count > 0:
        insights.append(
            Insight(
                id="common-day-of-week",
                type=InsightType.DAY.value,
                title="Day of Week Pattern",
                description=(
                    f"{day_name} is when you tend to record emotions most "
                    f"frequently ({day_count} entries)."
                ),
                day_of_week=day_name,
                count=day_count,
            )
        )

    # Trigger
    trigger_counts: Counter[str] = Counter(
        event.trigger_key for event in events if event.trigger_key is not None
    )
    common_trigger = _most_common(trigger_counts)
    if (
        common_trigger is not None
        and common_trigger[1] >= PatternThresholds.MIN_COMMON_TRIGGER_COUNT
    ):
        trigger, trigger_count = common_trigger
        insights.append(
            Insight(
                id="common-trigger",
                type=InsightType.TRIGGER.value,
                title="Common Trigger",
                description=(
                    f'"{trigger}" is a frequent trigger for your emotions '
                    f"({trigger_count} times)."
                ),
                trigger=trigger,
                count=trigger_count,
            )
        )

    suggestion = COPING_SUGGESTIONS.get(top_emotion)
    if suggestion is not None:
        insights.append(
            Insight(
                id="suggestion",
                type=InsightType.SUGGESTION.value,
                title="Helpful Suggestion",
                description=suggestion,
                emotion=top_emotion,
            )
        )

    return insights


# =============================================================================
# Triggers, time and trends
# =============================================================================


def generate_trigger_patterns(events: Iterable[EmotionEvent]) -> list[TriggerPattern]:
    """Group events by canonical trigger key.

    Returns:
        At most five patterns, most frequent trigger first. Triggers with
        equal totals keep the order in which they were first seen.
    """
    grouped: dict[str, Counter[str]] = {}
    for event in events:
        key = event.trigger_key
        if key is None:
            continue
        grouped.setdefault(key, Counter())[event.emotion] += 1

    patterns = [
        TriggerPattern(trigger=key, emotions=dict(counts), total=sum(counts.values()))
        for key, counts in grouped.items()
    ]
    patterns.sort(key=lambda pattern: pattern.total, reverse=True)
    return patterns[: PatternThresholds.TOP_TRIGGER_PATTERNS]


def generate_time_patterns(
    events: Iterable[EmotionEvent],
    tz: tzinfo = timezone.utc,
) -> TimePatterns:
    """Build complete hour-of-day (24) and weekday (7) histograms."""
    hourly = [0] * 24
    daily = [0] * 7
    for event in events:
        hourly[_local_hour(event, tz)] += 1
        daily[_weekday_index(event, tz)] += 1

    return TimePatterns(
        hourly=[HourlyCount(hour=hour, count=count) for hour, count in enumerate(hourly)],
        daily=[
            DailyCount(day=day, name=WEEKDAY_NAMES[day], count=count)
            for day, count in enumerate(daily)
        ],
    )


def generate_emotion_trends(events: Iterable[EmotionEvent]) -> list[EmotionTrend]:
    """Count emotions per UTC calendar date, oldest date first.

    Dates without events are not filled in.
    """
    by_date: dict[str, Counter[str]] = {}
    for event in events:
        by_date.setdefault(utc_date_key(event.timestamp), Counter())[event.emotion] += 1

    return [
        EmotionTrend(date=date, emotions=dict(counts))
        for date, counts in sorted(by_date.items())
    ]


# =============================================================================
# Correlations
# =============================================================================


def generate_emotion_correlations(
    events: Sequence[EmotionEvent],
) -> list[EmotionCorrelation]:
    """Find pairs of different emotions logged close together.

    Each event is compared with up to the next three events (by time) that
    fall within 24 hours. Every qualifying neighbour with a different
    emotion counts once, so one event can add to the same pair more than
    once.

    Returns:
        Up to ten correlations, highest count first. ``strength`` is the
        pair count relative to the strongest pair.
    """
    labels = list(dict.fromkeys(event.emotion for event in events))

    pairs: dict[tuple[str, str], EmotionCorrelation] = {}
    for i, first in enumerate(labels):
        for second in labels[i + 1 :]:
            key = tuple(sorted((first, second)))
            pairs[key] = EmotionCorrelation(source=first, target=second)

    ordered = sorted(events, key=lambda event: event.timestamp)
    window_seconds = PatternThresholds.CORRELATION_WINDOW_HOURS * 3600
    lookahead = PatternThresholds.CORRELATION_LOOKAHEAD

    for i, current in enumerate(ordered):
        for following in ordered[i + 1 : i + 1 + lookahead]:
            elapsed = (following.timestamp - current.timestamp).total_seconds()
            if elapsed <= window_seconds and following.emotion != current.emotion:
                pairs[tuple(sorted((current.emotion, following.emotion)))].count += 1

    max_count = max((pair.count for pair in pairs.values()), default=0)
    denominator = max(1, max_count)

    correlations = [
        pair.model_copy(update={"strength": pair.count / denominator})
        for pair in pairs.values()
        if pair.count > 0
    ]
    correlations.sort(key=lambda pair: pair.count, reverse=True)
    return correlations[: PatternThresholds.TOP_CORRELATIONS]


# =============================================================================
# Entry point
# =============================================================================


def analyze(
    events: Sequence[EmotionEvent],
    journals: Sequence[EmotionJournalEntry] = (),
    scope: str | AnalysisScope = AnalysisScope.ALL,
    tz: tzinfo = timezone.utc,
) -> PatternAnalysis:
    """Run the pattern analysis sub-reports selected by ``scope``.

    Args:
        events: Emotion events, in any order.
        journals: Journal entries; only counted.
        scope: Which sub-reports to compute.
        tz: Zone used for local hour and weekday bucketing.

    Returns:
        PatternAnalysis with out-of-scope sub-reports left empty. Every
        sub-report is empty when there are no events.

    Raises:
        InvalidScopeRequestError: If ``scope`` is not a known value.
    """
    resolved = parse_scope(scope)
    events = list(events)

    analysis = PatternAnalysis(event_count=len(events), journal_count=len(journals))
    if not events:
        return analysis

    if resolved.includes(AnalysisScope.INSIGHTS):
        analysis.insights = generate_insights(events, tz)
    if resolved.includes(AnalysisScope.TRIGGERS):
        analysis.trigger_patterns = generate_trigger_patterns(events)
    if resolved.includes(AnalysisScope.TIME):
        analysis.time_patterns = generate_time_patterns(events, tz)
    if resolved.includes(AnalysisScope.TRENDS):
        analysis.emotion_trends = generate_emotion_trends(events)
    if resolved.includes(AnalysisScope.CORRELATIONS):
        analysis.emotion_correlations = generate_emotion_correlations(events)

    logger.debug(
        "Pattern analysis (%s): %d events, %d insights, %d triggers, %d correlations",
        resolved.value,
        len(events),
        len(analysis.insights),
        len(analysis.trigger_patterns),
        len(analysis.emotion_correlations),
    )
    return analysis

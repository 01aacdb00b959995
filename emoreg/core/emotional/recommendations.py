# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Strategy recommendation engine.

Ranks regulation strategies for a user in strictly ordered stages:

1. Filter the catalog by category, complexity and (optionally) emotion
2. Strategies the user has rated as effective
3. Strategies suited to the user's most frequent emotions
4. Strategies with recognized evidence
5. Remaining candidates, to fill up to the requested limit
6. Sort by score (stable) and truncate

A strategy appears at most once; the first stage that picks it wins.

Scores in stages 3-5 fall in a fixed range per stage. The position inside
that range comes from an injected ScoreJitter. The default HashJitter is
deterministic, so the same input always produces the same ranking.
"""

import hashlib
import logging
import random
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from emoreg.core.emotional.constants import (
    SCORE_RANGES,
    SUITABILITY,
    ReasonType,
    RecommendationThresholds,
    StrategyComplexity,
)
from emoreg.core.emotional.context import (
    EmotionEvent,
    RecommendationRequest,
    StrategyEffectiveness,
    StrategyFeedback,
    StrategyRecommendation,
    UserPreferences,
)
from emoreg.core.emotional.exceptions import InvalidComplexityError
from emoreg.core.emotional.strategies import RegulationStrategy, StrategyCatalog

logger = logging.getLogger(__name__)

EFFECTIVE_REASON = "This has worked well for you in the past"
EVIDENCE_REASON = "Strong evidence supporting effectiveness"
PREFERENCE_REASON = "Matches your preferences"


def emotion_reason(emotion: str) -> str:
    return f"Good for managing {emotion.lower()} feelings"


# =============================================================================
# Score jitter
# =============================================================================


class ScoreJitter(Protocol):
    """Picks a score in ``[low, high)`` for a strategy."""

    def __call__(self, strategy_id: str, low: float, high: float) -> float: ...


class HashJitter:
    """Deterministic jitter derived from a SHA-256 digest of the strategy id.

    Args:
        salt: Mixed into the digest; changing it reshuffles the offsets.
    """

    def __init__(self, salt: str = "") -> None:
        self._salt = salt

    def __call__(self, strategy_id: str, low: float, high: float) -> float:
        digest = hashlib.sha256(f"{self._salt}:{strategy_id}".encode()).digest()
        fraction = int.from_bytes(digest[:8], "big") / 2**64
        return low + (high - low) * fraction


class RandomJitter:
    """Jitter backed by a ``random.Random`` instance (seed it for repeatability)."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def __call__(self, strategy_id: str, low: float, high: float) -> float:
        return low + (high - low) * self._rng.random()


# =============================================================================
# Helpers
# =============================================================================


def parse_complexity(value: str | StrategyComplexity | None) -> StrategyComplexity | None:
    """Resolve a request complexity value.

    Raises:
        InvalidComplexityError: If the value is not a known complexity.
    """
    if value is None or isinstance(value, StrategyComplexity):
        return value
    try:
        return StrategyComplexity(value)
    except ValueError:
        raise InvalidComplexityError(
            value, [complexity.value for complexity in StrategyComplexity]
        ) from None


def aggregate_feedback(
    feedback_log: Iterable[StrategyFeedback],
) -> dict[str, StrategyEffectiveness]:
    """Aggregate feedback ratings per strategy, in first-seen order."""
    aggregated: dict[str, StrategyEffectiveness] = {}
    for feedback in feedback_log:
        entry = aggregated.get(feedback.strategy_id)
        if entry is None:
            entry = StrategyEffectiveness(strategy_id=feedback.strategy_id)
            aggregated[feedback.strategy_id] = entry
        entry.total_rating += feedback.effectiveness
        entry.count += 1
    return aggregated


def top_emotions(
    events: Iterable[EmotionEvent],
    n: int = RecommendationThresholds.TOP_EMOTIONS,
) -> list[str]:
    """Most frequent emotion labels; ties keep first-appearance order."""
    counts: Counter[str] = Counter(event.emotion for event in events)
    return [emotion for emotion, _ in counts.most_common(n)]


def filter_candidates(
    catalog: StrategyCatalog,
    preferences: UserPreferences,
    request: RecommendationRequest,
) -> dict[str, RegulationStrategy]:
    """Select catalog strategies the user can be offered, in catalog order.

    Request categories and complexity take precedence over the stored
    preferences when present.
    """
    categories = set(request.categories or preferences.preferred_strategy_types)
    complexity = request.complexity or preferences.strategy_complexity

    return {
        strategy.id: strategy
        for strategy in catalog
        if strategy.category in categories
        and complexity.allows(strategy.complexity)
        and (request.emotion is None or strategy.is_suitable_for(request.emotion))
    }


def _recommendation(
    strategy: RegulationStrategy,
    reason: str,
    reason_type: ReasonType,
    score: float,
) -> StrategyRecommendation:
    return StrategyRecommendation(
        id=strategy.id,
        title=strategy.name,
        description=strategy.description,
        steps=list(strategy.steps),
        category=strategy.category,
        suitability=SUITABILITY[reason_type],
        time_required=strategy.time_required,
        reason=reason,
        reason_type=reason_type,
        score=score,
    )


def _jittered(jitter: ScoreJitter, strategy_id: str, reason_type: ReasonType) -> float:
    low, high = SCORE_RANGES[reason_type]
    return jitter(strategy_id, low, high)


# =============================================================================
# Entry points
# =============================================================================


def recommend(
    catalog: StrategyCatalog,
    events: Sequence[EmotionEvent],
    feedback_log: Sequence[StrategyFeedback],
    preferences: UserPreferences,
    request: RecommendationRequest,
    jitter: ScoreJitter | None = None,
) -> list[StrategyRecommendation]:
    """Rank regulation strategies for a user.

    Args:
        catalog: Strategies to choose from.
        events: The user's recent emotion events.
        feedback_log: The user's strategy feedback, oldest first.
        preferences: Stored preferences.
        request: Per-call parameters (emotion, overrides, limit).
        jitter: Score jitter for stages 3-5. Defaults to HashJitter().

    Returns:
        At most ``request.limit`` recommendations, highest score first.
        Empty when the catalog is empty or the user has neither events
        nor feedback.
    """
    if len(catalog) == 0 or (not events and not feedback_log):
        return []

    jitter = jitter or HashJitter()
    pool = filter_candidates(catalog, preferences, request)
    used: set[str] = set()
    recommendations: list[StrategyRecommendation] = []

    def add(
        strategy: RegulationStrategy,
        reason: str,
        reason_type: ReasonType,
        score: float,
    ) -> None:
        used.add(strategy.id)
        recommendations.append(_recommendation(strategy, reason, reason_type, score))

    # Proven effective for this user
    for strategy_id, effectiveness in aggregate_feedback(feedback_log).items():
        if effectiveness.is_effective and strategy_id in pool:
            add(
                pool[strategy_id],
                EFFECTIVE_REASON,
                ReasonType.EFFECTIVENESS,
                effectiveness.average * RecommendationThresholds.RATING_TO_SCORE,
            )

    # Suited to frequent emotions
    for emotion in top_emotions(events):
        matches = [
            strategy
            for strategy in pool.values()
            if strategy.id not in used and strategy.is_suitable_for(emotion)
        ]
        for strategy in matches[: RecommendationThresholds.STRATEGIES_PER_EMOTION]:
            add(
                strategy,
                emotion_reason(emotion),
                ReasonType.EMOTION,
                _jittered(jitter, strategy.id, ReasonType.EMOTION),
            )

    # Evidence based
    evidenced = [
        strategy
        for strategy in pool.values()
        if strategy.id not in used and strategy.has_recognized_evidence
    ]
    for strategy in evidenced[: RecommendationThresholds.EVIDENCE_STRATEGIES]:
        add(
            strategy,
            EVIDENCE_REASON,
            ReasonType.EVIDENCE,
            _jittered(jitter, strategy.id, ReasonType.EVIDENCE),
        )

    # Fill with the remaining preferred strategies
    deficit = request.limit - len(recommendations)
    if deficit > 0:
        remaining = [strategy for strategy in pool.values() if strategy.id not in used]
        for strategy in remaining[:deficit]:
            add(
                strategy,
                PREFERENCE_REASON,
                ReasonType.PREFERENCE,
                _jittered(jitter, strategy.id, ReasonType.PREFERENCE),
            )

    recommendations.sort(key=lambda rec: rec.score, reverse=True)
    result = recommendations[: request.limit]

    logger.debug(
        "Recommended %d of %d candidate strategies (%d events, %d feedback)",
        len(result),
        len(pool),
        len(events),
        len(feedback_log),
    )
    return result


def rerank_for_mood(
    catalog: StrategyCatalog,
    current: Sequence[StrategyRecommendation],
    emotion: str,
    jitter: ScoreJitter | None = None,
    limit: int = RecommendationThresholds.MOOD_LIMIT,
) -> list[StrategyRecommendation]:
    """Re-rank recommendations for the mood the user reports right now.

    Every catalog strategy suited to ``emotion`` is considered. Strategies
    already recommended keep their data with a score boost; others get a
    fresh score. Nothing is re-ranked when there are no current
    recommendations.

    Args:
        catalog: Strategies to choose from.
        current: Recommendations produced by recommend().
        emotion: The mood the user selected.
        jitter: Score jitter for strategies not yet recommended.
        limit: Maximum number of results.

    Returns:
        Up to ``limit`` recommendations, highest score first.
    """
    if not current:
        return []

    jitter = jitter or HashJitter()
    existing: Mapping[str, StrategyRecommendation] = {rec.id: rec for rec in current}
    reason = emotion_reason(emotion)

    reranked: list[StrategyRecommendation] = []
    for strategy in catalog:
        if not strategy.is_suitable_for(emotion):
            continue
        previous = existing.get(strategy.id)
        if previous is not None:
            reranked.append(
                previous.model_copy(
                    update={
                        "reason": reason,
                        "reason_type": ReasonType.CURRENT_MOOD,
                        "score": previous.score + RecommendationThresholds.MOOD_BOOST,
                    }
                )
            )
        else:
            reranked.append(
                _recommendation(
                    strategy,
                    reason,
                    ReasonType.CURRENT_MOOD,
                    _jittered(jitter, strategy.id, ReasonType.CURRENT_MOOD),
                )
            )

    reranked.sort(key=lambda rec: rec.score, reverse=True)
    return reranked[:limit]

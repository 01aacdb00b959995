# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotional regulation API endpoints.

This module provides endpoints for:
- GET /pattern-recognition - Emotion history and pattern analysis
- POST /pattern-recognition - Update pattern recognition settings
- GET /strategy-recommendations - Personalized strategy recommendations
- POST /strategy-recommendations - Record feedback or update preferences
- GET /strategies - The regulation strategy catalog
- GET /strategy-effectiveness - Aggregated feedback per strategy

All endpoints require an authenticated user.
"""

import logging
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from emoreg.api.dependencies import get_catalog, get_regulation_service, require_auth
from emoreg.api.middleware.auth import CurrentUser
from emoreg.core.emotional.constants import RecommendationThresholds
from emoreg.core.emotional.context import RecommendationRequest
from emoreg.core.emotional.recommendations import parse_complexity
from emoreg.core.emotional.strategies import StrategyCatalog
from emoreg.domains.regulation.service import EmotionalRegulationService
from emoreg.models.regulation import (
    ActionResponse,
    PatternRecognitionResponse,
    PatternSettingsRequest,
    PreferencesUpdateRequest,
    StrategyEffectivenessResponse,
    StrategyFeedbackRequest,
    StrategyListResponse,
    StrategyRecommendationsResponse,
    StrategyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _split_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def _invalid_body(error: str, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": error,
            "details": exc.errors(include_url=False, include_context=False),
        },
    )


# =============================================================================
# Pattern recognition
# =============================================================================


@router.get(
    "/pattern-recognition",
    response_model=PatternRecognitionResponse,
    summary="Get emotion patterns",
    description="Emotion records, journals and pattern analysis for a time window.",
)
async def get_pattern_recognition(
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
    emotions: Annotated[
        str | None, Query(description="Comma-separated emotion labels, or 'all'")
    ] = None,
    analysis_type: Annotated[str, Query(alias="analysisType")] = "all",
    current_user: CurrentUser = Depends(require_auth),
    service: EmotionalRegulationService = Depends(get_regulation_service),
) -> PatternRecognitionResponse:
    """Analyze the user's emotion history.

    Dates default to the last 30 days. Unknown ``analysisType`` values are
    rejected with 400.
    """
    return await service.get_pattern_analysis(
        user_id=current_user.id,
        start=start_date,
        end=end_date,
        emotions=_split_csv(emotions),
        analysis_type=analysis_type,
    )


@router.post(
    "/pattern-recognition",
    response_model=ActionResponse,
    summary="Update pattern recognition settings",
)
async def update_pattern_recognition(
    data: PatternSettingsRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: EmotionalRegulationService = Depends(get_regulation_service),
) -> ActionResponse:
    """Turn pattern recognition on or off and store its settings."""
    await service.update_pattern_settings(
        user_id=current_user.id,
        enabled=data.enabled,
        settings=data.settings,
    )
    return ActionResponse(success=True)


# =============================================================================
# Strategy recommendations
# =============================================================================


@router.get(
    "/strategy-recommendations",
    response_model=StrategyRecommendationsResponse,
    summary="Get strategy recommendations",
    description="Regulation strategies ranked for the user.",
)
async def get_strategy_recommendations(
    emotion: str | None = None,
    categories: Annotated[
        str | None, Query(description="Comma-separated categories")
    ] = None,
    complexity: str | None = None,
    limit: Annotated[
        int,
        Query(ge=1, le=RecommendationThresholds.MAX_LIMIT),
    ] = RecommendationThresholds.DEFAULT_LIMIT,
    current_mood: Annotated[str | None, Query(alias="currentMood")] = None,
    current_user: CurrentUser = Depends(require_auth),
    service: EmotionalRegulationService = Depends(get_regulation_service),
) -> StrategyRecommendationsResponse:
    """Recommend strategies.

    ``categories`` and ``complexity`` override the stored preferences for
    this request. ``currentMood`` re-ranks the result for the mood the user
    reports right now.
    """
    request = RecommendationRequest(
        emotion=emotion or None,
        categories=_split_csv(categories),
        complexity=parse_complexity(complexity or None),
        limit=limit,
    )
    return await service.get_recommendations(
        user_id=current_user.id,
        request=request,
        current_mood=current_mood or None,
    )


@router.post(
    "/strategy-recommendations",
    response_model=ActionResponse,
    summary="Record strategy feedback or update preferences",
    description=(
        "With action=update_preferences the body carries the new preferences; "
        "otherwise the body is strategy feedback."
    ),
)
async def post_strategy_recommendations(
    body: Annotated[dict[str, Any], Body()],
    current_user: CurrentUser = Depends(require_auth),
    service: EmotionalRegulationService = Depends(get_regulation_service),
) -> ActionResponse | JSONResponse:
    """Record strategy feedback or update strategy preferences."""
    if body.get("action") == "update_preferences":
        try:
            update = PreferencesUpdateRequest.model_validate(body)
        except ValidationError as e:
            return _invalid_body("Invalid preferences", e)

        await service.update_preferences(current_user.id, update.preferences.to_preferences())
        return ActionResponse(success=True, message="Preferences updated successfully")

    try:
        feedback = StrategyFeedbackRequest.model_validate(body)
    except ValidationError as e:
        return _invalid_body("Invalid feedback", e)

    await service.record_feedback(current_user.id, feedback.to_feedback())
    return ActionResponse(success=True, message="Strategy feedback recorded successfully")


# =============================================================================
# Catalog and effectiveness
# =============================================================================


@router.get(
    "/strategies",
    response_model=StrategyListResponse,
    summary="List regulation strategies",
)
async def list_strategies(
    current_user: CurrentUser = Depends(require_auth),
    catalog: StrategyCatalog = Depends(get_catalog),
) -> StrategyListResponse:
    """Return the full strategy catalog in definition order."""
    items = [StrategyResponse.from_strategy(strategy) for strategy in catalog]
    return StrategyListResponse(items=items, total=len(items))


@router.get(
    "/strategy-effectiveness",
    response_model=StrategyEffectivenessResponse,
    summary="Get strategy effectiveness",
)
async def get_strategy_effectiveness(
    current_user: CurrentUser = Depends(require_auth),
    service: EmotionalRegulationService = Depends(get_regulation_service),
) -> StrategyEffectivenessResponse:
    """Aggregate the user's feedback ratings per strategy."""
    items = await service.get_strategy_effectiveness(current_user.id)
    return StrategyEffectivenessResponse(items=items, total=len(items))

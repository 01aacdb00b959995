# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- Emotion event and feedback builders
- The bundled strategy catalog
- Default user preferences
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from emoreg.core.emotional.context import (
    EmotionEvent,
    StrategyFeedback,
    UserPreferences,
)
from emoreg.core.emotional.strategies import StrategyCatalog, get_strategy_catalog


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_user_id() -> str:
    """Provide a sample user ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def base_time() -> datetime:
    """A Monday at 09:00 UTC."""
    return datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_event(sample_user_id: str) -> Callable[..., EmotionEvent]:
    """Build emotion events with sequential ids."""
    counter = {"n": 0}

    def _make(
        emotion: str,
        timestamp: datetime,
        intensity: float = 3.0,
        triggers: Any = None,
    ) -> EmotionEvent:
        counter["n"] += 1
        return EmotionEvent(
            id=f"event-{counter['n']}",
            user_id=sample_user_id,
            timestamp=timestamp,
            emotion=emotion,
            intensity=intensity,
            triggers=triggers,
        )

    return _make


@pytest.fixture
def hourly_events(
    make_event: Callable[..., EmotionEvent], base_time: datetime
) -> Callable[[list[str]], list[EmotionEvent]]:
    """Build one event per label, one hour apart, starting at base_time."""

    def _build(labels: list[str]) -> list[EmotionEvent]:
        return [
            make_event(label, base_time + timedelta(hours=i))
            for i, label in enumerate(labels)
        ]

    return _build


@pytest.fixture
def make_feedback() -> Callable[..., StrategyFeedback]:
    """Build strategy feedback entries."""

    def _make(strategy_id: str, effectiveness: int, emotion: str | None = None) -> StrategyFeedback:
        return StrategyFeedback(
            strategy_id=strategy_id,
            effectiveness=effectiveness,
            emotion=emotion,
        )

    return _make


@pytest.fixture
def catalog() -> StrategyCatalog:
    """The bundled regulation strategy catalog."""
    return get_strategy_catalog()


@pytest.fixture
def default_preferences() -> UserPreferences:
    """Preferences with every default applied."""
    return UserPreferences()

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Emotional regulation domain package.

This package provides the emotional regulation service:
- Pattern analysis over stored emotion records and journals
- Strategy recommendations, feedback and preferences
- Pattern recognition settings
"""

from emoreg.domains.regulation.service import (
    EmotionalRegulationService,
    RegulationServiceError,
    SettingsNotFoundError,
    StrategyNotFoundError,
)

__all__ = [
    "EmotionalRegulationService",
    "RegulationServiceError",
    "SettingsNotFoundError",
    "StrategyNotFoundError",
]

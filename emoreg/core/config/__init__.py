# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Loading of bundled data files such as the strategy catalog

Example:
    >>> from emoreg.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from emoreg.core.config.settings import (
    AnalysisSettings,
    APISettings,
    CORSSettings,
    DatabaseSettings,
    RateLimitSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from emoreg.core.config.yaml_loader import BUNDLED_CONFIG_DIR, YAMLLoadError, load_yaml

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "AnalysisSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
    # YAML utilities
    "BUNDLED_CONFIG_DIR",
    "load_yaml",
    "YAMLLoadError",
]

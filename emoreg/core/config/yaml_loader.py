# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""YAML data file loader utilities.

Static data shipped with the service (such as the regulation strategy
catalog) lives in YAML files under ``emoreg/config``. This module reads
them with ``yaml.safe_load`` and normalizes failures into YAMLLoadError.

Example:
    >>> from emoreg.core.config.yaml_loader import BUNDLED_CONFIG_DIR, load_yaml
    >>> data = load_yaml(BUNDLED_CONFIG_DIR / "strategies.yaml")
    >>> len(data["strategies"])
    15
"""

from pathlib import Path
from typing import Any

import yaml

BUNDLED_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


class YAMLLoadError(Exception):
    """Raised when a YAML file cannot be loaded or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize YAMLLoadError.

        Args:
            path: Path to the YAML file that failed to load.
            reason: Description of why the file failed to load.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its root mapping.

    Args:
        path: Path to the YAML file to load.

    Returns:
        Dictionary containing the parsed YAML contents.
        Empty dict if the file is empty.

    Raises:
        YAMLLoadError: If the file doesn't exist, cannot be read,
            contains invalid YAML, or its root is not a mapping.
    """
    if not path.is_file():
        reason = "Path is not a file" if path.exists() else "File does not exist"
        raise YAMLLoadError(path, reason)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise YAMLLoadError(
            path, f"YAML root must be a mapping, got {type(parsed).__name__}"
        )

    return parsed

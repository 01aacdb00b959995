# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Regulation strategy catalog.

The catalog is a read-only, ordered table of regulation strategies. It is
built once from YAML (the bundled ``emoreg/config/strategies.yaml`` by
default) and injected into the recommendation engine. Definition order is
significant: it is the order in which candidates are considered.

Example:
    >>> from emoreg.core.emotional.strategies import get_strategy_catalog
    >>> catalog = get_strategy_catalog()
    >>> catalog.get("deep-breathing").time_required
    '5 minutes'
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from emoreg.core.config.yaml_loader import BUNDLED_CONFIG_DIR, YAMLLoadError, load_yaml
from emoreg.core.emotional.constants import (
    EVIDENCE_MARKERS,
    StrategyComplexity,
    StrategyDuration,
)
from emoreg.core.emotional.exceptions import StrategyCatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = BUNDLED_CONFIG_DIR / "strategies.yaml"


class RegulationStrategy(BaseModel):
    """A single emotion regulation strategy."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str
    steps: tuple[str, ...] = ()
    suitable_for: frozenset[str] = frozenset()
    category: str
    complexity: StrategyComplexity
    duration: StrategyDuration
    evidence_base: str = ""

    @property
    def time_required(self) -> str:
        return self.duration.time_required

    @property
    def has_recognized_evidence(self) -> bool:
        """Whether the evidence base cites a recognized authority."""
        return any(marker in self.evidence_base for marker in EVIDENCE_MARKERS)

    def is_suitable_for(self, emotion: str) -> bool:
        return emotion in self.suitable_for


class StrategyCatalog:
    """Ordered, read-only collection of regulation strategies keyed by id."""

    def __init__(self, strategies: Iterable[RegulationStrategy] = ()) -> None:
        self._strategies: dict[str, RegulationStrategy] = {}
        for strategy in strategies:
            if strategy.id in self._strategies:
                raise StrategyCatalogError(f"Duplicate strategy id: {strategy.id!r}")
            self._strategies[strategy.id] = strategy

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> "StrategyCatalog":
        """Build a catalog from raw mappings (e.g. parsed YAML).

        Raises:
            StrategyCatalogError: If an entry is invalid or an id repeats.
        """
        strategies = []
        for index, entry in enumerate(entries):
            try:
                strategies.append(RegulationStrategy.model_validate(entry))
            except ValidationError as e:
                raise StrategyCatalogError(
                    f"Invalid strategy entry at position {index}: {e}"
                ) from e
        return cls(strategies)

    @classmethod
    def from_yaml(cls, path: Path) -> "StrategyCatalog":
        """Load a catalog from a YAML file with a root ``strategies`` list.

        Raises:
            StrategyCatalogError: If the file cannot be loaded or is invalid.
        """
        try:
            data = load_yaml(path)
        except YAMLLoadError as e:
            raise StrategyCatalogError(str(e)) from e

        entries = data.get("strategies", [])
        if not isinstance(entries, list):
            raise StrategyCatalogError(
                f"'strategies' in {path} must be a list, got {type(entries).__name__}"
            )

        catalog = cls.from_entries(entries)
        logger.info("Loaded %d regulation strategies from %s", len(catalog), path)
        return catalog

    def get(self, strategy_id: str) -> RegulationStrategy | None:
        return self._strategies.get(strategy_id)

    def ids(self) -> list[str]:
        return list(self._strategies)

    def __iter__(self) -> Iterator[RegulationStrategy]:
        return iter(self._strategies.values())

    def __len__(self) -> int:
        return len(self._strategies)

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._strategies

    def __repr__(self) -> str:
        return f"StrategyCatalog(strategies={len(self)})"


@lru_cache(maxsize=4)
def get_strategy_catalog(path: Path | None = None) -> StrategyCatalog:
    """Get a cached catalog instance.

    Args:
        path: YAML file to load. Defaults to the bundled catalog.

    Returns:
        Cached StrategyCatalog.
    """
    return StrategyCatalog.from_yaml(path or DEFAULT_CATALOG_PATH)

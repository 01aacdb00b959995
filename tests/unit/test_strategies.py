# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the regulation strategy catalog."""

from pathlib import Path

import pytest

from emoreg.core.emotional.constants import StrategyComplexity, StrategyDuration
from emoreg.core.emotional.exceptions import StrategyCatalogError
from emoreg.core.emotional.strategies import (
    RegulationStrategy,
    StrategyCatalog,
    get_strategy_catalog,
)

VALID_ENTRY = {
    "id": "box-breathing",
    "name": "Box Breathing",
    "description": "Breathe in a square pattern.",
    "steps": ["In for 4", "Hold for 4", "Out for 4", "Hold for 4"],
    "suitable_for": ["Anxious", "Stressed"],
    "category": "physical",
    "complexity": "simple",
    "duration": "short",
    "evidence_base": "Used in NHS breathing guidance.",
}


class TestBundledCatalog:
    """Tests for the bundled catalog."""

    def test_has_fifteen_strategies_in_order(self, catalog: StrategyCatalog) -> None:
        ids = catalog.ids()

        assert len(catalog) == 15
        assert ids[0] == "deep-breathing"
        assert ids[-1] == "self-compassion-break"

    def test_lookup(self, catalog: StrategyCatalog) -> None:
        strategy = catalog.get("deep-breathing")

        assert strategy.category == "physical"
        assert strategy.complexity is StrategyComplexity.SIMPLE
        assert strategy.time_required == "5 minutes"
        assert strategy.has_recognized_evidence is True
        assert strategy.is_suitable_for("Anxious")
        assert not strategy.is_suitable_for("anxious")

    def test_missing_id(self, catalog: StrategyCatalog) -> None:
        assert catalog.get("levitation") is None
        assert "levitation" not in catalog
        assert "counting" in catalog

    def test_catalog_is_cached(self) -> None:
        assert get_strategy_catalog() is get_strategy_catalog()

    def test_evidence_markers(self, catalog: StrategyCatalog) -> None:
        # Cites the Royal College, which is not a recognized marker
        assert catalog.get("counting").has_recognized_evidence is False


class TestRegulationStrategy:
    """Tests for RegulationStrategy."""

    def test_duration_display(self) -> None:
        strategy = RegulationStrategy.model_validate({**VALID_ENTRY, "duration": "long"})

        assert strategy.duration is StrategyDuration.LONG
        assert strategy.time_required == "30 minutes"

    def test_steps_and_suitability_are_immutable(self) -> None:
        strategy = RegulationStrategy.model_validate(VALID_ENTRY)

        assert strategy.steps == ("In for 4", "Hold for 4", "Out for 4", "Hold for 4")
        assert strategy.suitable_for == frozenset({"Anxious", "Stressed"})


class TestStrategyCatalog:
    """Tests for building catalogs."""

    def test_from_entries(self) -> None:
        catalog = StrategyCatalog.from_entries([VALID_ENTRY])

        assert catalog.ids() == ["box-breathing"]
        assert repr(catalog) == "StrategyCatalog(strategies=1)"

    def test_duplicate_id_raises(self) -> None:
        with pytest.raises(StrategyCatalogError) as exc_info:
            StrategyCatalog.from_entries([VALID_ENTRY, VALID_ENTRY])

        assert "Duplicate strategy id" in str(exc_info.value)

    def test_invalid_entry_raises(self) -> None:
        entry = {**VALID_ENTRY, "complexity": "extreme"}

        with pytest.raises(StrategyCatalogError) as exc_info:
            StrategyCatalog.from_entries([VALID_ENTRY | {"id": "ok"}, entry])

        assert "position 1" in str(exc_info.value)

    def test_empty_catalog(self) -> None:
        catalog = StrategyCatalog()

        assert len(catalog) == 0
        assert list(catalog) == []


class TestFromYaml:
    """Tests for StrategyCatalog.from_yaml."""

    def test_loads_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "strategies.yaml"
        yaml_file.write_text(
            "strategies:\n"
            "  - id: walk\n"
            "    name: Walk\n"
            "    description: Go for a walk.\n"
            "    category: physical\n"
            "    complexity: simple\n"
            "    duration: medium\n"
        )

        catalog = StrategyCatalog.from_yaml(yaml_file)

        assert catalog.get("walk").time_required == "15 minutes"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(StrategyCatalogError):
            StrategyCatalog.from_yaml(tmp_path / "missing.yaml")

    def test_strategies_must_be_a_list(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "strategies.yaml"
        yaml_file.write_text("strategies:\n  walk: {}\n")

        with pytest.raises(StrategyCatalogError) as exc_info:
            StrategyCatalog.from_yaml(yaml_file)

        assert "must be a list" in str(exc_info.value)

    def test_empty_file_gives_empty_catalog(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "strategies.yaml"
        yaml_file.write_text("")

        assert len(StrategyCatalog.from_yaml(yaml_file)) == 0

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for trigger normalization."""

import pytest

from emoreg.core.emotional.triggers import (
    RawTrigger,
    StructuredTrigger,
    parse_trigger,
    trigger_key,
)


class TestParseTrigger:
    """Tests for parse_trigger."""

    @pytest.mark.parametrize("value", [None, "", []])
    def test_empty_values_mean_no_trigger(self, value) -> None:
        """None, empty string and empty list all mean no trigger."""
        assert parse_trigger(value) is None

    def test_string_becomes_raw_trigger(self) -> None:
        result = parse_trigger("Upcoming test")

        assert result == RawTrigger(text="Upcoming test")
        assert result.key == "Upcoming test"

    def test_string_list_becomes_structured_trigger(self) -> None:
        result = parse_trigger(["homework", "maths"])

        assert isinstance(result, StructuredTrigger)
        assert result.items == ("homework", "maths")

    def test_structured_key_is_compact_json_in_order(self) -> None:
        """Order is preserved, so differently ordered lists differ."""
        first = parse_trigger(["a", "b"])
        second = parse_trigger(["b", "a"])

        assert first.key == '["a","b"]'
        assert second.key == '["b","a"]'

    def test_non_ascii_is_kept_in_key(self) -> None:
        assert parse_trigger(["café"]).key == '["café"]'

    def test_dict_is_coerced_to_raw_json(self) -> None:
        result = parse_trigger({"source": "school"})

        assert isinstance(result, RawTrigger)
        assert result.text == '{"source":"school"}'

    def test_number_is_coerced_to_raw_json(self) -> None:
        assert parse_trigger(42) == RawTrigger(text="42")

    def test_mixed_list_is_coerced_to_raw_json(self) -> None:
        result = parse_trigger(["homework", 3])

        assert isinstance(result, RawTrigger)
        assert result.text == '["homework",3]'

    def test_existing_trigger_passes_through(self) -> None:
        trigger = RawTrigger(text="Noise")

        assert parse_trigger(trigger) is trigger

    def test_serialized_trigger_is_reparsed(self) -> None:
        """A dumped trigger round-trips through parse_trigger."""
        dumped = StructuredTrigger(items=("a", "b")).model_dump()

        assert parse_trigger(dumped) == StructuredTrigger(items=("a", "b"))

    def test_coercion_logs_debug(self, caplog) -> None:
        with caplog.at_level("DEBUG", logger="emoreg.core.emotional.triggers"):
            parse_trigger({"x": 1})

        assert "Coerced malformed trigger" in caplog.text


class TestTriggerKey:
    """Tests for trigger_key."""

    def test_none_has_no_key(self) -> None:
        assert trigger_key(None) is None

    def test_raw_and_structured_keys(self) -> None:
        assert trigger_key(RawTrigger(text="Exam")) == "Exam"
        assert trigger_key(StructuredTrigger(items=("x",))) == '["x"]'

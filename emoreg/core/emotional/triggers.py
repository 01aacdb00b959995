# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Trigger values recorded alongside emotion events.

A user's trigger can arrive as free text ("Upcoming test") or as a list of
tags (["homework", "maths"]). Both shapes are normalized into a small
tagged variant and reduced to a single canonical key for grouping:

- RawTrigger: key is the text itself
- StructuredTrigger: key is the compact JSON array of its items

Anything else (numbers, mappings, lists holding non-strings) is coerced to
its JSON serialization and kept as a RawTrigger instead of being rejected.
"""

import json
import logging
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class RawTrigger(BaseModel):
    """A trigger recorded as free text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["raw"] = "raw"
    text: str

    @property
    def key(self) -> str:
        """Canonical grouping key."""
        return self.text


class StructuredTrigger(BaseModel):
    """A trigger recorded as an ordered list of tags."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    items: tuple[str, ...]

    @property
    def key(self) -> str:
        """Canonical grouping key (compact JSON array, order preserved)."""
        return _to_json(list(self.items))


TriggerValue = Union[RawTrigger, StructuredTrigger]


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _coerce(value: Any) -> RawTrigger:
    try:
        text = _to_json(value)
    except (TypeError, ValueError):
        text = str(value)
    logger.debug("Coerced malformed trigger value of type %s", type(value).__name__)
    return RawTrigger(text=text)


def parse_trigger(value: Any) -> TriggerValue | None:
    """Normalize a stored trigger value into a TriggerValue.

    Args:
        value: Whatever was stored for the event's triggers.

    Returns:
        The normalized trigger, or None when the event has no trigger
        (None, empty string or empty list).
    """
    if value is None or isinstance(value, (RawTrigger, StructuredTrigger)):
        return value

    if isinstance(value, str):
        return RawTrigger(text=value) if value else None

    if isinstance(value, (list, tuple)):
        if not value:
            return None
        if all(isinstance(item, str) for item in value):
            return StructuredTrigger(items=tuple(value))
        return _coerce(list(value))

    if isinstance(value, dict) and value.get("kind") in ("raw", "structured"):
        # Already-serialized TriggerValue (e.g. from an API payload)
        if value["kind"] == "raw" and isinstance(value.get("text"), str):
            return parse_trigger(value["text"])
        if value["kind"] == "structured" and isinstance(value.get("items"), (list, tuple)):
            return parse_trigger(list(value["items"]))

    return _coerce(value)


def trigger_key(value: TriggerValue | None) -> str | None:
    """Canonical string key used to group events by trigger."""
    if value is None:
        return None
    return value.key

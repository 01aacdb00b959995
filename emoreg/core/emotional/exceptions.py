# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions raised by the emotional pattern and strategy engines."""

from collections.abc import Iterable


class EmotionalRegulationError(Exception):
    """Base exception for emotional regulation core errors."""

    pass


class InvalidRequestValueError(EmotionalRegulationError):
    """Raised when a request parameter holds an unrecognized value.

    Attributes:
        field: Name of the offending request parameter.
        value: The rejected value.
        allowed: Accepted values.
    """

    def __init__(self, field: str, value: object, allowed: Iterable[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid {field} {value!r}; expected one of: {', '.join(self.allowed)}"
        )


class InvalidScopeRequestError(InvalidRequestValueError):
    """Raised for an unknown analysisType."""

    def __init__(self, value: object, allowed: Iterable[str]) -> None:
        super().__init__("analysisType", value, allowed)


class InvalidComplexityError(InvalidRequestValueError):
    """Raised for an unknown strategy complexity in a request."""

    def __init__(self, value: object, allowed: Iterable[str]) -> None:
        super().__init__("complexity", value, allowed)


class StrategyCatalogError(EmotionalRegulationError):
    """Raised when the regulation strategy catalog cannot be built."""

    pass

"""Shared value objects exchanged with reporting engines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DiscreteParameterValue:
    """Single discrete value bound to a report parameter."""

    value: object = None


NULL_DISCRETE_VALUE = DiscreteParameterValue(value=None)

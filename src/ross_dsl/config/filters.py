"""
Filters
=======

A filter receives the data produced by an extractor and decides whether
the matcher it belongs to passes. Several filters also update a state
slot as a side effect, which is how rules keep memory between events.

State slots are addressed by their u32 index; ``let`` declarations make
the slot name resolve to that index.
"""

from dataclasses import dataclass

from ross_dsl.config.cron import CronExpression
from ross_dsl.config.values import Value


class Filter:
    """Base class of all filters."""

    def __str__(self) -> str:
        arguments = ", ".join(str(value) for value in vars(self).values())
        return f"{type(self).__name__}({arguments})"


# =============================================================================
# Comparisons
# =============================================================================

@dataclass(frozen=True)
class ValueEqualToConstFilter(Filter):
    """Passes when the extracted value equals ``value``."""
    value: Value


@dataclass(frozen=True)
class StateEqualToConstFilter(Filter):
    """Passes when state slot ``state_index`` holds ``value``."""
    state_index: int
    value: Value


@dataclass(frozen=True)
class StateEqualToValueFilter(Filter):
    """Passes when state slot ``state_index`` equals the extracted value."""
    state_index: int


@dataclass(frozen=True)
class StateMoreThanConstFilter(Filter):
    state_index: int
    value: Value


@dataclass(frozen=True)
class TimeMatchesCronExpressionFilter(Filter):
    """Passes when the current time matches ``cron_expression``."""
    cron_expression: CronExpression


# =============================================================================
# State Updates
# =============================================================================

@dataclass(frozen=True)
class IncrementStateByConstFilter(Filter):
    state_index: int
    value: Value


@dataclass(frozen=True)
class IncrementStateByValueFilter(Filter):
    state_index: int


@dataclass(frozen=True)
class DecrementStateByConstFilter(Filter):
    state_index: int
    value: Value


@dataclass(frozen=True)
class DecrementStateByValueFilter(Filter):
    state_index: int


@dataclass(frozen=True)
class SetStateToConstFilter(Filter):
    """Writes ``value`` into state slot ``state_index`` and passes."""
    state_index: int
    value: Value


@dataclass(frozen=True)
class SetStateToValueFilter(Filter):
    """Writes the extracted value into state slot ``state_index``."""
    state_index: int


@dataclass(frozen=True)
class FlipStateFilter(Filter):
    """Inverts the bool held in state slot ``state_index``."""
    state_index: int

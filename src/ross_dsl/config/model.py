"""
Configuration Model
===================

The structure the compiler produces and the runtime consumes.

Structure
---------
Config
├── initial_state     slot index -> Value
├── event_processors  EventProcessor, in source declaration order
│   ├── matcher       boolean tree of (extractor, filter) leaves
│   └── creators      Creator: extractor + producer + optional guard
└── peripherals       peripheral index -> Peripheral

For every incoming event the runtime evaluates each processor's matcher;
when it passes, every creator whose guard also passes produces an
outgoing event.

Usage:
    config = compile_dsl(text)
    print(config.describe())
"""

from dataclasses import dataclass, field
from typing import Optional

from ross_dsl.config.extractors import Extractor
from ross_dsl.config.filters import Filter
from ross_dsl.config.peripherals import Peripheral
from ross_dsl.config.producers import Producer
from ross_dsl.config.values import Value


INDENT = "  "


# =============================================================================
# Matchers
# =============================================================================

class Matcher:
    """Base class of the boolean matcher tree."""

    def describe_lines(self) -> list[str]:
        raise NotImplementedError

    def describe(self) -> str:
        return "\n".join(self.describe_lines())


@dataclass(frozen=True)
class SingleMatcher(Matcher):
    """Leaf: run ``extractor`` on the event and pass its output to ``filter``."""
    extractor: Extractor
    filter: Filter

    def describe_lines(self) -> list[str]:
        return [f"{self.extractor} -> {self.filter}"]


@dataclass(frozen=True)
class AndMatcher(Matcher):
    left: Matcher
    right: Matcher

    def describe_lines(self) -> list[str]:
        return ["and"] + _indent(self.left.describe_lines() + self.right.describe_lines())


@dataclass(frozen=True)
class OrMatcher(Matcher):
    left: Matcher
    right: Matcher

    def describe_lines(self) -> list[str]:
        return ["or"] + _indent(self.left.describe_lines() + self.right.describe_lines())


@dataclass(frozen=True)
class NotMatcher(Matcher):
    inner: Matcher

    def describe_lines(self) -> list[str]:
        return ["not"] + _indent(self.inner.describe_lines())


def conjoin(matchers: list[Matcher]) -> Matcher:
    """
    Fold matchers left to right with And.

        conjoin([a, b, c]) == AndMatcher(AndMatcher(a, b), c)

    Raises:
        ValueError: If `matchers` is empty
    """
    if not matchers:
        raise ValueError("conjoin() needs at least one matcher")
    result = matchers[0]
    for matcher in matchers[1:]:
        result = AndMatcher(result, matcher)
    return result


# =============================================================================
# Event Processors
# =============================================================================

@dataclass(frozen=True)
class Creator:
    """
    Produces one outgoing event when its processor fires.

    Attributes:
        extractor: Data handed to the producer
        producer: Builds the outgoing event
        matcher: Optional additional guard (``fire {...} if match {...}``)
    """
    extractor: Extractor
    producer: Producer
    matcher: Optional[Matcher] = None

    def describe_lines(self) -> list[str]:
        lines = [f"{self.extractor} -> {self.producer}"]
        if self.matcher is not None:
            lines.append(INDENT + "if")
            lines.extend(_indent(_indent(self.matcher.describe_lines())))
        return lines


@dataclass(frozen=True)
class EventProcessor:
    """A matcher and the creators it triggers (possibly none)."""
    matcher: Matcher
    creators: tuple[Creator, ...] = ()

    def describe_lines(self) -> list[str]:
        lines = ["match"] + _indent(self.matcher.describe_lines())
        for creator in self.creators:
            lines.append("fire")
            lines.extend(_indent(creator.describe_lines()))
        return lines


# =============================================================================
# Config
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    A compiled program.

    Attributes:
        initial_state: Initial value of every state slot, by slot index
        event_processors: Processors in source declaration order
        peripherals: Declared peripherals, by peripheral index
    """
    initial_state: dict[int, Value] = field(default_factory=dict)
    event_processors: tuple[EventProcessor, ...] = ()
    peripherals: dict[int, Peripheral] = field(default_factory=dict)

    def describe(self) -> str:
        """
        Render the configuration as stable, human-readable text.

        Example:
            initial state:
              0: false
            event processors:
              #0
                match
                  and
                    EventCodeExtractor() -> ValueEqualToConstFilter(0x0007~u16)
                    ...
            peripherals:
              0: bcm single(0)
        """
        lines = ["initial state:"]
        for index in sorted(self.initial_state):
            lines.append(f"{INDENT}{index}: {self.initial_state[index]}")

        lines.append("event processors:")
        for number, processor in enumerate(self.event_processors):
            lines.append(f"{INDENT}#{number}")
            lines.extend(_indent(_indent(processor.describe_lines())))

        lines.append("peripherals:")
        for index in sorted(self.peripherals):
            lines.append(f"{INDENT}{index}: {self.peripherals[index]}")

        return "\n".join(lines)


def _indent(lines: list[str]) -> list[str]:
    return [INDENT + line for line in lines]

"""
Item Registry and Dispatch
==========================

Extractors, filters, producers and peripheral shapes are all written as
item calls:

    Identifier ( arg0 , arg1 , ... ) ;

Each argument is a literal or a constant name. The identifier is looked
up by exact name in a fixed table of ItemSpecs. A spec records the
constructor and the type every parameter requires; the call is checked
against it in this order:

1. Unknown name      -> UnknownExtractor / UnknownFilter / UnknownProducer
                        (recoverable; the name is the location)
2. Argument list and terminating ``;``
3. Argument count    -> Expected(ArgumentCount(declared, found))
4. Each argument is cast to its parameter type (see literal.cast_literal)

Everything after a successful name lookup is fatal: once the name is
known the call cannot be anything else.

Example:
    >>> cursor, item = filter_call(Cursor("FlipStateFilter(0x00000000~u32);"), {})
    >>> item
    FlipStateFilter(state_index=0)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ross_dsl.combinators import committed, delimited_list
from ross_dsl.config import extractors, filters, producers
from ross_dsl.config.peripherals import (
    BcmRgb,
    BcmRgbw,
    BcmSingle,
    RelayDoubleExclusive,
    RelaySingle,
)
from ross_dsl.config.values import ParameterType
from ross_dsl.errors import BaseError, ErrorKind, Expectation
from ross_dsl.literal import Literal, cast_literal, literal_or_constant
from ross_dsl.scanner import Cursor, name, skip_space, terminator

logger = logging.getLogger(__name__)


# =============================================================================
# Item Specifications
# =============================================================================

@dataclass(frozen=True)
class ItemSpec:
    """
    A constructible item.

    Attributes:
        name: Identifier used in source
        factory: Called with the cast arguments, in order
        parameters: Required type of each parameter
    """
    name: str
    factory: Callable[..., Any]
    parameters: tuple[ParameterType, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)


def _spec(cls: type, *parameters: ParameterType) -> ItemSpec:
    return ItemSpec(cls.__name__, cls, parameters)


def _registry(*specs: ItemSpec) -> dict[str, ItemSpec]:
    return {spec.name: spec for spec in specs}


U8 = ParameterType.U8
U16 = ParameterType.U16
U32 = ParameterType.U32
VALUE = ParameterType.VALUE


EXTRACTORS = _registry(
    _spec(extractors.NoneExtractor),
    _spec(extractors.PacketExtractor),
    _spec(extractors.EventCodeExtractor),
    _spec(extractors.EventProducerAddressExtractor),
    _spec(extractors.MessageCodeExtractor),
    _spec(extractors.MessageValueExtractor),
    _spec(extractors.ButtonIndexExtractor),
)

FILTERS = _registry(
    _spec(filters.ValueEqualToConstFilter, VALUE),
    _spec(filters.StateEqualToConstFilter, U32, VALUE),
    _spec(filters.StateEqualToValueFilter, U32),
    _spec(filters.IncrementStateByConstFilter, U32, VALUE),
    _spec(filters.IncrementStateByValueFilter, U32),
    _spec(filters.DecrementStateByConstFilter, U32, VALUE),
    _spec(filters.DecrementStateByValueFilter, U32),
    _spec(filters.SetStateToConstFilter, U32, VALUE),
    _spec(filters.SetStateToValueFilter, U32),
    _spec(filters.FlipStateFilter, U32),
    _spec(filters.TimeMatchesCronExpressionFilter, ParameterType.CRON_EXPRESSION),
    _spec(filters.StateMoreThanConstFilter, U32, VALUE),
)

PRODUCERS = _registry(
    _spec(producers.NoneProducer),
    _spec(producers.PacketProducer, U16),
    _spec(producers.MessageProducer, U16, U16, ParameterType.MESSAGE_VALUE),
    _spec(producers.BcmChangeBrightnessProducer, U16, U8, ParameterType.BCM_VALUE),
    _spec(producers.BcmChangeBrightnessStateProducer, U16, U8, U32),
    _spec(producers.BcmAnimateBrightnessProducer, U16, U8, U32, ParameterType.BCM_VALUE),
    _spec(producers.BcmAnimateBrightnessStateProducer, U16, U8, U32, U32),
    _spec(producers.RelaySetValueProducer, U16, U8, ParameterType.RELAY_VALUE),
)

# Peripheral shapes are keyed by the keyword written after the family
PERIPHERAL_SHAPES: dict[str, dict[str, ItemSpec]] = {
    "bcm": {
        "single": ItemSpec("single", BcmSingle, (U8,)),
        "rgb": ItemSpec("rgb", BcmRgb, (U8, U8, U8)),
        "rgbw": ItemSpec("rgbw", BcmRgbw, (U8, U8, U8, U8)),
    },
    "relay": {
        "single": ItemSpec("single", RelaySingle, (U8,)),
        "double_exclusive": ItemSpec("double_exclusive", RelayDoubleExclusive, (U8, U8)),
    },
}


# =============================================================================
# Arguments
# =============================================================================

@dataclass(frozen=True)
class Argument:
    """A parsed call argument and where it was written."""
    location: Cursor
    literal: Literal


def argument_list(
    cursor: Cursor, constants: Mapping[str, Literal]
) -> tuple[Cursor, list[Argument]]:
    """Parse ``( arg , arg , ... )`` where each arg is a literal or constant."""

    def argument(start: Cursor) -> tuple[Cursor, Argument]:
        end, value = literal_or_constant(start, constants)
        return end, Argument(start, value)

    return delimited_list(cursor, argument)


def construct(start: Cursor, spec: ItemSpec, arguments: list[Argument]) -> Any:
    """
    Check arity, cast the arguments and build the item.

    Args:
        start: Cursor at the item name (location of an arity mismatch)
        spec: The item to build
        arguments: Parsed arguments

    Raises:
        BaseError: Expected(ArgumentCount) or a cast failure
    """
    if len(arguments) != spec.arity:
        raise BaseError(
            start,
            ErrorKind.expected(Expectation.argument_count(spec.arity, len(arguments))),
            length=len(spec.name),
        )
    values = [
        cast_literal(argument.literal, parameter, argument.location)
        for argument, parameter in zip(arguments, spec.parameters)
    ]
    return spec.factory(*values)


# =============================================================================
# Item Calls
# =============================================================================

def item_call(
    cursor: Cursor,
    registry: Mapping[str, ItemSpec],
    constants: Mapping[str, Literal],
    unknown: ErrorKind,
) -> tuple[Cursor, Any]:
    """
    Parse ``Name(args);`` against `registry`.

    Args:
        cursor: Position of the item name
        registry: Items allowed here
        constants: Constant table for argument resolution
        unknown: Error kind raised when the name is not in `registry`

    Returns:
        The cursor after the ``;`` and the constructed item
    """
    after_name, item_name = name(cursor)
    spec = registry.get(item_name)
    if spec is None:
        raise BaseError(cursor, unknown, length=len(item_name))

    with committed():
        after_arguments, arguments = argument_list(skip_space(after_name), constants)
        end = terminator(after_arguments)
        item = construct(cursor, spec, arguments)

    logger.debug(f"Item {item_name} at {cursor.source_location}")
    return end, item


def extractor_call(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Any]:
    return item_call(cursor, EXTRACTORS, constants, ErrorKind.unknown_extractor())


def filter_call(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Any]:
    return item_call(cursor, FILTERS, constants, ErrorKind.unknown_filter())


def producer_call(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Any]:
    return item_call(cursor, PRODUCERS, constants, ErrorKind.unknown_producer())

"""
Declaration Statements
======================

Statements that add to the symbol tables rather than producing rules.

    const NAME = literal;
    let NAME = literal;
    [pub(addr, ...)] peripheral <index> bcm|relay <shape>(channels);

Each parser returns a declaration object; the compiler applies it to the
SymbolTable once the whole statement has parsed.

Examples:
    const receiver_address = 0x0003~u16;
    let active = false;
    peripheral 0x00000000~u32 bcm rgb(0x00~u8, 0x01~u8, 0x02~u8);
    pub(0x0010~u16) peripheral 0x00000001~u32 relay single(0x03~u8);
"""

import logging
from dataclasses import dataclass

from ross_dsl.combinators import committed, optional
from ross_dsl.config.peripherals import Peripheral
from ross_dsl.config.values import ParameterType, Value
from ross_dsl.errors import AltError, BaseError, ErrorKind, Expectation
from ross_dsl.items import PERIPHERAL_SHAPES, argument_list, construct
from ross_dsl.literal import Literal, cast_literal, literal_or_constant
from ross_dsl.scanner import (
    Cursor,
    keyword,
    name,
    require_space,
    skip_space,
    symbol,
    terminator,
)
from ross_dsl.symbols import SymbolTable

logger = logging.getLogger(__name__)


# =============================================================================
# Declaration Results
# =============================================================================

@dataclass(frozen=True)
class ConstantDeclaration:
    name: str
    literal: Literal
    location: Cursor


@dataclass(frozen=True)
class StateDeclaration:
    """A state variable and its initial value."""
    name: str
    value: Value
    location: Cursor


@dataclass(frozen=True)
class PeripheralDeclaration:
    """
    A peripheral entry.

    Attributes:
        index: Peripheral index
        peripheral: Shape and gateway addresses
        location: Cursor at the index
        length: Length of the index text
    """
    index: int
    peripheral: Peripheral
    location: Cursor
    length: int


# =============================================================================
# const / let
# =============================================================================

def _binding(cursor: Cursor, word: str, symbols: SymbolTable):
    """Parse ``<word> NAME = literal;`` returning (cursor, name, name cursor, literal, literal cursor)."""
    cursor = keyword(cursor, word)
    with committed():
        name_start = require_space(cursor)
        cursor, bound_name = name(name_start)
        cursor = symbol(skip_space(cursor), "=")
        literal_start = skip_space(cursor)
        cursor, value = literal_or_constant(literal_start, symbols.constants)
        cursor = terminator(cursor)
    return cursor, bound_name, name_start, value, literal_start


def const_statement(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, ConstantDeclaration]:
    """
    Parse ``const NAME = literal;``.

    Any literal type is allowed, strings included.
    """
    cursor, bound_name, name_start, value, _ = _binding(cursor, "const", symbols)
    logger.debug(f"const {bound_name} = {value}")
    return cursor, ConstantDeclaration(bound_name, value, name_start)


def let_statement(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, StateDeclaration]:
    """
    Parse ``let NAME = literal;``.

    The literal must convert to a Value (anything but a string).
    """
    cursor, bound_name, name_start, value, literal_start = _binding(cursor, "let", symbols)
    with committed():
        initial = cast_literal(value, ParameterType.VALUE, literal_start)
    logger.debug(f"let {bound_name} = {initial}")
    return cursor, StateDeclaration(bound_name, initial, name_start)


# =============================================================================
# peripheral
# =============================================================================

def _gateway_prefix(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, tuple[int, ...]]:
    """Parse ``pub(addr, ...)`` followed by whitespace."""
    cursor = keyword(cursor, "pub")
    with committed():
        cursor, arguments = argument_list(skip_space(cursor), symbols.constants)
        addresses = tuple(
            cast_literal(argument.literal, ParameterType.U16, argument.location)
            for argument in arguments
        )
        cursor = require_space(cursor)
    return cursor, addresses


def _keyword_choice(cursor: Cursor, words) -> tuple[Cursor, str]:
    """Match one of `words`, reporting all of them if none applies."""
    for word in words:
        try:
            return keyword(cursor, word), word
        except BaseError:
            continue
    raise AltError([
        BaseError(cursor, ErrorKind.expected(Expectation.keyword(word))) for word in words
    ])


def _shape(cursor: Cursor, family: str, symbols: SymbolTable):
    shapes = PERIPHERAL_SHAPES[family]
    after_name, shape_name = _keyword_choice(cursor, shapes)
    spec = shapes[shape_name]

    after_arguments, arguments = argument_list(skip_space(after_name), symbols.constants)
    end = terminator(after_arguments)
    return end, construct(cursor, spec, arguments)


def _peripheral_body(
    cursor: Cursor, symbols: SymbolTable, gateways: tuple[int, ...]
) -> tuple[Cursor, PeripheralDeclaration]:
    index_start = require_space(cursor)
    index_end, index_literal = literal_or_constant(index_start, symbols.constants)
    index = cast_literal(index_literal, ParameterType.U32, index_start)

    cursor, family = _keyword_choice(require_space(index_end), PERIPHERAL_SHAPES)
    cursor, shape = _shape(require_space(cursor), family, symbols)

    peripheral = Peripheral(shape, gateways)
    logger.debug(f"peripheral {index}: {peripheral}")
    return cursor, PeripheralDeclaration(
        index, peripheral, index_start, len(index_start.text_until(index_end))
    )


def peripheral_statement(
    cursor: Cursor, symbols: SymbolTable
) -> tuple[Cursor, PeripheralDeclaration]:
    """
    Parse ``[pub(addrs)] peripheral <index> <family> <shape>(channels);``.

    The index is a u32, gateway addresses are u16 and channels are u8.
    An unknown family or shape reports every keyword accepted there.
    """
    cursor, gateways = optional(cursor, lambda start: _gateway_prefix(start, symbols))

    if gateways is None:
        cursor = keyword(cursor, "peripheral")
        with committed():
            return _peripheral_body(cursor, symbols, ())

    with committed():
        cursor = keyword(cursor, "peripheral")
        return _peripheral_body(cursor, symbols, gateways)

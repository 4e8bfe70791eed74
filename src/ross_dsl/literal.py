"""
Typed Literals
==============

Literal syntax, the Literal model and the strict cast rules that turn a
Literal into the exact type an item parameter requires.

Literal Syntax
--------------
| Form              | Example        | Type                           |
|-------------------|----------------|--------------------------------|
| boolean           | true, false    | bool                           |
| hex integer       | 0xabab~u16     | u8 / u16 / u32 (from suffix)   |
| decimal integer   | 123~u32        | u8 / u16 / u32 (from suffix)   |
| string            | "first"        | string (no escape sequences)   |
| rgb colour        | #ff000080      | rgb: r, g, b, brightness       |
| rgbw colour       | #ff00ff0080    | rgbw: r, g, b, w, brightness   |

An integer that does not fit its declared width (or is negative) is
reported as "expected a value" located at the digit text; an unknown
suffix as "expected a type" located at the suffix.

Casting
-------
Casts are exact-match only. A u8 literal is never widened to u16 and a
u32 literal is never narrowed to u8:

    cast_literal(Literal.u16(0xabab), ParameterType.U16)   # 0xabab
    cast_literal(Literal.u16(0xabab), ParameterType.U8)    # cast from u16 to u8 not allowed
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from ross_dsl.combinators import alt
from ross_dsl.config.values import (
    BcmValue,
    BcmValueKind,
    MessageValue,
    ParameterType,
    RelayDoubleExclusiveValue,
    RelayValue,
    RelayValueKind,
    Value,
    ValueType,
)
from ross_dsl.cron import parse_cron_expression
from ross_dsl.errors import (
    BaseError,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    ParserError,
)
from ross_dsl.scanner import (
    Cursor,
    alphanumeric1,
    dec1,
    hex1,
    keyword,
    name,
    symbol,
    take_until,
)


# =============================================================================
# Literal Model
# =============================================================================

class LiteralType(Enum):
    """Type tag of a Literal. The value is the name used in diagnostics."""
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    BOOL = "bool"
    STRING = "string"
    RGB = "rgb"
    RGBW = "rgbw"


# Integer suffix -> (type, largest value)
INTEGER_TYPES: dict[str, tuple[LiteralType, int]] = {
    "u8": (LiteralType.U8, 0xFF),
    "u16": (LiteralType.U16, 0xFFFF),
    "u32": (LiteralType.U32, 0xFFFF_FFFF),
}

# Hex digit count of a colour literal -> type
COLOR_TYPES: dict[int, LiteralType] = {
    8: LiteralType.RGB,
    10: LiteralType.RGBW,
}


@dataclass(frozen=True)
class Literal:
    """
    A typed constant as written in source.

    Attributes:
        type: Type tag
        value: int (u8/u16/u32), bool, str, or a tuple of ints for colours
    """
    type: LiteralType
    value: Union[int, bool, str, tuple]

    @classmethod
    def u8(cls, value: int) -> "Literal":
        return cls(LiteralType.U8, value)

    @classmethod
    def u16(cls, value: int) -> "Literal":
        return cls(LiteralType.U16, value)

    @classmethod
    def u32(cls, value: int) -> "Literal":
        return cls(LiteralType.U32, value)

    @classmethod
    def boolean(cls, value: bool) -> "Literal":
        return cls(LiteralType.BOOL, value)

    @classmethod
    def string(cls, value: str) -> "Literal":
        return cls(LiteralType.STRING, value)

    @classmethod
    def rgb(cls, red: int, green: int, blue: int, brightness: int) -> "Literal":
        return cls(LiteralType.RGB, (red, green, blue, brightness))

    @classmethod
    def rgbw(cls, red: int, green: int, blue: int, white: int, brightness: int) -> "Literal":
        return cls(LiteralType.RGBW, (red, green, blue, white, brightness))

    def __str__(self) -> str:
        if self.type == LiteralType.BOOL:
            return "true" if self.value else "false"
        if self.type == LiteralType.STRING:
            return f'"{self.value}"'
        if self.type in (LiteralType.RGB, LiteralType.RGBW):
            return "#" + "".join(f"{part:02x}" for part in self.value)
        return f"0x{self.value:x}~{self.type.value}"


# =============================================================================
# Literal Grammar
# =============================================================================
# Each alternative only checks syntax and returns a builder. The builder
# validates the scanned text, so a well-formed but invalid literal (such
# as 0xabab~u8) is reported on its own instead of as "expected a literal".
# =============================================================================

Builder = Callable[[], Literal]


def _boolean(cursor: Cursor) -> tuple[Cursor, Builder]:
    for word, value in (("true", True), ("false", False)):
        try:
            after = keyword(cursor, word)
        except ParserError:
            continue
        return after, lambda value=value: Literal.boolean(value)
    raise BaseError(cursor, ErrorKind.expected(Expectation.keyword("false")))


def _parse_integer(digits: str) -> Optional[int]:
    if digits.startswith("0x"):
        body = digits[2:]
        if body and all(char in "0123456789abcdefABCDEF" for char in body):
            return int(body, 16)
        return None
    if digits.isdigit():
        return int(digits, 10)
    return None


def _integer(cursor: Cursor, digits_scanner) -> tuple[Cursor, Builder]:
    after_digits, digits = digits_scanner(cursor)
    suffix_start = symbol(after_digits, "~")
    end, suffix = alphanumeric1(suffix_start)

    def build() -> Literal:
        if suffix not in INTEGER_TYPES:
            raise BaseError(
                suffix_start,
                ErrorKind.expected(Expectation(ExpectationCategory.TYPE)),
                length=len(suffix),
            )
        literal_type, maximum = INTEGER_TYPES[suffix]
        number = _parse_integer(digits)
        if number is None or number > maximum:
            raise BaseError(
                cursor,
                ErrorKind.expected(Expectation(ExpectationCategory.VALUE)),
                length=len(digits),
            )
        return Literal(literal_type, number)

    return end, build


def _hex_integer(cursor: Cursor) -> tuple[Cursor, Builder]:
    return _integer(cursor, hex1)


def _decimal_integer(cursor: Cursor) -> tuple[Cursor, Builder]:
    return _integer(cursor, dec1)


def _string(cursor: Cursor) -> tuple[Cursor, Builder]:
    after_quote = symbol(cursor, '"')
    after_text, text = take_until(after_quote, '"')
    end = symbol(after_text, '"')
    return end, lambda: Literal.string(text)


def _color(cursor: Cursor) -> tuple[Cursor, Builder]:
    after_hash = symbol(cursor, "#")
    end, digits = hex1(after_hash)

    def build() -> Literal:
        literal_type = COLOR_TYPES.get(len(digits))
        try:
            parts = tuple(bytes.fromhex(digits))
        except ValueError:
            literal_type = None
        if literal_type is None:
            raise BaseError(
                cursor,
                ErrorKind.expected(Expectation(ExpectationCategory.VALUE)),
                length=len(digits) + 1,
            )
        return Literal(literal_type, parts)

    return end, build


def literal(cursor: Cursor) -> tuple[Cursor, Literal]:
    """
    Parse one literal.

    Returns:
        The cursor after the literal and the Literal

    Raises:
        BaseError: Expected(Literal) caused by the failure of every
                   alternative, or a Value/Type error for a literal that
                   is well formed but invalid
    """
    try:
        end, build = alt(cursor, _boolean, _hex_integer, _decimal_integer, _string, _color)
    except ParserError as err:
        if err.fatal:
            raise
        raise BaseError(
            cursor, ErrorKind.expected(Expectation(ExpectationCategory.LITERAL)), child=err
        ) from None
    return end, build()


def literal_or_constant(
    cursor: Cursor, constants: Mapping[str, Literal]
) -> tuple[Cursor, Literal]:
    """
    Parse a constant reference or a literal.

    A name found in `constants` resolves to its Literal. Anything else is
    parsed as a literal.
    """
    try:
        after, word = name(cursor)
    except ParserError:
        return literal(cursor)

    if word in constants:
        return after, constants[word]
    return literal(cursor)


def state_variable(cursor: Cursor, state_slots: Mapping[str, int]) -> tuple[Cursor, int]:
    """
    Parse the name of a declared state variable.

    Returns:
        The cursor after the name and the state slot index

    Raises:
        BaseError: Expected(StateVariable)
    """
    kind = ErrorKind.expected(Expectation(ExpectationCategory.STATE_VARIABLE))
    try:
        after, word = name(cursor)
    except ParserError as err:
        raise BaseError(cursor, kind, child=err) from None

    if word not in state_slots:
        raise BaseError(cursor, kind, length=len(word))
    return after, state_slots[word]


# =============================================================================
# Casting
# =============================================================================

def _refuse(literal: Literal, target: ParameterType, location: Optional[Cursor]) -> BaseError:
    return BaseError(location, ErrorKind.cast_not_allowed(literal.type.value, target.value))


def _bad_value(location: Optional[Cursor]) -> BaseError:
    return BaseError(location, ErrorKind.expected(Expectation(ExpectationCategory.VALUE)))


_INTEGER_TARGETS = {
    ParameterType.U8: LiteralType.U8,
    ParameterType.U16: LiteralType.U16,
    ParameterType.U32: LiteralType.U32,
    ParameterType.BOOL: LiteralType.BOOL,
}

_VALUE_TYPES = {
    LiteralType.U8: ValueType.U8,
    LiteralType.U16: ValueType.U16,
    LiteralType.U32: ValueType.U32,
    LiteralType.BOOL: ValueType.BOOL,
    LiteralType.RGB: ValueType.RGB,
    LiteralType.RGBW: ValueType.RGBW,
}

_MESSAGE_VALUE_TYPES = {
    LiteralType.U8: ValueType.U8,
    LiteralType.U16: ValueType.U16,
    LiteralType.U32: ValueType.U32,
    LiteralType.BOOL: ValueType.BOOL,
}

_BCM_VALUE_KINDS = {
    LiteralType.U8: BcmValueKind.SINGLE,
    LiteralType.RGB: BcmValueKind.RGB,
    LiteralType.RGBW: BcmValueKind.RGBW,
}

_RELAY_DOUBLE_EXCLUSIVE_VALUES = {value.value: value for value in RelayDoubleExclusiveValue}


def cast_literal(
    literal: Literal,
    target: ParameterType,
    location: Optional[Cursor] = None,
) -> Any:
    """
    Convert a Literal into the type an item parameter requires.

    Args:
        literal: The literal to convert
        target: Required parameter type
        location: Cursor at the literal in source, used for diagnostics

    Returns:
        int, bool, Value, MessageValue, BcmValue, RelayValue or
        CronExpression according to `target`

    Raises:
        BaseError: CastNotAllowed for a type mismatch, Expected(Value)
                   for a string that is not a valid relay value or cron
                   expression
    """
    if target in _INTEGER_TARGETS:
        if literal.type != _INTEGER_TARGETS[target]:
            raise _refuse(literal, target, location)
        return literal.value

    if target == ParameterType.VALUE:
        if literal.type not in _VALUE_TYPES:
            raise _refuse(literal, target, location)
        return Value(_VALUE_TYPES[literal.type], literal.value)

    if target == ParameterType.MESSAGE_VALUE:
        if literal.type not in _MESSAGE_VALUE_TYPES:
            raise _refuse(literal, target, location)
        return MessageValue(_MESSAGE_VALUE_TYPES[literal.type], literal.value)

    if target == ParameterType.BCM_VALUE:
        if literal.type not in _BCM_VALUE_KINDS:
            raise _refuse(literal, target, location)
        return BcmValue(_BCM_VALUE_KINDS[literal.type], literal.value)

    if target == ParameterType.RELAY_VALUE:
        if literal.type == LiteralType.BOOL:
            return RelayValue(RelayValueKind.SINGLE, literal.value)
        if literal.type == LiteralType.STRING:
            if literal.value not in _RELAY_DOUBLE_EXCLUSIVE_VALUES:
                raise _bad_value(location)
            return RelayValue(
                RelayValueKind.DOUBLE_EXCLUSIVE,
                _RELAY_DOUBLE_EXCLUSIVE_VALUES[literal.value],
            )
        raise _refuse(literal, target, location)

    if target == ParameterType.CRON_EXPRESSION:
        if literal.type != LiteralType.STRING:
            raise _refuse(literal, target, location)
        try:
            return parse_cron_expression(literal.value)
        except ValueError:
            raise _bad_value(location) from None

    raise ValueError(f"unsupported parameter type: {target}")

"""
Runtime Values
==============

Typed values carried by a compiled configuration.

These are the values the runtime stores in state slots, compares events
against and sends to devices. The compiler only builds them; it never
interprets them.

| Class         | Variants                                   |
|---------------|--------------------------------------------|
| Value         | u8, u16, u32, bool, rgb, rgbw              |
| MessageValue  | u8, u16, u32, bool                         |
| BcmValue      | single (one u8 channel), rgb, rgbw         |
| RelayValue    | single (bool), double-exclusive            |

Colours are stored as 4-tuples (r, g, b, brightness) for rgb and
5-tuples (r, g, b, w, brightness) for rgbw.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


# =============================================================================
# Parameter Types
# =============================================================================

class ParameterType(Enum):
    """
    Types an item parameter may require.

    The value is the name used in "cast from X to Y not allowed" messages.
    """
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    BOOL = "bool"
    VALUE = "value"
    MESSAGE_VALUE = "message value"
    BCM_VALUE = "bcm value"
    RELAY_VALUE = "relay value"
    CRON_EXPRESSION = "cron expression"


# =============================================================================
# Generic Value
# =============================================================================

class ValueType(Enum):
    """Variant tag of a Value or MessageValue."""
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    BOOL = "bool"
    RGB = "rgb"
    RGBW = "rgbw"


ValueData = Union[int, bool, tuple]


def _format_data(value_type: ValueType, data: ValueData) -> str:
    if value_type == ValueType.BOOL:
        return "true" if data else "false"
    if value_type in (ValueType.RGB, ValueType.RGBW):
        return "#" + "".join(f"{part:02x}" for part in data)
    width = {ValueType.U8: 2, ValueType.U16: 4, ValueType.U32: 8}[value_type]
    return f"0x{data:0{width}x}~{value_type.value}"


@dataclass(frozen=True)
class Value:
    """
    A generic typed value (state slot contents, event comparison constant).

    Attributes:
        type: Variant tag
        data: int for integers, bool for bool, tuple for colours
    """
    type: ValueType
    data: ValueData

    @classmethod
    def u8(cls, data: int) -> "Value":
        return cls(ValueType.U8, data)

    @classmethod
    def u16(cls, data: int) -> "Value":
        return cls(ValueType.U16, data)

    @classmethod
    def u32(cls, data: int) -> "Value":
        return cls(ValueType.U32, data)

    @classmethod
    def boolean(cls, data: bool) -> "Value":
        return cls(ValueType.BOOL, data)

    def __str__(self) -> str:
        return _format_data(self.type, self.data)


@dataclass(frozen=True)
class MessageValue:
    """Payload of a message event. Only integer and bool variants exist."""
    type: ValueType
    data: Union[int, bool]

    def __str__(self) -> str:
        return _format_data(self.type, self.data)


# =============================================================================
# Device Values
# =============================================================================

class BcmValueKind(Enum):
    SINGLE = auto()
    RGB = auto()
    RGBW = auto()


@dataclass(frozen=True)
class BcmValue:
    """
    Brightness for a BCM (binary code modulation) output.

    Attributes:
        kind: SINGLE for one channel, RGB/RGBW for colour groups
        data: u8 brightness for SINGLE, colour tuple otherwise
    """
    kind: BcmValueKind
    data: Union[int, tuple]

    def __str__(self) -> str:
        if self.kind == BcmValueKind.SINGLE:
            return f"0x{self.data:02x}~u8"
        return "#" + "".join(f"{part:02x}" for part in self.data)


class RelayDoubleExclusiveValue(Enum):
    """State of a pair of relays of which at most one may be on."""
    FIRST_CHANNEL_ON = "first"
    SECOND_CHANNEL_ON = "second"
    NO_CHANNEL_ON = "none"


class RelayValueKind(Enum):
    SINGLE = auto()
    DOUBLE_EXCLUSIVE = auto()


@dataclass(frozen=True)
class RelayValue:
    """Target state of a relay peripheral."""
    kind: RelayValueKind
    data: Union[bool, RelayDoubleExclusiveValue]

    def __str__(self) -> str:
        if self.kind == RelayValueKind.SINGLE:
            return "true" if self.data else "false"
        return f'"{self.data.value}"'

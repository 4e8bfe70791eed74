"""
Peripherals
===========

Declared hardware output channels of a device.

A peripheral is one of a small set of shapes over u8 channel numbers,
plus an optional list of gateway addresses its events are forwarded to.

| Family | Shape             | Channels       |
|--------|-------------------|----------------|
| bcm    | single            | 1              |
| bcm    | rgb               | 3 (r, g, b)    |
| bcm    | rgbw              | 4 (r, g, b, w) |
| relay  | single            | 1              |
| relay  | double_exclusive  | 2              |
"""

from dataclasses import dataclass


class PeripheralShape:
    """Base class of the peripheral shapes."""

    family: str = ""
    keyword: str = ""

    def __str__(self) -> str:
        channels = ", ".join(str(channel) for channel in vars(self).values())
        return f"{self.family} {self.keyword}({channels})"


@dataclass(frozen=True)
class BcmSingle(PeripheralShape):
    family = "bcm"
    keyword = "single"

    channel: int


@dataclass(frozen=True)
class BcmRgb(PeripheralShape):
    family = "bcm"
    keyword = "rgb"

    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class BcmRgbw(PeripheralShape):
    family = "bcm"
    keyword = "rgbw"

    red: int
    green: int
    blue: int
    white: int


@dataclass(frozen=True)
class RelaySingle(PeripheralShape):
    family = "relay"
    keyword = "single"

    channel: int


@dataclass(frozen=True)
class RelayDoubleExclusive(PeripheralShape):
    family = "relay"
    keyword = "double_exclusive"

    first_channel: int
    second_channel: int


@dataclass(frozen=True)
class Peripheral:
    """
    A peripheral table entry.

    Attributes:
        shape: Channel layout
        gateway_addresses: u16 addresses that also receive this
                           peripheral's events (from a ``pub(...)`` prefix)
    """
    shape: PeripheralShape
    gateway_addresses: tuple[int, ...] = ()

    def __str__(self) -> str:
        if not self.gateway_addresses:
            return str(self.shape)
        addresses = ", ".join(f"0x{address:04x}" for address in self.gateway_addresses)
        return f"{self.shape} pub({addresses})"

"""
Producers
=========

A producer builds the outgoing event a Creator sends when its event
processor fires. Every producer except NoneProducer targets the u16
address of a receiving device.
"""

from dataclasses import dataclass

from ross_dsl.config.values import BcmValue, MessageValue, RelayValue


class Producer:
    """Base class of all producers."""

    def __str__(self) -> str:
        arguments = ", ".join(
            f"0x{value:04x}" if key == "receiver_address" else str(value)
            for key, value in vars(self).items()
        )
        return f"{type(self).__name__}({arguments})"


@dataclass(frozen=True)
class NoneProducer(Producer):
    """Produces nothing."""


@dataclass(frozen=True)
class PacketProducer(Producer):
    """Forwards the extracted packet unchanged to ``receiver_address``."""
    receiver_address: int


@dataclass(frozen=True)
class MessageProducer(Producer):
    receiver_address: int
    code: int
    value: MessageValue


# =============================================================================
# BCM Outputs
# =============================================================================

@dataclass(frozen=True)
class BcmChangeBrightnessProducer(Producer):
    """Sets peripheral ``index`` on the receiver to a constant brightness."""
    receiver_address: int
    index: int
    value: BcmValue


@dataclass(frozen=True)
class BcmChangeBrightnessStateProducer(Producer):
    """Sets peripheral ``index`` to the brightness held in a state slot."""
    receiver_address: int
    index: int
    state_index: int


@dataclass(frozen=True)
class BcmAnimateBrightnessProducer(Producer):
    """Fades peripheral ``index`` to ``target_value`` over ``duration`` ms."""
    receiver_address: int
    index: int
    duration: int
    target_value: BcmValue


@dataclass(frozen=True)
class BcmAnimateBrightnessStateProducer(Producer):
    receiver_address: int
    index: int
    duration: int
    state_index: int


# =============================================================================
# Relay Outputs
# =============================================================================

@dataclass(frozen=True)
class RelaySetValueProducer(Producer):
    receiver_address: int
    index: int
    value: RelayValue

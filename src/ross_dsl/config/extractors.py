"""
Extractors
==========

An extractor pulls one piece of data out of an incoming event (its code,
the address of the device that produced it, ...). Filters then test that
data and producers may forward it.

All extractors take no parameters.
"""

from dataclasses import dataclass


class Extractor:
    """Base class of all extractors."""

    def __str__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True)
class NoneExtractor(Extractor):
    """Extracts nothing."""


@dataclass(frozen=True)
class PacketExtractor(Extractor):
    """Extracts the whole raw packet."""


@dataclass(frozen=True)
class EventCodeExtractor(Extractor):
    """Extracts the u16 event code."""


@dataclass(frozen=True)
class EventProducerAddressExtractor(Extractor):
    """Extracts the u16 address of the device that sent the event."""


@dataclass(frozen=True)
class MessageCodeExtractor(Extractor):
    pass


@dataclass(frozen=True)
class MessageValueExtractor(Extractor):
    pass


@dataclass(frozen=True)
class ButtonIndexExtractor(Extractor):
    pass

"""
Symbol Tables
=============

Tables built up while a program is compiled:

| Table         | Key                | Value                        | Filled by        |
|---------------|--------------------|------------------------------|------------------|
| constants     | name               | Literal                      | const, let       |
| state_slots   | name               | slot index                   | let              |
| initial_state | slot index         | Value                        | let              |
| peripherals   | peripheral index   | Peripheral                   | peripheral       |

``let NAME = literal;`` allocates the next slot index (starting at 0),
records the initial value and also inserts the constant NAME -> u32 slot
index, so that NAME can be passed wherever a state index is expected:

    let active = false;
    do { match tick; fire { ... } if match { StateEqualToConstFilter(active, true); } }

Statement parsers only read the tables. The compiler applies each parsed
declaration through this class, so a statement that fails to parse never
leaves anything behind.

Redeclaration
-------------
Declaring a name or peripheral index that already exists is an error
(DuplicateName, located at the name). With ``allow_redeclaration`` the
later declaration replaces the earlier one instead.
"""

import logging
from typing import Optional

from ross_dsl.config.event_codes import EVENT_CODES
from ross_dsl.config.peripherals import Peripheral
from ross_dsl.config.values import Value
from ross_dsl.errors import BaseError, ErrorKind
from ross_dsl.literal import Literal
from ross_dsl.scanner import Cursor

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    Constants, state slots and peripherals of one compilation.

    Attributes:
        constants: Name -> Literal
        state_slots: State variable name -> slot index
        initial_state: Slot index -> initial Value
        peripherals: Peripheral index -> Peripheral
        allow_redeclaration: Replace instead of rejecting duplicates
    """

    def __init__(self, allow_redeclaration: bool = False):
        self.constants: dict[str, Literal] = {}
        self.state_slots: dict[str, int] = {}
        self.initial_state: dict[int, Value] = {}
        self.peripherals: dict[int, Peripheral] = {}
        self.allow_redeclaration = allow_redeclaration

    @classmethod
    def with_event_codes(cls, allow_redeclaration: bool = False) -> "SymbolTable":
        """Create a table pre-seeded with the protocol event-code constants."""
        table = cls(allow_redeclaration)
        for event_name, code in EVENT_CODES.items():
            table.constants[event_name] = Literal.u16(code)
        return table

    # =========================================================================
    # Declarations
    # =========================================================================

    def _check_unique(self, exists: bool, location: Optional[Cursor], length: int) -> None:
        if exists and not self.allow_redeclaration:
            raise BaseError(location, ErrorKind.duplicate_name(), length=length, fatal=True)

    def declare_constant(
        self, name: str, literal: Literal, location: Optional[Cursor] = None
    ) -> None:
        """
        Add a constant.

        Raises:
            BaseError: DuplicateName if the name is taken
        """
        self._check_unique(name in self.constants, location, len(name))
        self.constants[name] = literal
        logger.debug(f"Constant {name} = {literal}")

    def declare_state(
        self, name: str, value: Value, location: Optional[Cursor] = None
    ) -> int:
        """
        Allocate the next state slot and alias `name` to its index.

        Returns:
            The allocated slot index

        Raises:
            BaseError: DuplicateName if the name is taken
        """
        self._check_unique(name in self.constants, location, len(name))

        index = len(self.initial_state)
        self.state_slots[name] = index
        self.initial_state[index] = value
        self.constants[name] = Literal.u32(index)
        logger.debug(f"State {name} -> slot {index}, initial {value}")
        return index

    def declare_peripheral(
        self,
        index: int,
        peripheral: Peripheral,
        location: Optional[Cursor] = None,
        length: int = 0,
    ) -> None:
        """
        Register a peripheral at an explicit index.

        Raises:
            BaseError: DuplicateName if the index is taken
        """
        self._check_unique(index in self.peripherals, location, length)
        self.peripherals[index] = peripheral
        logger.debug(f"Peripheral {index}: {peripheral}")

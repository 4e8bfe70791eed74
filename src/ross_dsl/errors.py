"""
ROSS DSL Error Hierarchy
========================

This module defines the exception hierarchy for the rule-language compiler.
All exceptions inherit from RossDslError, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
RossDslError (base)
└── ParserError - a node of the diagnostic tree
    ├── BaseError - one failure: location, kind and an optional cause
    └── AltError  - every sibling alternative that was tried and failed

Diagnostic Tree
---------------
A parse function either returns ``(remainder, value)`` or raises a
ParserError. The raised object *is* the diagnostic: a BaseError may carry a
single child explaining why it happened, and an AltError aggregates the
failures of all alternatives attempted at one position.

Every ParserError carries a severity flag:

- recoverable (``fatal=False``): the caller may try a sibling alternative
  at the same position.
- fatal (``fatal=True``): a statement or item keyword has already matched,
  so the failure must propagate past any enclosing alternative selection.

Rendering
---------
``str(error)`` produces an indented text tree:

    expected something at <input>:3:9: "sned 0x0007~u16 from 0x0002~u1..." caused by one of:
      expected keyword 'peripheral' at <input>:3:9: "sned 0x0007~u16 from ..."
      expected keyword 'let' at <input>:3:9: "sned 0x0007~u16 from ..."
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ross_dsl.scanner import Cursor


# Width of the single-line source excerpt printed for each diagnostic
DEFAULT_MAX_LOCATION_LENGTH = 32


# =============================================================================
# Base Exception Class
# =============================================================================

class RossDslError(Exception):
    """
    Base exception for all rule-language compiler errors.

        try:
            config = compile_dsl(text)
        except RossDslError as e:
            print(e)
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Error Kinds
# =============================================================================

class ExpectationCategory(Enum):
    """What the parser was looking for when it failed."""
    ARGUMENT_COUNT = auto()
    KEYWORD = auto()
    SYMBOL = auto()
    NAME = auto()
    LITERAL = auto()
    VALUE = auto()
    TYPE = auto()
    STATE_VARIABLE = auto()
    ALPHA = auto()
    ALPHANUMERIC = auto()
    DIGIT = auto()
    HEX_DIGIT = auto()
    MULTISPACE = auto()
    SOMETHING = auto()


_EXPECTATION_WORDING = {
    ExpectationCategory.NAME: "a name",
    ExpectationCategory.LITERAL: "a literal",
    ExpectationCategory.VALUE: "a value",
    ExpectationCategory.TYPE: "a type",
    ExpectationCategory.STATE_VARIABLE: "a state variable",
    ExpectationCategory.ALPHA: "an ascii letter",
    ExpectationCategory.ALPHANUMERIC: "an ascii alphanumeric character",
    ExpectationCategory.DIGIT: "an ascii digit",
    ExpectationCategory.HEX_DIGIT: "a hexadecimal digit",
    ExpectationCategory.MULTISPACE: "a space, tab or newline",
    ExpectationCategory.SOMETHING: "something",
}


@dataclass(frozen=True)
class Expectation:
    """
    An expected syntactic element.

    Parameterised expectations keep their parameters in ``details``:
    the keyword text, the symbol character, or the (declared, found)
    argument counts.

    Examples:
        Expectation.symbol(";")
        Expectation.argument_count(2, 3)
        Expectation(ExpectationCategory.NAME)
    """
    category: ExpectationCategory
    details: tuple = ()

    @classmethod
    def keyword(cls, word: str) -> "Expectation":
        return cls(ExpectationCategory.KEYWORD, (word,))

    @classmethod
    def symbol(cls, char: str) -> "Expectation":
        return cls(ExpectationCategory.SYMBOL, (char,))

    @classmethod
    def argument_count(cls, expected: int, found: int) -> "Expectation":
        return cls(ExpectationCategory.ARGUMENT_COUNT, (expected, found))

    def __str__(self) -> str:
        if self.category == ExpectationCategory.ARGUMENT_COUNT:
            expected, found = self.details
            return f"{expected} arguments found {found}"
        if self.category == ExpectationCategory.KEYWORD:
            return f"keyword '{self.details[0]}'"
        if self.category == ExpectationCategory.SYMBOL:
            return f"symbol '{self.details[0]}'"
        return _EXPECTATION_WORDING[self.category]


class ErrorCategory(Enum):
    """Top-level classification of a diagnostic."""
    EXPECTED = auto()
    INTERNAL = auto()
    UNKNOWN_EXTRACTOR = auto()
    UNKNOWN_FILTER = auto()
    UNKNOWN_PRODUCER = auto()
    CAST_NOT_ALLOWED = auto()
    DUPLICATE_NAME = auto()
    NESTING_TOO_DEEP = auto()


@dataclass(frozen=True)
class ErrorKind:
    """
    The kind of a BaseError.

    Attributes:
        category: Top-level classification
        expectation: What was expected (EXPECTED only)
        details: Extra parameters: the (from, to) type names of a refused
                 cast, or the scanner name of an INTERNAL failure
    """
    category: ErrorCategory
    expectation: Optional[Expectation] = None
    details: tuple = ()

    @classmethod
    def expected(cls, expectation: Expectation) -> "ErrorKind":
        return cls(ErrorCategory.EXPECTED, expectation)

    @classmethod
    def internal(cls, scanner: str) -> "ErrorKind":
        return cls(ErrorCategory.INTERNAL, details=(scanner,))

    @classmethod
    def unknown_extractor(cls) -> "ErrorKind":
        return cls(ErrorCategory.UNKNOWN_EXTRACTOR)

    @classmethod
    def unknown_filter(cls) -> "ErrorKind":
        return cls(ErrorCategory.UNKNOWN_FILTER)

    @classmethod
    def unknown_producer(cls) -> "ErrorKind":
        return cls(ErrorCategory.UNKNOWN_PRODUCER)

    @classmethod
    def cast_not_allowed(cls, source: str, target: str) -> "ErrorKind":
        return cls(ErrorCategory.CAST_NOT_ALLOWED, details=(source, target))

    @classmethod
    def duplicate_name(cls) -> "ErrorKind":
        return cls(ErrorCategory.DUPLICATE_NAME)

    @classmethod
    def nesting_too_deep(cls) -> "ErrorKind":
        return cls(ErrorCategory.NESTING_TOO_DEEP)

    def __str__(self) -> str:
        if self.category == ErrorCategory.EXPECTED:
            return f"expected {self.expectation}"
        if self.category == ErrorCategory.INTERNAL:
            return f"error in {self.details[0]}"
        if self.category == ErrorCategory.CAST_NOT_ALLOWED:
            source, target = self.details
            return f"cast from {source} to {target} not allowed"
        if self.category == ErrorCategory.DUPLICATE_NAME:
            return "name already declared"
        # UNKNOWN_EXTRACTOR -> "unknown extractor"
        return self.category.name.lower().replace("_", " ")


# =============================================================================
# Diagnostic Tree Nodes
# =============================================================================

class ParserError(RossDslError):
    """
    Base class for the nodes of the diagnostic tree.

    Attributes:
        fatal: True once the failure must no longer be recovered from
        max_location_length: Excerpt width used by str()
    """

    max_location_length: int = DEFAULT_MAX_LOCATION_LENGTH

    def __init__(self, fatal: bool = False):
        self.fatal = fatal
        super().__init__()

    def escalate(self) -> "ParserError":
        """Mark this failure fatal and return it for re-raising."""
        self.fatal = True
        return self

    def render(self, max_length: Optional[int] = None) -> str:
        """
        Render the diagnostic tree as indented text.

        Args:
            max_length: Maximum width of each source excerpt
                        (defaults to max_location_length)

        Returns:
            Multi-line text, two spaces of indentation per nesting level
        """
        if max_length is None:
            max_length = self.max_location_length
        return "\n".join(self._render_lines(max_length))

    def _render_lines(self, max_length: int) -> list[str]:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class BaseError(ParserError):
    """
    A single failure at one location.

    Attributes:
        location: Cursor positioned at the offending input
        kind: What went wrong
        child: Optional underlying cause
        length: Length of the offending fragment, when it is known
                (for example the text of an unknown item name)
    """

    def __init__(
        self,
        location: Optional["Cursor"],
        kind: ErrorKind,
        child: Optional[ParserError] = None,
        length: Optional[int] = None,
        fatal: bool = False,
    ):
        self.location = location
        self.kind = kind
        self.child = child
        self.length = length
        super().__init__(fatal)

    @property
    def fragment(self) -> str:
        """The offending input: the named fragment, or everything remaining."""
        if self.location is None:
            return ""
        if self.length is not None:
            return self.location.rest[:self.length]
        return self.location.rest

    @property
    def source_location(self) -> Optional[SourceLocation]:
        if self.location is None:
            return None
        return self.location.source_location

    def __repr__(self) -> str:
        return f"BaseError({self.kind}, {self.fragment[:20]!r}, fatal={self.fatal})"

    def _render_lines(self, max_length: int) -> list[str]:
        head = f"{self.kind}"
        if self.location is not None:
            excerpt = _excerpt(self.fragment, max_length)
            head += f" at {self.location.source_location}: {excerpt}"

        if self.child is None:
            return [head]

        if isinstance(self.child, AltError):
            lines = [head + " caused by one of:"]
            for sibling in self.child.siblings:
                lines.extend(_indent(sibling._render_lines(max_length)))
            return lines

        return [head + " caused by:"] + _indent(self.child._render_lines(max_length))


class AltError(ParserError):
    """
    Failures of every alternative tried at one position, in trial order.

    Attributes:
        siblings: The individual failures
    """

    def __init__(self, siblings: list[ParserError], fatal: bool = False):
        self.siblings = list(siblings)
        super().__init__(fatal)

    @classmethod
    def combine(cls, errors: list[ParserError]) -> "AltError":
        """
        Aggregate sibling failures, flattening nested aggregates.

        A nested AltError contributes its own siblings rather than a
        further level of nesting.
        """
        siblings: list[ParserError] = []
        for error in errors:
            if isinstance(error, AltError):
                siblings.extend(error.siblings)
            else:
                siblings.append(error)
        return cls(siblings)

    def __repr__(self) -> str:
        return f"AltError({len(self.siblings)} alternatives, fatal={self.fatal})"

    def _render_lines(self, max_length: int) -> list[str]:
        lines = ["one of:"]
        for sibling in self.siblings:
            lines.extend(_indent(sibling._render_lines(max_length)))
        return lines


# =============================================================================
# Rendering Helpers
# =============================================================================

def _indent(lines: list[str]) -> list[str]:
    return ["  " + line for line in lines]


def _excerpt(text: str, max_length: int) -> str:
    """Single-line, trimmed and truncated view of the input at a location."""
    view = text.lstrip()
    if not view:
        return "end of input"

    view = view.split("\n", 1)[0].rstrip()
    if len(view) > max_length:
        view = view[:max_length] + "..."
    return f'"{view}"'

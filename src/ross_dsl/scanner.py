"""
Rule Language Scanner
=====================

Character-level building blocks for the rule-language parser.

The parser does not tokenize ahead of time. Instead every parse function
receives an immutable Cursor into the source text and returns the cursor
after whatever it consumed, together with the parsed value:

    cursor, word = name(Cursor("led_channel = 0x00~u8;"))
    # word == "led_channel", cursor.rest == " = 0x00~u8;"

A scanner that cannot match raises a recoverable BaseError located at the
cursor it was given.

Character Classes
-----------------
| Scanner          | Accepts                         | Expectation on failure   |
|------------------|---------------------------------|--------------------------|
| alpha1           | a-z A-Z                         | an ascii letter          |
| alphanumeric1    | a-z A-Z 0-9                     | an ascii alphanumeric... |
| hex1             | 0-9 a-f A-F x                   | a hexadecimal digit      |
| dec1             | 0-9 -                           | an ascii digit           |
| multispace1      | space, tab, CR, LF              | a space, tab or newline  |

``hex1`` and ``dec1`` are deliberately permissive (they also take the
``0x`` prefix and a minus sign); the literal parser validates the digit
text afterwards so that a malformed number is reported as a bad value
rather than as a syntax error.

Comments
--------
``//`` starts a comment running to the end of the line. Comments are
blanked out by strip_comments() before parsing so that line and column
numbers of everything else are unchanged.
"""

import string
from dataclasses import dataclass, replace
from typing import Callable

from ross_dsl.errors import (
    BaseError,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    SourceLocation,
)


# Character sets
ALPHA = frozenset(string.ascii_letters)
ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)
HEX_CHARS = frozenset(string.hexdigits + "x")
DEC_CHARS = frozenset(string.digits + "-")
WHITESPACE = frozenset(" \t\r\n")

# Characters that can start / continue a name
NAME_START = frozenset(string.ascii_letters + "_")
NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


# =============================================================================
# Cursor
# =============================================================================

@dataclass(frozen=True)
class Cursor:
    """
    Immutable position within source text.

    Attributes:
        source: The complete source text
        offset: Index of the next unconsumed character
        filename: Name of the source (for diagnostics)
    """
    source: str
    offset: int = 0
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Cursor({self.source_location}, {self.rest[:16]!r})"

    @property
    def rest(self) -> str:
        """The unconsumed remainder of the source."""
        return self.source[self.offset:]

    def at_end(self) -> bool:
        """Check if all input has been consumed."""
        return self.offset >= len(self.source)

    def peek(self, offset: int = 0) -> str:
        """
        Look at the character at the current position + offset.

        Returns empty string if past end of source.
        """
        pos = self.offset + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.offset)

    def advance(self, count: int) -> "Cursor":
        """Return a cursor `count` characters further on."""
        return replace(self, offset=min(self.offset + count, len(self.source)))

    def text_until(self, other: "Cursor") -> str:
        """Source text between this cursor and a later one."""
        return self.source[self.offset:other.offset]

    def previous(self) -> str:
        """The character immediately before the cursor, or empty string."""
        if self.offset == 0:
            return ""
        return self.source[self.offset - 1]

    @property
    def source_location(self) -> SourceLocation:
        """Line and column (both 1-indexed) of the cursor."""
        line = self.source.count("\n", 0, self.offset) + 1
        line_start = self.source.rfind("\n", 0, self.offset) + 1
        return SourceLocation(self.filename, line, self.offset - line_start + 1)


# =============================================================================
# Comment Removal
# =============================================================================

def strip_comments(source: str) -> str:
    """
    Blank out ``//`` line comments, preserving positions.

    Every comment character is replaced with a space, so the text that
    remains keeps its original line and column. ``//`` inside a
    double-quoted string is left alone.

    Args:
        source: Raw program text

    Returns:
        Text of the same length with comments blanked
    """
    chars = list(source)
    pos = 0
    in_string = False

    while pos < len(chars):
        char = chars[pos]
        if char == '"':
            in_string = not in_string
        elif char == "\n":
            # Strings never span lines for this purpose
            in_string = False
        elif not in_string and char == "/" and pos + 1 < len(chars) and chars[pos + 1] == "/":
            while pos < len(chars) and chars[pos] != "\n":
                chars[pos] = " "
                pos += 1
            continue
        pos += 1

    return "".join(chars)


# =============================================================================
# Character Scanners
# =============================================================================

def _expected(cursor: Cursor, expectation: Expectation, length: int | None = None) -> BaseError:
    return BaseError(cursor, ErrorKind.expected(expectation), length=length)


def take_while(cursor: Cursor, accept: Callable[[str], bool]) -> tuple[Cursor, str]:
    """Consume the longest (possibly empty) run of accepted characters."""
    end = cursor.offset
    source = cursor.source
    while end < len(source) and accept(source[end]):
        end += 1
    return cursor.advance(end - cursor.offset), source[cursor.offset:end]


def _take_while1(
    cursor: Cursor, chars: frozenset, category: ExpectationCategory
) -> tuple[Cursor, str]:
    after, text = take_while(cursor, chars.__contains__)
    if not text:
        raise _expected(cursor, Expectation(category))
    return after, text


def alpha1(cursor: Cursor) -> tuple[Cursor, str]:
    return _take_while1(cursor, ALPHA, ExpectationCategory.ALPHA)


def alphanumeric1(cursor: Cursor) -> tuple[Cursor, str]:
    return _take_while1(cursor, ALPHANUMERIC, ExpectationCategory.ALPHANUMERIC)


def hex1(cursor: Cursor) -> tuple[Cursor, str]:
    return _take_while1(cursor, HEX_CHARS, ExpectationCategory.HEX_DIGIT)


def dec1(cursor: Cursor) -> tuple[Cursor, str]:
    return _take_while1(cursor, DEC_CHARS, ExpectationCategory.DIGIT)


def multispace0(cursor: Cursor) -> tuple[Cursor, str]:
    return take_while(cursor, WHITESPACE.__contains__)


def multispace1(cursor: Cursor) -> tuple[Cursor, str]:
    return _take_while1(cursor, WHITESPACE, ExpectationCategory.MULTISPACE)


def skip_space(cursor: Cursor) -> Cursor:
    """Skip optional whitespace, returning only the new cursor."""
    return multispace0(cursor)[0]


def require_space(cursor: Cursor) -> Cursor:
    """Skip mandatory whitespace, returning only the new cursor."""
    return multispace1(cursor)[0]


def take_until(cursor: Cursor, terminator: str) -> tuple[Cursor, str]:
    """
    Consume everything up to (not including) `terminator`.

    Raises:
        BaseError: INTERNAL "take_until" kind if the terminator never appears
    """
    end = cursor.source.find(terminator, cursor.offset)
    if end < 0:
        raise BaseError(cursor, ErrorKind.internal("take_until"))
    return cursor.advance(end - cursor.offset), cursor.source[cursor.offset:end]


# =============================================================================
# Words and Punctuation
# =============================================================================

def name(cursor: Cursor) -> tuple[Cursor, str]:
    """
    Scan a name: a letter or underscore, then letters, digits or underscores.

    Raises:
        BaseError: Expected(Name) caused by Expected(Alpha)
    """
    if cursor.peek() not in NAME_START:
        cause = _expected(cursor, Expectation(ExpectationCategory.ALPHA))
        raise BaseError(
            cursor, ErrorKind.expected(Expectation(ExpectationCategory.NAME)), child=cause
        )
    return take_while(cursor, NAME_CHARS.__contains__)


def keyword(cursor: Cursor, word: str) -> Cursor:
    """
    Match a keyword as a whole word.

    ``event`` matches in ``event X`` but not in ``events``.

    Raises:
        BaseError: Expected(Keyword(word))
    """
    if not cursor.startswith(word) or cursor.peek(len(word)) in NAME_CHARS:
        raise _expected(cursor, Expectation.keyword(word))
    return cursor.advance(len(word))


def symbol(cursor: Cursor, char: str) -> Cursor:
    """
    Match one punctuation character.

    Raises:
        BaseError: Expected(Symbol(char))
    """
    if cursor.peek() != char:
        raise _expected(cursor, Expectation.symbol(char))
    return cursor.advance(1)


def terminator(cursor: Cursor) -> Cursor:
    """
    Match the ``;`` closing a statement, allowing whitespace before it.

    The failure is located immediately after the preceding construct,
    before any skipped whitespace.

    Raises:
        BaseError: Expected(Symbol(';'))
    """
    after_space = skip_space(cursor)
    if after_space.peek() != ";":
        raise _expected(cursor, Expectation.symbol(";"))
    return after_space.advance(1)

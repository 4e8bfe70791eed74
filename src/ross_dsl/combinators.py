"""
Parser Combinators
==================

Small helpers for composing parse functions.

A parse function takes a Cursor (plus whatever context it needs, bound
with functools.partial or a lambda) and returns ``(cursor, value)``. It
signals failure by raising a ParserError.

Alternatives and Commitment
---------------------------
``alt()`` tries each parser in turn at the same position. Recoverable
failures are collected and, if every alternative fails, raised together
as an AltError. A fatal failure stops the search immediately.

``committed()`` turns any failure raised inside its block into a fatal
one. Statement and item parsers enter it right after their keyword has
matched:

    cursor = keyword(cursor, "send")
    with committed():
        cursor = require_space(cursor)
        ...

From that point on a mistake in the construct is reported where it
happened, instead of being hidden behind an "expected something" at the
start of the statement.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from ross_dsl.errors import AltError, ParserError
from ross_dsl.scanner import Cursor, skip_space, symbol

T = TypeVar("T")

Parser = Callable[[Cursor], tuple[Cursor, Any]]


def alt(cursor: Cursor, *parsers: Parser) -> tuple[Cursor, Any]:
    """
    Return the result of the first parser that succeeds.

    Raises:
        ParserError: The first fatal failure, or an AltError holding every
                     recoverable failure in trial order
    """
    errors: list[ParserError] = []
    for parser in parsers:
        try:
            return parser(cursor)
        except ParserError as err:
            if err.fatal:
                raise
            errors.append(err)
    raise AltError.combine(errors)


@contextmanager
def committed() -> Iterator[None]:
    """Escalate every failure raised inside the block to fatal."""
    try:
        yield
    except ParserError as err:
        raise err.escalate()


def optional(cursor: Cursor, parser: Parser) -> tuple[Cursor, Optional[Any]]:
    """Apply `parser`; on recoverable failure consume nothing and yield None."""
    try:
        return parser(cursor)
    except ParserError as err:
        if err.fatal:
            raise
        return cursor, None


def many0(cursor: Cursor, parser: Parser) -> tuple[Cursor, list]:
    """
    Apply `parser` until it fails recoverably (or stops consuming input).

    Returns:
        The cursor after the last success and the list of results
    """
    results = []
    while True:
        try:
            after, value = parser(cursor)
        except ParserError as err:
            if err.fatal:
                raise
            return cursor, results
        if after.offset == cursor.offset:
            return cursor, results
        results.append(value)
        cursor = after


def many1(cursor: Cursor, parser: Parser) -> tuple[Cursor, list]:
    """Like many0() but the first application must succeed."""
    cursor, first = parser(cursor)
    cursor, rest = many0(cursor, parser)
    return cursor, [first] + rest


def delimited_list(
    cursor: Cursor,
    element: Parser,
    opening: str = "(",
    closing: str = ")",
    separator: str = ",",
) -> tuple[Cursor, list]:
    """
    Parse a bracketed, separated and possibly empty list.

        ( elem , elem , elem )

    Whitespace is allowed around every element. Unless the list closes
    straight away every element is mandatory, so an element's own failure
    is what gets reported.
    """
    cursor = symbol(cursor, opening)
    cursor = skip_space(cursor)

    items = []
    if cursor.peek() != closing:
        cursor, first = element(cursor)
        items.append(first)
        while True:
            after_space = skip_space(cursor)
            if after_space.peek() != separator:
                break
            cursor = skip_space(after_space.advance(1))
            cursor, item = element(cursor)
            items.append(item)

    cursor = skip_space(cursor)
    cursor = symbol(cursor, closing)
    return cursor, items

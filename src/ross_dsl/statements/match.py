"""
Matcher Expressions
===================

Grammar for the boolean conditions of ``do``, ``send`` and ``set``.

Grammar
-------
    match_clause := "match" body
    body         := "event" value              event code equals value
                  | "producer" value           producer address equals value
                  | "tick"                     internal system tick
                  | "{" [extractor] filter "}" explicit extractor/filter pair
                  | "not" "{" body "}"
                  | "or" "{" body "," body "}"
                  | "and" "{" body "," body "}"

``value`` is a u16 literal or a constant holding one. The extractor of a
block defaults to NoneExtractor. Both operands of ``and``/``or`` are
required; nesting is unlimited.

Examples:
    match event BUTTON_PRESSED_EVENT_CODE
    match { FlipStateFilter(active); }
    match and { event 0x0007~u16, not { producer 0x0003~u16 } }

A clause returns the Matcher together with the cursor after it. Callers
decide what may follow (``;`` or nothing, see clause_terminator()).
"""

from typing import Mapping

from ross_dsl.combinators import alt, committed, optional
from ross_dsl.config.event_codes import INTERNAL_SYSTEM_TICK_EVENT_CODE
from ross_dsl.config.extractors import (
    EventCodeExtractor,
    EventProducerAddressExtractor,
    NoneExtractor,
)
from ross_dsl.config.filters import ValueEqualToConstFilter
from ross_dsl.config.model import AndMatcher, Matcher, NotMatcher, OrMatcher, SingleMatcher
from ross_dsl.config.values import ParameterType, Value
from ross_dsl.items import extractor_call, filter_call
from ross_dsl.literal import Literal, cast_literal, literal_or_constant
from ross_dsl.scanner import Cursor, keyword, require_space, skip_space, symbol, terminator


# =============================================================================
# Shared Helpers
# =============================================================================

def u16_operand(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, int]:
    """Parse a literal or constant that must be a u16."""
    end, value = literal_or_constant(cursor, constants)
    return end, cast_literal(value, ParameterType.U16, cursor)


def event_code_matcher(code: int) -> SingleMatcher:
    """Matcher passing for events with the given code."""
    return SingleMatcher(EventCodeExtractor(), ValueEqualToConstFilter(Value.u16(code)))


def producer_address_matcher(address: int) -> SingleMatcher:
    """Matcher passing for events sent by the given device address."""
    return SingleMatcher(
        EventProducerAddressExtractor(), ValueEqualToConstFilter(Value.u16(address))
    )


def clause_terminator(cursor: Cursor) -> Cursor:
    """
    Consume what ends a clause inside a ``do`` block.

    A clause ending with ``}`` may be followed by an optional ``;``; any
    other clause requires one.
    """
    if cursor.previous() == "}":
        after_space = skip_space(cursor)
        if after_space.peek() == ";":
            return after_space.advance(1)
        return cursor
    return terminator(cursor)


# =============================================================================
# Body Forms
# =============================================================================

def _event_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    cursor = keyword(cursor, "event")
    with committed():
        cursor, code = u16_operand(require_space(cursor), constants)
    return cursor, event_code_matcher(code)


def _producer_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    cursor = keyword(cursor, "producer")
    with committed():
        cursor, address = u16_operand(require_space(cursor), constants)
    return cursor, producer_address_matcher(address)


def _tick_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    cursor = keyword(cursor, "tick")
    return cursor, event_code_matcher(INTERNAL_SYSTEM_TICK_EVENT_CODE)


def _block_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    cursor = symbol(cursor, "{")
    with committed():
        cursor = skip_space(cursor)
        cursor, extractor = optional(cursor, lambda start: extractor_call(start, constants))
        if extractor is None:
            extractor = NoneExtractor()
        cursor, item = filter_call(skip_space(cursor), constants)
        cursor = symbol(skip_space(cursor), "}")
    return cursor, SingleMatcher(extractor, item)


def _not_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    cursor = keyword(cursor, "not")
    with committed():
        cursor = symbol(skip_space(cursor), "{")
        cursor, inner = matcher_body(skip_space(cursor), constants)
        cursor = symbol(skip_space(cursor), "}")
    return cursor, NotMatcher(inner)


def _binary_form(
    cursor: Cursor, constants: Mapping[str, Literal], word: str, node: type
) -> tuple[Cursor, Matcher]:
    cursor = keyword(cursor, word)
    with committed():
        cursor = symbol(skip_space(cursor), "{")
        cursor, left = matcher_body(skip_space(cursor), constants)
        cursor = symbol(skip_space(cursor), ",")
        cursor, right = matcher_body(skip_space(cursor), constants)
        cursor = symbol(skip_space(cursor), "}")
    return cursor, node(left, right)


def _and_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    return _binary_form(cursor, constants, "and", AndMatcher)


def _or_form(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    return _binary_form(cursor, constants, "or", OrMatcher)


BODY_FORMS = (_event_form, _producer_form, _tick_form, _block_form, _not_form, _or_form, _and_form)


# =============================================================================
# Entry Points
# =============================================================================

def matcher_body(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    """
    Parse a matcher body (everything after the ``match`` keyword).

    Raises:
        ParserError: AltError of every form's failure if none applies
    """
    return alt(cursor, *(lambda start, form=form: form(start, constants) for form in BODY_FORMS))


def match_clause(cursor: Cursor, constants: Mapping[str, Literal]) -> tuple[Cursor, Matcher]:
    """
    Parse ``match <body>``.

    Fails recoverably only when the ``match`` keyword itself is missing.
    """
    cursor = keyword(cursor, "match")
    with committed():
        return matcher_body(skip_space(cursor), constants)

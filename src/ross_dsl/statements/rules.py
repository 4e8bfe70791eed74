"""
Rule Statements
===============

Statements that produce an EventProcessor.

send
----
    send <event> from <address> to <receiver> [if match <body>];

Forwards matching events unchanged. Desugars to:

    matcher:  And(event code == <event>, producer address == <address>)
              [And'd with the extra condition]
    creators: PacketExtractor -> PacketProducer(<receiver>)

set
---
    set <state> to <value> on <event> from <address> [if match <body>];

Writes a constant into a state slot when a matching event arrives. The
processor has no creators; its matcher ends with a SetStateToConstFilter
that runs only after every condition before it has passed:

    And(And(event, producer)[, condition], SetStateToConst(<state>, <value>))

do
--
    do {
        match <body>;              // one or more, And'd left to right
        fire { [extractor] producer };   // zero or more
        fire { producer } if match { ... };
    };

Clause terminators inside ``do`` follow clause_terminator(): a clause
ending with ``}`` takes an optional ``;``, any other clause needs one.
"""

import logging
from typing import Optional

from ross_dsl.combinators import committed, many0, many1, optional
from ross_dsl.config.extractors import NoneExtractor, PacketExtractor
from ross_dsl.config.filters import SetStateToConstFilter
from ross_dsl.config.model import AndMatcher, Creator, EventProcessor, Matcher, SingleMatcher, conjoin
from ross_dsl.config.producers import PacketProducer
from ross_dsl.config.values import ParameterType
from ross_dsl.items import extractor_call, producer_call
from ross_dsl.literal import cast_literal, literal_or_constant, state_variable
from ross_dsl.scanner import Cursor, keyword, require_space, skip_space, symbol, terminator
from ross_dsl.statements.match import (
    clause_terminator,
    event_code_matcher,
    match_clause,
    producer_address_matcher,
    u16_operand,
)
from ross_dsl.symbols import SymbolTable

logger = logging.getLogger(__name__)


def _keyword_after_space(cursor: Cursor, word: str) -> Cursor:
    return keyword(require_space(cursor), word)


def _if_match(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, Optional[Matcher]]:
    """Parse an optional ``if match <body>`` suffix."""
    after_if, found = optional(cursor, lambda start: (_keyword_after_space(start, "if"), True))
    if not found:
        return cursor, None
    with committed():
        return match_clause(require_space(after_if), symbols.constants)


# =============================================================================
# send
# =============================================================================

def send_statement(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, EventProcessor]:
    """Parse a ``send`` statement into a forwarding EventProcessor."""
    cursor = keyword(cursor, "send")
    with committed():
        cursor, event = u16_operand(require_space(cursor), symbols.constants)
        cursor = _keyword_after_space(cursor, "from")
        cursor, address = u16_operand(require_space(cursor), symbols.constants)
        cursor = _keyword_after_space(cursor, "to")
        cursor, receiver = u16_operand(require_space(cursor), symbols.constants)
        cursor, condition = _if_match(cursor, symbols)
        cursor = terminator(cursor)

    matchers = [event_code_matcher(event), producer_address_matcher(address)]
    if condition is not None:
        matchers.append(condition)

    creator = Creator(PacketExtractor(), PacketProducer(receiver))
    logger.debug(f"send 0x{event:04x} from 0x{address:04x} to 0x{receiver:04x}")
    return cursor, EventProcessor(conjoin(matchers), (creator,))


# =============================================================================
# set
# =============================================================================

def set_statement(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, EventProcessor]:
    """Parse a ``set`` statement into a matcher-only EventProcessor."""
    cursor = keyword(cursor, "set")
    with committed():
        cursor, state_index = state_variable(require_space(cursor), symbols.state_slots)
        cursor = _keyword_after_space(cursor, "to")
        value_start = require_space(cursor)
        cursor, literal = literal_or_constant(value_start, symbols.constants)
        value = cast_literal(literal, ParameterType.VALUE, value_start)
        cursor = _keyword_after_space(cursor, "on")
        cursor, event = u16_operand(require_space(cursor), symbols.constants)
        cursor = _keyword_after_space(cursor, "from")
        cursor, address = u16_operand(require_space(cursor), symbols.constants)
        cursor, condition = _if_match(cursor, symbols)
        cursor = terminator(cursor)

    matchers = [event_code_matcher(event), producer_address_matcher(address)]
    if condition is not None:
        matchers.append(condition)

    write = SingleMatcher(NoneExtractor(), SetStateToConstFilter(state_index, value))
    logger.debug(f"set slot {state_index} to {value} on 0x{event:04x} from 0x{address:04x}")
    return cursor, EventProcessor(AndMatcher(conjoin(matchers), write))


# =============================================================================
# do
# =============================================================================

def fire_clause(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, Creator]:
    """
    Parse ``fire { [extractor] producer } [if match <body>]``.

    The extractor defaults to NoneExtractor. Returns the cursor after the
    clause, before any terminator.
    """
    constants = symbols.constants
    cursor = keyword(cursor, "fire")
    with committed():
        cursor = skip_space(symbol(skip_space(cursor), "{"))
        cursor, extractor = optional(cursor, lambda start: extractor_call(start, constants))
        if extractor is None:
            extractor = NoneExtractor()
        cursor, producer = producer_call(skip_space(cursor), constants)
        cursor = symbol(skip_space(cursor), "}")
        cursor, guard = _if_match(cursor, symbols)
    return cursor, Creator(extractor, producer, guard)


def do_statement(cursor: Cursor, symbols: SymbolTable) -> tuple[Cursor, EventProcessor]:
    """Parse a ``do { match ...; fire ...; }`` block."""

    def match_item(start: Cursor) -> tuple[Cursor, Matcher]:
        end, matcher = match_clause(skip_space(start), symbols.constants)
        with committed():
            return clause_terminator(end), matcher

    def fire_item(start: Cursor) -> tuple[Cursor, Creator]:
        end, creator = fire_clause(skip_space(start), symbols)
        with committed():
            return clause_terminator(end), creator

    cursor = keyword(cursor, "do")
    with committed():
        cursor = symbol(skip_space(cursor), "{")
        cursor, matchers = many1(cursor, match_item)
        cursor, creators = many0(cursor, fire_item)
        cursor = symbol(skip_space(cursor), "}")
        cursor = clause_terminator(cursor)

    logger.debug(f"do block with {len(matchers)} matchers, {len(creators)} creators")
    return cursor, EventProcessor(conjoin(matchers), tuple(creators))

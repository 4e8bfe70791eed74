# =============================================================================
# test_match.py - Matcher Expression Tests
# =============================================================================
# Tests for the match clause grammar.
#
# Test coverage includes:
#   - event / producer / tick shorthands
#   - Explicit { extractor filter } blocks
#   - not / and / or composition and nesting
#   - Clause terminators inside do blocks
#   - Fatal diagnostics once a form has been recognised
# =============================================================================

import pytest

from ross_dsl.config.event_codes import BUTTON_PRESSED_EVENT_CODE, EVENT_CODES
from ross_dsl.config.extractors import (
    ButtonIndexExtractor,
    EventCodeExtractor,
    EventProducerAddressExtractor,
    NoneExtractor,
)
from ross_dsl.config.filters import FlipStateFilter, ValueEqualToConstFilter
from ross_dsl.config.model import AndMatcher, NotMatcher, OrMatcher, SingleMatcher
from ross_dsl.config.values import Value
from ross_dsl.errors import AltError, BaseError, ErrorKind, Expectation
from ross_dsl.literal import Literal
from ross_dsl.scanner import Cursor
from ross_dsl.statements.match import (
    clause_terminator,
    event_code_matcher,
    match_clause,
    producer_address_matcher,
)


# =============================================================================
# Helper Function
# =============================================================================

CONSTANTS = {name: Literal.u16(code) for name, code in EVENT_CODES.items()}


def match(text: str):
    """Parse a match clause and return (matcher, remaining text)."""
    cursor, matcher = match_clause(Cursor(text), CONSTANTS)
    return matcher, cursor.rest


# =============================================================================
# Shorthand Forms
# =============================================================================

class TestShorthands:
    """Test event, producer and tick."""

    def test_event(self):
        matcher, rest = match("match event 0xabab~u16;")
        assert matcher == SingleMatcher(
            EventCodeExtractor(), ValueEqualToConstFilter(Value.u16(0xABAB))
        )
        assert rest == ";"

    def test_event_constant(self):
        matcher, _ = match("match event BUTTON_PRESSED_EVENT_CODE;")
        assert matcher == event_code_matcher(BUTTON_PRESSED_EVENT_CODE)

    def test_producer(self):
        matcher, _ = match("match producer 0x0001~u16;")
        assert matcher == SingleMatcher(
            EventProducerAddressExtractor(), ValueEqualToConstFilter(Value.u16(0x0001))
        )

    def test_tick(self):
        matcher, rest = match("match tick;")
        assert matcher == event_code_matcher(EVENT_CODES["INTERNAL_SYSTEM_TICK_EVENT_CODE"])
        assert rest == ";"

    def test_event_requires_u16(self):
        with pytest.raises(BaseError) as exc_info:
            match("match event 0x01~u8;")
        error = exc_info.value
        assert error.kind == ErrorKind.cast_not_allowed("u8", "u16")
        assert error.fragment.startswith("0x01~u8")
        assert error.fatal


# =============================================================================
# Blocks
# =============================================================================

class TestBlocks:
    """Test explicit extractor/filter blocks."""

    def test_extractor_and_filter(self):
        matcher, rest = match(
            "match { ButtonIndexExtractor(); ValueEqualToConstFilter(0x01~u8); }"
        )
        assert matcher == SingleMatcher(
            ButtonIndexExtractor(), ValueEqualToConstFilter(Value.u8(1))
        )
        assert rest == ""

    def test_default_extractor(self):
        matcher, _ = match("match { FlipStateFilter(0x00000000~u32); }")
        assert matcher == SingleMatcher(NoneExtractor(), FlipStateFilter(0))

    def test_multiline(self):
        matcher, _ = match("match {\n    EventCodeExtractor();\n    ValueEqualToConstFilter(0x0007~u16);\n}")
        assert matcher.extractor == EventCodeExtractor()

    def test_second_extractor_is_not_a_filter(self):
        with pytest.raises(BaseError) as exc_info:
            match("match { EventCodeExtractor(); ButtonIndexExtractor(); }")
        error = exc_info.value
        assert error.kind == ErrorKind.unknown_filter()
        assert error.fragment == "ButtonIndexExtractor"
        assert error.fatal

    def test_unclosed_block(self):
        with pytest.raises(BaseError) as exc_info:
            match("match { FlipStateFilter(0x00000000~u32); ")
        assert exc_info.value.kind == ErrorKind.expected(Expectation.symbol("}"))


# =============================================================================
# Composition
# =============================================================================

class TestComposition:
    """Test not, and and or."""

    def test_not(self):
        matcher, _ = match("match not { tick }")
        assert matcher == NotMatcher(event_code_matcher(0x000A))

    def test_and(self):
        matcher, _ = match("match and { event 0x0001~u16, producer 0x0002~u16 }")
        assert matcher == AndMatcher(event_code_matcher(1), producer_address_matcher(2))

    def test_or(self):
        matcher, _ = match("match or { event 0x0001~u16, event 0x0002~u16 }")
        assert matcher == OrMatcher(event_code_matcher(1), event_code_matcher(2))

    def test_nested(self):
        matcher, rest = match(
            "match and { or { tick, event 0x0007~u16 }, not { producer 0x0003~u16 } };"
        )
        assert matcher == AndMatcher(
            OrMatcher(event_code_matcher(0x000A), event_code_matcher(0x0007)),
            NotMatcher(producer_address_matcher(0x0003)),
        )
        assert rest == ";"

    def test_block_operand(self):
        matcher, _ = match("match and { tick, { FlipStateFilter(0x00000001~u32); } }")
        assert matcher.right == SingleMatcher(NoneExtractor(), FlipStateFilter(1))

    def test_missing_second_operand(self):
        with pytest.raises(BaseError) as exc_info:
            match("match and { event 0x0001~u16 }")
        error = exc_info.value
        assert error.kind == ErrorKind.expected(Expectation.symbol(","))
        assert error.fatal


# =============================================================================
# Failures
# =============================================================================

class TestClauseFailures:
    """Test failures of the clause as a whole."""

    def test_missing_keyword_recoverable(self):
        with pytest.raises(BaseError) as exc_info:
            match("fire { NoneProducer(); }")
        assert exc_info.value.kind == ErrorKind.expected(Expectation.keyword("match"))
        assert not exc_info.value.fatal

    def test_unknown_body(self):
        """Every form is listed when none applies."""
        with pytest.raises(AltError) as exc_info:
            match("match sometimes;")
        error = exc_info.value
        assert error.fatal
        assert len(error.siblings) == 7


# =============================================================================
# Clause Terminators
# =============================================================================

class TestClauseTerminator:
    """Test what may follow a clause inside do."""

    def test_semicolon_required(self):
        with pytest.raises(BaseError) as exc_info:
            clause_terminator(Cursor("match tick fire", 10))
        assert exc_info.value.kind == ErrorKind.expected(Expectation.symbol(";"))

    def test_semicolon(self):
        assert clause_terminator(Cursor("match tick ;x", 10)).rest == "x"

    def test_optional_after_brace(self):
        cursor = Cursor("{ F(); }\n fire", 8)
        assert clause_terminator(cursor) == cursor

    def test_consumed_after_brace(self):
        assert clause_terminator(Cursor("{ F(); } ;x", 8)).rest == "x"

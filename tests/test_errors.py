# =============================================================================
# test_errors.py - Diagnostic Tree Tests
# =============================================================================
# Tests for error kinds, severity handling and text rendering.
#
# Test coverage includes:
#   - Human wording of every error kind and expectation
#   - Alternative aggregation and commitment (recoverable vs fatal)
#   - Rendering: excerpts, truncation, end of input, nesting
# =============================================================================

import pytest

from ross_dsl.combinators import alt, committed, delimited_list, many0, many1, optional
from ross_dsl.errors import (
    AltError,
    BaseError,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    ParserError,
    RossDslError,
)
from ross_dsl.scanner import Cursor, alpha1, dec1, keyword, symbol


def expected(category: ExpectationCategory) -> ErrorKind:
    return ErrorKind.expected(Expectation(category))


# =============================================================================
# Error Kind Wording
# =============================================================================

class TestWording:
    """Test the human-readable text of kinds."""

    @pytest.mark.parametrize("expectation,text", [
        (Expectation.argument_count(2, 3), "2 arguments found 3"),
        (Expectation.keyword("send"), "keyword 'send'"),
        (Expectation.symbol(";"), "symbol ';'"),
        (Expectation(ExpectationCategory.NAME), "a name"),
        (Expectation(ExpectationCategory.LITERAL), "a literal"),
        (Expectation(ExpectationCategory.VALUE), "a value"),
        (Expectation(ExpectationCategory.TYPE), "a type"),
        (Expectation(ExpectationCategory.STATE_VARIABLE), "a state variable"),
        (Expectation(ExpectationCategory.ALPHA), "an ascii letter"),
        (Expectation(ExpectationCategory.HEX_DIGIT), "a hexadecimal digit"),
        (Expectation(ExpectationCategory.MULTISPACE), "a space, tab or newline"),
        (Expectation(ExpectationCategory.SOMETHING), "something"),
    ])
    def test_expectation(self, expectation, text):
        assert str(expectation) == text

    def test_expected_kind(self):
        assert str(ErrorKind.expected(Expectation.symbol(";"))) == "expected symbol ';'"

    def test_cast_kind(self):
        assert str(ErrorKind.cast_not_allowed("u16", "u8")) == "cast from u16 to u8 not allowed"

    def test_unknown_kinds(self):
        assert str(ErrorKind.unknown_extractor()) == "unknown extractor"
        assert str(ErrorKind.unknown_filter()) == "unknown filter"
        assert str(ErrorKind.unknown_producer()) == "unknown producer"

    def test_internal_kind(self):
        assert str(ErrorKind.internal("take_until")) == "error in take_until"

    def test_duplicate_kind(self):
        assert str(ErrorKind.duplicate_name()) == "name already declared"

    def test_hierarchy(self):
        assert issubclass(BaseError, ParserError)
        assert issubclass(AltError, RossDslError)


# =============================================================================
# Alternatives and Commitment
# =============================================================================

def _fatal_parser(cursor):
    cursor = keyword(cursor, "send")
    with committed():
        cursor = symbol(cursor, "!")
    return cursor, None


class TestCombinators:
    """Test alternative selection and commitment."""

    def test_first_success_wins(self):
        cursor, text = alt(Cursor("abc"), dec1, alpha1)
        assert text == "abc"

    def test_all_failures_aggregated(self):
        with pytest.raises(AltError) as exc_info:
            alt(Cursor("!"), dec1, alpha1)
        kinds = [error.kind for error in exc_info.value.siblings]
        assert kinds == [
            expected(ExpectationCategory.DIGIT),
            expected(ExpectationCategory.ALPHA),
        ]
        assert not exc_info.value.fatal

    def test_nested_alternatives_flattened(self):
        inner = lambda cursor: alt(cursor, dec1, alpha1)
        with pytest.raises(AltError) as exc_info:
            alt(Cursor("!"), inner, lambda cursor: (symbol(cursor, "?"), None))
        assert len(exc_info.value.siblings) == 3

    def test_committed_marks_fatal(self):
        with pytest.raises(BaseError) as exc_info:
            with committed():
                symbol(Cursor("x"), ";")
        assert exc_info.value.fatal

    def test_fatal_stops_alternatives(self):
        """A fatal failure is not hidden behind later alternatives."""
        with pytest.raises(BaseError) as exc_info:
            alt(Cursor("send"), _fatal_parser, alpha1)
        assert exc_info.value.fatal
        assert exc_info.value.kind == ErrorKind.expected(Expectation.symbol("!"))

    def test_optional(self):
        cursor, value = optional(Cursor("123"), alpha1)
        assert value is None
        assert cursor.offset == 0

    def test_optional_propagates_fatal(self):
        with pytest.raises(BaseError):
            optional(Cursor("send"), _fatal_parser)

    def test_many0_and_many1(self):
        parser = lambda cursor: (symbol(cursor, "a"), "a")
        cursor, items = many0(Cursor("aaab"), parser)
        assert items == ["a", "a", "a"]
        assert cursor.rest == "b"
        with pytest.raises(BaseError):
            many1(Cursor("b"), parser)

    def test_delimited_list(self):
        cursor, items = delimited_list(Cursor("( 1 , 22,3 )x"), dec1)
        assert items == ["1", "22", "3"]
        assert cursor.rest == "x"

    def test_delimited_list_empty(self):
        _, items = delimited_list(Cursor("( )"), dec1)
        assert items == []

    def test_delimited_list_first_element_error_reported(self):
        with pytest.raises(BaseError) as exc_info:
            delimited_list(Cursor("(x, 1)"), dec1)
        error = exc_info.value
        assert error.kind == expected(ExpectationCategory.DIGIT)
        assert error.location.offset == 1

    def test_delimited_list_element_after_separator_required(self):
        with pytest.raises(BaseError) as exc_info:
            delimited_list(Cursor("(1, )"), dec1)
        assert exc_info.value.kind == expected(ExpectationCategory.DIGIT)


# =============================================================================
# Rendering
# =============================================================================

class TestRendering:
    """Test rendering of diagnostic trees."""

    def test_single_error(self):
        error = BaseError(Cursor("abc input"), ErrorKind.expected(Expectation.symbol(";")))
        assert str(error) == "expected symbol ';' at <input>:1:1: \"abc input\""

    def test_excerpt_is_first_line_only(self):
        error = BaseError(Cursor("first line\nsecond"), expected(ExpectationCategory.NAME))
        assert str(error).endswith('"first line"')

    def test_excerpt_truncated(self):
        error = BaseError(Cursor("a" * 40), expected(ExpectationCategory.NAME))
        assert str(error).endswith('"' + "a" * 32 + '..."')

    def test_custom_width(self):
        error = BaseError(Cursor("abcdefgh"), expected(ExpectationCategory.NAME))
        assert error.render(4).endswith('"abcd..."')

    def test_end_of_input(self):
        error = BaseError(Cursor("abc", 3), ErrorKind.expected(Expectation.symbol(";")))
        assert str(error) == "expected symbol ';' at <input>:1:4: end of input"

    def test_length_limits_excerpt(self):
        error = BaseError(Cursor("Foo(); rest"), ErrorKind.unknown_filter(), length=3)
        assert error.fragment == "Foo"
        assert str(error).endswith('"Foo"')

    def test_caused_by(self):
        cursor = Cursor("1abc")
        error = BaseError(
            cursor,
            expected(ExpectationCategory.NAME),
            child=BaseError(cursor, expected(ExpectationCategory.ALPHA)),
        )
        assert str(error).splitlines() == [
            'expected a name at <input>:1:1: "1abc" caused by:',
            '  expected an ascii letter at <input>:1:1: "1abc"',
        ]

    def test_caused_by_one_of(self):
        cursor = Cursor("zz")
        error = BaseError(
            cursor,
            expected(ExpectationCategory.LITERAL),
            child=AltError([
                BaseError(cursor, ErrorKind.expected(Expectation.keyword("true"))),
                BaseError(cursor, expected(ExpectationCategory.HEX_DIGIT)),
            ]),
        )
        assert str(error).splitlines() == [
            'expected a literal at <input>:1:1: "zz" caused by one of:',
            "  expected keyword 'true' at <input>:1:1: \"zz\"",
            '  expected a hexadecimal digit at <input>:1:1: "zz"',
        ]

    def test_bare_alternatives(self):
        cursor = Cursor("x")
        error = AltError([
            BaseError(cursor, expected(ExpectationCategory.DIGIT)),
            BaseError(cursor, expected(ExpectationCategory.ALPHA)),
        ])
        lines = str(error).splitlines()
        assert lines[0] == "one of:"
        assert all(line.startswith("  expected") for line in lines[1:])

    def test_nested_indentation(self):
        cursor = Cursor("x")
        leaf = BaseError(cursor, expected(ExpectationCategory.ALPHA))
        middle = BaseError(cursor, expected(ExpectationCategory.NAME), child=leaf)
        root = BaseError(cursor, expected(ExpectationCategory.SOMETHING), child=middle)
        lines = str(root).splitlines()
        assert lines[2].startswith("    expected an ascii letter")

    def test_location_uses_filename(self):
        error = BaseError(
            Cursor("a\n  b", 4, "rules.ross"), expected(ExpectationCategory.NAME)
        )
        assert " at rules.ross:2:3: " in str(error)

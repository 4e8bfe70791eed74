# =============================================================================
# test_compiler.py - Compiler Integration Tests
# =============================================================================
# End-to-end tests of RossCompiler and the convenience functions.
#
# Test coverage includes:
#   - Complete programs mixing every statement kind
#   - Source order of event processors and state slot allocation
#   - Comments, whitespace and empty programs
#   - Symbol table options (predefined constants, redeclaration)
#   - Root diagnostics and their rendering
#   - File compilation
# =============================================================================

from pathlib import Path

import pytest

from ross_dsl import (
    BaseError,
    CompilerOptions,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    Literal,
    RossCompiler,
    compile_dsl,
    compile_file,
)
from ross_dsl.config.extractors import NoneExtractor, PacketExtractor
from ross_dsl.config.filters import FlipStateFilter, StateEqualToConstFilter
from ross_dsl.config.model import AndMatcher, Creator, SingleMatcher
from ross_dsl.config.peripherals import BcmRgb, BcmSingle, Peripheral, RelaySingle
from ross_dsl.config.producers import BcmChangeBrightnessProducer, PacketProducer
from ross_dsl.config.values import BcmValue, BcmValueKind, Value
from ross_dsl.errors import AltError
from ross_dsl.statements.match import event_code_matcher, producer_address_matcher


# =============================================================================
# Sample Programs
# =============================================================================

FLIP_AND_FIRE = """
// Toggle a light with a button and drive the LED from the new state
const transmitter_address = 0x0002~u16;
const receiver_address = 0x0003~u16;
const receiver_address2 = 0x0004~u16;

let active = false;

do {
    match event BUTTON_PRESSED_EVENT_CODE;
    match producer transmitter_address;
    match { FlipStateFilter(active); }

    fire {
        BcmChangeBrightnessProducer(receiver_address, 0x00~u8, 0xff~u8);
    } if match { StateEqualToConstFilter(active, true); }

    fire {
        BcmChangeBrightnessProducer(receiver_address2, 0x00~u8, 0x00~u8);
    } if match { StateEqualToConstFilter(active, false); }
}
"""

FORWARD = """
send BUTTON_PRESSED_EVENT_CODE from 0x0002~u16 to 0x0003~u16;
send BUTTON_RELEASED_EVENT_CODE from 0x0002~u16 to 0x0003~u16;
"""


def compile_text(source: str, **options):
    """Compile with RossCompiler and return the CompilerResult."""
    return RossCompiler(CompilerOptions(**options)).compile_source(source)


# =============================================================================
# Complete Programs
# =============================================================================

class TestPrograms:
    """Test complete programs."""

    def test_flip_and_fire(self):
        config = compile_dsl(FLIP_AND_FIRE)

        assert config.initial_state == {0: Value.boolean(False)}
        assert len(config.event_processors) == 1

        processor = config.event_processors[0]
        assert processor.matcher == AndMatcher(
            AndMatcher(event_code_matcher(0x0007), producer_address_matcher(0x0002)),
            SingleMatcher(NoneExtractor(), FlipStateFilter(0)),
        )
        assert processor.creators == (
            Creator(
                NoneExtractor(),
                BcmChangeBrightnessProducer(3, 0, BcmValue(BcmValueKind.SINGLE, 0xFF)),
                SingleMatcher(NoneExtractor(), StateEqualToConstFilter(0, Value.boolean(True))),
            ),
            Creator(
                NoneExtractor(),
                BcmChangeBrightnessProducer(4, 0, BcmValue(BcmValueKind.SINGLE, 0x00)),
                SingleMatcher(NoneExtractor(), StateEqualToConstFilter(0, Value.boolean(False))),
            ),
        )

    def test_processors_in_source_order(self):
        config = compile_dsl(FORWARD)
        codes = [p.matcher.left.filter.value for p in config.event_processors]
        assert codes == [Value.u16(0x0007), Value.u16(0x0008)]
        assert all(
            p.creators == (Creator(PacketExtractor(), PacketProducer(3)),)
            for p in config.event_processors
        )

    def test_mixed_statements(self):
        config = compile_dsl("""
            peripheral 0x00000000~u32 bcm single(0x00~u8);
            pub(0x0010~u16) peripheral 0x00000001~u32 bcm rgb(0x01~u8, 0x02~u8, 0x03~u8);
            let active = false;
            let level = 0x00~u8;
            set active to true on BUTTON_PRESSED_EVENT_CODE from 0x0002~u16;
            do { match tick; fire { NoneProducer(); } };
            send 0x0001~u16 from 0x0002~u16 to 0x0003~u16;
        """)
        assert config.initial_state == {0: Value.boolean(False), 1: Value.u8(0)}
        assert config.peripherals == {
            0: Peripheral(BcmSingle(0)),
            1: Peripheral(BcmRgb(1, 2, 3), (0x0010,)),
        }
        assert len(config.event_processors) == 3
        assert config.event_processors[0].creators == ()

    def test_statement_count(self):
        result = compile_text(FORWARD)
        assert result.statement_count == 2

    def test_statements_on_one_line(self):
        config = compile_dsl("let a = true;let b = false;do{match tick;}")
        assert len(config.initial_state) == 2
        assert len(config.event_processors) == 1


class TestEmptyPrograms:
    """Test programs without statements."""

    @pytest.mark.parametrize("source", ["", "   \n\t  ", "// nothing here\n// at all"])
    def test_empty(self, source):
        config = compile_dsl(source)
        assert config.initial_state == {}
        assert config.event_processors == ()
        assert config.peripherals == {}


# =============================================================================
# Symbols
# =============================================================================

class TestSymbols:
    """Test constants and state slots across statements."""

    def test_state_alias(self):
        result = compile_text("let active = false;\nlet count = 0x00~u8;")
        assert result.state_slots == {"active": 0, "count": 1}
        assert result.constants["active"] == Literal.u32(0)
        assert result.constants["count"] == Literal.u32(1)

    def test_event_codes_predefined(self):
        result = compile_text("")
        assert result.constants["BUTTON_PRESSED_EVENT_CODE"] == Literal.u16(0x0007)

    def test_event_codes_disabled(self):
        with pytest.raises(BaseError) as exc_info:
            compile_text(
                "send BUTTON_PRESSED_EVENT_CODE from 0x0002~u16 to 0x0003~u16;",
                predefined_constants=False,
            )
        assert exc_info.value.kind == ErrorKind.expected(
            Expectation(ExpectationCategory.LITERAL)
        )

    def test_string_constant_with_slashes(self):
        result = compile_text('const url = "a//b"; // comment')
        assert result.constants["url"] == Literal.string("a//b")

    def test_duplicate_constant(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("const a = 0x01~u8;\nconst a = 0x02~u8;")
        error = exc_info.value
        assert error.kind == ErrorKind.duplicate_name()
        assert error.fragment == "a"
        assert error.source_location.line == 2
        assert error.fatal

    def test_duplicate_event_code(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("const BUTTON_PRESSED_EVENT_CODE = 0x0001~u16;")
        assert exc_info.value.kind == ErrorKind.duplicate_name()

    def test_state_shadowing_constant(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("const active = true;\nlet active = false;")
        assert exc_info.value.kind == ErrorKind.duplicate_name()

    def test_duplicate_peripheral(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl(
                "peripheral 0x00000000~u32 bcm single(0x00~u8);\n"
                "peripheral 0x00000000~u32 relay single(0x01~u8);"
            )
        assert exc_info.value.fragment == "0x00000000~u32"

    def test_allow_redeclaration(self):
        config = compile_dsl(
            "const a = 0x0001~u16;\n"
            "const a = 0x0002~u16;\n"
            "peripheral 0x00000000~u32 bcm single(0x00~u8);\n"
            "peripheral 0x00000000~u32 relay single(0x01~u8);\n"
            "send 0x0007~u16 from a to 0x0003~u16;",
            allow_redeclaration=True,
        )
        assert config.peripherals == {0: Peripheral(RelaySingle(1))}
        assert config.event_processors[0].matcher.right == producer_address_matcher(2)


# =============================================================================
# Diagnostics
# =============================================================================

class TestDiagnostics:
    """Test root errors and their rendering."""

    def test_expected_something(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("sned 0x0007~u16 from 0x0002~u16 to 0x0003~u16;")
        error = exc_info.value
        assert error.kind == ErrorKind.expected(Expectation(ExpectationCategory.SOMETHING))
        assert error.fatal
        assert isinstance(error.child, AltError)
        assert [sibling.kind for sibling in error.child.siblings] == [
            ErrorKind.expected(Expectation.keyword(word))
            for word in ("peripheral", "let", "const", "send", "do", "set")
        ]

    def test_expected_something_rendering(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("let a = true;\n  sned", filename="rules.ross")
        lines = str(exc_info.value).splitlines()
        assert lines[0] == 'expected something at rules.ross:2:3: "sned" caused by one of:'
        assert lines[1] == "  expected keyword 'peripheral' at rules.ross:2:3: \"sned\""
        assert len(lines) == 7

    def test_error_after_comment_keeps_position(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("// first line\n// second line\nsned")
        location = exc_info.value.source_location
        assert (location.line, location.column) == (3, 1)

    def test_error_inside_block(self):
        """A failure inside a statement is reported where it happened."""
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("do {\n    match event 0x01~u8;\n}")
        error = exc_info.value
        assert error.kind == ErrorKind.cast_not_allowed("u8", "u16")
        assert error.source_location.line == 2
        assert error.source_location.column == len("    match event ") + 1

    def test_first_argument_error_in_program(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("do { match { ValueEqualToConstFilter(0x1ff~u8); } }")
        error = exc_info.value
        assert error.kind == ErrorKind.expected(Expectation(ExpectationCategory.VALUE))
        assert error.fragment == "0x1ff"

    def test_moderate_nesting(self):
        depth = 50
        source = "do { match " + "not { " * depth + "tick" + " }" * depth + "; }"
        config = compile_dsl(source)
        assert len(config.event_processors) == 1

    def test_nesting_too_deep(self):
        """Nesting beyond the interpreter stack is a diagnostic, not a crash."""
        depth = 5000
        source = "let a = true;\ndo { match " + "not { " * depth + "tick" + " }" * depth + "; }"
        with pytest.raises(BaseError) as exc_info:
            compile_dsl(source)
        error = exc_info.value
        assert error.kind == ErrorKind.nesting_too_deep()
        assert error.fatal
        assert error.source_location.line == 2
        assert str(error).startswith("nesting too deep at <input>:2:1:")

    def test_excerpt_width_option(self):
        with pytest.raises(BaseError) as exc_info:
            compile_dsl("sned 0x0007~u16;", max_location_length=4)
        assert str(exc_info.value).splitlines()[0].endswith('"sned..." caused by one of:')

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            CompilerOptions(max_location_length=0)

    def test_compilations_independent(self):
        """Each compilation starts from fresh tables."""
        compiler = RossCompiler()
        with pytest.raises(BaseError):
            compiler.compile_source("let a = true;\nlet b = 0x01~u8")
        result = compiler.compile_source("let b = 0x01~u8;")
        assert result.state_slots == {"b": 0}


# =============================================================================
# Files
# =============================================================================

class TestFiles:
    """Test compiling from disk."""

    def test_compile_file(self, tmp_path):
        path = tmp_path / "forward.ross"
        path.write_text(FORWARD, encoding="utf-8")
        config = compile_file(str(path))
        assert len(config.event_processors) == 2

    def test_filename_in_diagnostics(self, tmp_path):
        path = tmp_path / "broken.ross"
        path.write_text("let a = ;", encoding="utf-8")
        with pytest.raises(BaseError) as exc_info:
            compile_file(str(path))
        assert exc_info.value.source_location.filename == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RossCompiler().compile_file(str(tmp_path / "missing.ross"))

    @pytest.mark.parametrize("name", ["light_switch.ross", "gateway.ross"])
    def test_example_programs(self, name):
        path = Path(__file__).parent.parent / "examples" / "rules" / name
        result = RossCompiler().compile_file(str(path))
        assert result.config.event_processors
        assert result.config.peripherals

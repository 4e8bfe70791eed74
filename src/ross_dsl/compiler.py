"""
Rule Language Compiler
======================

This module provides the main compiler interface for the rule language.
It orchestrates the complete compilation process:

    Source → Strip comments → Statements → Symbol tables → Config

Usage
-----
Command line:
    $ rossc rules.ross -o rules.txt

Programmatic:
    >>> from ross_dsl import compile_dsl
    >>> config = compile_dsl('''
    ...     const device_address = 0x0002~u16;
    ...     send BUTTON_PRESSED_EVENT_CODE from device_address to 0x0003~u16;
    ... ''')
    >>> len(config.event_processors)
    1

Compilation Pipeline
--------------------
1. **Comment removal**: ``//`` comments are blanked, positions kept
2. **Statements**: at each position, after skipping whitespace, the
   statement parsers are tried in a fixed order: peripheral, let, const,
   send, do, set
3. **Tables**: each parsed declaration is applied to the SymbolTable;
   each rule is appended to the event-processor list
4. **Assembly**: once all input is consumed the Config is built

Error Handling
--------------
Compilation stops at the first error. The error raised is the root of a
diagnostic tree (see errors.py); no partial Config is returned. When no
statement applies at a position the root is ``expected something``,
with every statement's failure as its children. A statement whose
matchers nest deeper than the Python stack allows fails with
``nesting too deep`` at the start of that statement.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ross_dsl.combinators import alt
from ross_dsl.config.model import Config, EventProcessor
from ross_dsl.errors import (
    DEFAULT_MAX_LOCATION_LENGTH,
    BaseError,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    ParserError,
)
from ross_dsl.literal import Literal
from ross_dsl.scanner import Cursor, skip_space, strip_comments
from ross_dsl.statements import (
    STATEMENTS,
    ConstantDeclaration,
    PeripheralDeclaration,
    StateDeclaration,
)
from ross_dsl.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        filename: Source name used in diagnostics
        max_location_length: Width of the source excerpt in diagnostics
        predefined_constants: Seed the protocol event-code constants
        allow_redeclaration: Let a later declaration replace an earlier
                             one instead of failing with DuplicateName
    """
    filename: str = "<input>"
    max_location_length: int = DEFAULT_MAX_LOCATION_LENGTH
    predefined_constants: bool = True
    allow_redeclaration: bool = False

    def __post_init__(self):
        if self.max_location_length < 1:
            raise ValueError("max_location_length must be positive")


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        config: The compiled configuration
        statement_count: Number of statements compiled
        constants: Final constant table (including state-variable aliases)
        state_slots: State variable name -> slot index
    """
    filename: str = ""
    config: Config = field(default_factory=Config)
    statement_count: int = 0
    constants: dict[str, Literal] = field(default_factory=dict)
    state_slots: dict[str, int] = field(default_factory=dict)


class RossCompiler:
    """
    Compiler for rule-language programs.

    Example:
        compiler = RossCompiler()
        result = compiler.compile_file("rules.ross")
        print(result.config.describe())

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        """
        Initialize the compiler.

        Args:
            options: Compiler configuration (uses defaults if None)
        """
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: Optional[str] = None) -> CompilerResult:
        """
        Compile program text.

        Args:
            source: Program text
            filename: Source name for diagnostics (defaults to options.filename)

        Returns:
            CompilerResult holding the Config

        Raises:
            ParserError: Root of the diagnostic tree if compilation fails
        """
        filename = filename or self.options.filename
        try:
            return self._compile(source, filename)
        except ParserError as err:
            err.max_location_length = self.options.max_location_length
            logger.debug(f"Compilation of {filename} failed: {err.render()}")
            raise

    def compile_file(self, filepath: str) -> CompilerResult:
        """
        Compile a program file.

        Raises:
            ParserError: If compilation fails
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def _new_symbols(self) -> SymbolTable:
        if self.options.predefined_constants:
            return SymbolTable.with_event_codes(self.options.allow_redeclaration)
        return SymbolTable(self.options.allow_redeclaration)

    def _compile(self, source: str, filename: str) -> CompilerResult:
        symbols = self._new_symbols()
        processors: list[EventProcessor] = []
        statement_count = 0

        cursor = Cursor(strip_comments(source), 0, filename)
        while True:
            cursor = skip_space(cursor)
            if cursor.at_end():
                break

            try:
                cursor, statement = self._statement(cursor, symbols)
            except RecursionError:
                # Matchers nested past the interpreter's stack depth
                raise BaseError(cursor, ErrorKind.nesting_too_deep(), fatal=True) from None
            self._apply(statement, symbols, processors)
            statement_count += 1

        config = Config(
            initial_state=dict(symbols.initial_state),
            event_processors=tuple(processors),
            peripherals=dict(symbols.peripherals),
        )
        logger.info(
            f"Compiled {filename}: {len(config.initial_state)} state slots, "
            f"{len(config.event_processors)} event processors, "
            f"{len(config.peripherals)} peripherals"
        )
        return CompilerResult(
            filename=filename,
            config=config,
            statement_count=statement_count,
            constants=dict(symbols.constants),
            state_slots=dict(symbols.state_slots),
        )

    def _statement(self, cursor: Cursor, symbols: SymbolTable):
        """Parse one statement, reporting "expected something" if none applies."""
        parsers = [
            lambda start, parser=parser: parser(start, symbols) for parser in STATEMENTS
        ]
        try:
            return alt(cursor, *parsers)
        except ParserError as err:
            if err.fatal:
                raise
            raise BaseError(
                cursor,
                ErrorKind.expected(Expectation(ExpectationCategory.SOMETHING)),
                child=err,
                fatal=True,
            ) from None

    def _apply(self, statement, symbols: SymbolTable, processors: list[EventProcessor]) -> None:
        """Fold a parsed statement into the tables or the processor list."""
        if isinstance(statement, EventProcessor):
            processors.append(statement)
            logger.debug(f"Event processor #{len(processors) - 1}")
        elif isinstance(statement, ConstantDeclaration):
            symbols.declare_constant(statement.name, statement.literal, statement.location)
        elif isinstance(statement, StateDeclaration):
            symbols.declare_state(statement.name, statement.value, statement.location)
        elif isinstance(statement, PeripheralDeclaration):
            symbols.declare_peripheral(
                statement.index, statement.peripheral, statement.location, statement.length
            )
        else:
            raise TypeError(f"unexpected statement result: {statement!r}")


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_dsl(source: str, filename: str = "<input>", **options) -> Config:
    """
    Compile program text and return its Config.

    Args:
        source: Program text
        filename: Source name for diagnostics
        **options: CompilerOptions fields

    Raises:
        ParserError: If compilation fails
    """
    compiler = RossCompiler(CompilerOptions(filename=filename, **options))
    return compiler.compile_source(source).config


def compile_file(filepath: str, **options) -> Config:
    """Compile a program file and return its Config."""
    compiler = RossCompiler(CompilerOptions(filename=str(filepath), **options))
    return compiler.compile_file(filepath).config

"""
ROSS DSL - Rule Language Compiler
=================================

This package compiles a small rule language describing event-driven
automation for networked peripheral devices ("when button-pressed
arrives from device X, change brightness on device Y") into an
in-memory configuration consumed by an external runtime.

Main Components
---------------
- **scanner / combinators**: cursor-based scanning and backtracking
- **literal**: typed literals and strict casting
- **errors**: the diagnostic tree raised on failure
- **items**: extractor / filter / producer / peripheral-shape registries
- **statements**: let, const, peripheral, send, do, set and matchers
- **compiler**: the driver producing a Config
- **config**: the runtime-facing data model

Quick Start
-----------
    >>> from ross_dsl import compile_dsl
    >>> config = compile_dsl('''
    ...     let active = false;
    ...     do {
    ...         match event BUTTON_PRESSED_EVENT_CODE;
    ...         match { FlipStateFilter(active); }
    ...     }
    ... ''')
    >>> config.initial_state
    {0: Value(type=<ValueType.BOOL: 'bool'>, data=False)}

Or use the command-line tool:
    $ rossc rules.ross
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from ross_dsl.compiler import (
    CompilerOptions,
    CompilerResult,
    RossCompiler,
    compile_dsl,
    compile_file,
)
from ross_dsl.config import Config
from ross_dsl.errors import (
    AltError,
    BaseError,
    ErrorCategory,
    ErrorKind,
    Expectation,
    ExpectationCategory,
    ParserError,
    RossDslError,
    SourceLocation,
)
from ross_dsl.literal import Literal, LiteralType

__all__ = [
    "__version__",
    "AltError",
    "BaseError",
    "CompilerOptions",
    "CompilerResult",
    "Config",
    "ErrorCategory",
    "ErrorKind",
    "Expectation",
    "ExpectationCategory",
    "Literal",
    "LiteralType",
    "ParserError",
    "RossCompiler",
    "RossDslError",
    "SourceLocation",
    "compile_dsl",
    "compile_file",
]

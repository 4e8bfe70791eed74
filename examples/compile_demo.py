#!/usr/bin/env python3
"""
Rule Language Compiler Demo
===========================

This script demonstrates how to use the compiler API to:
1. Compile the bundled example programs
2. Inspect the resulting configuration
3. Report a compile error

Usage:
    python examples/compile_demo.py
"""

from pathlib import Path

from ross_dsl import ParserError, RossCompiler, compile_dsl


RULES_DIR = Path(__file__).parent / "rules"


def main():
    compiler = RossCompiler()

    # ==========================================================================
    # 1. Compile every example program
    # ==========================================================================

    for path in sorted(RULES_DIR.glob("*.ross")):
        result = compiler.compile_file(str(path))
        config = result.config

        print(f"{path.name}: {result.statement_count} statements")
        print(f"  State slots: {result.state_slots}")
        print(f"  Event processors: {len(config.event_processors)}")
        print(f"  Peripherals: {sorted(config.peripherals)}")
        print()
        print(config.describe())
        print()

    # ==========================================================================
    # 2. Report an error
    # ==========================================================================
    # The exception is the root of a diagnostic tree; str() renders all of it.

    try:
        compile_dsl("send 0x0007~u16 form 0x0002~u16 to 0x0003~u16;")
    except ParserError as e:
        print("Compile error:")
        print(e)


if __name__ == "__main__":
    main()

"""
ROSS DSL Command-Line Interface
===============================

- **rossc**: rule-language compiler

The tool is a Click-based CLI application with help text and
error reporting through cli.errors.
"""

__all__ = ["rossc"]

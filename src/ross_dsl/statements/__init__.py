"""
Statement Grammar
=================

Parsers for the top-level statements of the rule language and for the
matcher expressions they embed.

Every statement parser has the signature

    parser(cursor, symbols) -> (cursor, result)

and only reads the SymbolTable. Results are either declarations (applied
to the tables by the compiler) or EventProcessors.
"""

from ross_dsl.statements.declarations import (
    ConstantDeclaration,
    PeripheralDeclaration,
    StateDeclaration,
    const_statement,
    let_statement,
    peripheral_statement,
)
from ross_dsl.statements.match import match_clause, matcher_body
from ross_dsl.statements.rules import do_statement, fire_clause, send_statement, set_statement

# Order in which the compiler tries statements at each position
STATEMENTS = (
    peripheral_statement,
    let_statement,
    const_statement,
    send_statement,
    do_statement,
    set_statement,
)

__all__ = [
    "ConstantDeclaration",
    "PeripheralDeclaration",
    "STATEMENTS",
    "StateDeclaration",
    "const_statement",
    "do_statement",
    "fire_clause",
    "let_statement",
    "match_clause",
    "matcher_body",
    "peripheral_statement",
    "send_statement",
    "set_statement",
]

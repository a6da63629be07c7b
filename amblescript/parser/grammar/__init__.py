"""Script grammar routines that emit CST events."""

from amblescript.parser.grammar.program import parse_definition, parse_program, parse_set_decl

__all__ = [
    "parse_definition",
    "parse_program",
    "parse_set_decl",
]

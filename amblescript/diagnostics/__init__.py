"""Diagnostics."""

from amblescript.diagnostics.codes import (
    LEXER_INVALID_CHARACTER,
    LEXER_UNTERMINATED_STRING,
    PARSER_BARE_STRING,
    PARSER_BRACELESS_GOAL,
    PARSER_EXPECTED_CONDITION,
    PARSER_EXPECTED_NAME,
    PARSER_EXPECTED_STRING,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_EXTRA_RBRACE,
    PARSER_MISSING_RBRACE,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from amblescript.diagnostics.diagnostic import Diagnostic, Severity
from amblescript.diagnostics.report import collect_diagnostics, format_diagnostic, has_errors

__all__ = [
    "LEXER_INVALID_CHARACTER",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_BARE_STRING",
    "PARSER_BRACELESS_GOAL",
    "PARSER_EXPECTED_CONDITION",
    "PARSER_EXPECTED_NAME",
    "PARSER_EXPECTED_STRING",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_VALUE",
    "PARSER_EXTRA_RBRACE",
    "PARSER_MISSING_RBRACE",
    "PARSER_UNEXPECTED_TOKEN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "format_diagnostic",
    "has_errors",
]

"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from amblescript.diagnostics.diagnostic import Diagnostic, Severity
from amblescript.text import TextRange


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None

    def at(
        self,
        range: TextRange,
        *,
        message: str | None = None,
        severity: Severity | None = None,
    ) -> Diagnostic:
        return Diagnostic(
            code=self.code,
            message=message if message is not None else self.message,
            range=range,
            severity=severity if severity is not None else self.severity,
            hint=self.hint,
            category=self.category,
        )


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint='Close the string on the same line, or use a `"""` block string for multi-line text.',
    severity="error",
    category="lexer",
)

LEXER_INVALID_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_CHARACTER",
    message="Invalid character.",
    severity="error",
    category="lexer",
)

PARSER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_VALUE",
    message="Expected a value",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_STRING",
    message="Expected a string",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_NAME: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_NAME",
    message="Expected an identifier",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_CONDITION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_CONDITION",
    message="Expected a condition",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected token",
    severity="error",
    category="parser",
)

PARSER_BARE_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_BARE_STRING",
    message="Bare word used where a quoted string is expected.",
    hint='Wrap the text in double quotes, e.g. `name "Hall"`.',
    severity="error",
    category="parser",
)

PARSER_BRACELESS_GOAL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_BRACELESS_GOAL",
    message="Goal body without braces uses the first-generation syntax.",
    hint="Wrap the goal statements in `{ ... }`.",
    severity="error",
    category="parser",
)

PARSER_EXTRA_RBRACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXTRA_RBRACE",
    message="Unmatched closing brace `}`.",
    hint="Remove the extra `}`.",
    severity="error",
    category="structure",
)

PARSER_MISSING_RBRACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_RBRACE",
    message="Missing closing brace `}`.",
    hint="Close the block before the next definition or the end of the file.",
    severity="error",
    category="structure",
)

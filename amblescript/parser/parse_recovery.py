"""Parser recovery primitives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from amblescript.lexer import LexMode, TokenKind
from amblescript.syntax import ScriptSyntaxKind

if TYPE_CHECKING:
    from amblescript.parser.marker import CompletedMarker
    from amblescript.parser.parser import Parser


class RecoveryError(StrEnum):
    EOF = "eof"
    ALREADY_RECOVERED = "already_recovered"


@dataclass(frozen=True, slots=True)
class ParseRecoveryTokenSet:
    """Recover by consuming tokens into an ERROR node until a safe token is reached.

    Every skipped token is re-lexed in `lex_mode`, so keywords of the
    enclosing scope are recognised as recovery points.
    """

    node_kind: ScriptSyntaxKind
    recovery_set: frozenset[TokenKind]
    lex_mode: LexMode = LexMode.NAME
    line_break: bool = False

    def recover(self, parser: Parser) -> tuple[CompletedMarker | None, RecoveryError | None]:
        parser.relex(self.lex_mode)
        if parser.at(TokenKind.EOF):
            return None, RecoveryError.EOF

        if self.is_at_recovered(parser, first=True):
            return None, RecoveryError.ALREADY_RECOVERED

        marker = parser.start()
        parser.bump(self.lex_mode)
        while not parser.at(TokenKind.EOF) and not self.is_at_recovered(parser, first=False):
            parser.bump(self.lex_mode)

        return marker.complete(parser, self.node_kind), None

    def is_at_recovered(self, parser: Parser, *, first: bool = False) -> bool:
        if parser.at_set(self.recovery_set):
            return True
        return self.line_break and not first and parser.has_preceding_line_break

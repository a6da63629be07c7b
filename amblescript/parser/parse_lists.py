"""Reusable node-list parse loop helpers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.syntax import ScriptSyntaxKind

if TYPE_CHECKING:
    from amblescript.parser.marker import CompletedMarker


@dataclass(slots=True)
class ParseNodeList:
    """Non-separated list parser with progress tracking and recovery hooks.

    `lex_mode` is the mode each element's first token is re-lexed in before
    the end check and dispatch. A `list_kind` of None leaves the elements
    directly in the enclosing node.
    """

    list_kind: ScriptSyntaxKind | None
    lex_mode: LexMode
    is_at_list_end: Callable[[Parser], bool]
    parse_element: Callable[[Parser], ParsedSyntax]
    recover: Callable[[Parser, ParsedSyntax], bool]

    def parse_list(self, parser: Parser) -> CompletedMarker | None:
        marker = parser.start() if self.list_kind is not None else None
        progress = ParserProgress()

        while True:
            parser.relex(self.lex_mode)
            if parser.at(TokenKind.EOF) or self.is_at_list_end(parser):
                break
            if not progress.has_progressed(parser):
                parser.bump_as_error(self.lex_mode)
                continue
            parsed_element = self.parse_element(parser)
            if not self.recover(parser, parsed_element):
                break

        if marker is None:
            return None
        return marker.complete(parser, self.list_kind)

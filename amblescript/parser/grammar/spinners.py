"""Spinner definitions: weighted text wedges."""

from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import (
    expect_name,
    parse_block,
    parse_keyword_value,
    parse_number_value,
    parse_string_value,
)
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser
from amblescript.syntax import ScriptSyntaxKind

SPINNER_STATEMENT_STARTS: frozenset[TokenKind] = frozenset({TokenKind.WEDGE_KW, TokenKind.WIDTH_KW})


def parse_spinner(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    expect_name(parser, "a spinner id")
    parse_block(
        parser,
        label="spinner",
        mode=LexMode.SPINNER_BODY,
        statement_starts=SPINNER_STATEMENT_STARTS,
        parse_statement=parse_spinner_statement,
    )
    return marker.complete(parser, ScriptSyntaxKind.SPINNER_DEF)


def parse_spinner_statement(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.WEDGE_KW:
            marker = parser.start()
            parser.bump()
            parse_string_value(parser, mode=LexMode.SPINNER_BODY)
            parser.relex(LexMode.SPINNER_WEDGE)
            if parser.at(TokenKind.WIDTH_KW) and not parser.has_preceding_line_break:
                parser.bump()
                parse_number_value(parser)
            marker.complete(parser, ScriptSyntaxKind.WEDGE_STMT)
        case TokenKind.WIDTH_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.SPINNER_WIDTH, parse_number_value)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()

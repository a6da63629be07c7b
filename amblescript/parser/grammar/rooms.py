"""Room definitions with overlays and exits."""

from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import (
    expect_name,
    parse_block,
    parse_boolean_value,
    parse_keyword_only,
    parse_keyword_value,
    parse_string_value,
    parse_value_list,
)
from amblescript.parser.grammar.conditions import parse_condition_list
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser
from amblescript.syntax import ScriptSyntaxKind

ROOM_STATEMENT_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NAME_KW,
        TokenKind.DESC_KW,
        TokenKind.DESCRIPTION_KW,
        TokenKind.VISITED_KW,
        TokenKind.OVERLAY_KW,
        TokenKind.EXIT_KW,
    }
)

OVERLAY_KEYWORDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.SET_KW,
        TokenKind.UNSET_KW,
        TokenKind.TEXT_KW,
        TokenKind.NORMAL_KW,
        TokenKind.HAPPY_KW,
        TokenKind.BORED_KW,
        TokenKind.MAD_KW,
    }
)

OVERLAY_ENTRY_STARTS: frozenset[TokenKind] = OVERLAY_KEYWORDS | {TokenKind.CUSTOM_KW, TokenKind.IDENTIFIER}

EXIT_ATTRIBUTE_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.REQUIRED_FLAGS_KW,
        TokenKind.REQUIRED_ITEMS_KW,
        TokenKind.BARRED_KW,
        TokenKind.LOCKED_KW,
        TokenKind.HIDDEN_KW,
        TokenKind.COMMA,
    }
)


def parse_room(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    expect_name(parser, "a room id")
    parse_block(
        parser,
        label="room",
        mode=LexMode.ROOM_BODY,
        statement_starts=ROOM_STATEMENT_STARTS,
        parse_statement=parse_room_statement,
    )
    return marker.complete(parser, ScriptSyntaxKind.ROOM_DEF)


def parse_room_statement(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.NAME_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ROOM_NAME, _room_string)
        case TokenKind.DESC_KW | TokenKind.DESCRIPTION_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ROOM_DESC, _room_string)
        case TokenKind.VISITED_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ROOM_VISITED, parse_boolean_value)
        case TokenKind.OVERLAY_KW:
            parse_overlay(parser)
        case TokenKind.EXIT_KW:
            parse_exit(parser)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _room_string(parser: Parser) -> CompletedMarker:
    return parse_string_value(parser, mode=LexMode.ROOM_BODY)


def parse_overlay(parser: Parser) -> CompletedMarker:
    """`overlay if <conditions> { entries }`."""
    marker = parser.start()
    parser.bump(LexMode.OVERLAY_HEADER)
    parser.expect(TokenKind.IF_KW, "if", mode=LexMode.CONDITION)
    parse_condition_list(parser)
    parse_block(
        parser,
        label="overlay",
        mode=LexMode.OVERLAY_BODY,
        statement_starts=OVERLAY_ENTRY_STARTS,
        parse_statement=parse_overlay_entry,
    )
    return marker.complete(parser, ScriptSyntaxKind.OVERLAY_STMT)


def parse_overlay_entry(parser: Parser) -> ParsedSyntax:
    if not parser.at_set(OVERLAY_ENTRY_STARTS):
        return ParsedSyntax.absent()

    marker = parser.start()
    if parser.at(TokenKind.CUSTOM_KW):
        parser.bump()
        if parser.eat(TokenKind.LPAREN):
            expect_name(parser, "a custom state name")
            parser.expect(TokenKind.RPAREN, ")")
        else:
            expect_name(parser, "a custom state name")
    else:
        parser.bump()
    parse_string_value(parser, mode=LexMode.OVERLAY_BODY)
    marker.complete(parser, ScriptSyntaxKind.OVERLAY_ENTRY)
    return ParsedSyntax.present()


def parse_exit(parser: Parser) -> CompletedMarker:
    """`exit <direction> -> <room> [{ attributes }]`."""
    marker = parser.start()
    parser.bump()
    if parser.at(TokenKind.STRING):
        parse_string_value(parser)
    else:
        expect_name(parser, "an exit direction")
    parser.expect(TokenKind.ARROW, "->")
    expect_name(parser, "a destination room id")
    if parser.at(TokenKind.LBRACE):
        parse_block(
            parser,
            label="exit",
            mode=LexMode.EXIT_BODY,
            statement_starts=EXIT_ATTRIBUTE_STARTS,
            parse_statement=parse_exit_attribute,
        )
    return marker.complete(parser, ScriptSyntaxKind.EXIT_STMT)


def parse_exit_attribute(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.COMMA:
            parser.bump()
        case TokenKind.REQUIRED_FLAGS_KW:
            _parse_required(parser, ScriptSyntaxKind.EXIT_REQUIRED_FLAGS)
        case TokenKind.REQUIRED_ITEMS_KW:
            _parse_required(parser, ScriptSyntaxKind.EXIT_REQUIRED_ITEMS)
        case TokenKind.BARRED_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.EXIT_BARRED, _exit_string)
        case TokenKind.LOCKED_KW | TokenKind.HIDDEN_KW:
            parse_keyword_only(parser, ScriptSyntaxKind.EXIT_FLAG)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _exit_string(parser: Parser) -> CompletedMarker:
    return parse_string_value(parser, mode=LexMode.EXIT_BODY)


def _parse_required(parser: Parser, kind: ScriptSyntaxKind) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    if parser.expect(TokenKind.LPAREN, "("):
        parse_value_list(parser)
        parser.relex(LexMode.NAME)
        parser.expect(TokenKind.RPAREN, ")")
    return marker.complete(parser, kind)

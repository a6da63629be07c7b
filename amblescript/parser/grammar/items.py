"""Item definitions and the `location` statement shared with NPCs."""

from amblescript.diagnostics.codes import PARSER_EXPECTED_TOKEN
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import (
    expect_name,
    parse_block,
    parse_boolean_value,
    parse_keyword_value,
    parse_optional_boolean,
    parse_optional_string,
    parse_string_value,
)
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser
from amblescript.syntax import ScriptSyntaxKind

ITEM_STATEMENT_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NAME_KW,
        TokenKind.DESC_KW,
        TokenKind.DESCRIPTION_KW,
        TokenKind.PORTABLE_KW,
        TokenKind.TEXT_KW,
        TokenKind.ABILITY_KW,
        TokenKind.CONTAINER_KW,
        TokenKind.LOCATION_KW,
        TokenKind.RESTRICTED_KW,
    }
)


def parse_item(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    expect_name(parser, "an item id")
    parse_block(
        parser,
        label="item",
        mode=LexMode.ITEM_BODY,
        statement_starts=ITEM_STATEMENT_STARTS,
        parse_statement=parse_item_statement,
    )
    return marker.complete(parser, ScriptSyntaxKind.ITEM_DEF)


def parse_item_statement(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.NAME_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ITEM_NAME, _item_string)
        case TokenKind.DESC_KW | TokenKind.DESCRIPTION_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ITEM_DESC, _item_string)
        case TokenKind.TEXT_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ITEM_TEXT, _item_string)
        case TokenKind.PORTABLE_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.ITEM_PORTABLE, parse_boolean_value)
        case TokenKind.RESTRICTED_KW:
            marker = parser.start()
            parser.bump()
            parse_optional_boolean(parser)
            marker.complete(parser, ScriptSyntaxKind.ITEM_RESTRICTED)
        case TokenKind.ABILITY_KW:
            _parse_ability(parser)
        case TokenKind.CONTAINER_KW:
            _parse_container(parser)
        case TokenKind.LOCATION_KW:
            parse_location(parser)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _item_string(parser: Parser) -> CompletedMarker:
    return parse_string_value(parser, mode=LexMode.ITEM_BODY)


def _parse_ability(parser: Parser) -> CompletedMarker:
    """`ability <name> [<target>]`, the target on the same line."""
    marker = parser.start()
    parser.bump()
    expect_name(parser, "an ability")
    parser.relex(LexMode.ITEM_BODY)
    if parser.at(TokenKind.IDENTIFIER) and not parser.has_preceding_line_break:
        parser.bump()
    return marker.complete(parser, ScriptSyntaxKind.ITEM_ABILITY)


def _parse_container(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump(LexMode.CONTAINER)
    if parser.at(TokenKind.STATE_KW):
        _parse_container_state(parser)
    elif parser.at(TokenKind.LBRACE):
        parse_block(
            parser,
            label="container",
            mode=LexMode.CONTAINER,
            statement_starts=frozenset({TokenKind.STATE_KW}),
            parse_statement=_parse_container_statement,
        )
    else:
        parser.missing(
            parser.diagnostic(
                PARSER_EXPECTED_TOKEN,
                message=f"Expected `state` or `{{` but found {parser.describe_current()}",
            )
        )
    return marker.complete(parser, ScriptSyntaxKind.ITEM_CONTAINER)


def _parse_container_statement(parser: Parser) -> ParsedSyntax:
    if not parser.at(TokenKind.STATE_KW):
        return ParsedSyntax.absent()
    _parse_container_state(parser)
    return ParsedSyntax.present()


def _parse_container_state(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    parser.eat(TokenKind.COLON)
    expect_name(parser, "a container state")
    return marker.complete(parser, ScriptSyntaxKind.CONTAINER_STATE)


def parse_location(parser: Parser) -> CompletedMarker:
    """`location` followed by `room x`, `npc x`, `chest x`, `inventory <owner>` or `nowhere "note"`."""
    marker = parser.start()
    parser.bump(LexMode.LOCATION)
    match parser.current:
        case TokenKind.ROOM_KW:
            parser.bump()
            expect_name(parser, "a room id")
        case TokenKind.NPC_KW:
            parser.bump()
            expect_name(parser, "an NPC id")
        case TokenKind.CHEST_KW:
            parser.bump()
            expect_name(parser, "a chest id")
        case TokenKind.INVENTORY_KW:
            parser.bump(LexMode.INVENTORY_OWNER)
            if not parser.eat(TokenKind.PLAYER_KW):
                expect_name(parser, "`player` or an inventory owner")
        case TokenKind.NOWHERE_KW:
            parser.bump()
            parse_optional_string(parser)
        case _:
            parser.missing(
                parser.diagnostic(
                    PARSER_EXPECTED_TOKEN,
                    message=(
                        "Expected `room`, `npc`, `chest`, `inventory` or `nowhere` "
                        f"but found {parser.describe_current()}"
                    ),
                )
            )
    return marker.complete(parser, ScriptSyntaxKind.LOCATION)

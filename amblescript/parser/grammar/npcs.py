"""NPC definitions: states, movement and dialogue."""

from amblescript.diagnostics.codes import PARSER_EXPECTED_TOKEN, PARSER_EXPECTED_VALUE
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import (
    expect_name,
    parse_block,
    parse_keyword_value,
    parse_number_value,
    parse_optional_boolean,
    parse_string_value,
    parse_value_list,
)
from amblescript.parser.grammar.items import parse_location
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.syntax import ScriptSyntaxKind

NPC_STATEMENT_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NAME_KW,
        TokenKind.DESC_KW,
        TokenKind.DESCRIPTION_KW,
        TokenKind.STATE_KW,
        TokenKind.MOVEMENT_KW,
        TokenKind.DIALOGUE_KW,
        TokenKind.LOCATION_KW,
        TokenKind.MAX_HP_KW,
    }
)

NPC_STATE_KEYWORDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NORMAL_KW,
        TokenKind.HAPPY_KW,
        TokenKind.BORED_KW,
        TokenKind.MAD_KW,
        TokenKind.CUSTOM_KW,
    }
)

MOVEMENT_ITEM_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.RANDOM_KW,
        TokenKind.ROUTE_KW,
        TokenKind.MOVEMENT_TYPE_KW,
        TokenKind.ROOMS_KW,
        TokenKind.TIMING_KW,
        TokenKind.ACTIVE_KW,
        TokenKind.LOOP_KW,
        TokenKind.COMMA,
    }
)

# Settings allowed inside `random(...)` / `route(...)`; movement types do not nest.
MOVEMENT_SETTING_STARTS: frozenset[TokenKind] = MOVEMENT_ITEM_STARTS - {
    TokenKind.RANDOM_KW,
    TokenKind.ROUTE_KW,
    TokenKind.MOVEMENT_TYPE_KW,
}

DIALOGUE_ENTRY_STARTS: frozenset[TokenKind] = NPC_STATE_KEYWORDS | {TokenKind.STRING, TokenKind.IDENTIFIER}


def parse_npc(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    expect_name(parser, "an NPC id")
    parse_block(
        parser,
        label="npc",
        mode=LexMode.NPC_BODY,
        statement_starts=NPC_STATEMENT_STARTS,
        parse_statement=parse_npc_statement,
    )
    return marker.complete(parser, ScriptSyntaxKind.NPC_DEF)


def parse_npc_statement(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.NAME_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.NPC_NAME, _npc_string)
        case TokenKind.DESC_KW | TokenKind.DESCRIPTION_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.NPC_DESC, _npc_string)
        case TokenKind.MAX_HP_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.NPC_MAX_HP, parse_number_value)
        case TokenKind.LOCATION_KW:
            parse_location(parser)
        case TokenKind.STATE_KW:
            marker = parser.start()
            parser.bump(LexMode.NPC_STATE)
            parse_npc_state(parser)
            marker.complete(parser, ScriptSyntaxKind.NPC_STATE)
        case TokenKind.MOVEMENT_KW:
            _parse_movement(parser)
        case TokenKind.DIALOGUE_KW:
            _parse_dialogue(parser)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _npc_string(parser: Parser) -> CompletedMarker:
    return parse_string_value(parser, mode=LexMode.NPC_BODY)


def parse_npc_state(parser: Parser) -> bool:
    """A mood keyword, `custom <name>` or a bare state name."""
    parser.relex(LexMode.NPC_STATE)
    if parser.at(TokenKind.CUSTOM_KW):
        parser.bump()
        if parser.at_set({TokenKind.IDENTIFIER, TokenKind.STRING}):
            parser.bump()
            return True
        expect_name(parser, "a custom state name")
        return False
    if parser.at_set(NPC_STATE_KEYWORDS | {TokenKind.IDENTIFIER}):
        parser.bump()
        return True
    parser.missing(
        parser.diagnostic(
            PARSER_EXPECTED_VALUE,
            message=f"Expected an NPC state but found {parser.describe_current()}",
        )
    )
    return False


def _parse_movement(parser: Parser) -> CompletedMarker:
    """`movement` items inline or in a block."""
    marker = parser.start()
    parser.bump(LexMode.MOVEMENT)
    if parser.at(TokenKind.LBRACE):
        parse_block(
            parser,
            label="movement",
            mode=LexMode.MOVEMENT,
            statement_starts=MOVEMENT_ITEM_STARTS,
            parse_statement=_parse_movement_item,
        )
    elif _parse_movement_items(parser) == 0:
        parser.missing(
            parser.diagnostic(
                PARSER_EXPECTED_TOKEN,
                message=f"Expected movement settings but found {parser.describe_current()}",
            )
        )
    return marker.complete(parser, ScriptSyntaxKind.MOVEMENT_STMT)


def _parse_movement_items(parser: Parser, *, closing: TokenKind | None = None) -> int:
    starts = MOVEMENT_ITEM_STARTS if closing is None else MOVEMENT_SETTING_STARTS
    progress = ParserProgress()
    count = 0
    while True:
        parser.relex(LexMode.MOVEMENT)
        if closing is not None and parser.at(closing):
            break
        if not parser.at_set(starts) or not progress.has_progressed(parser):
            break
        _parse_movement_item(parser)
        count += 1
    return count


def _parse_movement_item(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.COMMA:
            parser.bump()
        case TokenKind.RANDOM_KW | TokenKind.ROUTE_KW:
            marker = parser.start()
            parser.bump()
            if parser.eat(TokenKind.LPAREN):
                _parse_movement_items(parser, closing=TokenKind.RPAREN)
                parser.relex(LexMode.NAME)
                parser.expect(TokenKind.RPAREN, ")")
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_TYPE)
        case TokenKind.MOVEMENT_TYPE_KW:
            marker = parser.start()
            parser.bump(LexMode.MOVEMENT)
            if not parser.eat(TokenKind.RANDOM_KW) and not parser.eat(TokenKind.ROUTE_KW):
                expect_name(parser, "a movement type")
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_TYPE)
        case TokenKind.ROOMS_KW:
            marker = parser.start()
            parser.bump()
            if parser.expect(TokenKind.LPAREN, "("):
                parse_value_list(parser)
                parser.relex(LexMode.NAME)
                parser.expect(TokenKind.RPAREN, ")")
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_ROOMS)
        case TokenKind.TIMING_KW:
            marker = parser.start()
            parser.bump()
            if parser.eat(TokenKind.LPAREN):
                expect_name(parser, "a timing")
                parser.expect(TokenKind.RPAREN, ")")
            else:
                expect_name(parser, "a timing")
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_TIMING)
        case TokenKind.ACTIVE_KW:
            marker = parser.start()
            parser.bump()
            parse_optional_boolean(parser)
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_ACTIVE)
        case TokenKind.LOOP_KW:
            marker = parser.start()
            parser.bump()
            parse_optional_boolean(parser)
            marker.complete(parser, ScriptSyntaxKind.MOVEMENT_LOOP)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _parse_dialogue(parser: Parser) -> CompletedMarker:
    """`dialogue <state> { lines }` or `dialogue { lines and state groups }`."""
    marker = parser.start()
    parser.bump(LexMode.DIALOGUE_BODY)
    if parser.at(TokenKind.LBRACE):
        parse_block(
            parser,
            label="dialogue",
            mode=LexMode.DIALOGUE_BODY,
            statement_starts=DIALOGUE_ENTRY_STARTS,
            parse_statement=_parse_dialogue_entry,
        )
    else:
        _parse_dialogue_group(parser)
    return marker.complete(parser, ScriptSyntaxKind.DIALOGUE_STMT)


def _parse_dialogue_entry(parser: Parser) -> ParsedSyntax:
    if parser.at(TokenKind.STRING):
        parse_string_value(parser)
        return ParsedSyntax.present()
    if parser.at_set(NPC_STATE_KEYWORDS | {TokenKind.IDENTIFIER}):
        _parse_dialogue_group(parser)
        return ParsedSyntax.present()
    return ParsedSyntax.absent()


def _parse_dialogue_group(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parse_npc_state(parser)
    parse_block(
        parser,
        label="dialogue state",
        mode=LexMode.DIALOGUE_BODY,
        statement_starts=frozenset({TokenKind.STRING, TokenKind.COMMA}),
        parse_statement=_parse_dialogue_line,
    )
    return marker.complete(parser, ScriptSyntaxKind.DIALOGUE_GROUP)


def _parse_dialogue_line(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.STRING:
            parse_string_value(parser)
        case TokenKind.COMMA:
            parser.bump()
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()

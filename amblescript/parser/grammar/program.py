"""Top-level Script grammar: the program and `let set` declarations."""

from amblescript.diagnostics.codes import PARSER_EXTRA_RBRACE
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import DEFINITION_STARTS, expect_name, parse_value_list
from amblescript.parser.grammar.goals import parse_goal
from amblescript.parser.grammar.items import parse_item
from amblescript.parser.grammar.npcs import parse_npc
from amblescript.parser.grammar.rooms import parse_room
from amblescript.parser.grammar.spinners import parse_spinner
from amblescript.parser.grammar.triggers import parse_trigger
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parse_lists import ParseNodeList
from amblescript.parser.parse_recovery import ParseRecoveryTokenSet
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser
from amblescript.syntax import ScriptSyntaxKind

PROGRAM_RECOVERY = ParseRecoveryTokenSet(
    node_kind=ScriptSyntaxKind.ERROR,
    recovery_set=DEFINITION_STARTS | {TokenKind.RBRACE},
    lex_mode=LexMode.PROGRAM,
)


def parse_program(parser: Parser) -> None:
    root = parser.start()
    ParseNodeList(
        list_kind=None,
        lex_mode=LexMode.PROGRAM,
        is_at_list_end=lambda current: False,
        parse_element=parse_definition,
        recover=_recover_definition,
    ).parse_list(parser)
    root.complete(parser, ScriptSyntaxKind.PROGRAM)


def parse_definition(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.LET_KW:
            parse_set_decl(parser)
        case TokenKind.TRIGGER_KW:
            parse_trigger(parser)
        case TokenKind.ROOM_KW:
            parse_room(parser)
        case TokenKind.ITEM_KW:
            parse_item(parser)
        case TokenKind.SPINNER_KW:
            parse_spinner(parser)
        case TokenKind.NPC_KW:
            parse_npc(parser)
        case TokenKind.GOAL_KW:
            parse_goal(parser)
        case TokenKind.RBRACE:
            _parse_stray_rbrace(parser)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _recover_definition(parser: Parser, parsed: ParsedSyntax) -> bool:
    if parsed.is_present():
        return True
    if not parser.at(TokenKind.UNKNOWN):
        parser.error(parser.unexpected_token())
    _, recovery_error = PROGRAM_RECOVERY.recover(parser)
    return recovery_error is None


def _parse_stray_rbrace(parser: Parser) -> CompletedMarker:
    severity = "warning" if parser.options.allow_extra_rbrace else None
    parser.error(PARSER_EXTRA_RBRACE.at(parser.current_range, severity=severity))
    marker = parser.start()
    parser.bump()
    return marker.complete(parser, ScriptSyntaxKind.ERROR)


def parse_set_decl(parser: Parser) -> CompletedMarker:
    """`let [set] <name> = (values)`; `let set = (...)` declares a set named `set`."""
    marker = parser.start()
    parser.bump(LexMode.SET_DECL)
    if parser.at(TokenKind.SET_KW) and parser.nth(1) != TokenKind.EQUAL:
        parser.bump()
    expect_name(parser, "a set name")
    parser.expect(TokenKind.EQUAL, "=")
    if parser.expect(TokenKind.LPAREN, "("):
        parse_value_list(parser, ScriptSyntaxKind.SET_LIST)
        parser.relex(LexMode.NAME)
        parser.expect(TokenKind.RPAREN, ")")
    return marker.complete(parser, ScriptSyntaxKind.SET_DECL)

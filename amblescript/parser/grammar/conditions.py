"""Condition lists used by `when`, `if`, overlays and goal statements."""

from amblescript.diagnostics.codes import PARSER_EXPECTED_CONDITION, PARSER_EXPECTED_TOKEN
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import at_new_definition, expect_name
from amblescript.parser.marker import CompletedMarker, Marker
from amblescript.parser.parse_recovery import ParseRecoveryTokenSet
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.syntax import ScriptSyntaxKind

# Tokens that end a generic condition's word run.
GENERIC_STOP: frozenset[TokenKind] = frozenset(
    {
        TokenKind.COMMA,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.EOF,
    }
)

# Condition groups nest at most this deep; deeper `(` is reported and skipped.
MAX_GROUP_DEPTH = 32


def parse_condition_list(
    parser: Parser,
    *,
    in_group: bool = False,
    single_line: bool = False,
    typed_only: bool = False,
    depth: int = 0,
) -> CompletedMarker:
    """Parse a CONDITION_LIST.

    Items are separated by commas or simply juxtaposed (implicit AND). The
    list stops before `{`, `}`, EOF, a definition keyword on a new line, and
    before `)` when parsing a group. With `single_line` the list also ends at
    the first line break, which is how goal statements delimit conditions.
    `typed_only` rejects free-form conditions.
    """
    marker = parser.start()
    progress = ParserProgress()
    stop_at = {TokenKind.EOF, TokenKind.LBRACE, TokenKind.RBRACE}
    if in_group:
        stop_at.add(TokenKind.RPAREN)
    recovery_set = {TokenKind.COMMA, TokenKind.LBRACE, TokenKind.RBRACE}
    if in_group:
        recovery_set.add(TokenKind.RPAREN)
    recovery = ParseRecoveryTokenSet(
        node_kind=ScriptSyntaxKind.ERROR,
        recovery_set=frozenset(recovery_set),
        lex_mode=LexMode.CONDITION,
        line_break=single_line,
    )
    items = 0

    while True:
        parser.relex(LexMode.CONDITION)
        if parser.at_set(stop_at):
            break
        if at_new_definition(parser) and not parser.at(TokenKind.GOAL_KW):
            break
        if single_line and items > 0 and parser.has_preceding_line_break:
            break
        if not progress.has_progressed(parser):
            parser.bump_as_error(LexMode.CONDITION)
            continue

        if parser.at(TokenKind.COMMA):
            if items == 0:
                parser.bump_as_error()
            else:
                parser.bump()
            continue

        if parse_condition(parser, typed_only=typed_only, depth=depth) is not None:
            items += 1
            continue

        if not parser.at(TokenKind.UNKNOWN):
            parser.error(parser.unexpected_token())
        recovery.recover(parser)

    if items == 0:
        parser.missing(
            parser.diagnostic(
                PARSER_EXPECTED_CONDITION,
                message=f"Expected a condition but found {parser.describe_current()}",
            )
        )
    return marker.complete(parser, ScriptSyntaxKind.CONDITION_LIST)


def parse_condition(parser: Parser, *, typed_only: bool = False, depth: int = 0) -> CompletedMarker | None:
    match parser.current:
        case TokenKind.LPAREN if depth < MAX_GROUP_DEPTH:
            return _parse_group(parser, labelled=False, typed_only=typed_only, depth=depth)
        case TokenKind.HAS_KW | TokenKind.MISSING_KW:
            return _parse_possession(parser, typed_only=typed_only)
        case TokenKind.REACHED_KW:
            marker = parser.start()
            parser.bump(LexMode.CONDITION_SUBJECT)
            parser.expect(TokenKind.ROOM_KW, "room")
            expect_name(parser, "a room id")
            return marker.complete(parser, ScriptSyntaxKind.ROOM_COND)
        case TokenKind.GOAL_KW:
            return _parse_goal_condition(parser)
        case TokenKind.FLAG_KW:
            return _parse_flag_status(parser, typed_only=typed_only)
        case TokenKind.IDENTIFIER if parser.nth(1) == TokenKind.LPAREN and not parser.has_nth_preceding_trivia(1):
            if depth >= MAX_GROUP_DEPTH:
                return None
            return _parse_group(parser, labelled=True, typed_only=typed_only, depth=depth)
        case TokenKind.LPAREN | TokenKind.RPAREN | TokenKind.COMMA | TokenKind.UNKNOWN:
            return None
        case _ if typed_only:
            return None
        case _:
            marker = parser.start()
            _eat_generic_words(parser)
            return marker.complete(parser, ScriptSyntaxKind.GENERIC_COND)


def _parse_group(parser: Parser, *, labelled: bool, typed_only: bool, depth: int) -> CompletedMarker:
    marker = parser.start()
    if labelled:
        parser.bump()
    parser.bump()
    parse_condition_list(parser, in_group=True, typed_only=typed_only, depth=depth + 1)
    parser.relex(LexMode.NAME)
    parser.expect(TokenKind.RPAREN, ")")
    return marker.complete(parser, ScriptSyntaxKind.CONDITION_GROUP)


def _parse_possession(parser: Parser, *, typed_only: bool) -> CompletedMarker:
    """`has`/`missing` followed by `flag x`, `item x` or `visited room x`."""
    marker = parser.start()
    parser.bump(LexMode.CONDITION_SUBJECT)
    match parser.current:
        case TokenKind.FLAG_KW:
            parser.bump()
            expect_name(parser, "a flag name")
            return marker.complete(parser, ScriptSyntaxKind.FLAG_COND)
        case TokenKind.ITEM_KW:
            parser.bump()
            expect_name(parser, "an item id")
            return marker.complete(parser, ScriptSyntaxKind.ITEM_COND)
        case TokenKind.VISITED_KW:
            parser.bump(LexMode.CONDITION_SUBJECT)
            parser.expect(TokenKind.ROOM_KW, "room")
            expect_name(parser, "a room id")
            return marker.complete(parser, ScriptSyntaxKind.ROOM_COND)
        case _:
            return _finish_untyped(parser, marker, typed_only=typed_only, expected="flag, item or visited")


def _parse_goal_condition(parser: Parser) -> CompletedMarker:
    """`goal complete x` or `goal x (done | complete | in progress)`."""
    marker = parser.start()
    parser.bump(LexMode.GOAL_STATUS)
    if parser.eat(TokenKind.COMPLETE_KW):
        expect_name(parser, "a goal id")
        return marker.complete(parser, ScriptSyntaxKind.GOAL_COND)

    expect_name(parser, "a goal id")
    parser.relex(LexMode.GOAL_STATUS)
    match parser.current:
        case TokenKind.DONE_KW | TokenKind.COMPLETE_KW:
            parser.bump()
        case TokenKind.IN_KW:
            parser.bump(LexMode.GOAL_STATUS)
            parser.expect(TokenKind.PROGRESS_KW, "progress")
        case _:
            parser.missing(
                parser.diagnostic(
                    PARSER_EXPECTED_TOKEN,
                    message=f"Expected `done`, `complete` or `in progress` but found {parser.describe_current()}",
                )
            )
    return marker.complete(parser, ScriptSyntaxKind.GOAL_COND)


def _parse_flag_status(parser: Parser, *, typed_only: bool) -> CompletedMarker:
    """`flag (in progress | complete | set | unset) x`."""
    marker = parser.start()
    parser.bump(LexMode.FLAG_STATUS)
    match parser.current:
        case TokenKind.IN_KW:
            parser.bump(LexMode.FLAG_STATUS)
            parser.expect(TokenKind.PROGRESS_KW, "progress")
        case TokenKind.COMPLETE_KW | TokenKind.SET_KW | TokenKind.UNSET_KW:
            parser.bump()
        case _:
            return _finish_untyped(parser, marker, typed_only=typed_only, expected="a flag status")
    expect_name(parser, "a flag name")
    return marker.complete(parser, ScriptSyntaxKind.FLAG_STATUS_COND)


def _finish_untyped(parser: Parser, marker: Marker, *, typed_only: bool, expected: str) -> CompletedMarker:
    """Finish a condition whose leading keyword was not followed by a known form."""
    if typed_only:
        parser.missing(
            parser.diagnostic(
                PARSER_EXPECTED_TOKEN,
                message=f"Expected {expected} but found {parser.describe_current()}",
            )
        )
        return marker.complete(parser, ScriptSyntaxKind.GENERIC_COND)
    _eat_generic_words(parser, started=True)
    return marker.complete(parser, ScriptSyntaxKind.GENERIC_COND)


def _eat_generic_words(parser: Parser, *, started: bool = False) -> None:
    """Consume a run of words on one line up to a condition delimiter."""
    parser.relex(LexMode.NAME)
    if not started and not parser.at_set(GENERIC_STOP):
        parser.bump()
    while not parser.at_set(GENERIC_STOP) and not parser.has_preceding_line_break:
        if parser.at(TokenKind.UNKNOWN):
            break
        parser.bump()

"""Goal definitions, braced or in the brace-less first-generation form."""

from amblescript.diagnostics.codes import PARSER_BRACELESS_GOAL, PARSER_EXPECTED_TOKEN
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import (
    expect_name,
    parse_block,
    parse_keyword_value,
    parse_optional_string,
    parse_string_value,
)
from amblescript.parser.grammar.conditions import parse_condition_list
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.syntax import ScriptSyntaxKind

GOAL_STATEMENT_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NAME_KW,
        TokenKind.DESC_KW,
        TokenKind.DESCRIPTION_KW,
        TokenKind.GROUP_KW,
        TokenKind.DONE_KW,
        TokenKind.START_KW,
        TokenKind.FAIL_KW,
        TokenKind.CONDITION_KW,
    }
)

_WHEN_STATEMENTS: dict[TokenKind, ScriptSyntaxKind] = {
    TokenKind.DONE_KW: ScriptSyntaxKind.GOAL_DONE,
    TokenKind.START_KW: ScriptSyntaxKind.GOAL_START,
    TokenKind.FAIL_KW: ScriptSyntaxKind.GOAL_FAIL,
}


def parse_goal(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    expect_name(parser, "a goal id")
    parse_optional_string(parser)

    parser.relex(LexMode.GOAL_BODY)
    if parser.at(TokenKind.LBRACE):
        parse_block(
            parser,
            label="goal",
            mode=LexMode.GOAL_BODY,
            statement_starts=GOAL_STATEMENT_STARTS,
            parse_statement=parse_goal_statement,
        )
    elif parser.at_set(GOAL_STATEMENT_STARTS):
        _parse_braceless_body(parser)
    else:
        parser.missing(parser.expected_token("{"))
    return marker.complete(parser, ScriptSyntaxKind.GOAL_DEF)


def _parse_braceless_body(parser: Parser) -> None:
    if not parser.options.allow_braceless_goals:
        parser.error(parser.diagnostic(PARSER_BRACELESS_GOAL))

    progress = ParserProgress()
    while parser.relex(LexMode.GOAL_BODY) in GOAL_STATEMENT_STARTS and progress.has_progressed(parser):
        parse_goal_statement(parser)


def parse_goal_statement(parser: Parser) -> ParsedSyntax:
    match parser.current:
        case TokenKind.NAME_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.GOAL_NAME, _goal_string)
        case TokenKind.DESC_KW | TokenKind.DESCRIPTION_KW:
            parse_keyword_value(parser, ScriptSyntaxKind.GOAL_DESC, _goal_string)
        case TokenKind.GROUP_KW:
            marker = parser.start()
            parser.bump(LexMode.GOAL_GROUP)
            if parser.at_set({TokenKind.REQUIRED_KW, TokenKind.OPTIONAL_KW, TokenKind.STATUS_EFFECT_KW}):
                parser.bump()
            else:
                parser.missing(
                    parser.diagnostic(
                        PARSER_EXPECTED_TOKEN,
                        message=(
                            "Expected `required`, `optional` or `status-effect` "
                            f"but found {parser.describe_current()}"
                        ),
                    )
                )
            marker.complete(parser, ScriptSyntaxKind.GOAL_GROUP)
        case TokenKind.DONE_KW | TokenKind.START_KW | TokenKind.FAIL_KW:
            kind = _WHEN_STATEMENTS[parser.current]
            marker = parser.start()
            parser.bump(LexMode.WHEN)
            parser.expect(TokenKind.WHEN_KW, "when", mode=LexMode.CONDITION)
            parse_condition_list(parser, single_line=True, typed_only=True)
            marker.complete(parser, kind)
        case TokenKind.CONDITION_KW:
            marker = parser.start()
            parser.bump(LexMode.CONDITION)
            parse_condition_list(parser, single_line=True, typed_only=True)
            marker.complete(parser, ScriptSyntaxKind.GOAL_CONDITION)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def _goal_string(parser: Parser) -> CompletedMarker:
    return parse_string_value(parser, mode=LexMode.GOAL_BODY)

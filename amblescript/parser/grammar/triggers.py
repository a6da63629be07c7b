"""Trigger definitions: header modifiers, `when` clause and action bodies."""

from amblescript.diagnostics.codes import PARSER_EXPECTED_VALUE
from amblescript.lexer import LexMode, TokenKind
from amblescript.parser.grammar.common import at_new_definition, parse_block, parse_string_value
from amblescript.parser.grammar.conditions import parse_condition_list
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser
from amblescript.syntax import ScriptSyntaxKind

TRIGGER_STATEMENT_STARTS: frozenset[TokenKind] = frozenset(
    {TokenKind.IF_KW, TokenKind.DO_KW, TokenKind.IDENTIFIER}
)

ACTION_STOP: frozenset[TokenKind] = frozenset({TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.EOF})

# `if` and `do` blocks nest at most this deep; deeper ones end the enclosing block.
MAX_BLOCK_DEPTH = 32


def parse_trigger(parser: Parser) -> CompletedMarker:
    marker = parser.start()
    parser.bump(LexMode.TRIGGER_HEADER)

    if parser.at_set({TokenKind.STRING, TokenKind.IDENTIFIER}) and not at_new_definition(parser):
        if parser.at(TokenKind.STRING):
            parse_string_value(parser, mode=LexMode.TRIGGER_HEADER)
        else:
            parser.bump()

    while True:
        parser.relex(LexMode.TRIGGER_HEADER)
        match parser.current:
            case TokenKind.ONLY_KW | TokenKind.ONCE_KW:
                modifier = parser.start()
                parser.bump()
                modifier.complete(parser, ScriptSyntaxKind.TRIGGER_MODIFIER)
            case TokenKind.NOTE_KW:
                modifier = parser.start()
                parser.bump()
                parse_string_value(parser, mode=LexMode.TRIGGER_HEADER)
                modifier.complete(parser, ScriptSyntaxKind.TRIGGER_MODIFIER)
            case _:
                break

    when = parser.start()
    parser.expect(TokenKind.WHEN_KW, "when")
    parser.relex(LexMode.NAME)
    if not parser.at(TokenKind.LBRACE):
        parse_condition_list(parser)
    when.complete(parser, ScriptSyntaxKind.WHEN_CLAUSE)

    parse_trigger_block(parser, label="trigger")
    return marker.complete(parser, ScriptSyntaxKind.TRIGGER)


def parse_trigger_block(parser: Parser, *, label: str, depth: int = 0) -> CompletedMarker:
    return parse_block(
        parser,
        label=label,
        mode=LexMode.TRIGGER_BODY,
        statement_starts=TRIGGER_STATEMENT_STARTS,
        parse_statement=lambda current: parse_trigger_statement(current, depth=depth),
    )


def parse_trigger_statement(parser: Parser, *, depth: int = 0) -> ParsedSyntax:
    match parser.current:
        case TokenKind.IF_KW | TokenKind.DO_KW if depth >= MAX_BLOCK_DEPTH:
            return ParsedSyntax.absent()
        case TokenKind.IF_KW:
            marker = parser.start()
            parser.bump(LexMode.CONDITION)
            parse_condition_list(parser)
            parse_trigger_block(parser, label="if", depth=depth + 1)
            marker.complete(parser, ScriptSyntaxKind.IF_BLOCK)
        case TokenKind.DO_KW:
            marker = parser.start()
            parser.bump()
            parse_actions(parser)
            parser.relex(LexMode.NAME)
            if parser.at(TokenKind.LBRACE):
                parse_trigger_block(parser, label="do", depth=depth + 1)
            marker.complete(parser, ScriptSyntaxKind.DO_STMT)
        case TokenKind.IDENTIFIER:
            marker = parser.start()
            parse_actions(parser)
            marker.complete(parser, ScriptSyntaxKind.ACTION_STMT)
        case _:
            return ParsedSyntax.absent()
    return ParsedSyntax.present()


def parse_actions(parser: Parser) -> None:
    """One or more comma separated ACTION nodes on the current line."""
    while True:
        parse_action(parser)
        parser.relex(LexMode.NAME)
        if not parser.at(TokenKind.COMMA) or parser.has_preceding_line_break:
            break
        parser.bump()


def parse_action(parser: Parser) -> CompletedMarker:
    """An action is a run of tokens on one line.

    Parentheses nest and may span lines; a comma outside parentheses ends
    the action, as do `{`, `}` and the end of the line.
    """
    parser.relex(LexMode.NAME)
    if parser.at_set(ACTION_STOP | {TokenKind.COMMA, TokenKind.RPAREN}):
        return parser.missing(
            parser.diagnostic(
                PARSER_EXPECTED_VALUE,
                message=f"Expected an action but found {parser.describe_current()}",
            )
        )

    marker = parser.start()
    depth = 0
    first = True
    while not parser.at_set(ACTION_STOP):
        if not first and depth == 0 and (parser.at(TokenKind.COMMA) or parser.has_preceding_line_break):
            break
        first = False
        if parser.at(TokenKind.LPAREN):
            depth += 1
        elif parser.at(TokenKind.RPAREN):
            if depth == 0:
                break
            depth -= 1
        parser.bump()
    return marker.complete(parser, ScriptSyntaxKind.ACTION)

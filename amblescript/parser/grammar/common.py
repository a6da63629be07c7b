"""Grammar helpers shared by every Script construct: values, names and blocks."""

from collections.abc import Callable

from amblescript.diagnostics.codes import (
    PARSER_BARE_STRING,
    PARSER_EXPECTED_NAME,
    PARSER_EXPECTED_STRING,
    PARSER_EXPECTED_VALUE,
    PARSER_MISSING_RBRACE,
)
from amblescript.lexer import LexMode, TokenKind
from amblescript.lexer.modes import PROGRAM_KEYWORDS
from amblescript.parser.marker import CompletedMarker
from amblescript.parser.parse_lists import ParseNodeList
from amblescript.parser.parse_recovery import ParseRecoveryTokenSet
from amblescript.parser.parsed_syntax import ParsedSyntax
from amblescript.parser.parser import Parser, ParserProgress
from amblescript.syntax import ScriptSyntaxKind
from amblescript.text import TextSize

DEFINITION_STARTS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.LET_KW,
        TokenKind.TRIGGER_KW,
        TokenKind.ROOM_KW,
        TokenKind.ITEM_KW,
        TokenKind.SPINNER_KW,
        TokenKind.NPC_KW,
        TokenKind.GOAL_KW,
    }
)

BOOLEAN_KINDS: frozenset[TokenKind] = frozenset({TokenKind.TRUE_KW, TokenKind.FALSE_KW})

VALUE_STARTS: frozenset[TokenKind] = frozenset(
    {TokenKind.STRING, TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.MINUS} | BOOLEAN_KINDS
)

type StatementParser = Callable[[Parser], ParsedSyntax]


def at_new_definition(parser: Parser) -> bool:
    """A definition keyword at the start of a line ends any open list or run."""
    return parser.has_preceding_line_break and parser.current_text in PROGRAM_KEYWORDS


def parse_keyword_value(
    parser: Parser,
    kind: ScriptSyntaxKind,
    parse_value: Callable[[Parser], CompletedMarker],
) -> CompletedMarker:
    """`keyword value` statements such as `name "Hall"` or `max_hp 10`."""
    marker = parser.start()
    parser.bump()
    parse_value(parser)
    return marker.complete(parser, kind)


def parse_keyword_only(parser: Parser, kind: ScriptSyntaxKind) -> CompletedMarker:
    marker = parser.start()
    parser.bump()
    return marker.complete(parser, kind)


def parse_string_value(parser: Parser, *, mode: LexMode = LexMode.NAME) -> CompletedMarker:
    """Parse a STRING_VALUE.

    A quoted string is always accepted. A bare word on the same line is
    accepted as well unless `mode` reserves it as a keyword of the enclosing
    body; with `allow_bare_strings` disabled it still builds the node but is
    reported.
    """
    parser.relex(mode)
    if parser.at(TokenKind.STRING):
        marker = parser.start()
        parser.bump()
        return marker.complete(parser, ScriptSyntaxKind.STRING_VALUE)

    if parser.at(TokenKind.IDENTIFIER) and not parser.has_preceding_line_break:
        if not parser.options.allow_bare_strings:
            parser.error(parser.diagnostic(PARSER_BARE_STRING))
        marker = parser.start()
        parser.bump()
        return marker.complete(parser, ScriptSyntaxKind.STRING_VALUE)

    return parser.missing(
        parser.diagnostic(
            PARSER_EXPECTED_STRING,
            message=f"Expected a string but found {parser.describe_current()}",
        )
    )


def parse_optional_string(parser: Parser) -> CompletedMarker | None:
    """A quoted string on the same line, if one follows."""
    parser.relex(LexMode.NAME)
    if not parser.at(TokenKind.STRING) or parser.has_preceding_line_break:
        return None
    marker = parser.start()
    parser.bump()
    return marker.complete(parser, ScriptSyntaxKind.STRING_VALUE)


def parse_boolean_value(parser: Parser) -> CompletedMarker:
    parser.relex(LexMode.VALUE)
    if parser.at_set(BOOLEAN_KINDS):
        marker = parser.start()
        parser.bump()
        return marker.complete(parser, ScriptSyntaxKind.BOOLEAN_VALUE)
    return parser.missing(
        parser.diagnostic(
            PARSER_EXPECTED_VALUE,
            message=f"Expected `true` or `false` but found {parser.describe_current()}",
        )
    )


def parse_optional_boolean(parser: Parser) -> CompletedMarker | None:
    parser.relex(LexMode.VALUE)
    if not parser.at_set(BOOLEAN_KINDS) or parser.has_preceding_line_break:
        return None
    return parse_boolean_value(parser)


def parse_number_value(parser: Parser) -> CompletedMarker:
    parser.relex(LexMode.VALUE)
    if parser.at(TokenKind.NUMBER):
        marker = parser.start()
        parser.bump()
        return marker.complete(parser, ScriptSyntaxKind.NUMBER_VALUE)
    if parser.at(TokenKind.MINUS) and parser.nth(1) == TokenKind.NUMBER and not parser.has_nth_preceding_trivia(1):
        marker = parser.start()
        parser.bump()
        parser.bump()
        return marker.complete(parser, ScriptSyntaxKind.NUMBER_VALUE)
    return parser.missing(
        parser.diagnostic(
            PARSER_EXPECTED_VALUE,
            message=f"Expected a number but found {parser.describe_current()}",
        )
    )


def expect_name(parser: Parser, what: str) -> bool:
    """Eat an identifier (any word, keywords included) or record it as missing."""
    parser.relex(LexMode.NAME)
    if parser.at(TokenKind.IDENTIFIER) and not at_new_definition(parser):
        parser.bump()
        return True
    parser.missing(
        parser.diagnostic(
            PARSER_EXPECTED_NAME,
            message=f"Expected {what} but found {parser.describe_current()}",
        )
    )
    return False


def parse_value(parser: Parser) -> CompletedMarker | None:
    """One list value: string, number, boolean or name."""
    parser.relex(LexMode.VALUE)
    match parser.current:
        case TokenKind.STRING:
            kind = ScriptSyntaxKind.STRING_VALUE
        case TokenKind.TRUE_KW | TokenKind.FALSE_KW:
            kind = ScriptSyntaxKind.BOOLEAN_VALUE
        case TokenKind.IDENTIFIER:
            kind = ScriptSyntaxKind.NAME
        case TokenKind.NUMBER:
            return parse_number_value(parser)
        case TokenKind.MINUS if parser.nth(1) == TokenKind.NUMBER and not parser.has_nth_preceding_trivia(1):
            return parse_number_value(parser)
        case _:
            return None

    marker = parser.start()
    parser.bump()
    return marker.complete(parser, kind)


def parse_value_list(
    parser: Parser,
    list_kind: ScriptSyntaxKind = ScriptSyntaxKind.VALUE_LIST,
    *,
    closing: TokenKind = TokenKind.RPAREN,
) -> CompletedMarker:
    """Comma separated values up to (not including) `closing`.

    Several values in one element (`old key 3`) are wrapped in a
    COMPOUND_VALUE. A trailing comma is accepted.
    """
    marker = parser.start()
    progress = ParserProgress()
    recovery = ParseRecoveryTokenSet(
        node_kind=ScriptSyntaxKind.ERROR,
        recovery_set=frozenset({TokenKind.COMMA, closing, TokenKind.LBRACE, TokenKind.RBRACE}),
        lex_mode=LexMode.VALUE,
    )
    expecting_value = True

    while True:
        parser.relex(LexMode.VALUE)
        if parser.at_set({TokenKind.EOF, closing, TokenKind.LBRACE, TokenKind.RBRACE}):
            break
        if at_new_definition(parser):
            break
        if not progress.has_progressed(parser):
            parser.bump_as_error(LexMode.VALUE)
            continue

        if parser.at(TokenKind.COMMA):
            if expecting_value:
                parser.bump_as_error()
            else:
                parser.bump()
            expecting_value = True
            continue

        first = parse_value(parser)
        if first is None:
            if not parser.at(TokenKind.UNKNOWN):
                parser.error(parser.unexpected_token())
            recovery.recover(parser)
            expecting_value = False
            continue

        parser.relex(LexMode.VALUE)
        if parser.at_set(VALUE_STARTS) and not parser.has_preceding_line_break:
            compound = first.precede(parser)
            while parser.at_set(VALUE_STARTS) and not parser.has_preceding_line_break:
                if parse_value(parser) is None:
                    break
                parser.relex(LexMode.VALUE)
            compound.complete(parser, ScriptSyntaxKind.COMPOUND_VALUE)
        expecting_value = False

    return marker.complete(parser, list_kind)


def parse_block(
    parser: Parser,
    *,
    label: str,
    mode: LexMode,
    statement_starts: frozenset[TokenKind],
    parse_statement: StatementParser,
) -> CompletedMarker:
    """`{` statement* `}` as a BLOCK node.

    Statements are dispatched on their first token re-lexed in `mode`. A
    definition keyword that is not a statement of this block, or EOF, closes
    the block with a missing-brace diagnostic.
    """
    marker = parser.start()
    parser.relex(LexMode.NAME)
    opening = parser.current_range.start
    if not parser.expect(TokenKind.LBRACE, "{"):
        return marker.complete(parser, ScriptSyntaxKind.BLOCK)

    closing_set = statement_starts | DEFINITION_STARTS | {TokenKind.RBRACE}
    recovery = ParseRecoveryTokenSet(
        node_kind=ScriptSyntaxKind.ERROR,
        recovery_set=frozenset(closing_set),
        lex_mode=mode,
    )

    def is_at_block_end(current: Parser) -> bool:
        if current.at(TokenKind.RBRACE):
            return True
        return current.at_set(DEFINITION_STARTS) and not current.at_set(statement_starts)

    def recover_statement(current: Parser, parsed: ParsedSyntax) -> bool:
        if parsed.is_present():
            return True
        if not current.at(TokenKind.UNKNOWN):
            current.error(current.unexpected_token())
        _, recovery_error = recovery.recover(current)
        return recovery_error is None

    ParseNodeList(
        list_kind=None,
        lex_mode=mode,
        is_at_list_end=is_at_block_end,
        parse_element=parse_statement,
        recover=recover_statement,
    ).parse_list(parser)

    close_block(parser, label=label, opening=opening)
    return marker.complete(parser, ScriptSyntaxKind.BLOCK)


def close_block(parser: Parser, *, label: str, opening: TextSize) -> None:
    if parser.eat(TokenKind.RBRACE):
        return

    line, column = parser.line_col(opening)
    at_eof = parser.at(TokenKind.EOF)
    severity = "warning" if at_eof and parser.options.allow_missing_rbrace else None
    found = "the end of the file" if at_eof else parser.describe_current()
    parser.missing(
        PARSER_MISSING_RBRACE.at(
            parser.current_range,
            message=f"Missing `}}` for the {label} block opened at {line}:{column}, found {found}",
            severity=severity,
        )
    )

"""High-level parse entrypoint for Script source text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from amblescript.diagnostics import collect_diagnostics
from amblescript.lexer import BufferedLexer, LexMode, Lexer
from amblescript.parser.grammar import parse_program
from amblescript.parser.options import ParseMode, ParserOptions
from amblescript.parser.parse import build_lossless_tree
from amblescript.parser.parser import Parser
from amblescript.parser.token_source import TokenSource
from amblescript.parser.tree_sink import ParsedGreenTree

if TYPE_CHECKING:
    from amblescript.pipeline import ScriptParseResult


def _resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse_green(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedGreenTree:
    resolved_options = _resolve_options(options=options, mode=mode)

    lexer = Lexer(text)
    buffered = BufferedLexer(lexer)
    source = TokenSource(buffered, mode=LexMode.PROGRAM)
    parser = Parser(source, options=resolved_options)

    parse_program(parser)
    events, parser_diagnostics = parser.finish()
    trivia, lexer_diagnostics = source.finish()
    diagnostics = collect_diagnostics(lexer_diagnostics, parser_diagnostics)

    return build_lossless_tree(
        text=text,
        events=events,
        trivia=trivia,
        diagnostics=diagnostics,
    )


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ScriptParseResult:
    """Parse Script source into a lossless tree plus diagnostics. Never raises for bad input."""
    from amblescript.pipeline import ScriptParseResult

    resolved_options = _resolve_options(options=options, mode=mode)
    parsed = parse_green(text, options=resolved_options)
    return ScriptParseResult(
        source_text=text,
        parsed=parsed,
        options=resolved_options,
    )

#!/usr/bin/env python
"""Print the tokens (or the syntax tree) of a Script file."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from amblescript.cst import SyntaxNode, SyntaxToken
from amblescript.diagnostics import format_diagnostic
from amblescript.lexer import LexMode, Lexer, dump_tokens
from amblescript.load import read_script_text
from amblescript.parser import ParseMode, parse
from amblescript.text import LineIndex


def format_tree(node: SyntaxNode, depth: int = 0) -> list[str]:
    indent = "  " * depth
    lines = [f"{indent}{node.kind.name} {node.range.as_tuple()}"]
    for child in node.children:
        if isinstance(child, SyntaxToken):
            lines.append(f"{indent}  {child.kind.name} {child.text!r}")
        else:
            lines.extend(format_tree(child, depth + 1))
    return lines


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump Script tokens or syntax tree")
    parser.add_argument("path", type=Path, help="Script file to dump")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in LexMode],
        default=LexMode.PROGRAM.value,
        help="Lex mode used for every token (default: program)",
    )
    parser.add_argument("--cst", action="store_true", help="Print the parsed syntax tree instead")
    parser.add_argument("--permissive", action="store_true", help="Parse in permissive mode (with --cst)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    text = read_script_text(args.path)
    if args.cst:
        result = parse(text, mode=ParseMode.PERMISSIVE if args.permissive else ParseMode.STRICT)
        print("\n".join(format_tree(result.root)))
        line_index = LineIndex(text)
        for diagnostic in result.diagnostics:
            print(format_diagnostic(diagnostic, line_index, path=str(args.path)))
        return 1 if result.has_errors else 0

    lexer = Lexer(text)
    tokens = lexer.lex(LexMode(args.mode))
    dump_tokens(tokens, text, lexer.diagnostics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

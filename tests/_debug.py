"""Shared debug printers for lexer/parser/ast tests."""

from __future__ import annotations

import os

from amblescript.ast import (
    AstCondition,
    AstDefinition,
    AstError,
    AstProgram,
    AstSetDecl,
    AstStatement,
    AstTrigger,
)
from amblescript.cst import GreenNode, GreenToken
from amblescript.diagnostics import Diagnostic
from amblescript.lexer import Token, token_text

PRINT_TOKENS = os.getenv("PRINT_TOKENS", "0").lower() in {"1", "true", "yes", "on"}
PRINT_CST = os.getenv("PRINT_CST", "0").lower() in {"1", "true", "yes", "on"}
PRINT_AST = os.getenv("PRINT_AST", "0").lower() in {"1", "true", "yes", "on"}
PRINT_SOURCE = os.getenv("PRINT_SOURCE", "0").lower() in {"1", "true", "yes", "on"}
PRINT_DIAGNOSTICS = os.getenv("PRINT_DIAGNOSTICS", "0").lower() in {
    "1",
    "true",
    "yes",
    "on",
}


def debug_print_source(test_name: str, source: str) -> None:
    if not PRINT_SOURCE:
        return
    print(f"\n===== {test_name} SOURCE =====")
    print(source)


def debug_dump_tokens(test_name: str, source: str, tokens: list[Token]) -> None:
    if not PRINT_TOKENS:
        return
    debug_print_source(test_name, source)
    print(f"\n===== {test_name} TOKENS =====")
    for index, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{index:03d} {tok.kind.name:<24} range={tok.range.as_tuple()} flags={tok.flags} text={text!r}")


def debug_dump_cst(test_name: str, source: str, root: GreenNode) -> None:
    if not PRINT_CST:
        return
    if not PRINT_SOURCE:
        print(f"\n===== {test_name} SOURCE =====")
        print(source)
    else:
        debug_print_source(test_name, source)
    print(f"===== {test_name} CST =====")
    print(_dump_cst(root))


def debug_dump_ast(test_name: str, ast: AstProgram, source: str | None = None) -> None:
    if not PRINT_AST:
        return
    if source is not None:
        debug_print_source(test_name, source)
    print(f"\n===== {test_name} AST =====")
    print(_dump_ast(ast))


def debug_dump_diagnostics(test_name: str, diagnostics: list[Diagnostic], source: str | None = None) -> None:
    if not PRINT_DIAGNOSTICS:
        return
    if source is not None:
        debug_print_source(test_name, source)
    print(f"===== {test_name} DIAGNOSTICS =====")
    if not diagnostics:
        print("(none)")
        return
    for diagnostic in diagnostics:
        print(diagnostic)


def _dump_cst(node: GreenNode) -> str:
    lines: list[str] = []

    def walk_node(current: GreenNode, depth: int) -> None:
        indent = "  " * depth
        lines.append(f"{indent}{current.kind.name}")
        for child in current.children:
            if isinstance(child, GreenNode):
                walk_node(child, depth + 1)
            else:
                walk_token(child, depth + 1)

    def walk_token(token: GreenToken, depth: int) -> None:
        indent = "  " * depth
        text = token.text.replace("\n", "\\n").replace("\r", "\\r")
        lines.append(
            f"{indent}{token.kind.name} text={text!r} "
            f"leading={len(token.leading_trivia)} trailing={len(token.trailing_trivia)}"
        )

    walk_node(node, 0)
    return "\n".join(lines)


def _dump_ast(ast: AstProgram) -> str:
    lines: list[str] = ["AstProgram"]

    def walk_condition(condition: AstCondition, depth: int) -> None:
        indent = "  " * depth
        if condition.is_group:
            lines.append(f"{indent}group label={condition.label!r}")
            for child in condition.children:
                walk_condition(child, depth + 1)
            return
        lines.append(f"{indent}{condition.kind.name} {condition.text!r}")

    def walk_item(item: AstStatement | AstError, depth: int) -> None:
        indent = "  " * depth
        if isinstance(item, AstError):
            lines.append(f"{indent}AstError raw={item.raw_text!r}")
            return
        lines.append(f"{indent}{item.kind.name} keyword={item.keyword!r} qualifiers={item.qualifiers!r}")
        for value in item.values:
            lines.append(f"{indent}  value={value!r}")
        for condition in item.conditions:
            walk_condition(condition, depth + 1)
        for child in item.body:
            walk_item(child, depth + 1)

    for definition in ast.definitions:
        if isinstance(definition, AstSetDecl):
            lines.append(f"  AstSetDecl name={definition.name!r} values={definition.values!r}")
        elif isinstance(definition, AstTrigger):
            lines.append(
                f"  AstTrigger name={definition.name!r} only={definition.only} once={definition.once}"
            )
            for condition in definition.conditions:
                walk_condition(condition, 2)
            for item in definition.body:
                walk_item(item, 2)
        elif isinstance(definition, AstDefinition):
            lines.append(f"  {definition.kind.name} name={definition.name!r} title={definition.title!r}")
            for item in definition.statements:
                walk_item(item, 2)
        else:
            lines.append(f"  AstError raw={definition.raw_text!r}")

    return "\n".join(lines)
